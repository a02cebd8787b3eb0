"""
Shared behavior of the post-processing formatters.

Formatting is best effort: a missing tool or a failed run leaves the
generated code as it was and logs a warning.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod

from ..config import FormatterConfig
from ..diagnostics import CaseIterableError

logger = logging.getLogger(__name__)


class FormattingFailed(CaseIterableError):
    """Raised by a formatter backend when the tool ran but could not format."""


class Formatter(ABC):
    """Formatter backed by an external tool named ``tool``."""

    tool: str = ""

    def __init__(self):
        self._available: bool | None = None

    def is_available(self) -> bool:
        """Whether the tool is installed (checked once per instance)."""
        if self._available is None:
            self._available = self._detect()
            if not self._available:
                logger.debug("%s not found", self.tool)
        return self._available

    def format(self, code: str, config: FormatterConfig) -> str:
        """
        Format the given code.

        Args:
            code: The source code to format
            config: Formatter configuration

        Returns:
            Formatted code, or ``code`` unchanged when the tool is missing or fails
        """
        if not self.is_available():
            logger.warning("%s is not installed, leaving generated code unformatted", self.tool)
            return code
        try:
            return self._format(code, config)
        except FormattingFailed as e:
            logger.warning("%s could not format the generated code: %s", self.tool, e)
            return code

    @abstractmethod
    def _detect(self) -> bool:
        """Look for the tool."""

    @abstractmethod
    def _format(self, code: str, config: FormatterConfig) -> str:
        """Run the tool, raising FormattingFailed when it rejects ``code``."""
