"""
Black formatter for Python code.
"""

from __future__ import annotations

from ..config import FormatterConfig
from .base import Formatter, FormattingFailed


class BlackFormatter(Formatter):
    """Formatter using black for Python code."""

    tool = "black"

    def __init__(self):
        super().__init__()
        self._black = None

    def _detect(self) -> bool:
        try:
            import black
        except ImportError:
            return False
        self._black = black
        return True

    def _format(self, code: str, config: FormatterConfig) -> str:
        black = self._black

        target_versions = set()
        if config.target_version:
            version = getattr(black.TargetVersion, config.target_version.upper(), None)
            if version is not None:
                target_versions.add(version)

        mode = black.Mode(
            target_versions=target_versions,
            line_length=config.line_length,
            string_normalization=config.string_normalization,
            magic_trailing_comma=config.magic_trailing_comma,
        )

        try:
            return black.format_str(code, mode=mode)
        except black.InvalidInput as e:
            raise FormattingFailed(str(e)) from e
