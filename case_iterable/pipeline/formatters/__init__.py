"""
Post-processing formatters for generated code.
"""

from __future__ import annotations

from ..config import FormatterConfig
from .base import Formatter, FormattingFailed
from .black_formatter import BlackFormatter
from .ruff_formatter import RuffFormatter

FORMATTERS: dict[str, type[Formatter]] = {
    "ruff": RuffFormatter,
    "black": BlackFormatter,
}


def get_formatter(config: FormatterConfig) -> Formatter:
    """Formatter instance for ``config.backend``."""
    try:
        return FORMATTERS[config.backend]()
    except KeyError:
        raise ValueError(f"Unknown formatter backend: {config.backend!r} (expected one of {sorted(FORMATTERS)})") from None


__all__ = [
    "Formatter",
    "FormattingFailed",
    "BlackFormatter",
    "RuffFormatter",
    "get_formatter",
]
