"""
Diagnostics and exceptions raised while deriving case iteration code.

Every rejection is fatal for the declaration it concerns: the generator
returns a diagnostic instead of an artifact, never a partial result.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class DiagnosticKind(str, Enum):
    """Why a declaration was rejected."""

    WRONG_SHAPE = "wrong_shape"  # Not an enumerated type
    PAYLOAD_VARIANT = "payload_variant"  # A member carries associated data
    ALIAS_VARIANT = "alias_variant"  # A member repeats an earlier member's value
    EMPTY_ENUMERATION = "empty_enumeration"  # No members at all
    DECLARATION_NOT_FOUND = "declaration_not_found"  # Named class absent from the module
    INVALID_SOURCE = "invalid_source"  # Source text does not parse


@dataclass(frozen=True)
class Diagnostic:
    """A fatal problem with one input declaration.

    Attributes:
        kind: Category of the problem
        name: Offending type or member name
        message: Human readable description
        lineno: Source line of the offending node, when known
    """

    kind: DiagnosticKind
    name: str
    message: str
    lineno: int | None = None

    def __str__(self) -> str:
        if self.lineno is not None:
            return f"line {self.lineno}: {self.message}"
        return self.message


class CaseIterableError(Exception):
    """Base class for all errors raised by case_iterable."""


class UnsupportedDeclarationError(CaseIterableError):
    """Raised by the analyzer when a declaration cannot be derived."""

    def __init__(self, diagnostic: Diagnostic):
        super().__init__(str(diagnostic))
        self.diagnostic = diagnostic


class GenerationError(CaseIterableError):
    """Raised when unwrapping a failed generation result."""

    def __init__(self, diagnostic: Diagnostic):
        super().__init__(str(diagnostic))
        self.diagnostic = diagnostic
