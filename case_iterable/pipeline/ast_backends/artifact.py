"""
Generated artifact and generation result containers.
"""

from __future__ import annotations

import ast
from dataclasses import dataclass, field

from ..diagnostics import Diagnostic, GenerationError


@dataclass
class GeneratedArtifact:
    """Declarations generated for one enumeration.

    Attributes:
        enum_name: Name of the original enumeration
        iterator_name: Name of the generated sequence carrier class
        successor_query: Method returning the next member (goes in the enum body)
        iterator_class: Carrier class holding the current position
        constructor: The carrier's ``__init__`` (part of ``iterator_class``)
        advance: The carrier's ``__next__`` (part of ``iterator_class``)
        entry_point: Static method returning a carrier at the first member
            (goes in the enum body)
        imports: Import statements the declarations rely on
    """

    enum_name: str
    iterator_name: str
    successor_query: ast.FunctionDef
    iterator_class: ast.ClassDef
    constructor: ast.FunctionDef
    advance: ast.FunctionDef
    entry_point: ast.FunctionDef
    imports: list[ast.stmt] = field(default_factory=list)

    def declarations(self) -> list[ast.stmt]:
        """Declarations in output order: successor query, carrier class, entry point."""
        return [self.successor_query, self.iterator_class, self.entry_point]

    def enum_members(self) -> list[ast.FunctionDef]:
        """Declarations that belong inside the enumeration's class body."""
        return [self.successor_query, self.entry_point]

    def to_source(self) -> str:
        """Unparse imports and declarations, for inspection and logging."""
        module = ast.Module(body=[*self.imports, *self.declarations()], type_ignores=[])
        ast.fix_missing_locations(module)
        return ast.unparse(module)


@dataclass
class GenerationResult:
    """Outcome of one generation: exactly one of ``artifact`` and ``diagnostic`` is set."""

    artifact: GeneratedArtifact | None = None
    diagnostic: Diagnostic | None = None

    @property
    def ok(self) -> bool:
        return self.artifact is not None

    def unwrap(self) -> GeneratedArtifact:
        """Return the artifact, or raise GenerationError with the diagnostic."""
        if self.artifact is None:
            raise GenerationError(self.diagnostic)
        return self.artifact
