"""
Pipeline - AST-based case iteration generator.

1. Phase 1 (Analyzer): Validate the enumeration and extract its members
2. Phase 2 (Relation): Map each member to its successor
3. Phase 3 (AST Backend): Build the generated declarations as Python AST
4. Phase 4 (Merger): Splice them into the module and unparse
5. Phase 5 (Formatter): Optional post-processing (ruff or black)
"""

from __future__ import annotations

from .ast_backends import GeneratedArtifact, GenerationResult
from .config import FormatterConfig, GeneratorConfig, OutputConfig, OutputMode
from .diagnostics import CaseIterableError, Diagnostic, DiagnosticKind, GenerationError, UnsupportedDeclarationError
from .generator import CaseIterableGenerator
from .merger import AtomicWriter, CodeMergeError, PythonAstMerger

__all__ = [
    "CaseIterableGenerator",
    "GeneratorConfig",
    "FormatterConfig",
    "OutputConfig",
    "OutputMode",
    "GeneratedArtifact",
    "GenerationResult",
    "CaseIterableError",
    "Diagnostic",
    "DiagnosticKind",
    "GenerationError",
    "UnsupportedDeclarationError",
    "CodeMergeError",
    "PythonAstMerger",
    "AtomicWriter",
]
