"""Case iteration generator

Derives, for a Python enumeration whose members carry no payload, a
successor query (``Color.RED.next()``) and a restartable iterator over
every member in declaration order (``Color.all_cases()``), and splices
them into the module that declares the enumeration.
"""

__version__ = "0.1.0"

from .pipeline import (
    AtomicWriter,
    CaseIterableGenerator,
    CodeMergeError,
    Diagnostic,
    DiagnosticKind,
    GeneratedArtifact,
    GenerationError,
    GenerationResult,
    GeneratorConfig,
    PythonAstMerger,
)

__all__ = [
    "CaseIterableGenerator",
    "GeneratorConfig",
    "GeneratedArtifact",
    "GenerationResult",
    "Diagnostic",
    "DiagnosticKind",
    "GenerationError",
    "CodeMergeError",
    "PythonAstMerger",
    "AtomicWriter",
]
