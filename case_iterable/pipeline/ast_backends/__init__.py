"""
AST backend: builds the generated declarations as Python AST nodes.
"""

from __future__ import annotations

from .artifact import GeneratedArtifact, GenerationResult
from .python_ast_backend import PythonAstBackend

__all__ = [
    "GeneratedArtifact",
    "GenerationResult",
    "PythonAstBackend",
]
