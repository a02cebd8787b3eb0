"""
Merger module.

Splices generated declarations into the module that holds the original
enumeration, and writes the result atomically.
"""

from __future__ import annotations

from .atomic_writer import AtomicWriter
from .base import CodeMergeError
from .python_merger import PythonAstMerger

__all__ = [
    "CodeMergeError",
    "PythonAstMerger",
    "AtomicWriter",
]
