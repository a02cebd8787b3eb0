"""
Declaration module.

Contains the analyzed enumeration model and the analyzer that builds it.
"""

from __future__ import annotations

from .analyzer import DeclarationAnalyzer, find_declaration, find_enum_declarations, local_enum_names
from .nodes import Variant, VariantList

__all__ = [
    "Variant",
    "VariantList",
    "DeclarationAnalyzer",
    "find_declaration",
    "find_enum_declarations",
    "local_enum_names",
]
