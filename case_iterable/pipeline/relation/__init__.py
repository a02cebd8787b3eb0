from __future__ import annotations

from .successor import TERMINAL, Successor, SuccessorRelation, build_successor_relation

__all__ = [
    "TERMINAL",
    "Successor",
    "SuccessorRelation",
    "build_successor_relation",
]
