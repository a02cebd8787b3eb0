"""
Successor relation.

Phase 2 of the pipeline: map every member to the member declared right
after it, and the last member to the terminal marker.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

from ..declaration.nodes import Variant, VariantList

# "No successor": the ordering is exhausted
TERMINAL = None


@dataclass(frozen=True)
class Successor:
    """One entry of the relation: ``variant`` is followed by ``next_variant``."""

    variant: Variant
    next_variant: Variant | None = TERMINAL

    @property
    def is_terminal(self) -> bool:
        return self.next_variant is TERMINAL


class SuccessorRelation:
    """Total mapping from member name to the next member, or terminal.

    Entries are kept in declaration order.
    """

    def __init__(self, enum_name: str, entries: list[Successor]):
        self.enum_name = enum_name
        self._entries = tuple(entries)
        self._by_name = {entry.variant.name: entry for entry in self._entries}

    def __iter__(self) -> Iterator[Successor]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def first(self) -> Variant:
        return self._entries[0].variant

    def next_of(self, name: str) -> Variant | None:
        """Successor of the member called ``name`` (``None`` when terminal).

        Raises:
            KeyError: If ``name`` is not a member
        """
        return self._by_name[name].next_variant

    def terminal_count(self) -> int:
        return sum(1 for entry in self._entries if entry.is_terminal)

    def walk(self) -> list[Variant]:
        """Follow the relation from the first member until terminal."""
        visited = [self.first]
        current = self.next_of(self.first.name)
        # bounded by the entry count
        while current is not TERMINAL and len(visited) <= len(self._entries):
            visited.append(current)
            current = self.next_of(current.name)
        return visited


def build_successor_relation(variants: VariantList) -> SuccessorRelation:
    """
    Build the successor relation for a VariantList.

    Args:
        variants: Members in declaration order

    Returns:
        SuccessorRelation with exactly ``len(variants)`` entries, the last
        one terminal
    """
    entries = []
    for i, variant in enumerate(variants):
        next_variant = variants[i + 1] if i + 1 < len(variants) else TERMINAL
        entries.append(Successor(variant=variant, next_variant=next_variant))
    return SuccessorRelation(variants.enum_name, entries)
