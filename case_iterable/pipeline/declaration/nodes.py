"""
Model of an analyzed enumeration declaration.

The analyzer turns a raw class statement into a VariantList: the ordered,
validated member names the rest of the pipeline works from.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field


@dataclass(frozen=True)
class Variant:
    """A payload-free enumeration member."""

    name: str
    lineno: int | None = None


@dataclass(frozen=True)
class VariantList:
    """Members of one enumerated type, in declaration order.

    Attributes:
        enum_name: Name of the enumerated type
        variants: Members in the order they are declared (never empty)
    """

    enum_name: str
    variants: tuple[Variant, ...] = field(default_factory=tuple)

    def __post_init__(self):
        if not self.variants:
            raise ValueError(f"VariantList for {self.enum_name} must not be empty")

    def __iter__(self) -> Iterator[Variant]:
        return iter(self.variants)

    def __len__(self) -> int:
        return len(self.variants)

    def __getitem__(self, index: int) -> Variant:
        return self.variants[index]

    @property
    def names(self) -> list[str]:
        return [variant.name for variant in self.variants]

    @property
    def first(self) -> Variant:
        return self.variants[0]
