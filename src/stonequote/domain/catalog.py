"""Read-only stone catalog keyed by exact stone type, thickness and finish."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator

from .exceptions import CatalogMissError
from .value_objects import StoneKey, StoneVariant

__all__ = ["StoneCatalog"]


@dataclass(frozen=True)
class StoneCatalog:
    """Ordered collection of stone variants.

    Lookups are exact on (type, thickness, finish). When the catalog holds
    duplicate rows for a key, the first one wins. There is no
    partial match: a miss is reported, never substituted.
    """

    variants: tuple[StoneVariant, ...] = ()

    @classmethod
    def from_variants(cls, variants: Iterable[StoneVariant]) -> "StoneCatalog":
        return cls(variants=tuple(variants))

    def __iter__(self) -> Iterator[StoneVariant]:
        return iter(self.variants)

    def __len__(self) -> int:
        return len(self.variants)

    def find(self, key: StoneKey) -> StoneVariant | None:
        """Return the first variant matching ``key`` exactly, or None."""
        for variant in self.variants:
            if variant.key == key:
                return variant
        return None

    def require(self, key: StoneKey) -> StoneVariant:
        """Return the variant for ``key``.

        Raises:
            CatalogMissError: If no variant matches exactly.
        """
        variant = self.find(key)
        if variant is None:
            raise CatalogMissError(key)
        return variant

    def stone_types(self) -> list[str]:
        """Distinct stone type names in catalog order."""
        seen: dict[str, None] = {}
        for variant in self.variants:
            seen.setdefault(variant.stone_type, None)
        return list(seen)

    def variants_for(self, stone_type: str) -> list[StoneVariant]:
        return [v for v in self.variants if v.stone_type == stone_type]
