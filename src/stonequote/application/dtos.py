"""Data Transfer Objects for the application layer."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from stonequote.domain import Product, ProductResult, QuoteSettings, StoneKey

if TYPE_CHECKING:
    from stonequote.infrastructure.cost_allocation import QuoteSummary
    from stonequote.infrastructure.slab_packing import PackingGroupResult


@dataclass
class QuoteOutput:
    """Output DTO for a complete quote run.

    Attributes:
        products: Input products, in quote order.
        results: Product results aligned with ``products``; None marks a
            product that could not be priced.
        summary: Quote totals.
        settings: Settings the quote was computed with.
        group_results: Packing results per stone group, empty when slabs
            were not shared.
    """

    products: list[Product]
    results: list[ProductResult | None]
    summary: "QuoteSummary"
    settings: QuoteSettings
    group_results: dict[StoneKey, "PackingGroupResult"] = field(default_factory=dict)

    @property
    def group_errors(self) -> list["PackingGroupResult"]:
        """Groups that carry an error marker."""
        return [g for g in self.group_results.values() if g.is_error]

    @property
    def has_errors(self) -> bool:
        return bool(self.group_errors)

    def items(self) -> list[tuple[Product, ProductResult | None]]:
        """Products paired with their results."""
        return list(zip(self.products, self.results))
