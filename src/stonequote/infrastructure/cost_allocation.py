"""Cost allocation from shared slabs back to individual products.

When products share slabs, the group's material cost is split between them in
proportion to the placed area each contributes. Fabrication and installation
are charged on each product's own finished area. Products left out of a
successful group fall back to independent pricing.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Mapping, Sequence

from stonequote.domain.catalog import StoneCatalog
from stonequote.domain.services.slab_sizer import SingleProductSizer, max_pieces_per_slab
from stonequote.domain.value_objects import (
    Product,
    ProductResult,
    QuoteSettings,
    StoneKey,
    StoneVariant,
)

from .slab_packing import PackingGroupResult

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class QuoteSummary:
    """Totals across a whole quote.

    Attributes:
        total_price: Sum of final prices of all priced products.
        total_slabs: Slabs of packed groups plus whole slabs of products
            priced independently.
        average_efficiency: Mean of packed groups' average efficiency and
            independently priced products' efficiency.
        priced_products: Number of products with a result.
        unpriced_products: Number of products without a result.
    """

    total_price: float
    total_slabs: int
    average_efficiency: float
    priced_products: int
    unpriced_products: int


class CostAllocator:
    """Apportions shared slab cost to products by area.

    Attributes:
        settings: Quote settings (breakage buffer, fabrication, installation).
        sizer: Sizer used for independent fallback pricing.
    """

    def __init__(
        self,
        settings: QuoteSettings,
        sizer: SingleProductSizer | None = None,
    ) -> None:
        self.settings = settings
        self.sizer = sizer or SingleProductSizer()

    def allocate(
        self,
        products: Sequence[Product],
        group_results: Mapping[StoneKey, PackingGroupResult],
        catalog: StoneCatalog,
    ) -> list[ProductResult | None]:
        """Price every product from packed groups, with fallback.

        Args:
            products: Input products, in quote order.
            group_results: Packing results keyed by stone key.
            catalog: Stone catalog supplying costs and markup.

        Returns:
            One entry per input product, aligned by index. An entry is None
            only when the product cannot be priced at all.
        """
        results: list[ProductResult | None] = [None] * len(products)

        for key, group in group_results.items():
            if group.error is not None:
                logger.warning("Group %s not allocated: %s", key, group.error.message)
                continue

            variant = catalog.find(key)
            if variant is None:
                logger.warning("Group %s has no exact catalog entry, skipping", key)
                continue

            for index, result in self._allocate_group(products, group, variant).items():
                results[index] = result

        for index, product in enumerate(products):
            if results[index] is not None or not product.is_valid:
                continue
            logger.warning(
                "Product %d (%s) priced independently", index, product.key
            )
            results[index] = self.sizer.calculate(product, catalog, self.settings)

        return results

    def _allocate_group(
        self,
        products: Sequence[Product],
        group: PackingGroupResult,
        variant: StoneVariant,
    ) -> dict[int, ProductResult]:
        settings = self.settings
        total_slabs = group.total_slabs
        total_area = group.total_placed_area
        if total_slabs == 0 or total_area <= 0:
            return {}

        total_material_cost = variant.slab_cost * settings.breakage_factor * total_slabs

        area_by_product: dict[int, float] = {}
        count_by_product: dict[int, int] = {}
        for placement in group.placements:
            index = placement.piece.product_index
            area_by_product[index] = area_by_product.get(index, 0.0) + placement.area
            count_by_product[index] = count_by_product.get(index, 0) + 1

        allocated: dict[int, ProductResult] = {}
        for index, product_area in area_by_product.items():
            if index >= len(products) or products[index].key != group.key:
                logger.warning(
                    "Product %d does not belong to group %s, skipping", index, group.key
                )
                continue
            product = products[index]

            area_ratio = product_area / total_area
            effective_slabs = total_slabs * area_ratio
            usable_sqft = product.usable_area_sqft

            material_cost = total_material_cost * area_ratio
            fabrication_cost = (
                usable_sqft * variant.fab_cost_per_sqft
                if settings.include_fabrication
                else 0.0
            )
            installation_cost = (
                usable_sqft * settings.installation_rate
                if settings.include_installation
                else 0.0
            )
            raw_cost = material_cost + fabrication_cost + installation_cost
            efficiency = (
                product_area / (effective_slabs * variant.slab_area) * 100
                if effective_slabs > 0
                else 0.0
            )

            allocated[index] = ProductResult(
                usable_area_sqft=usable_sqft,
                slabs_needed=effective_slabs,
                efficiency=efficiency,
                material_cost=material_cost,
                fabrication_cost=fabrication_cost,
                installation_cost=installation_cost,
                raw_cost=raw_cost,
                final_price=raw_cost * variant.markup,
                # Single-product estimate, not the shared layout.
                pieces_per_slab=max_pieces_per_slab(
                    product.width,  # type: ignore[arg-type]
                    product.depth,  # type: ignore[arg-type]
                    variant.slab_width,
                    variant.slab_height,
                    settings.kerf,
                ),
                piece_count=count_by_product[index],
                multi_product_optimized=True,
                group_key=group.key,
                area_ratio=area_ratio,
            )

        logger.debug(
            "Group %s: material %.2f over %d slabs split across %d products",
            group.key,
            total_material_cost,
            total_slabs,
            len(allocated),
        )
        return allocated


def apply_multi_product_optimization(
    products: Sequence[Product],
    group_results: Mapping[StoneKey, PackingGroupResult],
    catalog: StoneCatalog,
    settings: QuoteSettings,
) -> list[ProductResult | None]:
    """Allocate packed group costs to products. See CostAllocator.allocate."""
    return CostAllocator(settings).allocate(products, group_results, catalog)


def summarize_quote(
    results: Sequence[ProductResult | None],
    group_results: Mapping[StoneKey, PackingGroupResult] | None = None,
) -> QuoteSummary:
    """Compute quote totals.

    Args:
        results: Product results aligned with the input products.
        group_results: Packing results when slabs were shared.

    Returns:
        QuoteSummary with totals.
    """
    total_price = sum(r.final_price for r in results if r is not None)
    total_slabs = 0
    efficiencies: list[float] = []

    for group in (group_results or {}).values():
        if group.is_error or group.total_slabs == 0:
            continue
        total_slabs += group.total_slabs
        efficiencies.append(group.average_efficiency)

    for result in results:
        if result is None or result.multi_product_optimized:
            continue
        total_slabs += int(result.slabs_needed)
        efficiencies.append(result.efficiency)

    priced = sum(1 for r in results if r is not None)
    return QuoteSummary(
        total_price=total_price,
        total_slabs=total_slabs,
        average_efficiency=sum(efficiencies) / len(efficiencies) if efficiencies else 0.0,
        priced_products=priced,
        unpriced_products=len(results) - priced,
    )


__all__ = [
    "CostAllocator",
    "QuoteSummary",
    "apply_multi_product_optimization",
    "summarize_quote",
]
