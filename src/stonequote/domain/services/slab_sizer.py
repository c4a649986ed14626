"""Single-product slab sizing and independent costing.

Sizing here does not track individual placements; it estimates how many
copies of one piece fit on one slab using a family of row layouts, and prices
each product as if it had its slabs to itself.
"""

from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING

from ..value_objects import SQ_IN_PER_SQ_FT, Product, ProductResult, QuoteSettings

if TYPE_CHECKING:
    from ..catalog import StoneCatalog

logger = logging.getLogger(__name__)

__all__ = ["SingleProductSizer", "calculate_product_result", "max_pieces_per_slab"]


def _fit(span: float, size: float, kerf: float) -> int:
    """Number of pieces of ``size`` fitting in ``span`` with kerf between them."""
    if span < size:
        return 0
    return math.floor((span + kerf) / (size + kerf))


def _mixed_rows(
    row_height: float,
    row_count: int,
    other_height: float,
    other_count: int,
    slab_height: float,
    kerf: float,
) -> int:
    """Best count for N rows of one orientation topped up with the other.

    Args:
        row_height: Height of a row in the first orientation.
        row_count: Pieces per row in the first orientation.
        other_height: Height of a row in the second orientation.
        other_count: Pieces per row in the second orientation.
        slab_height: Slab height.
        kerf: Saw kerf.
    """
    best = 0
    max_rows = _fit(slab_height, row_height, kerf)
    for rows in range(max_rows + 1):
        # Rows of the other orientation start one kerf below the last row,
        # so a block boundary always costs a full kerf of height.
        remaining = slab_height - rows * (row_height + kerf) if rows else slab_height
        total = rows * row_count
        if remaining >= other_height:
            total += _fit(remaining, other_height, kerf) * other_count
        best = max(best, total)
    return best


def max_pieces_per_slab(
    piece_width: float,
    piece_height: float,
    slab_width: float,
    slab_height: float,
    kerf: float = 0.0,
) -> int:
    """Estimate the maximum number of identical pieces cut from one slab.

    Evaluates a uniform grid in each orientation plus mixed layouts where
    some rows use one orientation and the remaining height is filled with
    rows of the other (tried in both orders).

    Args:
        piece_width: Piece width in inches.
        piece_height: Piece height (depth) in inches.
        slab_width: Slab width in inches.
        slab_height: Slab height in inches.
        kerf: Saw kerf between adjacent pieces in inches.

    Returns:
        Maximum piece count, 0 if the piece fits in neither orientation.

    Raises:
        ValueError: If any dimension is not positive or kerf is negative.
    """
    if min(piece_width, piece_height, slab_width, slab_height) <= 0:
        raise ValueError("Piece and slab dimensions must be positive")
    if kerf < 0:
        raise ValueError("Kerf must be non-negative")

    natural_per_row = _fit(slab_width, piece_width, kerf)
    swapped_per_row = _fit(slab_width, piece_height, kerf)

    natural_grid = natural_per_row * _fit(slab_height, piece_height, kerf)
    swapped_grid = swapped_per_row * _fit(slab_height, piece_width, kerf)

    natural_first = _mixed_rows(
        piece_height, natural_per_row, piece_width, swapped_per_row, slab_height, kerf
    )
    swapped_first = _mixed_rows(
        piece_width, swapped_per_row, piece_height, natural_per_row, slab_height, kerf
    )

    return max(natural_grid, swapped_grid, natural_first, swapped_first)


class SingleProductSizer:
    """Prices one product without sharing slabs with any other product."""

    def calculate(
        self,
        product: Product,
        catalog: "StoneCatalog",
        settings: QuoteSettings,
    ) -> ProductResult | None:
        """Size and price a product on its own slabs.

        Returns None when the product is incomplete, when its exact stone
        combination is not in the catalog, or when its piece cannot be cut
        from the stone's slab at all.
        """
        if not product.is_valid:
            return None

        variant = catalog.find(product.key)
        if variant is None:
            logger.warning("No catalog entry for %s, product left unpriced", product.key)
            return None

        width = product.width
        depth = product.depth
        assert width is not None and depth is not None

        per_slab = max_pieces_per_slab(
            width, depth, variant.slab_width, variant.slab_height, settings.kerf
        )
        if per_slab == 0:
            logger.warning(
                "Piece %sx%s does not fit on %s slab (%sx%s)",
                width,
                depth,
                product.key,
                variant.slab_width,
                variant.slab_height,
            )
            return None

        slabs = math.ceil(product.quantity / per_slab)
        used_area = width * depth * product.quantity
        total_slab_area = slabs * variant.slab_area
        efficiency = used_area / total_slab_area * 100 if total_slab_area > 0 else 0.0

        usable_sqft = used_area / SQ_IN_PER_SQ_FT
        material_cost = variant.slab_cost * slabs * settings.breakage_factor
        fabrication_cost = (
            usable_sqft * variant.fab_cost_per_sqft if settings.include_fabrication else 0.0
        )
        installation_cost = (
            usable_sqft * settings.installation_rate if settings.include_installation else 0.0
        )
        raw_cost = material_cost + fabrication_cost + installation_cost

        return ProductResult(
            usable_area_sqft=usable_sqft,
            slabs_needed=slabs,
            efficiency=efficiency,
            material_cost=material_cost,
            fabrication_cost=fabrication_cost,
            installation_cost=installation_cost,
            raw_cost=raw_cost,
            final_price=raw_cost * variant.markup,
            pieces_per_slab=per_slab,
            piece_count=product.quantity,
            multi_product_optimized=False,
            group_key=product.key,
        )


def calculate_product_result(
    product: Product,
    catalog: "StoneCatalog",
    settings: QuoteSettings,
) -> ProductResult | None:
    """Price a single product independently. See SingleProductSizer.calculate."""
    return SingleProductSizer().calculate(product, catalog, settings)
