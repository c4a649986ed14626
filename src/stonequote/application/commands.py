"""Application commands (use cases) for stone quoting."""

from __future__ import annotations

import logging
from typing import Sequence

from stonequote.domain import (
    Product,
    ProductResult,
    QuoteSettings,
    SingleProductSizer,
    StoneCatalog,
)
from stonequote.infrastructure.cost_allocation import CostAllocator, summarize_quote
from stonequote.infrastructure.slab_packing import MultiProductPacker

from .dtos import QuoteOutput

logger = logging.getLogger(__name__)


class GenerateQuoteCommand:
    """Command to price a product list against a stone catalog.

    With multi-product optimization enabled, products sharing a stone group
    are packed onto shared slabs and material cost is split by area.
    Otherwise each product is sized and priced on its own.

    Each execute() call is independent; no packing state is kept between runs.
    """

    def __init__(
        self,
        sizer: SingleProductSizer | None = None,
        packer: MultiProductPacker | None = None,
    ) -> None:
        self.sizer = sizer or SingleProductSizer()
        self.packer = packer

    def execute(
        self,
        products: Sequence[Product],
        catalog: StoneCatalog,
        settings: QuoteSettings | None = None,
    ) -> QuoteOutput:
        """Run a quote.

        Args:
            products: Product lines to price.
            catalog: Stone catalog.
            settings: Quote settings, defaults if None.

        Returns:
            QuoteOutput with per-product results, group layouts and totals.
        """
        settings = settings or QuoteSettings()
        products = list(products)

        if settings.multi_product_optimization:
            packer = self.packer or MultiProductPacker.from_settings(settings)
            group_results = packer.optimize(products, catalog)
            allocator = CostAllocator(settings, sizer=self.sizer)
            results = allocator.allocate(products, group_results, catalog)
        else:
            group_results = {}
            results = self._price_independently(products, catalog, settings)

        summary = summarize_quote(results, group_results)
        logger.info(
            "Quote: %d/%d products priced, %d slabs, total %.2f",
            summary.priced_products,
            len(products),
            summary.total_slabs,
            summary.total_price,
        )

        return QuoteOutput(
            products=products,
            results=results,
            summary=summary,
            settings=settings,
            group_results=group_results,
        )

    def _price_independently(
        self,
        products: list[Product],
        catalog: StoneCatalog,
        settings: QuoteSettings,
    ) -> list[ProductResult | None]:
        return [self.sizer.calculate(p, catalog, settings) for p in products]
