"""Adapter functions converting configuration models into domain objects."""

from typing import Iterable

from stonequote.application.config.schema import (
    ProductSchema,
    QuoteConfiguration,
    QuoteSettingsSchema,
    StoneVariantSchema,
)
from stonequote.domain import Product, QuoteSettings, StoneCatalog, StoneVariant


def config_to_settings(config: QuoteSettingsSchema | None) -> QuoteSettings:
    """Convert settings schema to the domain QuoteSettings.

    Returns default settings if ``config`` is None.
    """
    if config is None:
        return QuoteSettings()

    return QuoteSettings(
        include_kerf=config.include_kerf,
        kerf_width=config.kerf_width,
        breakage_buffer=config.breakage_buffer,
        include_fabrication=config.include_fabrication,
        include_installation=config.include_installation,
        installation_rate=config.installation_rate,
        multi_product_optimization=config.multi_product_optimization,
    )


def config_to_catalog(rows: Iterable[StoneVariantSchema]) -> StoneCatalog:
    """Convert catalog rows to a StoneCatalog, preserving row order."""
    return StoneCatalog.from_variants(
        StoneVariant(
            stone_type=row.stone_type,
            thickness=row.thickness,
            finish=row.finish,
            slab_width=row.slab_width,
            slab_height=row.slab_height,
            slab_cost=row.slab_cost,
            fab_cost_per_sqft=row.fab_cost_per_sqft,
            markup=row.markup,
        )
        for row in rows
    )


def config_to_product(row: ProductSchema) -> Product:
    return Product(
        stone_type=row.stone,
        width=row.width,
        depth=row.depth,
        quantity=row.quantity if row.quantity is not None else 0,
        thickness=row.thickness,
        finish=row.finish,
        edge_detail=row.edge_detail,
        priority=row.priority,
        custom_name=row.custom_name or None,
        slab_size=row.slab_size,
        note=row.note,
    )


def config_to_products(config: QuoteConfiguration) -> list[Product]:
    """Convert the configuration's product lines, preserving order."""
    return [config_to_product(row) for row in config.products]
