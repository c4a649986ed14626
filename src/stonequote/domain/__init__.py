"""Domain layer - stone quoting value objects, catalog and services."""

from .catalog import StoneCatalog
from .exceptions import CatalogMissError, QuoteError, UnplaceablePieceError
from .services import SingleProductSizer, calculate_product_result, max_pieces_per_slab
from .value_objects import (
    Piece,
    Placement,
    Priority,
    Product,
    ProductResult,
    QuoteSettings,
    StoneKey,
    StoneVariant,
)

__all__ = [
    # Value objects
    "Piece",
    "Placement",
    "Priority",
    "Product",
    "ProductResult",
    "QuoteSettings",
    "StoneKey",
    "StoneVariant",
    # Catalog
    "StoneCatalog",
    # Exceptions
    "CatalogMissError",
    "QuoteError",
    "UnplaceablePieceError",
    # Services
    "SingleProductSizer",
    "calculate_product_result",
    "max_pieces_per_slab",
]
