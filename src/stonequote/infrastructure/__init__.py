"""Infrastructure layer - slab packing, cost allocation and formatters."""

from .cost_allocation import (
    CostAllocator,
    QuoteSummary,
    apply_multi_product_optimization,
    summarize_quote,
)
from .formatters import JsonExporter, QuoteFormatter, SlabLayoutFormatter
from .slab_packing import (
    GroupError,
    GroupErrorKind,
    MultiProductPacker,
    PackingGroupResult,
    SlabInstance,
    find_best_placement,
    optimize_multi_product_layout,
)

__all__ = [
    # Slab packing
    "GroupError",
    "GroupErrorKind",
    "MultiProductPacker",
    "PackingGroupResult",
    "SlabInstance",
    "find_best_placement",
    "optimize_multi_product_layout",
    # Cost allocation
    "CostAllocator",
    "QuoteSummary",
    "apply_multi_product_optimization",
    "summarize_quote",
    # Formatters
    "JsonExporter",
    "QuoteFormatter",
    "SlabLayoutFormatter",
]
