"""Domain services for slab sizing."""

from .slab_sizer import SingleProductSizer, calculate_product_result, max_pieces_per_slab

__all__ = ["SingleProductSizer", "calculate_product_result", "max_pieces_per_slab"]
