"""Pydantic response schemas for the REST API."""

from pydantic import BaseModel, Field


class ProductResultSchema(BaseModel):
    """Pricing for one product."""

    usable_area_sqft: float
    slabs_needed: float
    efficiency: float
    material_cost: float
    fabrication_cost: float
    installation_cost: float
    raw_cost: float
    final_price: float
    pieces_per_slab: int
    piece_count: int
    multi_product_optimized: bool
    area_ratio: float | None = None


class ProductQuoteSchema(BaseModel):
    """A product line with its result; result is null when unpriced."""

    index: int
    name: str
    stone_type: str
    thickness: str
    finish: str
    width: float | None
    depth: float | None
    quantity: int
    priority: str
    result: ProductResultSchema | None


class PlacementSchema(BaseModel):
    label: str
    product_index: int
    piece_index: int
    edge_detail: str
    x: float
    y: float
    width: float
    height: float
    rotated: bool


class SlabSchema(BaseModel):
    index: int
    width: float
    height: float
    efficiency: float
    placements: list[PlacementSchema] = Field(default_factory=list)


class GroupErrorSchema(BaseModel):
    kind: str
    message: str
    piece: str | None = None
    slab_width: float | None = None
    slab_height: float | None = None


class StoneGroupSchema(BaseModel):
    """Packing result for one stone type, thickness and finish."""

    stone_type: str
    thickness: str
    finish: str
    total_slabs: int
    average_efficiency: float
    slabs: list[SlabSchema] = Field(default_factory=list)
    error: GroupErrorSchema | None = None


class QuoteSummarySchema(BaseModel):
    total_price: float
    total_slabs: int
    average_efficiency: float
    priced_products: int
    unpriced_products: int


class QuoteResponse(BaseModel):
    """Response for a quote request."""

    products: list[ProductQuoteSchema]
    groups: list[StoneGroupSchema] = Field(default_factory=list)
    summary: QuoteSummarySchema
    multi_product_optimization: bool
