"""Value objects for the stone quoting domain.

All dimensions are in inches and all costs in dollars. Slab coordinates use a
top-left origin: x grows to the right, y grows downward.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

SQ_IN_PER_SQ_FT = 144.0
DEFAULT_SLAB_WIDTH = 126.0
DEFAULT_SLAB_HEIGHT = 63.0
DEFAULT_EDGE_DETAIL = "Eased"


class Priority(str, Enum):
    """Packing priority tier for a product's pieces."""

    HIGH = "high"
    NORMAL = "normal"
    LOW = "low"

    @property
    def rank(self) -> int:
        """Sort rank, lower packs first."""
        return _PRIORITY_RANKS[self]

    @classmethod
    def parse(cls, value: "str | Priority | None") -> "Priority":
        """Parse a priority string, treating unknown values as NORMAL."""
        if isinstance(value, Priority):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return cls.NORMAL


_PRIORITY_RANKS = {Priority.HIGH: 0, Priority.NORMAL: 1, Priority.LOW: 2}


@dataclass(frozen=True)
class StoneKey:
    """Exact stone group key: type, thickness and finish.

    Slabs are interchangeable only within one key.
    """

    stone_type: str
    thickness: str
    finish: str

    def __str__(self) -> str:
        return f"{self.stone_type}|{self.thickness}|{self.finish}"


@dataclass(frozen=True)
class StoneVariant:
    """A row of the stone catalog.

    Attributes:
        stone_type: Stone name (e.g. "Calacatta Gold").
        thickness: Thickness label (e.g. "3cm").
        finish: Finish label (e.g. "Polished").
        slab_width: Raw slab width in inches.
        slab_height: Raw slab height in inches.
        slab_cost: Cost of one raw slab.
        fab_cost_per_sqft: Fabrication cost per square foot of finished piece.
        markup: Multiplier applied to raw cost to get the customer price.
    """

    stone_type: str
    thickness: str
    finish: str
    slab_width: float = DEFAULT_SLAB_WIDTH
    slab_height: float = DEFAULT_SLAB_HEIGHT
    slab_cost: float = 0.0
    fab_cost_per_sqft: float = 0.0
    markup: float = 1.0

    def __post_init__(self) -> None:
        if not self.stone_type:
            raise ValueError("Stone type must not be empty")
        if self.slab_width <= 0 or self.slab_height <= 0:
            raise ValueError("Slab dimensions must be positive")
        if self.slab_cost < 0 or self.fab_cost_per_sqft < 0:
            raise ValueError("Costs must be non-negative")
        if self.markup <= 0:
            raise ValueError("Markup must be positive")

    @property
    def key(self) -> StoneKey:
        return StoneKey(self.stone_type, self.thickness, self.finish)

    @property
    def slab_area(self) -> float:
        """Slab area in square inches."""
        return self.slab_width * self.slab_height


@dataclass(frozen=True)
class Product:
    """A product line entered for quoting.

    Products are not validated on construction: an incomplete line must still
    flow through a quote run and come back with a null result.
    """

    stone_type: str
    width: float | None
    depth: float | None
    quantity: int = 1
    thickness: str = ""
    finish: str = ""
    edge_detail: str = DEFAULT_EDGE_DETAIL
    priority: Priority = Priority.NORMAL
    custom_name: str | None = None
    slab_size: str | None = None
    note: str = ""

    @property
    def key(self) -> StoneKey:
        return StoneKey(self.stone_type, self.thickness, self.finish)

    @property
    def is_valid(self) -> bool:
        """True when the product can be expanded into pieces."""
        return bool(
            self.stone_type
            and self.width is not None
            and self.width > 0
            and self.depth is not None
            and self.depth > 0
            and self.quantity > 0
        )

    @property
    def piece_area(self) -> float:
        """Area of a single piece in square inches."""
        if not self.is_valid:
            return 0.0
        return self.width * self.depth  # type: ignore[operator]

    @property
    def usable_area_sqft(self) -> float:
        """Finished area of all pieces in square feet."""
        return self.piece_area / SQ_IN_PER_SQ_FT * max(self.quantity, 0)

    def display_name(self, index: int) -> str:
        """Name shown for this product, given its zero-based index."""
        return self.custom_name or f"Type {index + 1}"


@dataclass(frozen=True)
class Piece:
    """One physical unit to be cut from a slab."""

    width: float
    depth: float
    product_index: int
    piece_index: int
    name: str
    edge_detail: str
    priority: Priority
    product: Product

    def __post_init__(self) -> None:
        if self.width <= 0 or self.depth <= 0:
            raise ValueError("Piece dimensions must be positive")

    @property
    def area(self) -> float:
        return self.width * self.depth

    @property
    def is_square(self) -> bool:
        return self.width == self.depth

    def footprint(self, rotated: bool) -> tuple[float, float]:
        """(width, height) of the piece as laid on the slab."""
        if rotated:
            return self.depth, self.width
        return self.width, self.depth

    @property
    def label(self) -> str:
        if self.product.quantity > 1:
            return f"{self.name} #{self.piece_index + 1}"
        return self.name


@dataclass(frozen=True)
class Placement:
    """A piece sited on a slab.

    Attributes:
        piece: The placed piece.
        x: Left edge, inches from the slab's left edge.
        y: Top edge, inches from the slab's top edge.
        rotated: True if the piece's width and depth are swapped.
        slab_index: Zero-based index of the slab within its group.
    """

    piece: Piece
    x: float
    y: float
    rotated: bool = False
    slab_index: int = 0

    def __post_init__(self) -> None:
        if self.x < 0 or self.y < 0:
            raise ValueError("Position coordinates must be non-negative")
        if self.slab_index < 0:
            raise ValueError("Slab index must be non-negative")

    @property
    def placed_width(self) -> float:
        return self.piece.footprint(self.rotated)[0]

    @property
    def placed_height(self) -> float:
        return self.piece.footprint(self.rotated)[1]

    @property
    def right_edge(self) -> float:
        return self.x + self.placed_width

    @property
    def bottom_edge(self) -> float:
        return self.y + self.placed_height

    @property
    def area(self) -> float:
        return self.placed_width * self.placed_height


@dataclass(frozen=True)
class QuoteSettings:
    """Pricing and packing settings for a quote run.

    Attributes:
        include_kerf: Whether saw kerf spacing is applied between pieces.
        kerf_width: Saw blade kerf in inches.
        breakage_buffer: Percentage added to material cost for breakage.
        include_fabrication: Whether fabrication cost is charged.
        include_installation: Whether installation cost is charged.
        installation_rate: Installation cost per square foot.
        multi_product_optimization: Share slabs across products of the
            same stone group instead of sizing each product on its own.
    """

    include_kerf: bool = True
    kerf_width: float = 0.125
    breakage_buffer: float = 10.0
    include_fabrication: bool = True
    include_installation: bool = False
    installation_rate: float = 15.0
    multi_product_optimization: bool = True

    def __post_init__(self) -> None:
        if not 0 <= self.kerf_width <= 0.5:
            raise ValueError("Kerf must be between 0 and 0.5 inches")
        if not 0 <= self.breakage_buffer <= 100:
            raise ValueError("Breakage buffer must be between 0 and 100 percent")
        if self.installation_rate < 0:
            raise ValueError("Installation rate must be non-negative")

    @property
    def kerf(self) -> float:
        """Kerf actually applied between pieces."""
        return self.kerf_width if self.include_kerf else 0.0

    @property
    def breakage_factor(self) -> float:
        return 1 + self.breakage_buffer / 100


@dataclass(frozen=True)
class ProductResult:
    """Pricing outcome for one product.

    ``slabs_needed`` is a whole number in independent mode and a fractional
    share of the group's slabs when slabs are shared.

    ``pieces_per_slab`` is always the single-product estimate from
    max_pieces_per_slab, even when the product was packed onto shared slabs.
    It does not describe the shared layout.
    """

    usable_area_sqft: float
    slabs_needed: float
    efficiency: float
    material_cost: float
    fabrication_cost: float
    raw_cost: float
    final_price: float
    pieces_per_slab: int
    installation_cost: float = 0.0
    piece_count: int = 0
    multi_product_optimized: bool = False
    group_key: StoneKey | None = None
    area_ratio: float | None = None
