"""Pydantic models for quote configuration files.

A configuration file holds the quote settings, the product lines to price
and, optionally, the stone catalog. Field names are snake_case; the camelCase
names used by the quoting form and the column headings of the stone catalog
spreadsheet are accepted as aliases so exported data loads unchanged.
"""

import math
from typing import Any

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
    model_validator,
)

from stonequote.domain.value_objects import (
    DEFAULT_EDGE_DETAIL,
    DEFAULT_SLAB_HEIGHT,
    DEFAULT_SLAB_WIDTH,
    Priority,
)

# Version 1.0: Initial schema with settings, catalog and products
SUPPORTED_VERSIONS: frozenset[str] = frozenset({"1.0"})

# Packing time grows with the square of the piece count.
MAX_PRODUCT_QUANTITY = 200
MAX_TOTAL_PIECES = 1000


def _alias(*names: str) -> AliasChoices:
    return AliasChoices(*names)


def _parse_number(value: Any) -> float | None:
    """Parse a form value into a float, None when blank or not numeric."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number):
        return None
    return number


class QuoteSettingsSchema(BaseModel):
    """Settings for a quote run.

    Attributes:
        include_kerf: Apply saw kerf spacing between pieces.
        kerf_width: Saw kerf in inches.
        breakage_buffer: Percentage added to material cost.
        include_fabrication: Charge fabrication per square foot.
        include_installation: Charge installation per square foot.
        installation_rate: Installation cost per square foot.
        multi_product_optimization: Share slabs across products of one stone.
    """

    model_config = ConfigDict(extra="forbid")

    include_kerf: bool = Field(
        default=True, validation_alias=_alias("include_kerf", "includeKerf")
    )
    kerf_width: float = Field(
        default=0.125,
        ge=0,
        le=0.5,
        validation_alias=_alias("kerf_width", "kerfWidth"),
        description="Saw kerf width in inches",
    )
    breakage_buffer: float = Field(
        default=10.0,
        ge=0,
        le=100,
        validation_alias=_alias("breakage_buffer", "breakageBuffer"),
        description="Breakage buffer in percent",
    )
    include_fabrication: bool = Field(
        default=True,
        validation_alias=_alias("include_fabrication", "includeFabrication"),
    )
    include_installation: bool = Field(
        default=False,
        validation_alias=_alias("include_installation", "includeInstallation"),
    )
    installation_rate: float = Field(
        default=15.0,
        ge=0,
        validation_alias=_alias("installation_rate", "installationRate"),
        description="Installation cost per square foot",
    )
    multi_product_optimization: bool = Field(
        default=True,
        validation_alias=_alias(
            "multi_product_optimization", "multiProductOptimization"
        ),
    )


class StoneVariantSchema(BaseModel):
    """A stone catalog row."""

    model_config = ConfigDict(extra="ignore")

    stone_type: str = Field(
        ..., min_length=1, validation_alias=_alias("stone_type", "Stone Type")
    )
    thickness: str = Field(default="", validation_alias=_alias("thickness", "Thickness"))
    finish: str = Field(default="", validation_alias=_alias("finish", "Finish"))
    slab_width: float = Field(
        default=DEFAULT_SLAB_WIDTH,
        gt=0,
        validation_alias=_alias("slab_width", "Slab Width"),
    )
    slab_height: float = Field(
        default=DEFAULT_SLAB_HEIGHT,
        gt=0,
        validation_alias=_alias("slab_height", "Slab Height"),
    )
    slab_cost: float = Field(
        default=0.0, ge=0, validation_alias=_alias("slab_cost", "Slab Cost")
    )
    fab_cost_per_sqft: float = Field(
        default=0.0, ge=0, validation_alias=_alias("fab_cost_per_sqft", "Fab Cost")
    )
    markup: float = Field(default=1.0, gt=0, validation_alias=_alias("markup", "Mark Up"))

    @field_validator("thickness", "finish", mode="before")
    @classmethod
    def coerce_label(cls, v: Any) -> Any:
        """Accept numeric labels such as a bare thickness of 3."""
        if v is None:
            return ""
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return str(v)
        return v


class ProductSchema(BaseModel):
    """A product line as entered on the quoting form.

    Width, depth and quantity accept numbers or numeric strings. Blank or
    unparseable values load as None so the product is reported unpriced
    instead of failing the whole file. Quantity is capped at
    MAX_PRODUCT_QUANTITY.
    """

    model_config = ConfigDict(extra="ignore")

    stone: str = Field(default="", validation_alias=_alias("stone", "stone_type"))
    width: float | None = None
    depth: float | None = None
    quantity: int | None = Field(default=1, le=MAX_PRODUCT_QUANTITY)
    thickness: str = ""
    finish: str = ""
    edge_detail: str = Field(
        default=DEFAULT_EDGE_DETAIL, validation_alias=_alias("edge_detail", "edgeDetail")
    )
    slab_size: str | None = Field(
        default=None, validation_alias=_alias("slab_size", "slabSize")
    )
    priority: Priority = Priority.NORMAL
    custom_name: str | None = Field(
        default=None, validation_alias=_alias("custom_name", "customName")
    )
    note: str = Field(default="", validation_alias=_alias("note", "notes"))

    @field_validator("width", "depth", mode="before")
    @classmethod
    def parse_dimension(cls, v: Any) -> float | None:
        return _parse_number(v)

    @field_validator("quantity", mode="before")
    @classmethod
    def parse_quantity(cls, v: Any) -> int | None:
        number = _parse_number(v)
        return None if number is None else int(number)

    @field_validator("priority", mode="before")
    @classmethod
    def parse_priority(cls, v: Any) -> Priority:
        return Priority.parse(v)

    @field_validator("stone", "thickness", "finish", "edge_detail", "note", mode="before")
    @classmethod
    def coerce_text(cls, v: Any) -> Any:
        if v is None:
            return ""
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return str(v)
        return v

    @field_validator("edge_detail")
    @classmethod
    def default_edge_detail(cls, v: str) -> str:
        return v or DEFAULT_EDGE_DETAIL


class QuoteConfiguration(BaseModel):
    """Root configuration model for a quote.

    Attributes:
        schema_version: Version string in format "major.minor".
        settings: Quote settings.
        catalog: Stone catalog rows; may instead be supplied separately.
        products: Product lines to price.

    Example:
        >>> config = QuoteConfiguration(
        ...     products=[ProductSchema(stone="Carrara", width=24, depth=96)]
        ... )
    """

    model_config = ConfigDict(extra="forbid")

    schema_version: str = Field(default="1.0", pattern=r"^\d+\.\d+$")
    settings: QuoteSettingsSchema = Field(default_factory=QuoteSettingsSchema)
    catalog: list[StoneVariantSchema] = Field(default_factory=list)
    products: list[ProductSchema] = Field(default_factory=list, max_length=500)

    @field_validator("schema_version")
    @classmethod
    def validate_supported_version(cls, v: str) -> str:
        """Accept supported versions and newer minor versions of them."""
        if v in SUPPORTED_VERSIONS:
            return v

        major_version = int(v.split(".")[0])
        supported_majors = {int(sv.split(".")[0]) for sv in SUPPORTED_VERSIONS}
        if major_version in supported_majors:
            return v

        raise ValueError(
            f"Unsupported schema version '{v}'. "
            f"Supported versions: {sorted(SUPPORTED_VERSIONS)}"
        )

    @model_validator(mode="after")
    def validate_total_pieces(self) -> "QuoteConfiguration":
        """Reject quotes that expand into more pieces than a run can pack."""
        total = sum(max(p.quantity or 0, 0) for p in self.products)
        if total > MAX_TOTAL_PIECES:
            raise ValueError(
                f"Quote expands to {total} pieces; at most {MAX_TOTAL_PIECES} are allowed"
            )
        return self


class CatalogFile(BaseModel):
    """A standalone catalog file: either a bare list or {"catalog": [...]}."""

    model_config = ConfigDict(extra="forbid")

    catalog: list[StoneVariantSchema] = Field(default_factory=list)
