"""Domain exceptions raised inside the quoting engine.

These never escape a quote run: the packer converts them into per-group
error markers so the remaining groups are still priced.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .value_objects import Piece, StoneKey


class QuoteError(Exception):
    """Base class for quoting errors."""


class CatalogMissError(QuoteError):
    """Raised when no catalog variant matches a stone key exactly."""

    def __init__(self, key: "StoneKey") -> None:
        self.key = key
        super().__init__(
            "Exact stone type/thickness/finish combination not found in catalog: "
            f"{key}"
        )


class UnplaceablePieceError(QuoteError):
    """Raised when a piece exceeds the slab in both orientations."""

    def __init__(self, piece: "Piece", slab_width: float, slab_height: float) -> None:
        self.piece = piece
        self.slab_width = slab_width
        self.slab_height = slab_height
        super().__init__(
            f"Piece '{piece.label}' ({piece.width}x{piece.depth}) "
            f"does not fit on slab ({slab_width}x{slab_height}) in either orientation"
        )
