"""Slab layout optimization: placement search and multi-product packing.

Pieces from every product that shares an exact stone key (type, thickness,
finish) are packed together onto that stone's slabs. The packer is a greedy
first-fit heuristic:

1. Pieces are sorted by priority tier, then by area (largest first).
2. Each piece goes onto the first slab, in creation order, where the
   placement search finds room.
3. A new slab is opened only when no existing slab accepts the piece.

This is NOT an optimal 2D bin packer. It is fast and usually good, but a
different order or a full search can beat it; tests pin its behavior, not a
guaranteed optimum.

Result dataclasses are frozen. Mutable state lives only in a packing session
owned by a single optimization call.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Sequence

from stonequote.domain.catalog import StoneCatalog
from stonequote.domain.exceptions import CatalogMissError, UnplaceablePieceError
from stonequote.domain.value_objects import (
    Piece,
    Placement,
    Product,
    QuoteSettings,
    StoneKey,
    StoneVariant,
)

logger = logging.getLogger(__name__)

# Leftover strips narrower than this are considered unusable.
MIN_USEFUL_OFFCUT = 12.0
SLIVER_PENALTY = 100.0


@dataclass(frozen=True)
class SlabInstance:
    """One raw slab opened during packing.

    Attributes:
        slab_index: Zero-based index in creation order within its group.
        width: Slab width in inches.
        height: Slab height in inches.
        placements: Pieces placed on this slab, in placement order.
    """

    slab_index: int
    width: float
    height: float
    placements: tuple[Placement, ...]

    @property
    def area(self) -> float:
        return self.width * self.height

    @property
    def used_area(self) -> float:
        """Area covered by placed pieces in square inches."""
        return sum(p.area for p in self.placements)

    @property
    def efficiency(self) -> float:
        """Occupied area as a percentage of slab area."""
        if self.area == 0:
            return 0.0
        return self.used_area / self.area * 100

    @property
    def piece_count(self) -> int:
        return len(self.placements)


class GroupErrorKind(str, Enum):
    """Reasons a stone group could not be packed."""

    CATALOG_MISS = "catalog_miss"
    UNPLACEABLE_PIECE = "unplaceable_piece"
    INTERNAL = "internal"


@dataclass(frozen=True)
class GroupError:
    """Error marker attached to a stone group result.

    Attributes:
        kind: Error category.
        message: Human-readable explanation.
        piece: Offending piece for unplaceable-piece errors.
        slab_width: Slab width when known.
        slab_height: Slab height when known.
    """

    kind: GroupErrorKind
    message: str
    piece: Piece | None = None
    slab_width: float | None = None
    slab_height: float | None = None


@dataclass(frozen=True)
class PackingGroupResult:
    """Packing outcome for one exact stone key.

    Attributes:
        key: The stone group key.
        pieces: All pieces expanded for this group, in input order.
        variant: Matching catalog variant, None on a catalog miss.
        slabs: Slabs opened for the group.
        placements: Every placement across the group's slabs.
        error: Error marker, None when packing succeeded.
    """

    key: StoneKey
    pieces: tuple[Piece, ...]
    variant: StoneVariant | None = None
    slabs: tuple[SlabInstance, ...] = ()
    placements: tuple[Placement, ...] = ()
    error: GroupError | None = None

    @property
    def is_error(self) -> bool:
        return self.error is not None

    @property
    def total_slabs(self) -> int:
        return len(self.slabs)

    @property
    def average_efficiency(self) -> float:
        """Mean of per-slab efficiencies, 0 when no slabs were opened."""
        if not self.slabs:
            return 0.0
        return sum(s.efficiency for s in self.slabs) / len(self.slabs)

    @property
    def total_placed_area(self) -> float:
        return sum(p.area for p in self.placements)

    @property
    def product_indices(self) -> list[int]:
        """Indices of the input products contributing to this group."""
        seen: dict[int, None] = {}
        for piece in self.pieces:
            seen.setdefault(piece.product_index, None)
        return list(seen)


def candidate_positions(
    placements: Sequence[Placement],
    kerf: float,
    include_diagonal: bool = True,
) -> list[tuple[float, float]]:
    """Anchor points to try for the next piece on a slab.

    The origin, then for each placed piece the point to its right and the
    point below it (kerf away), plus optionally the point diagonally past its
    bottom-right corner. Duplicates are dropped, first occurrence kept.
    """
    points: list[tuple[float, float]] = [(0.0, 0.0)]
    for placed in placements:
        right = placed.right_edge + kerf
        below = placed.bottom_edge + kerf
        points.append((right, placed.y))
        points.append((placed.x, below))
        if include_diagonal:
            points.append((right, below))
    return list(dict.fromkeys(points))


def overlaps(
    x: float,
    y: float,
    width: float,
    height: float,
    other: Placement,
    kerf: float,
) -> bool:
    """Check whether a footprint comes within ``kerf`` of a placed piece.

    Rectangles separated by at least ``kerf`` on either axis do not overlap.
    """
    return not (
        x + width + kerf <= other.x
        or x >= other.right_edge + kerf
        or y + height + kerf <= other.y
        or y >= other.bottom_edge + kerf
    )


def waste_score(
    x: float,
    y: float,
    width: float,
    height: float,
    slab_width: float,
    slab_height: float,
) -> float:
    """Score a position, lower is better.

    Penalizes leaving a sliver narrower than MIN_USEFUL_OFFCUT to the right
    or below the piece, then prefers positions near the top-left corner.
    """
    right_space = slab_width - (x + width)
    bottom_space = slab_height - (y + height)

    score = 0.0
    if 0 < right_space < MIN_USEFUL_OFFCUT:
        score += SLIVER_PENALTY
    if 0 < bottom_space < MIN_USEFUL_OFFCUT:
        score += SLIVER_PENALTY
    return score + x + y


def find_best_placement(
    piece: Piece,
    placements: Sequence[Placement],
    slab_width: float,
    slab_height: float,
    kerf: float,
    slab_index: int = 0,
    include_diagonal: bool = True,
) -> Placement | None:
    """Find the lowest-waste valid position for a piece on a partly filled slab.

    Every candidate anchor is tried unrotated and rotated (square pieces skip
    the rotated trial). A trial is valid if it stays inside the slab and
    keeps at least ``kerf`` from every placed piece.

    Args:
        piece: Piece to place.
        placements: Pieces already on the slab.
        slab_width: Slab width in inches.
        slab_height: Slab height in inches.
        kerf: Required spacing between pieces.
        slab_index: Index stamped on the returned placement.
        include_diagonal: Also try the point past each piece's bottom-right corner.

    Returns:
        The best Placement, or None if the piece fits nowhere on this slab.
        Ties keep the first candidate found.
    """
    orientations = (False,) if piece.is_square else (False, True)

    best: tuple[float, float, float, bool] | None = None
    for x, y in candidate_positions(placements, kerf, include_diagonal):
        for rotated in orientations:
            width, height = piece.footprint(rotated)
            if x + width > slab_width or y + height > slab_height:
                continue
            if any(overlaps(x, y, width, height, other, kerf) for other in placements):
                continue
            score = waste_score(x, y, width, height, slab_width, slab_height)
            if best is None or score < best[0]:
                best = (score, x, y, rotated)

    if best is None:
        return None

    _, x, y, rotated = best
    return Placement(piece=piece, x=x, y=y, rotated=rotated, slab_index=slab_index)


def expand_pieces(products: Sequence[Product]) -> dict[StoneKey, list[Piece]]:
    """Expand valid products into pieces grouped by exact stone key.

    Invalid products (no stone, non-positive width, depth or quantity) are
    skipped. Groups keep first-seen order and pieces keep input order.
    """
    groups: dict[StoneKey, list[Piece]] = {}
    for index, product in enumerate(products):
        if not product.is_valid:
            logger.debug("Skipping incomplete product %d", index)
            continue

        width = product.width
        depth = product.depth
        assert width is not None and depth is not None

        name = product.display_name(index)
        pieces = groups.setdefault(product.key, [])
        for piece_index in range(product.quantity):
            pieces.append(
                Piece(
                    width=width,
                    depth=depth,
                    product_index=index,
                    piece_index=piece_index,
                    name=name,
                    edge_detail=product.edge_detail,
                    priority=product.priority,
                    product=product,
                )
            )
    return groups


def sort_pieces(pieces: Iterable[Piece]) -> list[Piece]:
    """Sort by priority tier, then area descending; stable for ties."""
    return sorted(pieces, key=lambda p: (p.priority.rank, -p.area))


@dataclass
class _SlabState:
    """Mutable slab while a group is being packed."""

    index: int
    width: float
    height: float
    placements: list[Placement] = field(default_factory=list)

    def freeze(self) -> SlabInstance:
        return SlabInstance(
            slab_index=self.index,
            width=self.width,
            height=self.height,
            placements=tuple(self.placements),
        )


@dataclass
class _PackingSession:
    """State for packing one stone group, owned by a single optimize call.

    Attributes:
        variant: Catalog variant supplying the slab size.
        kerf: Spacing between pieces.
        include_diagonal: Whether placement search uses diagonal anchors.
        slabs: Slabs opened so far, in creation order.
        placements: Placements in the order they were made.
    """

    variant: StoneVariant
    kerf: float
    include_diagonal: bool = True
    slabs: list[_SlabState] = field(default_factory=list)
    placements: list[Placement] = field(default_factory=list)

    def place(self, piece: Piece) -> Placement:
        """Place a piece on the first slab with room, opening one if needed.

        Raises:
            UnplaceablePieceError: If the piece cannot fit on an empty slab.
        """
        for slab in self.slabs:
            placement = find_best_placement(
                piece,
                slab.placements,
                slab.width,
                slab.height,
                self.kerf,
                slab_index=slab.index,
                include_diagonal=self.include_diagonal,
            )
            if placement is not None:
                return self._record(slab, placement)

        return self._open_slab(piece)

    def _open_slab(self, piece: Piece) -> Placement:
        slab_width = self.variant.slab_width
        slab_height = self.variant.slab_height

        for rotated in (False, True):
            width, height = piece.footprint(rotated)
            if width <= slab_width and height <= slab_height:
                break
        else:
            raise UnplaceablePieceError(piece, slab_width, slab_height)

        slab = _SlabState(index=len(self.slabs), width=slab_width, height=slab_height)
        self.slabs.append(slab)
        logger.debug("Opened slab %d for %s", slab.index, self.variant.key)

        placement = Placement(
            piece=piece, x=0.0, y=0.0, rotated=rotated, slab_index=slab.index
        )
        return self._record(slab, placement)

    def _record(self, slab: _SlabState, placement: Placement) -> Placement:
        slab.placements.append(placement)
        self.placements.append(placement)
        logger.debug(
            "Placed '%s' on slab %d at (%s, %s)%s",
            placement.piece.label,
            slab.index,
            placement.x,
            placement.y,
            " rotated" if placement.rotated else "",
        )
        return placement

    def finish(self, key: StoneKey, pieces: Sequence[Piece]) -> PackingGroupResult:
        return PackingGroupResult(
            key=key,
            pieces=tuple(pieces),
            variant=self.variant,
            slabs=tuple(slab.freeze() for slab in self.slabs),
            placements=tuple(self.placements),
        )


class MultiProductPacker:
    """Packs pieces of many products onto shared slabs, per stone group.

    Each exact stone key is packed independently; an error in one group is
    recorded on that group's result and never stops the others.

    Attributes:
        kerf: Spacing between pieces in inches.
        include_diagonal: Whether placement search uses diagonal anchors.
    """

    def __init__(self, kerf: float = 0.125, include_diagonal: bool = True) -> None:
        if kerf < 0:
            raise ValueError("Kerf must be non-negative")
        self.kerf = kerf
        self.include_diagonal = include_diagonal

    @classmethod
    def from_settings(cls, settings: QuoteSettings) -> "MultiProductPacker":
        return cls(kerf=settings.kerf)

    def optimize(
        self,
        products: Sequence[Product],
        catalog: StoneCatalog,
    ) -> dict[StoneKey, PackingGroupResult]:
        """Pack all valid products, grouped by exact stone key.

        Args:
            products: Product lines to pack.
            catalog: Stone catalog for slab sizes.

        Returns:
            Mapping of stone key to group result, in first-seen group order.
        """
        groups = expand_pieces(products)
        logger.info(
            "Packing %d pieces across %d stone groups",
            sum(len(p) for p in groups.values()),
            len(groups),
        )

        results: dict[StoneKey, PackingGroupResult] = {}
        for key, pieces in groups.items():
            results[key] = self._pack_group_safely(key, pieces, catalog)
        return results

    def _pack_group_safely(
        self,
        key: StoneKey,
        pieces: list[Piece],
        catalog: StoneCatalog,
    ) -> PackingGroupResult:
        """Pack one group, converting any failure into an error marker."""
        try:
            return self.pack_group(key, pieces, catalog.require(key))
        except CatalogMissError as e:
            logger.warning("%s", e)
            error = GroupError(kind=GroupErrorKind.CATALOG_MISS, message=str(e))
            return PackingGroupResult(key=key, pieces=tuple(pieces), error=error)
        except UnplaceablePieceError as e:
            logger.warning("Group %s: %s", key, e)
            error = GroupError(
                kind=GroupErrorKind.UNPLACEABLE_PIECE,
                message=str(e),
                piece=e.piece,
                slab_width=e.slab_width,
                slab_height=e.slab_height,
            )
            return PackingGroupResult(
                key=key, pieces=tuple(pieces), variant=catalog.find(key), error=error
            )
        except Exception as e:
            logger.exception("Unexpected failure packing group %s", key)
            error = GroupError(kind=GroupErrorKind.INTERNAL, message=str(e))
            return PackingGroupResult(key=key, pieces=tuple(pieces), error=error)

    def pack_group(
        self,
        key: StoneKey,
        pieces: Sequence[Piece],
        variant: StoneVariant,
    ) -> PackingGroupResult:
        """Pack one group's pieces onto slabs of ``variant``.

        Raises:
            UnplaceablePieceError: If any piece is larger than the slab in
                both orientations.
        """
        session = _PackingSession(
            variant=variant, kerf=self.kerf, include_diagonal=self.include_diagonal
        )
        for piece in sort_pieces(pieces):
            session.place(piece)

        result = session.finish(key, pieces)
        for slab in result.slabs:
            logger.debug(
                "Slab %d of %s: %d pieces, %.1f%% efficient",
                slab.slab_index,
                key,
                slab.piece_count,
                slab.efficiency,
            )
        logger.info(
            "Group %s: %d pieces on %d slabs, %.1f%% average efficiency",
            key,
            len(pieces),
            result.total_slabs,
            result.average_efficiency,
        )
        return result


def optimize_multi_product_layout(
    products: Sequence[Product],
    catalog: StoneCatalog,
    settings: QuoteSettings,
) -> dict[StoneKey, PackingGroupResult]:
    """Pack products onto shared slabs using the settings' kerf."""
    return MultiProductPacker.from_settings(settings).optimize(products, catalog)
