"""Output formatters for quotes and slab layouts."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from stonequote.domain import Placement, Product, ProductResult

from .slab_packing import PackingGroupResult, SlabInstance

if TYPE_CHECKING:
    from stonequote.application.dtos import QuoteOutput


class QuoteFormatter:
    """Formats product pricing as a text table with totals."""

    def format(self, output: "QuoteOutput") -> str:
        if not output.products:
            return "No products in quote."

        lines = [
            "QUOTE",
            "=" * 96,
            f"{'Product':<22} {'Stone':<28} {'Qty':<5} {'Sq Ft':<8} "
            f"{'Slabs':<7} {'Eff %':<7} {'Price'}",
            "-" * 96,
        ]
        for index, (product, result) in enumerate(output.items()):
            lines.append(self._format_row(index, product, result))

        summary = output.summary
        lines.append("-" * 96)
        lines.append(f"{'Total price:':<22} ${summary.total_price:,.2f}")
        lines.append(f"{'Total slabs:':<22} {summary.total_slabs}")
        lines.append(f"{'Average efficiency:':<22} {summary.average_efficiency:.1f}%")
        if summary.unpriced_products:
            lines.append(f"{'Unpriced products:':<22} {summary.unpriced_products}")
        if output.settings.multi_product_optimization:
            lines.append("Slabs shared across products of the same stone.")

        return "\n".join(lines)

    def _format_row(
        self, index: int, product: Product, result: ProductResult | None
    ) -> str:
        name = product.display_name(index)[:21]
        stone = str(product.key)[:27]
        if result is None:
            return f"{name:<22} {stone:<28} {product.quantity:<5} -- not priced --"

        slabs = (
            f"{result.slabs_needed:.2f}"
            if result.multi_product_optimized
            else f"{result.slabs_needed:.0f}"
        )
        return (
            f"{name:<22} {stone:<28} {product.quantity:<5} "
            f"{result.usable_area_sqft:<8.2f} {slabs:<7} {result.efficiency:<7.1f} "
            f"${result.final_price:,.2f}"
        )


class SlabLayoutFormatter:
    """Formats packed slab layouts per stone group."""

    def format(self, group_results: dict[Any, PackingGroupResult]) -> str:
        if not group_results:
            return "No slab layouts."

        sections = [self.format_group(group) for group in group_results.values()]
        return "\n\n".join(sections)

    def format_group(self, group: PackingGroupResult) -> str:
        lines = [f"STONE GROUP: {group.key}", "=" * 70]

        if group.error is not None:
            lines.append(f"ERROR ({group.error.kind.value}): {group.error.message}")
            return "\n".join(lines)

        lines.append(
            f"{group.total_slabs} slab(s), "
            f"{group.average_efficiency:.1f}% average efficiency"
        )
        for slab in group.slabs:
            lines.extend(self._format_slab(slab))
        return "\n".join(lines)

    def _format_slab(self, slab: SlabInstance) -> list[str]:
        lines = [
            "",
            f"Slab {slab.slab_index + 1} ({slab.width:g}x{slab.height:g}): "
            f"{slab.piece_count} piece(s), {slab.efficiency:.1f}% efficient",
            f"  {'Piece':<26} {'X':<9} {'Y':<9} {'Size':<16} {'Rotated'}",
        ]
        for placement in slab.placements:
            size = f"{placement.placed_width:g}x{placement.placed_height:g}"
            lines.append(
                f"  {placement.piece.label[:25]:<26} {placement.x:<9.3f} "
                f"{placement.y:<9.3f} {size:<16} {'yes' if placement.rotated else 'no'}"
            )
        return lines


class JsonExporter:
    """Exports a quote as JSON."""

    def export(self, output: "QuoteOutput") -> str:
        """Export quote output as JSON string."""
        return json.dumps(self.to_dict(output), indent=2)

    def to_dict(self, output: "QuoteOutput") -> dict[str, Any]:
        summary = output.summary
        return {
            "products": [
                self._format_product(index, product, result)
                for index, (product, result) in enumerate(output.items())
            ],
            "groups": [self.format_group(g) for g in output.group_results.values()],
            "summary": {
                "total_price": round(summary.total_price, 2),
                "total_slabs": summary.total_slabs,
                "average_efficiency": round(summary.average_efficiency, 2),
                "priced_products": summary.priced_products,
                "unpriced_products": summary.unpriced_products,
            },
            "multi_product_optimization": output.settings.multi_product_optimization,
        }

    def _format_product(
        self, index: int, product: Product, result: ProductResult | None
    ) -> dict[str, Any]:
        return {
            "index": index,
            "name": product.display_name(index),
            "stone_type": product.stone_type,
            "thickness": product.thickness,
            "finish": product.finish,
            "width": product.width,
            "depth": product.depth,
            "quantity": product.quantity,
            "priority": product.priority.value,
            "result": self.format_result(result),
        }

    def format_result(self, result: ProductResult | None) -> dict[str, Any] | None:
        if result is None:
            return None
        return {
            "usable_area_sqft": round(result.usable_area_sqft, 4),
            "slabs_needed": round(result.slabs_needed, 4),
            "efficiency": round(result.efficiency, 2),
            "material_cost": round(result.material_cost, 2),
            "fabrication_cost": round(result.fabrication_cost, 2),
            "installation_cost": round(result.installation_cost, 2),
            "raw_cost": round(result.raw_cost, 2),
            "final_price": round(result.final_price, 2),
            "pieces_per_slab": result.pieces_per_slab,
            "piece_count": result.piece_count,
            "multi_product_optimized": result.multi_product_optimized,
            "area_ratio": (
                round(result.area_ratio, 6) if result.area_ratio is not None else None
            ),
        }

    def format_group(self, group: PackingGroupResult) -> dict[str, Any]:
        data: dict[str, Any] = {
            "stone_type": group.key.stone_type,
            "thickness": group.key.thickness,
            "finish": group.key.finish,
            "total_slabs": group.total_slabs,
            "average_efficiency": round(group.average_efficiency, 2),
            "slabs": [
                {
                    "index": slab.slab_index,
                    "width": slab.width,
                    "height": slab.height,
                    "efficiency": round(slab.efficiency, 2),
                    "placements": [self._format_placement(p) for p in slab.placements],
                }
                for slab in group.slabs
            ],
            "error": None,
        }
        if group.error is not None:
            error = group.error
            data["error"] = {
                "kind": error.kind.value,
                "message": error.message,
                "piece": error.piece.label if error.piece is not None else None,
                "slab_width": error.slab_width,
                "slab_height": error.slab_height,
            }
        return data

    def _format_placement(self, placement: Placement) -> dict[str, Any]:
        return {
            "label": placement.piece.label,
            "product_index": placement.piece.product_index,
            "piece_index": placement.piece.piece_index,
            "edge_detail": placement.piece.edge_detail,
            "x": placement.x,
            "y": placement.y,
            "width": placement.placed_width,
            "height": placement.placed_height,
            "rotated": placement.rotated,
        }
