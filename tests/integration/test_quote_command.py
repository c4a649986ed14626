"""Integration tests for GenerateQuoteCommand.

Runs complete quotes from configuration files through packing, allocation
and totals.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from stonequote.application import GenerateQuoteCommand
from stonequote.application.config import (
    config_to_catalog,
    config_to_products,
    config_to_settings,
    load_catalog,
    load_config,
)
from stonequote.domain import QuoteSettings, StoneKey
from stonequote.infrastructure import GroupErrorKind, MultiProductPacker

CARRARA = StoneKey("Carrara", "3cm", "Polished")
ABSOLUTE_BLACK = StoneKey("Absolute Black", "2cm", "Honed")


def _run(path: Path, settings: QuoteSettings | None = None, catalog_path: Path | None = None):
    config = load_config(path)
    rows = load_catalog(catalog_path).catalog if catalog_path else config.catalog
    return GenerateQuoteCommand().execute(
        config_to_products(config),
        config_to_catalog(rows),
        settings or config_to_settings(config.settings),
    )


# =============================================================================
# Shared slabs
# =============================================================================


class TestSharedSlabQuote:
    """Quotes with multi-product optimization enabled."""

    def test_kitchen(self, fixtures_path: Path) -> None:
        output = _run(fixtures_path / "kitchen.json")

        assert list(output.group_results) == [CARRARA, ABSOLUTE_BLACK]
        assert not output.has_errors
        assert output.summary.total_slabs == 2
        assert output.summary.priced_products == 3
        assert all(r is not None and r.multi_product_optimized for r in output.results)

    def test_island_and_vanity_split_one_slab(self, fixtures_path: Path) -> None:
        output = _run(fixtures_path / "kitchen.json")

        island, vanity, _ = output.results
        assert island.slabs_needed == pytest.approx(0.5)
        assert vanity.slabs_needed == pytest.approx(0.5)
        assert island.material_cost + vanity.material_cost == pytest.approx(550.0)

    def test_total_price_is_sum_of_products(self, fixtures_path: Path) -> None:
        output = _run(fixtures_path / "kitchen.json")

        assert output.summary.total_price == pytest.approx(
            sum(r.final_price for r in output.results)
        )

    def test_separate_catalog(self, fixtures_path: Path) -> None:
        output = _run(
            fixtures_path / "products_only.json",
            catalog_path=fixtures_path / "catalog.json",
        )

        assert output.summary.total_slabs == 2
        assert output.summary.total_price == pytest.approx(1100.0)

    def test_unplaceable_piece_isolated(self, fixtures_path: Path) -> None:
        output = _run(fixtures_path / "oversized_piece.json")

        assert output.has_errors
        error = output.group_errors[0].error
        assert error is not None
        assert error.kind == GroupErrorKind.UNPLACEABLE_PIECE
        assert output.results[0] is None
        assert output.results[1] is not None
        assert not output.results[1].multi_product_optimized

    def test_missing_catalog_leaves_all_unpriced(self, fixtures_path: Path) -> None:
        output = _run(fixtures_path / "products_only.json")

        assert output.results == [None, None]
        assert output.summary.unpriced_products == 2
        assert output.group_errors[0].error.kind == GroupErrorKind.CATALOG_MISS

    def test_injected_packer(self, fixtures_path: Path) -> None:
        config = load_config(fixtures_path / "kitchen.json")
        command = GenerateQuoteCommand(packer=MultiProductPacker(kerf=0.0))

        output = command.execute(
            config_to_products(config), config_to_catalog(config.catalog), QuoteSettings()
        )

        placements = output.group_results[CARRARA].placements
        assert placements[1].x == 60.0


# =============================================================================
# Independent pricing
# =============================================================================


class TestIndependentQuote:
    """Quotes with each product on its own slabs."""

    def test_each_product_gets_whole_slabs(self, fixtures_path: Path) -> None:
        output = _run(
            fixtures_path / "kitchen.json",
            settings=QuoteSettings(multi_product_optimization=False),
        )

        assert output.group_results == {}
        assert [r.slabs_needed for r in output.results] == [1, 1, 1]
        assert output.summary.total_slabs == 3
        assert not any(r.multi_product_optimized for r in output.results)

    def test_sharing_never_costs_more_material(self, fixtures_path: Path) -> None:
        shared = _run(fixtures_path / "kitchen.json")
        independent = _run(
            fixtures_path / "kitchen.json",
            settings=QuoteSettings(multi_product_optimization=False),
        )

        shared_material = sum(r.material_cost for r in shared.results)
        independent_material = sum(r.material_cost for r in independent.results)
        assert shared_material < independent_material

    def test_runs_are_independent(self, fixtures_path: Path) -> None:
        command = GenerateQuoteCommand()
        config = load_config(fixtures_path / "kitchen.json")
        products = config_to_products(config)
        catalog = config_to_catalog(config.catalog)

        first = command.execute(products, catalog)
        second = command.execute(products, catalog)

        assert first.results == second.results
        assert first.group_results == second.group_results
