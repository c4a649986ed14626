"""Tests for quote and slab layout formatters."""

from __future__ import annotations

import json

import pytest

from stonequote.application import GenerateQuoteCommand, QuoteOutput
from stonequote.domain import QuoteSettings
from stonequote.infrastructure import JsonExporter, QuoteFormatter, SlabLayoutFormatter


@pytest.fixture
def shared_output(make_product, catalog) -> QuoteOutput:
    products = [
        make_product(60, 60, custom_name="Island"),
        make_product(60, 60, custom_name="Vanity"),
        make_product(130, 70, thickness="2cm", custom_name="Mystery"),
    ]
    return GenerateQuoteCommand().execute(products, catalog, QuoteSettings())


@pytest.fixture
def oversized_output(make_product, catalog) -> QuoteOutput:
    return GenerateQuoteCommand().execute(
        [make_product(130, 70, custom_name="Huge")], catalog, QuoteSettings()
    )


class TestQuoteFormatter:
    """Tests for the text quote table."""

    def test_rows_and_totals(self, shared_output: QuoteOutput) -> None:
        text = QuoteFormatter().format(shared_output)

        assert text.startswith("QUOTE")
        assert "Island" in text
        assert "Vanity" in text
        assert "Total price:" in text
        assert f"{'Total slabs:':<22} 1" in text
        assert "Average efficiency:" in text
        assert "Slabs shared across products of the same stone." in text

    def test_unpriced_rows_marked(self, shared_output: QuoteOutput) -> None:
        text = QuoteFormatter().format(shared_output)

        mystery = next(line for line in text.splitlines() if line.startswith("Mystery"))
        assert "-- not priced --" in mystery
        assert f"{'Unpriced products:':<22} 1" in text

    def test_shared_slabs_shown_fractional(self, shared_output: QuoteOutput) -> None:
        text = QuoteFormatter().format(shared_output)

        island = next(line for line in text.splitlines() if line.startswith("Island"))
        assert "0.50" in island

    def test_empty_quote(self, catalog) -> None:
        output = GenerateQuoteCommand().execute([], catalog)
        assert QuoteFormatter().format(output) == "No products in quote."


class TestSlabLayoutFormatter:
    """Tests for the slab layout report."""

    def test_layout(self, shared_output: QuoteOutput) -> None:
        text = SlabLayoutFormatter().format(shared_output.group_results)

        assert "STONE GROUP: Carrara|3cm|Polished" in text
        assert "1 slab(s)" in text
        assert "Slab 1 (126x63): 2 piece(s)" in text
        assert "60x60" in text

    def test_error_group(self, shared_output: QuoteOutput) -> None:
        text = SlabLayoutFormatter().format(shared_output.group_results)

        assert "STONE GROUP: Carrara|2cm|Polished" in text
        assert "ERROR (catalog_miss):" in text

    def test_unplaceable_group(self, oversized_output: QuoteOutput) -> None:
        text = SlabLayoutFormatter().format(oversized_output.group_results)

        assert "ERROR (unplaceable_piece):" in text
        assert "'Huge'" in text

    def test_no_layouts(self) -> None:
        assert SlabLayoutFormatter().format({}) == "No slab layouts."


class TestJsonExporter:
    """Tests for JSON export."""

    def test_structure(self, shared_output: QuoteOutput) -> None:
        data = json.loads(JsonExporter().export(shared_output))

        assert set(data) == {"products", "groups", "summary", "multi_product_optimization"}
        assert data["multi_product_optimization"] is True
        assert [p["name"] for p in data["products"]] == ["Island", "Vanity", "Mystery"]
        assert data["summary"]["total_slabs"] == 1
        assert data["summary"]["unpriced_products"] == 1

    def test_product_result(self, shared_output: QuoteOutput) -> None:
        data = JsonExporter().to_dict(shared_output)

        island = data["products"][0]["result"]
        assert island["multi_product_optimized"] is True
        assert island["area_ratio"] == 0.5
        assert island["slabs_needed"] == 0.5
        assert island["material_cost"] == 275.0
        assert data["products"][2]["result"] is None

    def test_groups(self, shared_output: QuoteOutput) -> None:
        data = JsonExporter().to_dict(shared_output)

        ok, missing = data["groups"]
        assert ok["error"] is None
        assert ok["total_slabs"] == 1
        assert len(ok["slabs"][0]["placements"]) == 2
        assert ok["slabs"][0]["placements"][1]["x"] == 60.125
        assert missing["error"]["kind"] == "catalog_miss"
        assert missing["slabs"] == []

    def test_unplaceable_error_detail(self, oversized_output: QuoteOutput) -> None:
        error = JsonExporter().to_dict(oversized_output)["groups"][0]["error"]

        assert error["kind"] == "unplaceable_piece"
        assert error["piece"] == "Huge"
        assert (error["slab_width"], error["slab_height"]) == (126.0, 63.0)

    def test_independent_mode(self, make_product, catalog) -> None:
        output = GenerateQuoteCommand().execute(
            [make_product(60, 60)], catalog, QuoteSettings(multi_product_optimization=False)
        )

        data = JsonExporter().to_dict(output)

        assert data["groups"] == []
        assert data["multi_product_optimization"] is False
        assert data["products"][0]["result"]["area_ratio"] is None
        assert data["products"][0]["result"]["slabs_needed"] == 1
