"""Integration tests for the stonequote CLI.

These tests verify the quote, validate and stones commands end-to-end,
including output formats and exit codes.
"""

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from stonequote.cli.main import app

FIXTURES_PATH = Path(__file__).parent.parent / "fixtures" / "configs"


@pytest.fixture
def runner() -> CliRunner:
    """Create a CLI runner for testing."""
    return CliRunner()


class TestQuoteCommand:
    """Tests for the quote command."""

    def test_text_quote(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["quote", str(FIXTURES_PATH / "kitchen.json")])

        assert result.exit_code == 0
        assert "QUOTE" in result.output
        assert "Island" in result.output
        assert "Total price:" in result.output

    def test_json_quote(self, runner: CliRunner) -> None:
        result = runner.invoke(
            app, ["quote", str(FIXTURES_PATH / "kitchen.json"), "--format", "json"]
        )

        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["summary"]["total_slabs"] == 2
        assert len(data["groups"]) == 2

    def test_layout(self, runner: CliRunner) -> None:
        result = runner.invoke(
            app, ["quote", str(FIXTURES_PATH / "kitchen.json"), "--layout"]
        )

        assert result.exit_code == 0
        assert "STONE GROUP: Carrara|3cm|Polished" in result.output
        assert "STONE GROUP: Absolute Black|2cm|Honed" in result.output

    def test_independent(self, runner: CliRunner) -> None:
        result = runner.invoke(
            app,
            ["quote", str(FIXTURES_PATH / "kitchen.json"), "--independent", "-f", "json"],
        )

        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["multi_product_optimization"] is False
        assert data["summary"]["total_slabs"] == 3

    def test_separate_catalog(self, runner: CliRunner) -> None:
        result = runner.invoke(
            app,
            [
                "quote",
                str(FIXTURES_PATH / "products_only.json"),
                "--catalog",
                str(FIXTURES_PATH / "catalog.json"),
                "--format",
                "json",
            ],
        )

        assert result.exit_code == 0
        assert json.loads(result.output)["summary"]["total_price"] == 1100.0

    def test_kerf_override(self, runner: CliRunner) -> None:
        result = runner.invoke(
            app,
            ["quote", str(FIXTURES_PATH / "kitchen.json"), "--kerf", "0", "-f", "json"],
        )

        assert result.exit_code == 0
        carrara = json.loads(result.output)["groups"][0]
        assert carrara["slabs"][0]["placements"][1]["x"] == 60.0

    def test_kerf_out_of_range(self, runner: CliRunner) -> None:
        result = runner.invoke(
            app, ["quote", str(FIXTURES_PATH / "kitchen.json"), "--kerf", "0.9"]
        )

        assert result.exit_code == 1
        assert "Error:" in result.output

    def test_group_error_exit_code(self, runner: CliRunner) -> None:
        """A quote with an unpackable group still prints but exits 2."""
        result = runner.invoke(app, ["quote", str(FIXTURES_PATH / "oversized_piece.json")])

        assert result.exit_code == 2
        assert "QUOTE" in result.output
        assert "-- not priced --" in result.output
        assert "does not fit" in result.output

    def test_catalog_miss_exit_code(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["quote", str(FIXTURES_PATH / "products_only.json")])

        assert result.exit_code == 2
        assert "not found in catalog" in result.output

    def test_file_not_found(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["quote", str(FIXTURES_PATH / "nonexistent.json")])

        assert result.exit_code == 1
        assert "Errors:" in result.output

    def test_invalid_json(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["quote", str(FIXTURES_PATH / "invalid_json.json")])

        assert result.exit_code == 1
        assert "Invalid JSON syntax" in result.output


class TestValidateCommand:
    """Tests for the validate command."""

    def test_valid_config(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["validate", str(FIXTURES_PATH / "kitchen.json")])

        assert result.exit_code == 0
        assert "Validation passed. Configuration is valid." in result.output

    def test_valid_with_separate_catalog(self, runner: CliRunner) -> None:
        result = runner.invoke(
            app,
            [
                "validate",
                str(FIXTURES_PATH / "products_only.json"),
                "--catalog",
                str(FIXTURES_PATH / "catalog.json"),
            ],
        )

        assert result.exit_code == 0

    def test_warnings(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["validate", str(FIXTURES_PATH / "with_warnings.json")])

        assert result.exit_code == 2
        assert "products[1]: No catalog entry for stone combination Carrara|2cm|Polished" in (
            result.output
        )
        assert "products[2]: Incomplete product" in result.output
        assert "Validation passed with 2 warning(s)" in result.output

    def test_oversized_piece_warning(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["validate", str(FIXTURES_PATH / "oversized_piece.json")])

        assert result.exit_code == 2
        assert "Piece 130x70 exceeds 126x63 slab" in result.output

    def test_unknown_field_rejected(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["validate", str(FIXTURES_PATH / "unknown_field.json")])

        assert result.exit_code == 1
        assert "Errors:" in result.output
        assert "Validation failed." in result.output

    def test_out_of_range_setting(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["validate", str(FIXTURES_PATH / "bad_settings.json")])

        assert result.exit_code == 1
        assert "settings.kerf_width" in result.output

    def test_file_not_found(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["validate", str(FIXTURES_PATH / "nonexistent.json")])

        assert result.exit_code == 1
        assert "File not found" in result.output


class TestStonesCommand:
    """Tests for the stones command."""

    def test_catalog_file(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["stones", str(FIXTURES_PATH / "catalog.json")])

        assert result.exit_code == 0
        assert "Carrara" in result.output
        assert "126x63" in result.output

    def test_inline_catalog(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["stones", str(FIXTURES_PATH / "kitchen.json")])

        assert result.exit_code == 0
        assert "Absolute Black" in result.output
        assert "130x76" in result.output

    def test_empty_catalog(self, runner: CliRunner, tmp_path: Path) -> None:
        path = tmp_path / "empty.json"
        path.write_text("[]")

        result = runner.invoke(app, ["stones", str(path)])

        assert result.exit_code == 0
        assert "Catalog is empty." in result.output

    def test_missing_file(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["stones", str(FIXTURES_PATH / "nonexistent.json")])

        assert result.exit_code == 1
