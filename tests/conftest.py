"""Pytest configuration and shared fixtures for stone quoting tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from stonequote.domain import Product, QuoteSettings, StoneCatalog, StoneVariant

FIXTURES_PATH = Path(__file__).parent / "fixtures" / "configs"


def pytest_configure(config: pytest.Config) -> None:
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "integration: end-to-end tests through CLI or API")
    config.addinivalue_line("markers", "slow: tests that take a long time to run")


# =============================================================================
# Shared catalog and settings fixtures
# =============================================================================


@pytest.fixture
def carrara() -> StoneVariant:
    """Carrara 3cm polished on a standard 126x63 slab, $500 per slab."""
    return StoneVariant(
        stone_type="Carrara",
        thickness="3cm",
        finish="Polished",
        slab_width=126.0,
        slab_height=63.0,
        slab_cost=500.0,
        fab_cost_per_sqft=20.0,
        markup=1.5,
    )


@pytest.fixture
def absolute_black() -> StoneVariant:
    """Absolute Black 2cm honed on a jumbo slab."""
    return StoneVariant(
        stone_type="Absolute Black",
        thickness="2cm",
        finish="Honed",
        slab_width=130.0,
        slab_height=76.0,
        slab_cost=800.0,
        fab_cost_per_sqft=25.0,
        markup=1.0,
    )


@pytest.fixture
def catalog(carrara: StoneVariant, absolute_black: StoneVariant) -> StoneCatalog:
    return StoneCatalog.from_variants([carrara, absolute_black])


@pytest.fixture
def settings() -> QuoteSettings:
    """Default settings: 1/8\" kerf, 10% breakage, fabrication charged."""
    return QuoteSettings()


@pytest.fixture
def make_product():
    """Factory for Carrara products with overridable fields."""

    def _make(width: float | None = 24.0, depth: float | None = 96.0, **kwargs) -> Product:
        fields = {
            "stone_type": "Carrara",
            "thickness": "3cm",
            "finish": "Polished",
            "quantity": 1,
        }
        fields.update(kwargs)
        return Product(width=width, depth=depth, **fields)

    return _make


@pytest.fixture
def fixtures_path() -> Path:
    return FIXTURES_PATH
