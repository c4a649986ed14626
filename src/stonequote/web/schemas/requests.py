"""Pydantic request schemas for the REST API."""

from typing import Any

from pydantic import BaseModel, Field


class QuoteRequest(BaseModel):
    """Request for pricing a quote configuration."""

    config: dict[str, Any] = Field(
        ..., description="Quote configuration JSON (settings, catalog, products)"
    )
