"""Pydantic request and response schemas for the REST API."""

from stonequote.web.schemas.requests import QuoteRequest
from stonequote.web.schemas.responses import (
    GroupErrorSchema,
    PlacementSchema,
    ProductQuoteSchema,
    ProductResultSchema,
    QuoteResponse,
    QuoteSummarySchema,
    SlabSchema,
    StoneGroupSchema,
)

__all__ = [
    "GroupErrorSchema",
    "PlacementSchema",
    "ProductQuoteSchema",
    "ProductResultSchema",
    "QuoteRequest",
    "QuoteResponse",
    "QuoteSummarySchema",
    "SlabSchema",
    "StoneGroupSchema",
]
