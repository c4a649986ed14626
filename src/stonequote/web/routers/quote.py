"""Quote endpoints."""

import logging

from fastapi import APIRouter, HTTPException

from stonequote.application import GenerateQuoteCommand
from stonequote.application.config import (
    config_to_catalog,
    config_to_products,
    config_to_settings,
    load_config_from_dict,
)
from stonequote.infrastructure import JsonExporter
from stonequote.web.schemas import QuoteRequest, QuoteResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/quote", tags=["quote"])


@router.post("", response_model=QuoteResponse)
def create_quote(request: QuoteRequest) -> QuoteResponse:
    """Price the submitted products against the submitted catalog.

    Stone groups that cannot be packed are reported in ``groups[].error``;
    their products fall back to independent pricing or a null result.

    Raises:
        ConfigError: If the configuration fails validation (handled as 422).
        HTTPException: 422 if the settings are out of range.
    """
    config = load_config_from_dict(request.config)

    try:
        settings = config_to_settings(config.settings)
    except ValueError as e:
        raise HTTPException(
            status_code=422,
            detail={"error": str(e), "error_type": "settings"},
        ) from e

    output = GenerateQuoteCommand().execute(
        config_to_products(config), config_to_catalog(config.catalog), settings
    )
    if output.has_errors:
        logger.info("Quote returned with %d group error(s)", len(output.group_errors))

    return QuoteResponse.model_validate(JsonExporter().to_dict(output))
