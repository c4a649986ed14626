"""Configuration schema and loading for quote files.

Public API:
    - QuoteConfiguration: Root configuration model
    - QuoteSettingsSchema: Quote settings model
    - StoneVariantSchema: Stone catalog row model
    - ProductSchema: Product line model
    - CatalogFile: Standalone catalog file model
    - load_config: Load configuration from a JSON file
    - load_config_from_dict: Load configuration from a dictionary
    - load_catalog: Load a stone catalog from a JSON file
    - ConfigError: Exception for configuration errors
    - config_to_settings / config_to_catalog / config_to_products:
      Convert configuration models to domain objects

Example:
    >>> from pathlib import Path
    >>> from stonequote.application.config import load_config, ConfigError
    >>>
    >>> try:
    ...     config = load_config(Path("kitchen.json"))
    ...     print(f"{len(config.products)} products")
    ... except ConfigError as e:
    ...     print(f"Error: {e}")
"""

from stonequote.application.config.adapter import (
    config_to_catalog,
    config_to_product,
    config_to_products,
    config_to_settings,
)
from stonequote.application.config.loader import (
    ConfigError,
    load_catalog,
    load_config,
    load_config_from_dict,
)
from stonequote.application.config.schema import (
    SUPPORTED_VERSIONS,
    CatalogFile,
    ProductSchema,
    QuoteConfiguration,
    QuoteSettingsSchema,
    StoneVariantSchema,
)

__all__ = [
    # Schema models
    "CatalogFile",
    "ProductSchema",
    "QuoteConfiguration",
    "QuoteSettingsSchema",
    "StoneVariantSchema",
    "SUPPORTED_VERSIONS",
    # Loader
    "ConfigError",
    "load_catalog",
    "load_config",
    "load_config_from_dict",
    # Adapters
    "config_to_catalog",
    "config_to_product",
    "config_to_products",
    "config_to_settings",
]
