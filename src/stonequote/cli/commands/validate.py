"""Validate command for checking quote configuration files.

Checks a JSON quote configuration for syntax and schema errors, then reports
advisories for products that a quote run would leave unpriced: incomplete
lines, stone combinations missing from the catalog, and pieces larger than
their stone's slab.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Annotated

import typer

from stonequote.application.config import (
    ConfigError,
    QuoteConfiguration,
    config_to_catalog,
    config_to_products,
    load_catalog,
    load_config,
)
from stonequote.domain import StoneCatalog, max_pieces_per_slab


@dataclass
class ConfigWarning:
    """A non-blocking advisory about a configuration."""

    path: str
    message: str


def collect_warnings(
    config: QuoteConfiguration, catalog: StoneCatalog
) -> list[ConfigWarning]:
    """Find products a quote run would leave unpriced or split into errors."""
    warnings: list[ConfigWarning] = []
    for index, product in enumerate(config_to_products(config)):
        path = f"products[{index}]"
        if not product.is_valid:
            warnings.append(
                ConfigWarning(
                    path,
                    "Incomplete product (needs stone, positive width, depth and "
                    "quantity); it will not be priced",
                )
            )
            continue

        variant = catalog.find(product.key)
        if variant is None:
            warnings.append(
                ConfigWarning(path, f"No catalog entry for stone combination {product.key}")
            )
            continue

        fits = max_pieces_per_slab(
            product.width,  # type: ignore[arg-type]
            product.depth,  # type: ignore[arg-type]
            variant.slab_width,
            variant.slab_height,
        )
        if fits == 0:
            warnings.append(
                ConfigWarning(
                    path,
                    f"Piece {product.width:g}x{product.depth:g} exceeds "
                    f"{variant.slab_width:g}x{variant.slab_height:g} slab",
                )
            )
    return warnings


def display_config_error(error: ConfigError) -> None:
    """Display a configuration loading error."""
    typer.echo("Errors:", err=True)
    if error.error_type == "file_not_found":
        typer.echo(f"  File not found: {error.path}", err=True)
    elif error.error_type == "json_parse":
        typer.echo("  Invalid JSON syntax", err=True)
        for detail in error.details:
            line = detail.get("line", "?")
            column = detail.get("column", "?")
            message = detail.get("message", "Unknown error")
            typer.echo(f"    Line {line}, Column {column}: {message}", err=True)
    elif error.error_type == "validation":
        for detail in error.details:
            path = detail.get("path", "unknown")
            message = detail.get("message", "Unknown error")
            typer.echo(f"  {path}: {message}", err=True)
            value = detail.get("value")
            if value is not None:
                typer.echo(f"    Value: {value!r}", err=True)
    else:
        typer.echo(f"  {error.message}", err=True)

    typer.echo()
    typer.echo("Validation failed.", err=True)


def validate_command(
    config_file: Annotated[
        Path,
        typer.Argument(help="Path to the JSON quote configuration to validate"),
    ],
    catalog_file: Annotated[
        Path | None,
        typer.Option("--catalog", "-c", help="Path to a JSON stone catalog"),
    ] = None,
) -> None:
    """Validate a quote configuration file.

    Exit codes:
        0 - Configuration is valid with no warnings
        1 - Configuration has errors (cannot be used)
        2 - Configuration is valid but has warnings

    Example:
        stonequote validate kitchen.json --catalog stones.json
    """
    typer.echo(f"Validating {config_file}...")
    typer.echo()

    try:
        config = load_config(config_file)
        rows = load_catalog(catalog_file).catalog if catalog_file else config.catalog
    except ConfigError as e:
        display_config_error(e)
        raise typer.Exit(code=1)

    warnings = collect_warnings(config, config_to_catalog(rows))
    if warnings:
        typer.echo("Warnings:")
        for warning in warnings:
            typer.echo(f"  {warning.path}: {warning.message}")
        typer.echo()
        typer.echo(f"Validation passed with {len(warnings)} warning(s)")
        raise typer.Exit(code=2)

    typer.echo("Validation passed. Configuration is valid.")
