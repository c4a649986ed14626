"""Typer CLI for stone quoting."""

import logging
from enum import Enum
from pathlib import Path
from typing import Annotated

import typer

from stonequote.application import GenerateQuoteCommand
from stonequote.application.config import (
    ConfigError,
    QuoteConfiguration,
    config_to_catalog,
    config_to_products,
    config_to_settings,
    load_catalog,
    load_config,
)
from stonequote.cli.commands import display_config_error, validate_command
from stonequote.domain import StoneCatalog
from stonequote.infrastructure import JsonExporter, QuoteFormatter, SlabLayoutFormatter


class OutputFormat(str, Enum):
    TEXT = "text"
    JSON = "json"


app = typer.Typer(
    name="stonequote",
    help="Quote stone countertops: slab layouts, material efficiency and pricing.",
)

app.command(name="validate")(validate_command)


def _build_catalog(config: QuoteConfiguration, catalog_file: Path | None) -> StoneCatalog:
    """Catalog rows from a separate file take precedence over inline rows."""
    if catalog_file is not None:
        return config_to_catalog(load_catalog(catalog_file).catalog)
    return config_to_catalog(config.catalog)


@app.command()
def quote(
    config_file: Annotated[
        Path,
        typer.Argument(help="Path to the JSON quote configuration"),
    ],
    catalog_file: Annotated[
        Path | None,
        typer.Option("--catalog", "-c", help="Path to a JSON stone catalog"),
    ] = None,
    output_format: Annotated[
        OutputFormat,
        typer.Option("--format", "-f", help="Output format"),
    ] = OutputFormat.TEXT,
    show_layout: Annotated[
        bool,
        typer.Option("--layout", help="Show slab layouts for shared slabs"),
    ] = False,
    independent: Annotated[
        bool,
        typer.Option(
            "--independent",
            help="Price each product on its own slabs (no slab sharing)",
        ),
    ] = False,
    kerf: Annotated[
        float | None,
        typer.Option("--kerf", help="Override saw kerf width in inches"),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable debug logging"),
    ] = False,
) -> None:
    """Price a product list and report slabs, efficiency and cost.

    Exit codes:
        0 - Quote produced
        1 - Configuration could not be loaded
        2 - Quote produced but some stone groups could not be packed

    Example:
        stonequote quote kitchen.json --catalog stones.json --layout
    """
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    try:
        config = load_config(config_file)
        catalog = _build_catalog(config, catalog_file)
    except ConfigError as e:
        display_config_error(e)
        raise typer.Exit(code=1)

    overrides: dict[str, object] = {}
    if independent:
        overrides["multi_product_optimization"] = False
    if kerf is not None:
        overrides["kerf_width"] = kerf
        overrides["include_kerf"] = True

    try:
        settings = config_to_settings(config.settings.model_copy(update=overrides))
    except ValueError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)

    output = GenerateQuoteCommand().execute(
        config_to_products(config), catalog, settings
    )

    if output_format == OutputFormat.JSON:
        typer.echo(JsonExporter().export(output))
    else:
        typer.echo(QuoteFormatter().format(output))
        if show_layout and output.group_results:
            typer.echo()
            typer.echo(SlabLayoutFormatter().format(output.group_results))

    for group in output.group_errors:
        message = group.error.message if group.error else "unknown error"
        typer.echo(f"Warning: {group.key}: {message}", err=True)

    if output.has_errors:
        raise typer.Exit(code=2)


@app.command()
def stones(
    catalog_file: Annotated[
        Path,
        typer.Argument(help="Path to a JSON stone catalog or quote configuration"),
    ],
) -> None:
    """List the stone variants in a catalog."""
    try:
        rows = load_catalog(catalog_file).catalog
    except ConfigError:
        try:
            rows = load_config(catalog_file).catalog
        except ConfigError as e:
            display_config_error(e)
            raise typer.Exit(code=1)

    catalog = config_to_catalog(rows)
    if not len(catalog):
        typer.echo("Catalog is empty.")
        return

    typer.echo(
        f"{'Stone':<28} {'Thickness':<10} {'Finish':<12} {'Slab':<12} "
        f"{'Slab $':<10} {'Fab $/sqft':<11} {'Markup'}"
    )
    typer.echo("-" * 94)
    for variant in catalog:
        slab = f"{variant.slab_width:g}x{variant.slab_height:g}"
        typer.echo(
            f"{variant.stone_type[:27]:<28} {variant.thickness:<10} {variant.finish:<12} "
            f"{slab:<12} {variant.slab_cost:<10.2f} {variant.fab_cost_per_sqft:<11.2f} "
            f"{variant.markup:g}"
        )


if __name__ == "__main__":
    app()
