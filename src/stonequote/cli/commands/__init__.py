"""CLI command implementations for the stonequote application.

This package contains subcommands for the stonequote CLI, including:
- validate: Validate a quote configuration file
"""

from stonequote.cli.commands.validate import (
    ConfigWarning,
    collect_warnings,
    display_config_error,
    validate_command,
)

__all__ = ["ConfigWarning", "collect_warnings", "display_config_error", "validate_command"]
