"""Command-line interface for stonequote."""
