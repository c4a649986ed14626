"""Stone fabrication quoting: slab layout optimization and pricing."""

__version__ = "1.0.0"
