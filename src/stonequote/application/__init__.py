"""Application layer - use cases and DTOs."""

from .commands import GenerateQuoteCommand
from .dtos import QuoteOutput

__all__ = ["GenerateQuoteCommand", "QuoteOutput"]
