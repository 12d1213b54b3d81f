"""External collaborators: Figma REST API and LLM completion providers."""

from .completion_client import CompletionClient, ProviderConfig, validate_provider
from .figma_client import FigmaClient, FigmaClientError

__all__ = [
    "CompletionClient",
    "FigmaClient",
    "FigmaClientError",
    "ProviderConfig",
    "validate_provider",
]
