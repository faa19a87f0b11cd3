"""Embedding provider factory, selected by configuration.

Providers are created per engine rather than cached in a module-level
registry, so tests and runs can hold differently configured instances.
"""

import logging
from typing import TYPE_CHECKING

from services.embeddings.base import EmbeddingProvider

if TYPE_CHECKING:
    from config import Settings

logger = logging.getLogger(__name__)

PROVIDER_NAMES = ("hashing", "gemini")


def create_provider(settings: "Settings") -> EmbeddingProvider:
    """Factory: create the configured provider with deferred imports."""
    name = settings.embedding_provider.strip().lower()
    if name == "hashing":
        from services.embeddings.hashing_provider import HashingEmbeddingProvider
        return HashingEmbeddingProvider(
            dimensions=settings.embedding_dimensions,
            max_chars=settings.embedding_max_chars,
        )
    elif name == "gemini":
        from services.embeddings.gemini_provider import GeminiEmbeddingProvider
        return GeminiEmbeddingProvider(
            api_key=settings.gemini_api_key,
            model=settings.embedding_model,
            dimensions=settings.embedding_dimensions,
            max_chars=settings.embedding_max_chars,
        )
    else:
        raise ValueError(
            f"Unknown embedding provider: {name!r} (expected one of {', '.join(PROVIDER_NAMES)})"
        )
