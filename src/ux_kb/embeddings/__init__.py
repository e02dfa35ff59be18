"""Embedding providers."""

from ux_kb.config import get_embedding_provider
from ux_kb.embeddings.provider import EmbeddingProvider
from ux_kb.errors import ConfigurationError


def create_embedder() -> EmbeddingProvider:
    """Create the embedding provider selected by UX_KB_EMBEDDING_PROVIDER."""
    provider = get_embedding_provider()
    if provider == "openai":
        from ux_kb.embeddings.openai import OpenAIEmbeddingClient

        return OpenAIEmbeddingClient()
    if provider == "ollama":
        from ux_kb.embeddings.ollama import OllamaEmbeddingClient

        return OllamaEmbeddingClient()
    raise ConfigurationError(f"Unknown embedding provider: {provider!r}")


__all__ = ["EmbeddingProvider", "create_embedder"]
