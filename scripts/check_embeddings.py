"""Quick check that the configured embedding provider returns vectors of the right size."""

import asyncio
import sys

from ux_kb.config import (
    get_embedding_dim,
    get_embedding_model,
    get_embedding_provider,
    get_ollama_url,
)
from ux_kb.embeddings import create_embedder
from ux_kb.embeddings.ollama import OllamaEmbeddingClient
from ux_kb.errors import ConfigurationError, EmbeddingError


async def _check() -> int:
    provider = get_embedding_provider()
    model = get_embedding_model()
    print(f"Checking {provider} embeddings with model {model}...")

    try:
        embedder = create_embedder()
    except ConfigurationError as e:
        print(f"  {e}")
        return 1

    try:
        if isinstance(embedder, OllamaEmbeddingClient) and not await embedder.is_available():
            print(f"  Ollama server not reachable at {get_ollama_url()}")
            return 1
        vector = await embedder.embed("button design usability")
    except EmbeddingError as e:
        print(f"  Embedding failed: {e}")
        return 1
    finally:
        await embedder.close()

    print(f"  Got {len(vector)} dimensions (expected {get_embedding_dim()})")
    return 0


def main() -> None:
    """Check embedding provider connectivity and dimensionality."""
    sys.exit(asyncio.run(_check()))


if __name__ == "__main__":
    main()
