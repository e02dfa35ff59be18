"""Ollama embedding client."""

import logging

import httpx

from ux_kb.config import get_embedding_dim, get_embedding_model, get_ollama_url
from ux_kb.embeddings.provider import check_dimensions
from ux_kb.errors import EmbeddingError

logger = logging.getLogger(__name__)


class OllamaEmbeddingClient:
    """Generates embeddings via a local Ollama server."""

    def __init__(
        self,
        *,
        base_url: str | None = None,
        model: str | None = None,
        dimensions: int | None = None,
        http_client: httpx.AsyncClient | None = None,
    ):
        """Initialize from explicit arguments, falling back to the environment."""
        self._base_url = (base_url or get_ollama_url()).rstrip("/")
        self.model = model or get_embedding_model()
        self.dimensions = dimensions or get_embedding_dim()
        self._http = http_client

    async def is_available(self) -> bool:
        """Check if Ollama is reachable."""
        try:
            resp = await self._get_client().get(f"{self._base_url}/api/tags")
            resp.raise_for_status()
        except httpx.HTTPError:
            logger.warning("Ollama not available at %s", self._base_url)
            return False
        return True

    async def embed(self, text: str) -> list[float]:
        """Generate an embedding vector for the given text."""
        try:
            resp = await self._get_client().post(
                f"{self._base_url}/api/embed",
                json={"model": self.model, "input": text},
            )
            resp.raise_for_status()
            data = resp.json()
        except (httpx.HTTPError, ValueError) as e:
            raise EmbeddingError(f"Ollama embedding request failed: {e}") from e

        # Ollama /api/embed returns {"embeddings": [[...]]}
        try:
            vector = data["embeddings"][0]
        except (KeyError, IndexError, TypeError) as e:
            raise EmbeddingError("malformed Ollama embedding response") from e
        return check_dimensions(vector, self.dimensions)

    def _get_client(self) -> httpx.AsyncClient:
        if self._http is None:
            self._http = httpx.AsyncClient()
        return self._http

    async def close(self) -> None:
        """Close the HTTP client if open."""
        if self._http is not None:
            await self._http.aclose()
            self._http = None
