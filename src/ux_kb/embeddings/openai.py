"""OpenAI-compatible embedding client."""

import logging

import httpx

from ux_kb.config import get_embedding_dim, get_embedding_model, get_openai_api_key, get_openai_url
from ux_kb.embeddings.provider import check_dimensions
from ux_kb.errors import ConfigurationError, EmbeddingError

logger = logging.getLogger(__name__)


class OpenAIEmbeddingClient:
    """Generates embeddings via the ``/embeddings`` endpoint of an OpenAI-style API."""

    def __init__(
        self,
        api_key: str | None = None,
        *,
        base_url: str | None = None,
        model: str | None = None,
        dimensions: int | None = None,
        http_client: httpx.AsyncClient | None = None,
    ):
        """Initialize from explicit arguments, falling back to the environment."""
        api_key = api_key or get_openai_api_key()
        if not api_key:
            raise ConfigurationError("OPENAI_API_KEY is not set")
        self._api_key = api_key
        self._base_url = (base_url or get_openai_url()).rstrip("/")
        self.model = model or get_embedding_model()
        self.dimensions = dimensions or get_embedding_dim()
        self._http = http_client

    async def embed(self, text: str) -> list[float]:
        """Generate an embedding vector for the given text."""
        client = self._get_client()
        try:
            resp = await client.post(
                f"{self._base_url}/embeddings",
                headers={"Authorization": f"Bearer {self._api_key}"},
                json={"model": self.model, "input": text},
            )
            resp.raise_for_status()
            data = resp.json()
        except httpx.HTTPStatusError as e:
            raise EmbeddingError(
                f"embedding request failed with status {e.response.status_code}"
            ) from e
        except (httpx.HTTPError, ValueError) as e:
            raise EmbeddingError(f"embedding request failed: {e}") from e

        try:
            vector = data["data"][0]["embedding"]
        except (KeyError, IndexError, TypeError) as e:
            raise EmbeddingError("malformed embedding response") from e
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
