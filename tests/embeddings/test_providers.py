"""Tests for the embedding providers, against a mocked HTTP transport."""

import json
from unittest.mock import patch

import httpx
import pytest

from ux_kb.embeddings import create_embedder
from ux_kb.embeddings.ollama import OllamaEmbeddingClient
from ux_kb.embeddings.openai import OpenAIEmbeddingClient
from ux_kb.embeddings.provider import EmbeddingProvider, check_dimensions
from ux_kb.errors import ConfigurationError, EmbeddingError


def _client(handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


def _openai(handler, dims: int = 3) -> OpenAIEmbeddingClient:
    return OpenAIEmbeddingClient(
        "sk-test",
        base_url="https://api.example.com/v1/",
        model="text-embedding-3-small",
        dimensions=dims,
        http_client=_client(handler),
    )


def test_check_dimensions():
    assert check_dimensions([1, 2.5], 2) == [1.0, 2.5]
    with pytest.raises(EmbeddingError, match="expected 3 dimensions, got 2"):
        check_dimensions([1.0, 2.0], 3)
    with pytest.raises(EmbeddingError):
        check_dimensions([], 0)
    with pytest.raises(EmbeddingError):
        check_dimensions(["a", "b"], 2)


def test_check_dimensions_rejects_zero_vector():
    with pytest.raises(EmbeddingError, match="all-zero"):
        check_dimensions([0, 0.0, 0], 3)
    assert check_dimensions([0.0, -0.25, 0.0], 3) == [0.0, -0.25, 0.0]


class TestOpenAI:
    @pytest.mark.asyncio
    async def test_embed(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["url"] = str(request.url)
            seen["auth"] = request.headers["Authorization"]
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json={"data": [{"embedding": [0.1, 0.2, 0.3]}]})

        client = _openai(handler)
        assert await client.embed("hello") == [0.1, 0.2, 0.3]
        assert seen["url"] == "https://api.example.com/v1/embeddings"
        assert seen["auth"] == "Bearer sk-test"
        assert seen["body"] == {"model": "text-embedding-3-small", "input": "hello"}
        await client.close()

    @pytest.mark.asyncio
    async def test_http_error(self):
        client = _openai(lambda request: httpx.Response(429, json={"error": "rate limited"}))
        with pytest.raises(EmbeddingError, match="status 429"):
            await client.embed("hello")

    @pytest.mark.asyncio
    async def test_transport_error(self):
        def handler(request):
            raise httpx.ConnectError("refused", request=request)

        with pytest.raises(EmbeddingError, match="request failed"):
            await _openai(handler).embed("hello")

    @pytest.mark.asyncio
    async def test_wrong_dimensions(self):
        client = _openai(lambda r: httpx.Response(200, json={"data": [{"embedding": [0.1]}]}))
        with pytest.raises(EmbeddingError, match="expected 3 dimensions"):
            await client.embed("hello")

    @pytest.mark.asyncio
    async def test_malformed_response(self):
        client = _openai(lambda r: httpx.Response(200, json={"data": []}))
        with pytest.raises(EmbeddingError, match="malformed"):
            await client.embed("hello")

    def test_missing_key(self):
        with patch.dict("os.environ", {}, clear=True):
            with pytest.raises(ConfigurationError, match="OPENAI_API_KEY"):
                OpenAIEmbeddingClient()

    def test_satisfies_protocol(self):
        assert isinstance(_openai(lambda r: httpx.Response(200)), EmbeddingProvider)


class TestOllama:
    def _make(self, handler) -> OllamaEmbeddingClient:
        return OllamaEmbeddingClient(
            base_url="http://ollama:11434",
            model="nomic-embed-text",
            dimensions=2,
            http_client=_client(handler),
        )

    @pytest.mark.asyncio
    async def test_embed(self):
        def handler(request):
            assert request.url.path == "/api/embed"
            return httpx.Response(200, json={"embeddings": [[0.5, 0.5]]})

        assert await self._make(handler).embed("hi") == [0.5, 0.5]

    @pytest.mark.asyncio
    async def test_embed_failure(self):
        client = self._make(lambda r: httpx.Response(500))
        with pytest.raises(EmbeddingError):
            await client.embed("hi")

    @pytest.mark.asyncio
    async def test_is_available(self):
        assert await self._make(lambda r: httpx.Response(200, json={"models": []})).is_available()
        assert not await self._make(lambda r: httpx.Response(503)).is_available()


class TestCreateEmbedder:
    def test_openai_default(self):
        with patch.dict("os.environ", {"OPENAI_API_KEY": "sk-x"}, clear=True):
            assert isinstance(create_embedder(), OpenAIEmbeddingClient)

    def test_ollama(self):
        with patch.dict("os.environ", {"UX_KB_EMBEDDING_PROVIDER": "Ollama"}, clear=True):
            embedder = create_embedder()
        assert isinstance(embedder, OllamaEmbeddingClient)
        assert embedder.model == "nomic-embed-text"

    def test_unknown(self):
        with patch.dict("os.environ", {"UX_KB_EMBEDDING_PROVIDER": "word2vec"}, clear=True):
            with pytest.raises(ConfigurationError, match="word2vec"):
                create_embedder()
