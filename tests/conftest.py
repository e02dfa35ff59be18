"""Shared test fixtures."""

import math
import re
import zlib

import pytest_asyncio

from ux_kb.db.connection import create_connection
from ux_kb.errors import EmbeddingError
from ux_kb.models.entry import KnowledgeEntryCreate
from ux_kb.services import Services
from ux_kb.store.knowledge_store import KnowledgeStore

TEST_DIM = 1536


class FakeEmbedder:
    """Deterministic bag-of-words embedder for testing.

    Each lower-cased alphanumeric token is hashed into one of ``dim``
    buckets and the count vector is normalized, so texts sharing words have
    proportionally higher cosine similarity.
    """

    def __init__(self, dim: int = TEST_DIM):
        self.dimensions = dim
        self.calls: list[str] = []
        self.closed = False

    async def embed(self, text: str) -> list[float]:
        self.calls.append(text)
        vec = [0.0] * self.dimensions
        for token in re.findall(r"[a-z0-9]+", text.lower()):
            vec[zlib.crc32(token.encode()) % self.dimensions] += 1.0
        norm = math.sqrt(sum(v * v for v in vec))
        if norm == 0:
            vec[0] = 1.0
            return vec
        return [v / norm for v in vec]

    async def close(self) -> None:
        self.closed = True


class FailingEmbedder(FakeEmbedder):
    """Embedder that fails for every text, or only texts containing ``marker``."""

    def __init__(self, marker: str | None = None, dim: int = TEST_DIM):
        super().__init__(dim)
        self.marker = marker

    async def embed(self, text: str) -> list[float]:
        if self.marker is None or self.marker in text:
            self.calls.append(text)
            raise EmbeddingError("provider unavailable")
        return await super().embed(text)


def make_entry(
    title: str, content: str, category: str = "ux-patterns", **kwargs
) -> KnowledgeEntryCreate:
    """Build a KnowledgeEntryCreate with sensible defaults."""
    return KnowledgeEntryCreate(title=title, content=content, category=category, **kwargs)


FITTS = make_entry(
    "Fitts' Law for UI Design",
    "Button size and distance drive usability: large buttons placed close to the cursor "
    "improve design usability.",
    source="Paul Fitts Research & UX Design Principles",
    primary_category="interaction",
    industry_tags=["technology"],
    complexity_level="beginner",
)

CONTRAST = make_entry(
    "WCAG Color Contrast Standards",
    "Normal text needs a 4.5:1 contrast ratio against its background for AA compliance.",
    category="accessibility",
    source="Web Content Accessibility Guidelines (WCAG) 2.1",
    primary_category="accessibility",
    industry_tags=["government", "healthcare"],
    complexity_level="intermediate",
)

CHECKOUT = make_entry(
    "Checkout Button Placement",
    "Checkout button design: keep the primary button visible; usability studies favour a "
    "sticky button on mobile.",
    category="conversion",
    source="Baymard Institute",
    primary_category="interaction",
    industry_tags=["ecommerce"],
    complexity_level="advanced",
)


@pytest_asyncio.fixture
async def db():
    """In-memory database with full schema and sqlite-vec."""
    conn = await create_connection(":memory:", embedding_dim=TEST_DIM)
    yield conn
    await conn.close()


@pytest_asyncio.fixture
async def store(db):
    """Knowledge store backed by in-memory DB."""
    return KnowledgeStore(db)


@pytest_asyncio.fixture
async def fake_embedder():
    """Fake embedding client for tests."""
    return FakeEmbedder()


@pytest_asyncio.fixture
async def services(db, fake_embedder):
    """Fully wired services over the in-memory DB, with no ingest delay."""
    svc = Services.from_parts(db, fake_embedder)
    svc.pipeline.delay = 0
    return svc


@pytest_asyncio.fixture
async def populated(services):
    """Services whose store holds the three sample entries."""
    result = await services.pipeline.run([FITTS, CONTRAST, CHECKOUT])
    assert result.successfully_added == 3
    return services
