"""Tests for KnowledgeStore."""

import sqlite3

import pytest

from tests.conftest import CHECKOUT, CONTRAST, FITTS, TEST_DIM
from ux_kb.db.backend import MatchFilters
from ux_kb.db.connection import create_connection
from ux_kb.errors import KnowledgeStoreError, StoreConnectionError
from ux_kb.models.entry import CompetitorPatternCreate
from ux_kb.store.knowledge_store import KnowledgeStore


def _vec(index: int = 0) -> list[float]:
    v = [0.0] * TEST_DIM
    v[index] = 1.0
    return v


class BrokenDatabase:
    """Database whose every call fails with ``error``."""

    vector_placeholder = "?"
    embedding_present_sql = "1"

    def __init__(self, error: Exception | None = None):
        self.error = error or sqlite3.OperationalError("disk I/O error")

    def encode_vector(self, embedding):
        return embedding

    async def execute(self, sql, params=()):
        raise self.error

    async def match_knowledge(self, *args, **kwargs):
        raise self.error

    async def match_patterns(self, *args, **kwargs):
        raise self.error

    async def commit(self):
        pass

    async def close(self):
        pass

    def is_disconnect(self, exc):
        return isinstance(exc, ConnectionError)


@pytest.mark.asyncio
async def test_ping_ok(store):
    await store.ping()


@pytest.mark.asyncio
async def test_ping_unreachable():
    with pytest.raises(StoreConnectionError, match="unreachable"):
        await KnowledgeStore(BrokenDatabase()).ping()


@pytest.mark.asyncio
async def test_lookup_errors_are_wrapped():
    store = KnowledgeStore(BrokenDatabase())
    with pytest.raises(KnowledgeStoreError):
        await store.find_by_title("x")
    with pytest.raises(KnowledgeStoreError):
        await store.add_entry(FITTS, _vec())


@pytest.mark.asyncio
async def test_query_errors_are_not_connection_errors():
    store = KnowledgeStore(BrokenDatabase())
    with pytest.raises(KnowledgeStoreError) as excinfo:
        await store.find_by_title("x")
    assert not isinstance(excinfo.value, StoreConnectionError)


@pytest.mark.asyncio
async def test_lost_connection_errors_surface_as_connection_errors():
    store = KnowledgeStore(BrokenDatabase(ConnectionResetError("connection reset by peer")))
    with pytest.raises(StoreConnectionError, match="connection lost: title lookup failed"):
        await store.find_by_title("x")
    with pytest.raises(StoreConnectionError, match="insert failed"):
        await store.add_entry(FITTS, _vec())
    with pytest.raises(StoreConnectionError, match="pattern lookup failed"):
        await store.find_pattern_by_name("x")


@pytest.mark.asyncio
async def test_closed_database_surfaces_as_connection_error():
    db = await create_connection(":memory:", embedding_dim=TEST_DIM)
    store = KnowledgeStore(db)
    await store.add_entry(FITTS, _vec())
    await db.close()
    with pytest.raises(StoreConnectionError, match="title lookup failed"):
        await store.find_by_title(FITTS.title)
    with pytest.raises(StoreConnectionError, match="match failed"):
        await store.match_knowledge(_vec(), 0.5, 5)


@pytest.mark.asyncio
async def test_match_errors_are_wrapped():
    with pytest.raises(KnowledgeStoreError, match="match failed"):
        await KnowledgeStore(BrokenDatabase()).match_knowledge(_vec(), 0.5, 5)


@pytest.mark.asyncio
async def test_add_and_find(store):
    created = await store.add_entry(FITTS, _vec())
    found = await store.find_by_title(FITTS.title)
    assert found is not None
    assert found.id == created.id


@pytest.mark.asyncio
async def test_match_threshold_and_order(store):
    await store.add_entry(FITTS, _vec(0))
    near = _vec(0)
    near[1] = 1.0
    await store.add_entry(CONTRAST, near)
    await store.add_entry(CHECKOUT, _vec(2))

    results = await store.match_knowledge(_vec(0), 0.5, 10)
    assert [r.entry.title for r in results] == [FITTS.title, CONTRAST.title]
    assert results[0].similarity == pytest.approx(1.0)
    assert results[1].similarity == pytest.approx(0.7071, abs=1e-3)


@pytest.mark.asyncio
async def test_match_limit(store):
    for i, e in enumerate([FITTS, CONTRAST, CHECKOUT]):
        await store.add_entry(e, _vec(i))
    results = await store.match_knowledge([1.0] * TEST_DIM, 0.0, 2)
    assert len(results) == 2


@pytest.mark.asyncio
async def test_opposite_vectors_never_match(store):
    await store.add_entry(FITTS, [-1.0] + [0.0] * (TEST_DIM - 1))
    assert await store.match_knowledge(_vec(0), 0.0, 10) == []


class TestMatchFilters:
    """Facets combine with AND; list facets match any value."""

    @pytest.fixture
    async def filled(self, store):
        everything = [1.0] * TEST_DIM
        for e in [FITTS, CONTRAST, CHECKOUT]:
            await store.add_entry(e, everything)
        return store

    async def _titles(self, store, **kwargs):
        results = await store.match_knowledge([1.0] * TEST_DIM, 0.0, 10, MatchFilters(**kwargs))
        return sorted(r.entry.title for r in results)

    @pytest.mark.asyncio
    async def test_category(self, filled):
        assert await self._titles(filled, categories=("conversion",)) == [CHECKOUT.title]

    @pytest.mark.asyncio
    async def test_industry_any_of(self, filled):
        titles = await self._titles(filled, industries=("healthcare", "ecommerce"))
        assert titles == sorted([CONTRAST.title, CHECKOUT.title])

    @pytest.mark.asyncio
    async def test_facets_combine_with_and(self, filled):
        titles = await self._titles(
            filled, primary_category="interaction", industries=("ecommerce",)
        )
        assert titles == [CHECKOUT.title]

    @pytest.mark.asyncio
    async def test_no_match(self, filled):
        titles = await self._titles(
            filled, primary_category="accessibility", industries=("ecommerce",)
        )
        assert titles == []

    @pytest.mark.asyncio
    async def test_complexity_levels(self, filled):
        titles = await self._titles(filled, complexity_levels=("intermediate", "advanced"))
        assert titles == sorted([CONTRAST.title, CHECKOUT.title])


@pytest.mark.asyncio
async def test_patterns(store):
    pattern = CompetitorPatternCreate(
        pattern_name="Sticky add-to-cart",
        description="Add-to-cart bar pinned to the bottom on mobile",
        industry="ecommerce",
        pattern_type="cart",
    )
    await store.add_pattern(pattern, _vec(0))
    results = await store.match_patterns(_vec(0), 0.5, 5, industry="ecommerce")
    assert [r.pattern.pattern_name for r in results] == ["Sticky add-to-cart"]
    assert await store.match_patterns(_vec(0), 0.5, 5, industry="saas") == []


@pytest.mark.asyncio
async def test_aggregates(store):
    for i, e in enumerate([FITTS, CONTRAST, CHECKOUT]):
        await store.add_entry(e, _vec(i))
    assert await store.count_entries() == 3
    assert len(await store.category_breakdown()) == 3
    assert len(await store.sample_entries(5)) == 3
    stats = await store.embedding_stats()
    assert stats["coverage"] == 1.0
