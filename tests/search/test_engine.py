"""Tests for the similarity search engine."""

import asyncio

import pytest

from tests.conftest import CHECKOUT, FITTS, FailingEmbedder, FakeEmbedder
from ux_kb.errors import EmbeddingError, KnowledgeStoreError
from ux_kb.models.entry import CompetitorPatternCreate
from ux_kb.models.search import SearchFilters
from ux_kb.search.engine import SimilaritySearchEngine, complexity_levels_for
from ux_kb.store.knowledge_store import KnowledgeStore

QUERY = "button design usability"


class ExplodingStore(KnowledgeStore):
    async def match_knowledge(self, *args, **kwargs):
        raise KnowledgeStoreError("match failed: database is locked")

    async def match_patterns(self, *args, **kwargs):
        raise KnowledgeStoreError("pattern match failed: database is locked")


class CrashingEmbedder(FakeEmbedder):
    async def embed(self, text: str) -> list[float]:
        raise RuntimeError("provider exploded")


class HangingEmbedder(FakeEmbedder):
    async def embed(self, text: str) -> list[float]:
        await asyncio.sleep(1)
        return await super().embed(text)


class TestComplexityLevels:
    def test_exact_level(self):
        assert complexity_levels_for("beginner", False) == ["beginner"]

    def test_include_higher(self):
        assert complexity_levels_for("intermediate", True) == ["intermediate", "advanced"]

    def test_top_of_ladder(self):
        assert complexity_levels_for("advanced", True) == ["advanced"]

    def test_unknown_level_matches_only_itself(self):
        assert complexity_levels_for("expert", True) == ["expert"]


@pytest.mark.asyncio
async def test_search_returns_both_button_entries(populated):
    results = await populated.engine.search(QUERY, SearchFilters(confidence_threshold=0.3))
    assert [r.entry.title for r in results] == [CHECKOUT.title, FITTS.title]
    assert results[0].similarity == pytest.approx(0.603, abs=0.01)
    assert results[1].similarity == pytest.approx(0.566, abs=0.01)


@pytest.mark.asyncio
async def test_search_result_properties(populated):
    for threshold in (0.0, 0.3, 0.58, 0.9):
        filters = SearchFilters(confidence_threshold=threshold, max_results=2)
        results = await populated.engine.search(QUERY, filters)
        assert len(results) <= 2
        sims = [r.similarity for r in results]
        assert sims == sorted(sims, reverse=True)
        assert all(threshold <= s <= 1.0 for s in sims)


@pytest.mark.asyncio
async def test_higher_threshold_narrows(populated):
    results = await populated.engine.search(QUERY, SearchFilters(confidence_threshold=0.59))
    assert [r.entry.title for r in results] == [CHECKOUT.title]


@pytest.mark.asyncio
async def test_category_filter(populated):
    filters = SearchFilters(confidence_threshold=0.3, categories=["ux-patterns"])
    results = await populated.engine.search(QUERY, filters)
    assert [r.entry.title for r in results] == [FITTS.title]


@pytest.mark.asyncio
async def test_search_by_hierarchy_requires_every_facet(populated):
    results = await populated.engine.search_by_hierarchy(
        QUERY, primary_category="interaction", industry_tags=["ecommerce"], threshold=0.3
    )
    assert [r.entry.title for r in results] == [CHECKOUT.title]

    results = await populated.engine.search_by_hierarchy(
        QUERY, primary_category="interaction", complexity_level="intermediate", threshold=0.3
    )
    assert results == []


@pytest.mark.asyncio
async def test_search_by_complexity_exact(populated):
    results = await populated.engine.search_by_complexity(QUERY, "beginner", threshold=0.3)
    assert [r.entry.title for r in results] == [FITTS.title]


@pytest.mark.asyncio
async def test_search_by_complexity_include_higher(populated):
    results = await populated.engine.search_by_complexity(
        QUERY, "beginner", include_higher=True, threshold=0.3
    )
    assert [r.entry.title for r in results] == [CHECKOUT.title, FITTS.title]


@pytest.mark.asyncio
async def test_search_by_unknown_complexity(populated):
    results = await populated.engine.search_by_complexity(
        QUERY, "expert", include_higher=True, threshold=0.0
    )
    assert results == []


@pytest.mark.asyncio
async def test_embedding_failure_degrades_to_empty(populated):
    engine = SimilaritySearchEngine(populated.store, FailingEmbedder())
    assert await engine.search(QUERY) == []
    assert await engine.embed_query(QUERY) is None


@pytest.mark.asyncio
async def test_unexpected_provider_error_degrades_to_empty(populated):
    engine = SimilaritySearchEngine(populated.store, CrashingEmbedder())
    assert await engine.search(QUERY) == []
    assert await engine.embed_query(QUERY) is None
    assert await engine.search_patterns(QUERY) == []
    assert await engine.search_by_complexity(QUERY, "beginner") == []
    with pytest.raises(RuntimeError, match="provider exploded"):
        await engine.match(QUERY)


@pytest.mark.asyncio
async def test_match_raises_on_embedding_failure(populated):
    engine = SimilaritySearchEngine(populated.store, FailingEmbedder())
    with pytest.raises(EmbeddingError):
        await engine.match(QUERY)


@pytest.mark.asyncio
async def test_embedding_timeout_degrades_to_empty(populated):
    engine = SimilaritySearchEngine(populated.store, HangingEmbedder(), embed_timeout=0.01)
    assert await engine.search(QUERY) == []
    with pytest.raises(TimeoutError):
        await engine.match(QUERY)


@pytest.mark.asyncio
async def test_store_failure_degrades_to_empty(db):
    engine = SimilaritySearchEngine(ExplodingStore(db), FakeEmbedder())
    assert await engine.search(QUERY) == []
    assert await engine.search_patterns(QUERY) == []
    with pytest.raises(KnowledgeStoreError):
        await engine.match(QUERY)


@pytest.mark.asyncio
async def test_empty_store_returns_empty(services):
    assert await services.engine.search(QUERY, SearchFilters(confidence_threshold=0.0)) == []


@pytest.mark.asyncio
async def test_search_patterns(services):
    await services.pipeline.run_patterns(
        [
            CompetitorPatternCreate(
                pattern_name="Floating checkout button",
                description="A floating button design keeps checkout one tap away",
                industry="ecommerce",
                pattern_type="checkout",
            ),
            CompetitorPatternCreate(
                pattern_name="Mega menu",
                description="Wide navigation panel listing all departments",
                industry="retail",
                pattern_type="navigation",
            ),
        ]
    )
    results = await services.engine.search_patterns(QUERY, threshold=0.2)
    assert [r.pattern.pattern_name for r in results] == ["Floating checkout button"]
    assert await services.engine.search_patterns(QUERY, industry="retail", threshold=0.2) == []
