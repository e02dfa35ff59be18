"""Multi-query retrieval: expand, search each sub-query, merge."""

import logging
import time

from ux_kb.errors import RetrievalError
from ux_kb.models.rag import RAGContext, RetrievalMetadata
from ux_kb.models.search import SearchFilters, SearchResult
from ux_kb.rag.prompts import build_fallback_prompt, build_research_prompt
from ux_kb.rag.queries import generate_search_queries, infer_industry
from ux_kb.search.engine import SimilaritySearchEngine
from ux_kb.store.knowledge_store import KnowledgeStore

logger = logging.getLogger(__name__)

PER_QUERY_LIMIT = 5
DEFAULT_SEARCH_QUERY = "UX analysis with research insights"


def merge_results(batches: list[list[SearchResult]], limit: int) -> list[SearchResult]:
    """De-duplicate by entry id keeping the best similarity, best first."""
    best: dict[str, SearchResult] = {}
    for batch in batches:
        for result in batch:
            current = best.get(result.entry.id)
            if current is None or result.similarity > current.similarity:
                best[result.entry.id] = result
    ranked = sorted(best.values(), key=lambda r: (-r.similarity, r.entry.title))
    return ranked[:limit]


def distinct_categories(results: list[SearchResult]) -> list[str]:
    """Categories of ``results`` in first-seen order."""
    return list(dict.fromkeys(r.entry.category for r in results))


class MultiQueryRetriever:
    """Runs one similarity search per generated sub-query and merges the hits."""

    def __init__(
        self,
        store: KnowledgeStore,
        engine: SimilaritySearchEngine,
        *,
        per_query_limit: int = PER_QUERY_LIMIT,
    ):
        """Initialize with the store (for the emptiness check) and a search engine."""
        self.store = store
        self.engine = engine
        self.per_query_limit = per_query_limit

    async def retrieve(
        self,
        query: str,
        *,
        max_results: int = 8,
        threshold: float = 0.5,
        category_filter: list[str] | None = None,
        industry_filter: list[str] | None = None,
    ) -> RAGContext:
        """Build a research context for ``query``.

        Raises RetrievalError when no sub-query could be searched at all.
        """
        start = time.monotonic()
        industry = infer_industry(query)

        if await self.store.count_entries() == 0:
            logger.warning("No knowledge entries in store; using fallback prompt")
            return RAGContext(
                search_query=query or DEFAULT_SEARCH_QUERY,
                enhanced_prompt=build_fallback_prompt(query),
                retrieval_metadata=RetrievalMetadata(
                    threshold=threshold,
                    industry_context=industry,
                    error="No knowledge entries in database",
                ),
            )

        sub_queries = generate_search_queries(query)
        filters = SearchFilters(
            max_results=self.per_query_limit,
            confidence_threshold=threshold,
            categories=category_filter or [],
            industries=industry_filter or [],
        )

        batches: list[list[SearchResult]] = []
        last_error: Exception | None = None
        for sub_query in sub_queries:
            try:
                batches.append(await self.engine.match(sub_query, filters))
            except Exception as e:
                last_error = e
                logger.warning("Sub-query %r failed: %s", sub_query, e)

        if not batches and last_error is not None:
            raise RetrievalError(
                f"all {len(sub_queries)} sub-queries failed: {last_error}"
            ) from last_error

        knowledge = merge_results(batches, max_results)
        elapsed_ms = (time.monotonic() - start) * 1000
        logger.info(
            "Retrieved %d entries from %d sub-queries in %.0fms",
            len(knowledge),
            len(sub_queries),
            elapsed_ms,
        )
        return RAGContext(
            relevant_knowledge=knowledge,
            total_relevant_entries=len(knowledge),
            categories=distinct_categories(knowledge),
            search_query=query or DEFAULT_SEARCH_QUERY,
            enhanced_prompt=build_research_prompt(query, knowledge),
            retrieval_metadata=RetrievalMetadata(
                search_queries=sub_queries,
                queries_generated=len(sub_queries),
                processing_time_ms=elapsed_ms,
                threshold=threshold,
                industry_context=industry,
            ),
        )
