"""Embedding similarity search over the knowledge store with graceful degradation."""

import asyncio
import logging

from ux_kb.config import get_embed_timeout
from ux_kb.db.backend import MatchFilters
from ux_kb.embeddings.provider import EmbeddingProvider
from ux_kb.errors import EmbeddingError, KnowledgeStoreError
from ux_kb.models.entry import COMPLEXITY_LADDER
from ux_kb.models.search import PatternResult, SearchFilters, SearchResult
from ux_kb.store.knowledge_store import KnowledgeStore

logger = logging.getLogger(__name__)


def _rank(results: list[SearchResult], limit: int) -> list[SearchResult]:
    """Sort by descending similarity (title breaks ties) and truncate."""
    ranked = sorted(results, key=lambda r: (-r.similarity, r.entry.title))
    return ranked[:limit]


def complexity_levels_for(user_level: str, include_higher: bool) -> list[str]:
    """Levels a user at ``user_level`` should see.

    With ``include_higher`` the ladder slice from ``user_level`` upward is
    returned; a level outside the ladder only ever matches itself.
    """
    if not include_higher or user_level not in COMPLEXITY_LADDER:
        return [user_level]
    return list(COMPLEXITY_LADDER[COMPLEXITY_LADDER.index(user_level) :])


class SimilaritySearchEngine:
    """Embeds a query and returns the nearest knowledge entries.

    The public search methods log embedding and store failures and return an
    empty list. ``match`` is the raising variant for callers that must tell
    "nothing found" apart from "could not search".
    """

    def __init__(
        self,
        store: KnowledgeStore,
        embedder: EmbeddingProvider,
        *,
        embed_timeout: float | None = None,
    ):
        """Initialize with a store and an embedding provider."""
        self.store = store
        self.embedder = embedder
        self.embed_timeout = embed_timeout if embed_timeout is not None else get_embed_timeout()

    async def embed_query(self, query: str) -> list[float] | None:
        """Embed ``query``, returning None when the provider fails or times out."""
        try:
            return await asyncio.wait_for(self.embedder.embed(query), self.embed_timeout)
        except TimeoutError:
            logger.warning("Query embedding timed out after %.1fs", self.embed_timeout)
        except EmbeddingError:
            logger.warning("Query embedding failed", exc_info=True)
        except Exception:
            logger.warning("Query embedding provider error", exc_info=True)
        return None

    async def match(self, query: str, filters: SearchFilters | None = None) -> list[SearchResult]:
        """Like ``search`` but raises instead of degrading.

        Raises EmbeddingError, KnowledgeStoreError or TimeoutError.
        """
        filters = filters or SearchFilters()
        embedding = await asyncio.wait_for(self.embedder.embed(query), self.embed_timeout)
        match_filters = MatchFilters(
            categories=tuple(filters.categories),
            industries=tuple(filters.industries),
            primary_category=filters.primary_category,
            secondary_category=filters.secondary_category,
            complexity_levels=tuple(filters.complexity_levels),
        )
        results = await self.store.match_knowledge(
            embedding, filters.confidence_threshold, filters.max_results, match_filters
        )
        logger.debug("Search %r returned %d results", query, len(results))
        return _rank(results, filters.max_results)

    async def search(self, query: str, filters: SearchFilters | None = None) -> list[SearchResult]:
        """Nearest entries to ``query`` that pass every supplied filter.

        Returns an empty list when the query cannot be embedded or the store
        cannot be queried.
        """
        try:
            return await self.match(query, filters)
        except TimeoutError:
            logger.warning("Query embedding timed out after %.1fs", self.embed_timeout)
        except EmbeddingError:
            logger.warning("Query embedding failed", exc_info=True)
        except KnowledgeStoreError:
            logger.warning("Similarity search failed for %r", query, exc_info=True)
        except Exception:
            logger.warning("Unexpected error searching for %r", query, exc_info=True)
        return []

    async def search_by_hierarchy(
        self,
        query: str,
        primary_category: str | None = None,
        secondary_category: str | None = None,
        industry_tags: list[str] | None = None,
        complexity_level: str | None = None,
        *,
        max_results: int = 10,
        threshold: float = 0.5,
    ) -> list[SearchResult]:
        """Search restricted to a taxonomy position. Every supplied facet must match."""
        return await self.search(
            query,
            SearchFilters(
                max_results=max_results,
                confidence_threshold=threshold,
                primary_category=primary_category,
                secondary_category=secondary_category,
                industries=industry_tags or [],
                complexity_levels=[complexity_level] if complexity_level else [],
            ),
        )

    async def search_by_complexity(
        self,
        query: str,
        user_level: str,
        include_higher: bool = False,
        *,
        max_results: int = 10,
        threshold: float = 0.5,
    ) -> list[SearchResult]:
        """Search restricted to entries appropriate for ``user_level``."""
        return await self.search(
            query,
            SearchFilters(
                max_results=max_results,
                confidence_threshold=threshold,
                complexity_levels=complexity_levels_for(user_level, include_higher),
            ),
        )

    async def search_patterns(
        self,
        query: str,
        industry: str | None = None,
        pattern_type: str | None = None,
        *,
        max_results: int = 10,
        threshold: float = 0.5,
    ) -> list[PatternResult]:
        """Nearest competitor patterns to ``query``."""
        embedding = await self.embed_query(query)
        if embedding is None:
            return []
        try:
            results = await self.store.match_patterns(
                embedding, threshold, max_results, industry, pattern_type
            )
        except Exception:
            logger.warning("Pattern search failed for %r", query, exc_info=True)
            return []
        ranked = sorted(results, key=lambda r: (-r.similarity, r.pattern.pattern_name))
        return ranked[:max_results]
