"""Knowledge store: the narrow persistence surface used by the pipeline and search."""

import asyncio
import logging

from ux_kb.config import get_store_timeout
from ux_kb.db import queries
from ux_kb.db.backend import Database, MatchFilters
from ux_kb.errors import KnowledgeStoreError, StoreConnectionError
from ux_kb.models.entry import (
    CompetitorPattern,
    CompetitorPatternCreate,
    KnowledgeEntry,
    KnowledgeEntryCreate,
)
from ux_kb.models.search import PatternResult, SearchResult

logger = logging.getLogger(__name__)


def _clamp(similarity: float) -> float:
    return max(0.0, min(1.0, float(similarity)))


class KnowledgeStore:
    """Reads and writes knowledge entries and competitor patterns.

    Backend failures surface as ``KnowledgeStoreError``; an unreachable
    backend surfaces as ``StoreConnectionError``.
    """

    def __init__(self, db: Database, *, timeout: float | None = None):
        """Initialize with a database connection."""
        self.db = db
        self.timeout = timeout if timeout is not None else get_store_timeout()

    def _failure(self, message: str, exc: Exception) -> KnowledgeStoreError:
        if self.db.is_disconnect(exc):
            return StoreConnectionError(f"knowledge store connection lost: {message}: {exc}")
        return KnowledgeStoreError(f"{message}: {exc}")

    async def ping(self) -> None:
        """Round-trip a trivial query, raising StoreConnectionError on failure."""
        try:
            cursor = await asyncio.wait_for(self.db.execute("SELECT 1"), self.timeout)
            await cursor.fetchone()
        except Exception as e:
            raise StoreConnectionError(f"knowledge store unreachable: {e}") from e

    async def find_by_title(self, title: str) -> KnowledgeEntry | None:
        """Get the entry with this exact title, if any."""
        try:
            return await queries.find_entry_by_title(self.db, title)
        except Exception as e:
            raise self._failure("title lookup failed", e) from e

    async def add_entry(
        self, entry: KnowledgeEntryCreate, embedding: list[float]
    ) -> KnowledgeEntry:
        """Persist a new entry with its embedding and full freshness."""
        try:
            created = await queries.insert_entry(self.db, entry, embedding)
        except Exception as e:
            raise self._failure("insert failed", e) from e
        logger.info("Created entry %s: %s", created.id, created.title)
        return created

    async def find_pattern_by_name(self, pattern_name: str) -> CompetitorPattern | None:
        """Get the competitor pattern with this exact name, if any."""
        try:
            return await queries.find_pattern_by_name(self.db, pattern_name)
        except Exception as e:
            raise self._failure("pattern lookup failed", e) from e

    async def add_pattern(
        self, pattern: CompetitorPatternCreate, embedding: list[float]
    ) -> CompetitorPattern:
        """Persist a new competitor pattern with its embedding."""
        try:
            created = await queries.insert_pattern(self.db, pattern, embedding)
        except Exception as e:
            raise self._failure("pattern insert failed", e) from e
        logger.info("Created pattern %s: %s", created.id, created.pattern_name)
        return created

    async def match_knowledge(
        self,
        embedding: list[float],
        threshold: float,
        limit: int,
        filters: MatchFilters | None = None,
    ) -> list[SearchResult]:
        """Nearest entries with similarity >= threshold, best first."""
        try:
            rows = await asyncio.wait_for(
                self.db.match_knowledge(embedding, threshold, limit, filters), self.timeout
            )
            return [
                SearchResult(entry=queries.row_to_entry(row), similarity=_clamp(row["similarity"]))
                for row in rows
            ]
        except TimeoutError as e:
            raise KnowledgeStoreError(f"match timed out after {self.timeout}s") from e
        except Exception as e:
            raise self._failure("match failed", e) from e

    async def match_patterns(
        self,
        embedding: list[float],
        threshold: float,
        limit: int,
        industry: str | None = None,
        pattern_type: str | None = None,
    ) -> list[PatternResult]:
        """Nearest competitor patterns with similarity >= threshold, best first."""
        try:
            rows = await asyncio.wait_for(
                self.db.match_patterns(embedding, threshold, limit, industry, pattern_type),
                self.timeout,
            )
            return [
                PatternResult(
                    pattern=queries.row_to_pattern(row), similarity=_clamp(row["similarity"])
                )
                for row in rows
            ]
        except TimeoutError as e:
            raise KnowledgeStoreError(f"pattern match timed out after {self.timeout}s") from e
        except Exception as e:
            raise self._failure("pattern match failed", e) from e

    async def count_entries(self) -> int:
        """Total number of entries."""
        return await queries.count_entries(self.db)

    async def category_breakdown(self) -> list[tuple[str, int]]:
        """Entry counts per category, largest first."""
        return await queries.category_breakdown(self.db)

    async def sample_entries(self, limit: int = 5) -> list[KnowledgeEntry]:
        """A few entries for eyeballing."""
        return await queries.sample_entries(self.db, limit)

    async def embedding_stats(self) -> dict[str, object]:
        """Counts of entries with and without embeddings, plus coverage."""
        return await queries.embedding_stats(self.db)
