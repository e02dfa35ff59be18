"""Bulk, idempotent population of the knowledge store."""

import asyncio
import json
import logging
from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import TypeVar

from pydantic import BaseModel, ValidationError

from ux_kb.config import get_embed_timeout, get_ingest_delay
from ux_kb.embeddings.provider import EmbeddingProvider, check_dimensions
from ux_kb.errors import StoreConnectionError
from ux_kb.models.entry import CompetitorPatternCreate, KnowledgeEntryCreate
from ux_kb.store.knowledge_store import KnowledgeStore

logger = logging.getLogger(__name__)

ADDED = "added"
SKIPPED = "skipped"
FAILED = "failed"

# (index, total, title, outcome); index is 1-based
ProgressCallback = Callable[[int, int, str, str], None]

ModelT = TypeVar("ModelT", bound=BaseModel)


@dataclass
class IngestionResult:
    """Outcome of one ingestion run. Per-item failures are recorded, not raised."""

    total_entries: int = 0
    successfully_added: int = 0
    skipped: int = 0
    failed: int = 0
    errors: list[tuple[str, str]] = field(default_factory=list)
    skipped_titles: list[str] = field(default_factory=list)
    cancelled: bool = False

    @property
    def processed(self) -> int:
        """Number of items that reached an outcome."""
        return self.successfully_added + self.skipped + self.failed


class IngestionPipeline:
    """Embeds and stores entries one at a time, skipping titles already present."""

    def __init__(
        self,
        store: KnowledgeStore,
        embedder: EmbeddingProvider,
        *,
        delay: float | None = None,
        embed_timeout: float | None = None,
    ):
        """Initialize with a store, an embedding provider and pacing options."""
        self.store = store
        self.embedder = embedder
        self.delay = delay if delay is not None else get_ingest_delay()
        self.embed_timeout = embed_timeout if embed_timeout is not None else get_embed_timeout()

    async def run(
        self,
        entries: Sequence[KnowledgeEntryCreate],
        *,
        progress: ProgressCallback | None = None,
        cancel: asyncio.Event | None = None,
    ) -> IngestionResult:
        """Ingest ``entries`` in order.

        The store is pinged first; a connectivity failure there (or later)
        aborts the run by raising ``StoreConnectionError``.
        """

        async def _add(entry: KnowledgeEntryCreate) -> str:
            if await self.store.find_by_title(entry.title) is not None:
                return SKIPPED
            embedding = await self._embed(entry.embedding_text)
            await self.store.add_entry(entry, embedding)
            return ADDED

        return await self._run_items(
            [(e.title, e) for e in entries], _add, progress=progress, cancel=cancel
        )

    async def run_patterns(
        self,
        patterns: Sequence[CompetitorPatternCreate],
        *,
        progress: ProgressCallback | None = None,
        cancel: asyncio.Event | None = None,
    ) -> IngestionResult:
        """Ingest competitor patterns, keyed by ``pattern_name``."""

        async def _add(pattern: CompetitorPatternCreate) -> str:
            if await self.store.find_pattern_by_name(pattern.pattern_name) is not None:
                return SKIPPED
            embedding = await self._embed(pattern.embedding_text)
            await self.store.add_pattern(pattern, embedding)
            return ADDED

        return await self._run_items(
            [(p.pattern_name, p) for p in patterns], _add, progress=progress, cancel=cancel
        )

    async def _embed(self, text: str) -> list[float]:
        vector = await asyncio.wait_for(self.embedder.embed(text), self.embed_timeout)
        return check_dimensions(vector, self.embedder.dimensions)

    async def _run_items(
        self,
        items: list[tuple[str, object]],
        add: Callable[..., Awaitable[str]],
        *,
        progress: ProgressCallback | None,
        cancel: asyncio.Event | None,
    ) -> IngestionResult:
        result = IngestionResult(total_entries=len(items))
        await self.store.ping()

        for index, (title, item) in enumerate(items, start=1):
            if cancel is not None and cancel.is_set():
                logger.info("Ingestion cancelled after %d of %d items", index - 1, len(items))
                result.cancelled = True
                break

            try:
                outcome = await add(item)
            except StoreConnectionError:
                raise
            except TimeoutError:
                outcome = FAILED
                result.errors.append((title, f"embedding timed out after {self.embed_timeout}s"))
                logger.warning("Timed out embedding %r", title)
            except Exception as e:
                outcome = FAILED
                result.errors.append((title, str(e) or type(e).__name__))
                logger.warning("Failed to ingest %r: %s", title, e, exc_info=True)

            if outcome == ADDED:
                result.successfully_added += 1
            elif outcome == SKIPPED:
                result.skipped += 1
                result.skipped_titles.append(title)
                logger.debug("Skipping existing %r", title)
            else:
                result.failed += 1

            if progress is not None:
                progress(index, len(items), title, outcome)

            if index < len(items) and self.delay > 0:
                await asyncio.sleep(self.delay)

        logger.info(
            "Ingestion finished: %d added, %d skipped, %d failed",
            result.successfully_added,
            result.skipped,
            result.failed,
        )
        return result


def _load_json_array(path: Path | str, model: type[ModelT], noun: str) -> list[ModelT]:
    raw = json.loads(Path(path).read_text(encoding="utf-8"))
    if not isinstance(raw, list):
        raise ValueError(f"{path}: expected a JSON array of {noun} objects")

    items: list[ModelT] = []
    for i, item in enumerate(raw):
        try:
            items.append(model.model_validate(item))
        except ValidationError as e:
            raise ValueError(f"{path}: {noun} {i} is invalid: {e}") from e
    return items


def load_entries_file(path: Path | str) -> list[KnowledgeEntryCreate]:
    """Read a JSON array of knowledge entry objects.

    Raises ValueError naming the offending index when an item is invalid.
    """
    return _load_json_array(path, KnowledgeEntryCreate, "entry")


def load_patterns_file(path: Path | str) -> list[CompetitorPatternCreate]:
    """Read a JSON array of competitor pattern objects, validated like entries."""
    return _load_json_array(path, CompetitorPatternCreate, "pattern")
