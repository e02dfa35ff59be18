"""End-to-end smoke test: store, embedding, search, context, prompt."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from ux_kb.models.search import SearchFilters
from ux_kb.rag.context_builder import enhance_prompt

if TYPE_CHECKING:
    from ux_kb.services import Services

logger = logging.getLogger(__name__)

SMOKE_QUERY = "button design usability"
SMOKE_THRESHOLD = 0.3


@dataclass
class StageResult:
    """Outcome of one smoke-test stage."""

    name: str
    passed: bool
    detail: str


async def run_smoke_test(
    services: Services, query: str = SMOKE_QUERY, threshold: float = SMOKE_THRESHOLD
) -> list[StageResult]:
    """Run every stage in order. A failed stage fails the stages that depend on it."""
    stages: list[StageResult] = []

    def skipped(*names: str, reason: str) -> list[StageResult]:
        stages.extend(StageResult(n, False, f"skipped: {reason}") for n in names)
        return stages

    # Stage 1: store connectivity
    try:
        await services.store.ping()
        total = await services.store.count_entries()
    except Exception as e:
        logger.warning("Smoke test: store unreachable", exc_info=True)
        stages.append(StageResult("database", False, str(e)))
        return skipped(
            "embedding",
            "similarity search",
            "rag context",
            "enhanced prompt",
            reason="database unavailable",
        )
    stages.append(StageResult("database", total > 0, f"{total} entries"))

    # Stage 2: embedding
    embedding = await services.engine.embed_query(query)
    if embedding is None:
        stages.append(StageResult("embedding", False, "embedding provider failed"))
        return skipped(
            "similarity search", "rag context", "enhanced prompt", reason="embedding unavailable"
        )
    stages.append(StageResult("embedding", True, f"{len(embedding)} dimensions"))

    # Stage 3: similarity search
    try:
        results = await services.engine.match(
            query, SearchFilters(max_results=5, confidence_threshold=threshold)
        )
    except Exception as e:
        logger.warning("Smoke test: search failed", exc_info=True)
        stages.append(StageResult("similarity search", False, str(e)))
        return skipped("rag context", "enhanced prompt", reason="search unavailable")
    top = f"; top: {results[0].entry.title} ({results[0].similarity:.3f})" if results else ""
    stages.append(
        StageResult("similarity search", bool(results), f"{len(results)} results{top}")
    )

    # Stage 4: RAG context
    context = await services.builder.build_rag_context(query, similarity_threshold=threshold)
    error = context.retrieval_metadata.error
    stages.append(
        StageResult(
            "rag context",
            error is None and context.total_relevant_entries > 0,
            error or f"{context.total_relevant_entries} entries, "
            f"categories: {', '.join(context.categories) or '(none)'}",
        )
    )

    # Stage 5: enhanced prompt
    prompt = enhance_prompt(query, context)
    stages.append(StageResult("enhanced prompt", bool(prompt), f"{len(prompt)} characters"))
    return stages
