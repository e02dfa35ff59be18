"""RAG context assembly that always produces a usable prompt."""

import asyncio
import logging
import time

from ux_kb.config import get_rag_timeout
from ux_kb.models.rag import RAGContext, RetrievalMetadata
from ux_kb.rag.prompts import build_fallback_prompt
from ux_kb.rag.queries import infer_industry
from ux_kb.rag.retriever import DEFAULT_SEARCH_QUERY, MultiQueryRetriever

logger = logging.getLogger(__name__)


def fallback_context(
    query: str, *, threshold: float, error: str, elapsed_ms: float = 0.0
) -> RAGContext:
    """An empty context carrying the fallback prompt and the reason retrieval failed."""
    return RAGContext(
        search_query=query or DEFAULT_SEARCH_QUERY,
        enhanced_prompt=build_fallback_prompt(query),
        retrieval_metadata=RetrievalMetadata(
            processing_time_ms=elapsed_ms,
            threshold=threshold,
            industry_context=infer_industry(query),
            error=error,
        ),
    )


def enhance_prompt(
    user_prompt: str, rag_context: RAGContext, analysis_type: str = "general"
) -> str:
    """Return the context's prompt, or a fallback built from ``user_prompt``."""
    if rag_context.enhanced_prompt:
        return rag_context.enhanced_prompt
    logger.debug("Context for %s analysis has no prompt; using fallback", analysis_type)
    return build_fallback_prompt(user_prompt, rag_context.total_relevant_entries)


class RAGContextBuilder:
    """Front door for retrieval. Never raises for retrieval failures.

    Task cancellation is not a retrieval failure and propagates.
    """

    def __init__(self, retriever: MultiQueryRetriever, *, timeout: float | None = None):
        """Initialize with a retriever and an overall deadline."""
        self.retriever = retriever
        self.timeout = timeout if timeout is not None else get_rag_timeout()

    async def build_rag_context(
        self,
        query: str,
        max_results: int = 8,
        similarity_threshold: float = 0.5,
        category_filter: list[str] | None = None,
        industry_filter: list[str] | None = None,
    ) -> RAGContext:
        """Retrieve research for ``query`` or fall back to the standard prompt."""
        start = time.monotonic()
        try:
            context = await asyncio.wait_for(
                self.retriever.retrieve(
                    query,
                    max_results=max_results,
                    threshold=similarity_threshold,
                    category_filter=category_filter,
                    industry_filter=industry_filter,
                ),
                self.timeout,
            )
        except TimeoutError:
            logger.warning("RAG context build timed out after %.1fs", self.timeout)
            error = f"retrieval timed out after {self.timeout}s"
        except Exception as e:
            logger.warning("RAG context build failed", exc_info=True)
            error = str(e) or type(e).__name__
        else:
            if context is not None:
                return context
            error = "retriever returned no context"

        elapsed_ms = (time.monotonic() - start) * 1000
        return fallback_context(
            query, threshold=similarity_threshold, error=error, elapsed_ms=elapsed_ms
        )

    def enhance_prompt(
        self, user_prompt: str, rag_context: RAGContext, analysis_type: str = "general"
    ) -> str:
        """See :func:`enhance_prompt`."""
        return enhance_prompt(user_prompt, rag_context, analysis_type)
