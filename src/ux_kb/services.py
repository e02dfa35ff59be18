"""Service container wiring the store, embedder and retrieval components."""

import logging
from dataclasses import dataclass
from pathlib import Path

from ux_kb.db.backend import Database
from ux_kb.db.connection import create_connection
from ux_kb.embeddings import EmbeddingProvider, create_embedder
from ux_kb.ingest.pipeline import IngestionPipeline
from ux_kb.rag.context_builder import RAGContextBuilder
from ux_kb.rag.retriever import MultiQueryRetriever
from ux_kb.search.engine import SimilaritySearchEngine
from ux_kb.store.knowledge_store import KnowledgeStore

logger = logging.getLogger(__name__)


@dataclass
class Services:
    """Everything a CLI command or MCP tool needs, built once per process."""

    db: Database
    store: KnowledgeStore
    embedder: EmbeddingProvider
    engine: SimilaritySearchEngine
    retriever: MultiQueryRetriever
    builder: RAGContextBuilder
    pipeline: IngestionPipeline

    @classmethod
    def from_parts(cls, db: Database, embedder: EmbeddingProvider) -> "Services":
        """Wire the components around an open database and an embedder."""
        store = KnowledgeStore(db)
        engine = SimilaritySearchEngine(store, embedder)
        retriever = MultiQueryRetriever(store, engine)
        return cls(
            db=db,
            store=store,
            embedder=embedder,
            engine=engine,
            retriever=retriever,
            builder=RAGContextBuilder(retriever),
            pipeline=IngestionPipeline(store, embedder),
        )

    async def close(self) -> None:
        """Close the embedder's HTTP client and the database."""
        await self.embedder.close()
        await self.db.close()
        logger.debug("Services closed")


async def create_services(
    db_path: Path | str | None = None, *, embedder: EmbeddingProvider | None = None
) -> Services:
    """Open the database and build the service container.

    Raises StoreConnectionError or ConfigurationError.
    """
    embedder = embedder or create_embedder()
    try:
        db = await create_connection(db_path, embedding_dim=embedder.dimensions)
    except Exception:
        await embedder.close()
        raise
    return Services.from_parts(db, embedder)
