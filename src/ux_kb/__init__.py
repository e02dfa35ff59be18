"""UX research knowledge base: ingestion, similarity search and RAG prompt assembly."""
