"""Exception hierarchy for the UX knowledge base."""


class UXKnowledgeError(Exception):
    """Base exception for all knowledge base errors."""


class ConfigurationError(UXKnowledgeError):
    """Raised when required configuration is missing or invalid."""


class EmbeddingError(UXKnowledgeError):
    """Raised when the embedding provider cannot produce a valid vector."""


class KnowledgeStoreError(UXKnowledgeError):
    """Raised when a knowledge store operation fails."""


class StoreConnectionError(KnowledgeStoreError):
    """Raised when the knowledge store is unreachable.

    Unlike other store errors this one is fatal to an ingestion run.
    """


class RetrievalError(UXKnowledgeError):
    """Raised when every retrieval sub-query failed, as opposed to matching nothing."""
