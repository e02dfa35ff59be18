"""Environment-variable-based configuration."""

import os
from pathlib import Path


def get_db_path() -> Path:
    """Return the database file path from UX_KB_DB_PATH."""
    raw = os.environ.get("UX_KB_DB_PATH", "~/.local/share/ux_kb/knowledge.db")
    return Path(raw).expanduser()


def get_database_url() -> str | None:
    """Return the database URL from UX_KB_DATABASE_URL, if set.

    A ``postgresql://`` URL selects the Postgres backend.
    """
    return os.environ.get("UX_KB_DATABASE_URL") or None


def get_embedding_provider() -> str:
    """Return the embedding provider name from UX_KB_EMBEDDING_PROVIDER."""
    return os.environ.get("UX_KB_EMBEDDING_PROVIDER", "openai").lower()


def get_openai_url() -> str:
    """Return the OpenAI-compatible API base URL from UX_KB_OPENAI_URL."""
    return os.environ.get("UX_KB_OPENAI_URL", "https://api.openai.com/v1").rstrip("/")


def get_openai_api_key() -> str | None:
    """Return the OpenAI API key from OPENAI_API_KEY."""
    return os.environ.get("OPENAI_API_KEY") or None


def get_ollama_url() -> str:
    """Return the Ollama API URL from UX_KB_OLLAMA_URL."""
    return os.environ.get("UX_KB_OLLAMA_URL", "http://localhost:11434")


def get_embedding_model() -> str:
    """Return the embedding model name from UX_KB_EMBEDDING_MODEL."""
    if get_embedding_provider() == "openai":
        default = "text-embedding-3-small"
    else:
        default = "nomic-embed-text"
    return os.environ.get("UX_KB_EMBEDDING_MODEL", default)


def get_embedding_dim() -> int:
    """Return the embedding vector dimensions from UX_KB_EMBEDDING_DIM."""
    return int(os.environ.get("UX_KB_EMBEDDING_DIM", "1536"))


def get_embed_timeout() -> float:
    """Return the embedding call timeout in seconds from UX_KB_EMBED_TIMEOUT."""
    return float(os.environ.get("UX_KB_EMBED_TIMEOUT", "10.0"))


def get_store_timeout() -> float:
    """Return the store query timeout in seconds from UX_KB_STORE_TIMEOUT."""
    return float(os.environ.get("UX_KB_STORE_TIMEOUT", "10.0"))


def get_rag_timeout() -> float:
    """Return the overall RAG context timeout in seconds from UX_KB_RAG_TIMEOUT."""
    return float(os.environ.get("UX_KB_RAG_TIMEOUT", "30.0"))


def get_ingest_delay() -> float:
    """Return the delay between ingested items in seconds from UX_KB_INGEST_DELAY."""
    return float(os.environ.get("UX_KB_INGEST_DELAY", "0.1"))


def get_log_level() -> str:
    """Return the logging level from UX_KB_LOG_LEVEL."""
    return os.environ.get("UX_KB_LOG_LEVEL", "WARNING").upper()
