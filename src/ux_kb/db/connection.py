"""Database connection management with sqlite-vec or pgvector."""

import logging
from pathlib import Path

import aiosqlite
import sqlite_vec

from ux_kb.config import get_database_url, get_db_path, get_embedding_dim
from ux_kb.db.backend import Database
from ux_kb.db.sqlite_backend import SQLiteBackend
from ux_kb.errors import StoreConnectionError

logger = logging.getLogger(__name__)


async def create_connection(
    db_path: Path | str | None = None, *, embedding_dim: int | None = None
) -> Database:
    """Create and initialize a database connection.

    Dispatches to SQLite or PostgreSQL based on UX_KB_DATABASE_URL.
    For in-memory SQLite databases, pass ":memory:".
    Raises StoreConnectionError when the backend cannot be opened.
    """
    dim = embedding_dim or get_embedding_dim()
    # Explicit ":memory:" always uses SQLite (used by tests)
    if db_path == ":memory:":
        return await _create_sqlite(":memory:", embedding_dim=dim)
    url = get_database_url()
    if url and url.startswith("postgres"):
        return await _create_postgres(url, embedding_dim=dim)
    return await _create_sqlite(db_path or get_db_path(), embedding_dim=dim)


async def _create_sqlite(db_path: Path | str, *, embedding_dim: int) -> Database:
    """Create a SQLite backend with sqlite-vec."""
    db_path = str(db_path)

    try:
        if db_path != ":memory:":
            Path(db_path).parent.mkdir(parents=True, exist_ok=True)
        conn = await aiosqlite.connect(db_path)
    except (OSError, aiosqlite.Error) as e:
        raise StoreConnectionError(f"cannot open SQLite database {db_path}: {e}") from e

    conn.row_factory = aiosqlite.Row
    await conn.execute("PRAGMA journal_mode=WAL")

    # Similarity matching needs vec_distance_cosine, so a missing extension is fatal
    try:

        def _load_vec() -> None:
            conn._conn.enable_load_extension(True)
            sqlite_vec.load(conn._conn)
            conn._conn.enable_load_extension(False)

        await conn._execute(_load_vec)  # type: ignore[no-untyped-call]
        logger.debug("sqlite-vec extension loaded")
    except Exception as e:
        await conn.close()
        raise StoreConnectionError(f"sqlite-vec extension not available: {e}") from e

    db = SQLiteBackend(conn)
    await db.apply_schema(embedding_dim=embedding_dim)
    return db


async def _create_postgres(url: str, *, embedding_dim: int) -> Database:
    """Create a PostgreSQL backend with pgvector."""
    import asyncpg

    from ux_kb.db.postgres_backend import PostgresBackend

    try:
        db = await PostgresBackend.create(url)
    except (OSError, asyncpg.PostgresError) as e:
        raise StoreConnectionError(f"cannot connect to PostgreSQL: {e}") from e
    await db.apply_schema(embedding_dim=embedding_dim)
    return db
