"""SQLite implementation of the Database protocol.

Thin wrapper around aiosqlite.Connection. Similarity is computed with the
sqlite-vec ``vec_distance_cosine`` scalar function over the float32 BLOB
stored in each row, so facet filters are plain SQL predicates.
"""

from __future__ import annotations

import logging
import sqlite3
import struct
from typing import TYPE_CHECKING, Any

from ux_kb.db.backend import MatchFilters

if TYPE_CHECKING:
    import aiosqlite

    from ux_kb.db.backend import Cursor, Row

logger = logging.getLogger(__name__)

ENTRY_COLUMNS = (
    "id, title, content, source, category, primary_category, secondary_category, "
    "industry_tags, complexity_level, use_cases, related_patterns, freshness_score, "
    "application_context, tags, metadata, created_at, updated_at"
)

PATTERN_COLUMNS = (
    "id, pattern_name, description, industry, pattern_type, tags, metadata, "
    "created_at, updated_at"
)

# Messages aiosqlite and sqlite3 use for a connection that has been closed
_CLOSED_MARKERS = ("no active connection", "connection closed", "closed database")


def _serialize_f32(vec: list[float]) -> bytes:
    """Serialize a list of floats to a compact binary format for sqlite-vec."""
    return struct.pack(f"{len(vec)}f", *vec)


def _in_clause(column: str, values: tuple[str, ...], params: list[Any]) -> str:
    params.extend(values)
    return f" AND {column} IN ({', '.join('?' for _ in values)})"


class SQLiteCursor:
    """Wraps aiosqlite.Cursor to satisfy the Cursor protocol."""

    def __init__(self, cursor: aiosqlite.Cursor) -> None:
        """Initialize with an aiosqlite cursor."""
        self._cursor = cursor

    async def fetchone(self) -> Row | None:
        """Fetch the next row, or None if exhausted."""
        return await self._cursor.fetchone()

    async def fetchall(self) -> list[Row]:
        """Fetch all remaining rows."""
        return list(await self._cursor.fetchall())


class SQLiteBackend:
    """SQLite implementation of the Database protocol.

    Passes generic calls through to the underlying aiosqlite.Connection.
    The raw connection is exposed as ``_conn`` for SQLite-specific
    operations (extension loading, PRAGMA) that only run during setup.
    """

    vector_placeholder = "?"
    embedding_present_sql = "embedding IS NOT NULL AND length(embedding) > 0"

    def __init__(self, conn: aiosqlite.Connection) -> None:
        """Initialize with an aiosqlite connection."""
        self._conn = conn

    def encode_vector(self, embedding: list[float]) -> bytes:
        """Serialize an embedding as a float32 BLOB."""
        return _serialize_f32(embedding)

    async def execute(self, sql: str, params: tuple[Any, ...] | list[Any] = ()) -> Cursor:
        """Execute a single SQL statement and return a cursor."""
        cursor = await self._conn.execute(sql, params)
        return SQLiteCursor(cursor)

    async def executescript(self, sql: str) -> None:
        """Execute multiple SQL statements (DDL, migrations)."""
        await self._conn.executescript(sql)

    async def commit(self) -> None:
        """Commit the current transaction."""
        await self._conn.commit()

    async def close(self) -> None:
        """Close the database connection."""
        await self._conn.close()

    def is_disconnect(self, exc: BaseException) -> bool:
        """I/O errors and any use of a closed connection."""
        if isinstance(exc, OSError):
            return True
        if isinstance(exc, (ValueError, sqlite3.ProgrammingError)):
            return any(marker in str(exc).lower() for marker in _CLOSED_MARKERS)
        return False

    # -- Similarity matching (sqlite-vec) --

    async def match_knowledge(
        self,
        embedding: list[float],
        threshold: float,
        limit: int,
        filters: MatchFilters | None = None,
    ) -> list[Row]:
        """Nearest knowledge entries by cosine similarity, best first."""
        params: list[Any] = [_serialize_f32(embedding)]
        where = f"WHERE {self.embedding_present_sql}"

        if filters is not None:
            if filters.categories:
                where += _in_clause("category", filters.categories, params)
            if filters.primary_category:
                where += " AND primary_category = ?"
                params.append(filters.primary_category)
            if filters.secondary_category:
                where += " AND secondary_category = ?"
                params.append(filters.secondary_category)
            if filters.complexity_levels:
                where += _in_clause("complexity_level", filters.complexity_levels, params)
            if filters.industries:
                placeholders = ", ".join("?" for _ in filters.industries)
                where += (
                    " AND EXISTS (SELECT 1 FROM json_each(industry_tags)"
                    f" WHERE json_each.value IN ({placeholders}))"
                )
                params.extend(filters.industries)

        sql = f"""
            SELECT * FROM (
                SELECT {ENTRY_COLUMNS}, 1 AS has_embedding,
                       1 - vec_distance_cosine(embedding, ?) AS similarity
                FROM knowledge_entries
                {where}
            )
            WHERE similarity >= ?
            ORDER BY similarity DESC, title
            LIMIT ?
        """
        params.extend([threshold, limit])

        cursor = await self._conn.execute(sql, params)
        return list(await cursor.fetchall())

    async def match_patterns(
        self,
        embedding: list[float],
        threshold: float,
        limit: int,
        industry: str | None = None,
        pattern_type: str | None = None,
    ) -> list[Row]:
        """Nearest competitor patterns by cosine similarity, best first."""
        params: list[Any] = [_serialize_f32(embedding)]
        where = f"WHERE {self.embedding_present_sql}"
        if industry:
            where += " AND industry = ?"
            params.append(industry)
        if pattern_type:
            where += " AND pattern_type = ?"
            params.append(pattern_type)

        sql = f"""
            SELECT * FROM (
                SELECT {PATTERN_COLUMNS}, 1 AS has_embedding,
                       1 - vec_distance_cosine(embedding, ?) AS similarity
                FROM competitor_patterns
                {where}
            )
            WHERE similarity >= ?
            ORDER BY similarity DESC, pattern_name
            LIMIT ?
        """
        params.extend([threshold, limit])

        cursor = await self._conn.execute(sql, params)
        return list(await cursor.fetchall())

    # -- Schema --

    async def apply_schema(self, *, embedding_dim: int = 1536) -> None:
        """Apply all SQLite DDL.

        The BLOB column is dimension-agnostic; ``embedding_dim`` is accepted
        for parity with the Postgres backend.
        """
        from ux_kb.db.schema import apply_schema

        await apply_schema(self)
        logger.debug("SQLite schema applied (embedding dim %d)", embedding_dim)
