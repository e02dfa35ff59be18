"""PostgreSQL implementation of the Database protocol.

Uses asyncpg for async access and pgvector for embeddings. All application
SQL uses ``?`` placeholders and this backend translates them to ``$N`` at
execute time. The match operations are written in native ``$N`` form.
"""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING, Any

from ux_kb.db.backend import MatchFilters
from ux_kb.db.sqlite_backend import ENTRY_COLUMNS, PATTERN_COLUMNS

if TYPE_CHECKING:
    import asyncpg

    from ux_kb.db.backend import Cursor, Row

logger = logging.getLogger(__name__)

# Pre-compiled regex for placeholder translation
_PLACEHOLDER_RE = re.compile(r"\?")


def _translate_placeholders(sql: str) -> str:
    """Convert ``?`` placeholders to ``$1, $2, ...`` for asyncpg."""
    counter = 0

    def _replace(_match: re.Match[str]) -> str:
        nonlocal counter
        counter += 1
        return f"${counter}"

    return _PLACEHOLDER_RE.sub(_replace, sql)


def _vector_literal(vec: list[float]) -> str:
    """Render an embedding in pgvector's text input format."""
    return "[" + ",".join(str(v) for v in vec) + "]"


class PostgresRow:
    """Wraps asyncpg.Record to satisfy the Row protocol."""

    def __init__(self, record: asyncpg.Record) -> None:
        """Initialize with an asyncpg Record."""
        self._record = record

    def __getitem__(self, key: str | int) -> Any:
        """Get a column value by name or position."""
        return self._record[key]

    def keys(self) -> list[str]:
        """Return column names."""
        return list(self._record.keys())


class PostgresCursor:
    """Wraps a list of asyncpg.Record as a Cursor.

    asyncpg returns results eagerly; there is no server-side cursor for
    simple queries. This wraps the result list to match the Cursor protocol.
    """

    def __init__(self, rows: list[asyncpg.Record]) -> None:
        """Initialize with result rows."""
        self._rows = rows
        self._index = 0

    async def fetchone(self) -> Row | None:
        """Fetch the next row, or None if exhausted."""
        if self._index >= len(self._rows):
            return None
        row = PostgresRow(self._rows[self._index])
        self._index += 1
        return row

    async def fetchall(self) -> list[Row]:
        """Fetch all remaining rows."""
        remaining: list[Row] = [PostgresRow(r) for r in self._rows[self._index :]]
        self._index = len(self._rows)
        return remaining


class PostgresBackend:
    """PostgreSQL implementation of the Database protocol.

    Each ``execute()`` call acquires a connection from the pool, translates
    ``?`` → ``$N`` placeholders, and releases the connection after.
    ``commit()`` is a no-op: asyncpg auto-commits each statement.
    """

    vector_placeholder = "?::vector"
    embedding_present_sql = "embedding IS NOT NULL"

    def __init__(self, pool: asyncpg.Pool) -> None:
        """Initialize with an asyncpg connection pool."""
        self._pool = pool

    @classmethod
    async def create(cls, url: str) -> PostgresBackend:
        """Create a PostgresBackend from a connection URL."""
        import asyncpg as _asyncpg

        pool = await _asyncpg.create_pool(url, min_size=1, max_size=10)
        return cls(pool)

    def encode_vector(self, embedding: list[float]) -> str:
        """Render an embedding for a ``::vector`` cast."""
        return _vector_literal(embedding)

    async def execute(self, sql: str, params: tuple[Any, ...] | list[Any] = ()) -> Cursor:
        """Execute a single SQL statement and return a cursor."""
        pg_sql = _translate_placeholders(sql)
        async with self._pool.acquire() as conn:
            # statements without result columns go through execute, which returns no rows
            stmt = await conn.prepare(pg_sql)
            if stmt.get_attributes():
                rows = await conn.fetch(pg_sql, *params)
                return PostgresCursor(rows)
            await conn.execute(pg_sql, *params)
            return PostgresCursor([])

    async def executescript(self, sql: str) -> None:
        """Execute multiple SQL statements."""
        async with self._pool.acquire() as conn:
            await conn.execute(sql)

    async def commit(self) -> None:
        """No-op: asyncpg auto-commits each statement."""

    async def close(self) -> None:
        """Close the connection pool."""
        await self._pool.close()

    def is_disconnect(self, exc: BaseException) -> bool:
        """Socket errors, a closed pool and lost connections."""
        import asyncpg as _asyncpg

        return isinstance(
            exc,
            (
                OSError,
                _asyncpg.InterfaceError,
                _asyncpg.ConnectionDoesNotExistError,
                _asyncpg.PostgresConnectionError,
            ),
        )

    # -- Similarity matching (pgvector) --

    async def match_knowledge(
        self,
        embedding: list[float],
        threshold: float,
        limit: int,
        filters: MatchFilters | None = None,
    ) -> list[Row]:
        """Nearest knowledge entries by cosine similarity, best first."""
        params: list[Any] = [_vector_literal(embedding), threshold]
        where = "WHERE embedding IS NOT NULL AND 1 - (embedding <=> $1::vector) >= $2"

        if filters is not None:
            if filters.categories:
                params.append(list(filters.categories))
                where += f" AND category = ANY(${len(params)})"
            if filters.primary_category:
                params.append(filters.primary_category)
                where += f" AND primary_category = ${len(params)}"
            if filters.secondary_category:
                params.append(filters.secondary_category)
                where += f" AND secondary_category = ${len(params)}"
            if filters.complexity_levels:
                params.append(list(filters.complexity_levels))
                where += f" AND complexity_level = ANY(${len(params)})"
            if filters.industries:
                params.append(list(filters.industries))
                where += (
                    " AND EXISTS (SELECT 1 FROM jsonb_array_elements_text(industry_tags::jsonb)"
                    f" AS t(tag) WHERE t.tag = ANY(${len(params)}))"
                )

        params.append(limit)
        sql = f"""
            SELECT {ENTRY_COLUMNS}, TRUE AS has_embedding,
                   1 - (embedding <=> $1::vector) AS similarity
            FROM knowledge_entries
            {where}
            ORDER BY similarity DESC, title
            LIMIT ${len(params)}
        """
        async with self._pool.acquire() as conn:
            rows = await conn.fetch(sql, *params)
        return [PostgresRow(r) for r in rows]

    async def match_patterns(
        self,
        embedding: list[float],
        threshold: float,
        limit: int,
        industry: str | None = None,
        pattern_type: str | None = None,
    ) -> list[Row]:
        """Nearest competitor patterns by cosine similarity, best first."""
        params: list[Any] = [_vector_literal(embedding), threshold]
        where = "WHERE embedding IS NOT NULL AND 1 - (embedding <=> $1::vector) >= $2"
        if industry:
            params.append(industry)
            where += f" AND industry = ${len(params)}"
        if pattern_type:
            params.append(pattern_type)
            where += f" AND pattern_type = ${len(params)}"

        params.append(limit)
        sql = f"""
            SELECT {PATTERN_COLUMNS}, TRUE AS has_embedding,
                   1 - (embedding <=> $1::vector) AS similarity
            FROM competitor_patterns
            {where}
            ORDER BY similarity DESC, pattern_name
            LIMIT ${len(params)}
        """
        async with self._pool.acquire() as conn:
            rows = await conn.fetch(sql, *params)
        return [PostgresRow(r) for r in rows]

    # -- Schema --

    async def apply_schema(self, *, embedding_dim: int = 1536) -> None:
        """Apply all PostgreSQL DDL."""
        async with self._pool.acquire() as conn:
            await conn.execute("CREATE EXTENSION IF NOT EXISTS vector")

            await conn.execute("""
                CREATE TABLE IF NOT EXISTS schema_version (
                    version INTEGER NOT NULL
                )
            """)

            await conn.execute(f"""
                CREATE TABLE IF NOT EXISTS knowledge_entries (
                    id TEXT PRIMARY KEY,
                    title TEXT NOT NULL,
                    content TEXT NOT NULL,
                    source TEXT NOT NULL DEFAULT '',
                    category TEXT NOT NULL,
                    primary_category TEXT,
                    secondary_category TEXT,
                    industry_tags TEXT NOT NULL DEFAULT '[]',
                    complexity_level TEXT,
                    use_cases TEXT NOT NULL DEFAULT '[]',
                    related_patterns TEXT NOT NULL DEFAULT '[]',
                    freshness_score REAL NOT NULL DEFAULT 1.0,
                    application_context TEXT NOT NULL DEFAULT '{{}}',
                    tags TEXT NOT NULL DEFAULT '[]',
                    metadata TEXT NOT NULL DEFAULT '{{}}',
                    embedding vector({embedding_dim}),
                    created_at TEXT NOT NULL,
                    updated_at TEXT NOT NULL
                )
            """)

            await conn.execute(f"""
                CREATE TABLE IF NOT EXISTS competitor_patterns (
                    id TEXT PRIMARY KEY,
                    pattern_name TEXT NOT NULL,
                    description TEXT NOT NULL,
                    industry TEXT,
                    pattern_type TEXT,
                    tags TEXT NOT NULL DEFAULT '[]',
                    metadata TEXT NOT NULL DEFAULT '{{}}',
                    embedding vector({embedding_dim}),
                    created_at TEXT NOT NULL,
                    updated_at TEXT NOT NULL
                )
            """)

            for idx_sql in [
                "CREATE INDEX IF NOT EXISTS idx_entries_title ON knowledge_entries(title)",
                "CREATE INDEX IF NOT EXISTS idx_entries_category ON knowledge_entries(category)",
                "CREATE INDEX IF NOT EXISTS idx_entries_primary"
                " ON knowledge_entries(primary_category)",
                "CREATE INDEX IF NOT EXISTS idx_entries_complexity"
                " ON knowledge_entries(complexity_level)",
                "CREATE INDEX IF NOT EXISTS idx_patterns_name ON competitor_patterns(pattern_name)",
                "CREATE INDEX IF NOT EXISTS idx_patterns_industry ON competitor_patterns(industry)",
            ]:
                await conn.execute(idx_sql)

            await conn.execute("""
                CREATE TABLE IF NOT EXISTS id_sequences (
                    name TEXT PRIMARY KEY,
                    next_id INTEGER NOT NULL DEFAULT 1
                )
            """)
            await conn.execute("""
                INSERT INTO id_sequences (name, next_id)
                VALUES ('entry', 1), ('pattern', 1)
                ON CONFLICT (name) DO NOTHING
            """)

            row = await conn.fetchrow("SELECT version FROM schema_version")
            if row is None:
                await conn.execute("INSERT INTO schema_version (version) VALUES ($1)", 1)
