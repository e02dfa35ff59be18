"""Database backend protocol: a thin abstraction over async DB connections.

Application code programs against these protocols. Each backend (SQLite,
Postgres) provides a concrete implementation. SQL dialect differences
(placeholders, the vector column type, the similarity operator) are
handled inside the backend, not in application code.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable


@dataclass(frozen=True)
class MatchFilters:
    """Hard filters applied by the nearest-neighbour match operation.

    Facets combine with AND; values inside one tuple combine with OR.
    Empty tuples and None mean "no filter".
    """

    categories: tuple[str, ...] = ()
    industries: tuple[str, ...] = ()
    primary_category: str | None = None
    secondary_category: str | None = None
    complexity_levels: tuple[str, ...] = ()


@runtime_checkable
class Row(Protocol):
    """A database row supporting both named and positional access."""

    def __getitem__(self, key: str | int) -> Any:
        """Get a column value by name or position."""
        ...

    def keys(self) -> Any:
        """Return column names."""
        ...


@runtime_checkable
class Cursor(Protocol):
    """Async cursor returned by Database.execute()."""

    async def fetchone(self) -> Row | None:
        """Fetch the next row, or None if exhausted."""
        ...

    async def fetchall(self) -> list[Row]:
        """Fetch all remaining rows."""
        ...


@runtime_checkable
class Database(Protocol):
    """Async database backend.

    All application SQL uses ``?`` placeholders and SQLite-flavored syntax.
    Non-SQLite backends translate at execute time (``?`` → ``$N``).
    """

    #: SQL placeholder for an embedding parameter, e.g. ``?`` or ``?::vector``.
    vector_placeholder: str
    #: SQL predicate that is true when ``embedding`` holds a usable vector.
    embedding_present_sql: str

    def encode_vector(self, embedding: list[float]) -> Any:
        """Convert an embedding to the backend's wire format."""
        ...

    async def execute(self, sql: str, params: tuple[Any, ...] | list[Any] = ()) -> Cursor:
        """Execute a single SQL statement and return a cursor."""
        ...

    async def executescript(self, sql: str) -> None:
        """Execute multiple SQL statements (DDL, migrations)."""
        ...

    async def commit(self) -> None:
        """Commit the current transaction."""
        ...

    async def close(self) -> None:
        """Close the database connection."""
        ...

    def is_disconnect(self, exc: BaseException) -> bool:
        """True when ``exc`` means the connection itself is gone."""
        ...

    async def match_knowledge(
        self,
        embedding: list[float],
        threshold: float,
        limit: int,
        filters: MatchFilters | None = None,
    ) -> list[Row]:
        """Nearest knowledge entries with similarity >= threshold, best first."""
        ...

    async def match_patterns(
        self,
        embedding: list[float],
        threshold: float,
        limit: int,
        industry: str | None = None,
        pattern_type: str | None = None,
    ) -> list[Row]:
        """Nearest competitor patterns with similarity >= threshold, best first."""
        ...
