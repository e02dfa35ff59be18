"""Database connection and schema management."""

from ux_kb.db.backend import Cursor, Database, MatchFilters, Row
from ux_kb.db.sqlite_backend import SQLiteBackend

__all__ = ["Cursor", "Database", "MatchFilters", "Row", "SQLiteBackend"]
