"""Tests for database connection and schema initialization."""

import sqlite3

import pytest

from ux_kb.db.connection import create_connection
from ux_kb.errors import StoreConnectionError


@pytest.mark.asyncio
async def test_create_in_memory_connection():
    db = await create_connection(":memory:")
    try:
        cursor = await db.execute("SELECT name FROM sqlite_master WHERE type='table' ORDER BY name")
        tables = {row[0] for row in await cursor.fetchall()}
        expected = {"knowledge_entries", "competitor_patterns", "id_sequences", "schema_version"}
        assert expected <= tables
    finally:
        await db.close()


@pytest.mark.asyncio
async def test_sqlite_vec_loaded():
    db = await create_connection(":memory:")
    try:
        cursor = await db.execute("SELECT vec_version()")
        row = await cursor.fetchone()
        assert row is not None
    finally:
        await db.close()


@pytest.mark.asyncio
async def test_schema_version():
    db = await create_connection(":memory:")
    try:
        cursor = await db.execute("SELECT version FROM schema_version")
        row = await cursor.fetchone()
        assert row[0] == 1
    finally:
        await db.close()


@pytest.mark.asyncio
async def test_file_database_created(tmp_path, monkeypatch):
    monkeypatch.delenv("UX_KB_DATABASE_URL", raising=False)
    path = tmp_path / "nested" / "kb.db"
    db = await create_connection(path)
    try:
        assert path.exists()
    finally:
        await db.close()


@pytest.mark.asyncio
async def test_schema_is_reapplied_idempotently(tmp_path, monkeypatch):
    monkeypatch.delenv("UX_KB_DATABASE_URL", raising=False)
    path = tmp_path / "kb.db"
    db = await create_connection(path)
    await db.close()
    db = await create_connection(path)
    try:
        cursor = await db.execute("SELECT COUNT(*) FROM schema_version")
        row = await cursor.fetchone()
        assert row[0] == 1
    finally:
        await db.close()


@pytest.mark.asyncio
async def test_unopenable_path_raises_connection_error(tmp_path, monkeypatch):
    monkeypatch.delenv("UX_KB_DATABASE_URL", raising=False)
    blocker = tmp_path / "file"
    blocker.write_text("not a directory")
    with pytest.raises(StoreConnectionError):
        await create_connection(blocker / "kb.db")


@pytest.mark.asyncio
async def test_closed_connection_counts_as_disconnect():
    db = await create_connection(":memory:")
    await db.close()
    with pytest.raises(ValueError) as excinfo:
        await db.execute("SELECT 1")
    assert db.is_disconnect(excinfo.value)
    assert db.is_disconnect(sqlite3.ProgrammingError("Cannot operate on a closed database."))
    assert not db.is_disconnect(sqlite3.OperationalError("no such table: nope"))
    assert not db.is_disconnect(ValueError("could not convert string to float"))
