"""Query helpers for common database operations."""

import json
from datetime import UTC, datetime
from typing import Any

from ux_kb.db.backend import Database, Row
from ux_kb.db.sqlite_backend import ENTRY_COLUMNS, PATTERN_COLUMNS
from ux_kb.models.entry import (
    MAX_FRESHNESS,
    ApplicationContext,
    CompetitorPattern,
    CompetitorPatternCreate,
    KnowledgeEntry,
    KnowledgeEntryCreate,
)


def _has_embedding_sql(db: Database) -> str:
    return f"CASE WHEN {db.embedding_present_sql} THEN 1 ELSE 0 END AS has_embedding"


async def next_id(db: Database, name: str, prefix: str) -> str:
    """Get and increment the named ID sequence."""
    cursor = await db.execute("SELECT next_id FROM id_sequences WHERE name = ?", (name,))
    row = await cursor.fetchone()
    if row is None:
        raise RuntimeError(f"id sequence {name!r} is missing")
    value = row[0]
    await db.execute("UPDATE id_sequences SET next_id = ? WHERE name = ?", (value + 1, name))
    return f"{prefix}-{value:05d}"


def row_to_entry(row: Row) -> KnowledgeEntry:
    """Convert a database row to a KnowledgeEntry."""
    col_names = list(row.keys())
    return KnowledgeEntry(
        id=row["id"],
        title=row["title"],
        content=row["content"],
        source=row["source"] or "",
        category=row["category"],
        primary_category=row["primary_category"],
        secondary_category=row["secondary_category"],
        industry_tags=_parse_json(row["industry_tags"], []),
        complexity_level=row["complexity_level"],
        use_cases=_parse_json(row["use_cases"], []),
        related_patterns=_parse_json(row["related_patterns"], []),
        freshness_score=row["freshness_score"],
        application_context=ApplicationContext.model_validate(
            _parse_json(row["application_context"], {})
        ),
        tags=_parse_json(row["tags"], []),
        metadata=_parse_json(row["metadata"], {}),
        has_embedding=bool(row["has_embedding"]) if "has_embedding" in col_names else False,
        created_at=datetime.fromisoformat(row["created_at"]),
        updated_at=datetime.fromisoformat(row["updated_at"]),
    )


def row_to_pattern(row: Row) -> CompetitorPattern:
    """Convert a database row to a CompetitorPattern."""
    col_names = list(row.keys())
    return CompetitorPattern(
        id=row["id"],
        pattern_name=row["pattern_name"],
        description=row["description"],
        industry=row["industry"],
        pattern_type=row["pattern_type"],
        tags=_parse_json(row["tags"], []),
        metadata=_parse_json(row["metadata"], {}),
        has_embedding=bool(row["has_embedding"]) if "has_embedding" in col_names else False,
        created_at=datetime.fromisoformat(row["created_at"]),
        updated_at=datetime.fromisoformat(row["updated_at"]),
    )


async def insert_entry(
    db: Database, entry: KnowledgeEntryCreate, embedding: list[float]
) -> KnowledgeEntry:
    """Insert a new knowledge entry together with its embedding.

    The row and its vector are written by a single statement, so an entry
    without an embedding is never left behind.
    """
    entry_id = await next_id(db, "entry", "ux")
    now = _now_iso()
    await db.execute(
        f"""INSERT INTO knowledge_entries
        ({ENTRY_COLUMNS}, embedding)
        VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, {db.vector_placeholder})""",
        (
            entry_id,
            entry.title,
            entry.content,
            entry.source,
            entry.category,
            entry.primary_category,
            entry.secondary_category,
            json.dumps(entry.industry_tags),
            entry.complexity_level,
            json.dumps(entry.use_cases),
            json.dumps(entry.related_patterns),
            MAX_FRESHNESS,
            entry.application_context.model_dump_json(exclude_none=True),
            json.dumps(entry.tags),
            json.dumps(entry.metadata),
            now,
            now,
            db.encode_vector(embedding),
        ),
    )
    await db.commit()
    return KnowledgeEntry(
        **entry.model_dump(),
        id=entry_id,
        freshness_score=MAX_FRESHNESS,
        has_embedding=True,
        created_at=datetime.fromisoformat(now),
        updated_at=datetime.fromisoformat(now),
    )


async def find_entry_by_title(db: Database, title: str) -> KnowledgeEntry | None:
    """Get the first entry with exactly this title."""
    cursor = await db.execute(
        f"SELECT {ENTRY_COLUMNS}, {_has_embedding_sql(db)} FROM knowledge_entries"
        " WHERE title = ? ORDER BY id LIMIT 1",
        (title,),
    )
    row = await cursor.fetchone()
    return row_to_entry(row) if row else None


async def insert_pattern(
    db: Database, pattern: CompetitorPatternCreate, embedding: list[float]
) -> CompetitorPattern:
    """Insert a new competitor pattern together with its embedding."""
    pattern_id = await next_id(db, "pattern", "pat")
    now = _now_iso()
    await db.execute(
        f"""INSERT INTO competitor_patterns
        ({PATTERN_COLUMNS}, embedding)
        VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, {db.vector_placeholder})""",
        (
            pattern_id,
            pattern.pattern_name,
            pattern.description,
            pattern.industry,
            pattern.pattern_type,
            json.dumps(pattern.tags),
            json.dumps(pattern.metadata),
            now,
            now,
            db.encode_vector(embedding),
        ),
    )
    await db.commit()
    return CompetitorPattern(
        **pattern.model_dump(),
        id=pattern_id,
        has_embedding=True,
        created_at=datetime.fromisoformat(now),
        updated_at=datetime.fromisoformat(now),
    )


async def find_pattern_by_name(db: Database, pattern_name: str) -> CompetitorPattern | None:
    """Get the first competitor pattern with exactly this name."""
    cursor = await db.execute(
        f"SELECT {PATTERN_COLUMNS}, {_has_embedding_sql(db)} FROM competitor_patterns"
        " WHERE pattern_name = ? ORDER BY id LIMIT 1",
        (pattern_name,),
    )
    row = await cursor.fetchone()
    return row_to_pattern(row) if row else None


async def count_entries(db: Database) -> int:
    """Total number of knowledge entries."""
    cursor = await db.execute("SELECT COUNT(*) AS total FROM knowledge_entries")
    row = await cursor.fetchone()
    if row is None:
        raise RuntimeError("COUNT query returned no rows")
    return int(row["total"])


async def category_breakdown(db: Database) -> list[tuple[str, int]]:
    """Entry counts per category, largest first, ties by name."""
    cursor = await db.execute(
        "SELECT category, COUNT(*) AS cnt FROM knowledge_entries"
        " GROUP BY category ORDER BY cnt DESC, category"
    )
    return [(row["category"], int(row["cnt"])) for row in await cursor.fetchall()]


async def sample_entries(db: Database, limit: int = 5) -> list[KnowledgeEntry]:
    """The first ``limit`` entries in insertion order."""
    cursor = await db.execute(
        f"SELECT {ENTRY_COLUMNS}, {_has_embedding_sql(db)} FROM knowledge_entries"
        " ORDER BY id LIMIT ?",
        (limit,),
    )
    return [row_to_entry(row) for row in await cursor.fetchall()]


async def embedding_stats(db: Database) -> dict[str, Any]:
    """Return counts of entries with and without a usable embedding."""
    cursor = await db.execute(
        f"SELECT COUNT(*) AS total,"
        f" SUM(CASE WHEN {db.embedding_present_sql} THEN 1 ELSE 0 END) AS with_emb"
        " FROM knowledge_entries"
    )
    row = await cursor.fetchone()
    if row is None:
        raise RuntimeError("COUNT query returned no rows")
    total = int(row["total"])
    with_emb = int(row["with_emb"] or 0)
    return {
        "total": total,
        "with_embeddings": with_emb,
        "without_embeddings": total - with_emb,
        "coverage": with_emb / total if total else 0.0,
    }


def _parse_json(raw: str | None, default: Any) -> Any:
    """Parse a JSON text column, falling back to ``default`` for empty values."""
    if not raw:
        return default
    return json.loads(raw)


def _now_iso() -> str:
    return datetime.now(UTC).isoformat()
