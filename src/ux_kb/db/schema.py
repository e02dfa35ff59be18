"""DDL for the SQLite knowledge database."""

from ux_kb.db.backend import Database

SCHEMA_VERSION = 1

SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS schema_version (
    version INTEGER NOT NULL
);

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
    application_context TEXT NOT NULL DEFAULT '{}',
    tags TEXT NOT NULL DEFAULT '[]',
    metadata TEXT NOT NULL DEFAULT '{}',
    embedding BLOB,
    created_at TEXT NOT NULL,
    updated_at TEXT NOT NULL
);

CREATE INDEX IF NOT EXISTS idx_entries_title ON knowledge_entries(title);
CREATE INDEX IF NOT EXISTS idx_entries_category ON knowledge_entries(category);
CREATE INDEX IF NOT EXISTS idx_entries_primary ON knowledge_entries(primary_category);
CREATE INDEX IF NOT EXISTS idx_entries_complexity ON knowledge_entries(complexity_level);

CREATE TABLE IF NOT EXISTS competitor_patterns (
    id TEXT PRIMARY KEY,
    pattern_name TEXT NOT NULL,
    description TEXT NOT NULL,
    industry TEXT,
    pattern_type TEXT,
    tags TEXT NOT NULL DEFAULT '[]',
    metadata TEXT NOT NULL DEFAULT '{}',
    embedding BLOB,
    created_at TEXT NOT NULL,
    updated_at TEXT NOT NULL
);

CREATE INDEX IF NOT EXISTS idx_patterns_name ON competitor_patterns(pattern_name);
CREATE INDEX IF NOT EXISTS idx_patterns_industry ON competitor_patterns(industry);

CREATE TABLE IF NOT EXISTS id_sequences (
    name TEXT PRIMARY KEY,
    next_id INTEGER NOT NULL DEFAULT 1
);
"""

INIT_SEQ_SQL = """
INSERT OR IGNORE INTO id_sequences (name, next_id) VALUES ('entry', 1);
INSERT OR IGNORE INTO id_sequences (name, next_id) VALUES ('pattern', 1);
"""


async def apply_schema(db: Database) -> None:
    """Apply the database schema."""
    await db.executescript(SCHEMA_SQL)
    await db.executescript(INIT_SEQ_SQL)

    cursor = await db.execute("SELECT version FROM schema_version")
    row = await cursor.fetchone()
    if row is None:
        await db.execute("INSERT INTO schema_version (version) VALUES (?)", (SCHEMA_VERSION,))

    await db.commit()
