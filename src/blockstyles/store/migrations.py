from __future__ import annotations

from blockstyles.store.db import Database

SCHEMA = """
CREATE TABLE IF NOT EXISTS block_styles (
    id TEXT PRIMARY KEY,
    title TEXT NOT NULL DEFAULT '',
    slug TEXT NOT NULL DEFAULT '',
    status TEXT NOT NULL DEFAULT 'draft',
    author TEXT NOT NULL DEFAULT '',
    block_name TEXT NOT NULL DEFAULT '',
    style_name TEXT NOT NULL DEFAULT '',
    style_slug TEXT NOT NULL DEFAULT '',
    custom_css TEXT NOT NULL DEFAULT '',
    created_at TEXT NOT NULL DEFAULT '',
    updated_at TEXT NOT NULL DEFAULT ''
);

CREATE INDEX IF NOT EXISTS idx_block_styles_status ON block_styles (status);
CREATE INDEX IF NOT EXISTS idx_block_styles_block ON block_styles (block_name);
"""


def run_migrations(db: Database) -> None:
    """Create the style table and its indexes if they are missing."""
    db.connection.executescript(SCHEMA)
