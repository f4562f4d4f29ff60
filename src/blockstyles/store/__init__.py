from __future__ import annotations

from blockstyles.store.db import Database
from blockstyles.store.migrations import run_migrations
from blockstyles.store.repositories import StyleRepository

__all__ = [
    "Database",
    "run_migrations",
    "StyleRepository",
]
