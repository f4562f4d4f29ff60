from __future__ import annotations

import pytest

from blockstyles.auth import Actor
from blockstyles.registry.blocks import BlockRegistry
from blockstyles.service import StyleService
from blockstyles.store.db import Database
from blockstyles.store.migrations import run_migrations
from blockstyles.store.repositories import StyleRepository


@pytest.fixture
def db() -> Database:
    database = Database(":memory:")
    database.connect()
    run_migrations(database)
    yield database
    database.close()


@pytest.fixture
def repo(db: Database) -> StyleRepository:
    return StyleRepository(db)


@pytest.fixture
def blocks() -> BlockRegistry:
    return BlockRegistry({"core/paragraph": "Paragraph", "core/quote": "Quote"})


@pytest.fixture
def service(repo: StyleRepository, blocks: BlockRegistry) -> StyleService:
    return StyleService(repo, blocks)


@pytest.fixture
def admin() -> Actor:
    return Actor("admin", frozenset({"switch_themes", "edit_others_styles"}))


@pytest.fixture
def editor() -> Actor:
    """Can manage styles but only edit their own."""
    return Actor("editor", frozenset({"switch_themes"}))


@pytest.fixture
def viewer() -> Actor:
    return Actor("viewer", frozenset())
