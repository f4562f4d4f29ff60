from __future__ import annotations

import sqlite3

import pytest

from blockstyles.model.style import StyleRecord, StyleStatus
from blockstyles.store.db import Database
from blockstyles.store.migrations import run_migrations
from blockstyles.store.repositories import StyleRepository


@pytest.fixture
def db() -> Database:
    """Create a fresh in-memory database with migrations for each test."""
    database = Database(":memory:")
    database.connect()
    run_migrations(database)
    yield database
    database.close()


@pytest.fixture
def repo(db: Database) -> StyleRepository:
    return StyleRepository(db)


def _make_style(
    id: str = "sty-1",
    title: str = "Fancy Quote",
    slug: str = "",
    status: StyleStatus = StyleStatus.PUBLISH,
    author: str = "admin",
    block_name: str = "core/quote",
    style_name: str = "Fancy Quote",
    style_slug: str = "fancy-quote",
    custom_css: str = ".is-style-fancy-quote { font-style: italic; }",
    created_at: str = "2025-01-15T10:00:00Z",
    updated_at: str = "2025-01-15T10:00:00Z",
) -> StyleRecord:
    return StyleRecord(
        id=id,
        title=title,
        slug=slug,
        status=status,
        author=author,
        block_name=block_name,
        style_name=style_name,
        style_slug=style_slug,
        custom_css=custom_css,
        created_at=created_at,
        updated_at=updated_at,
    )


class TestDatabase:
    def test_migrations_are_repeatable(self, db: Database) -> None:
        run_migrations(db)
        row = db.fetch_one(
            "SELECT name FROM sqlite_master WHERE type = 'table' AND name = 'block_styles'"
        )
        assert row is not None

    def test_requires_connection(self) -> None:
        with pytest.raises(RuntimeError, match="not connected"):
            Database(":memory:").fetch_one("SELECT 1")

    def test_transaction_commits(self, db: Database) -> None:
        with db.transaction() as conn:
            conn.execute("INSERT INTO block_styles (id) VALUES (?)", ("a",))
            conn.execute("INSERT INTO block_styles (id) VALUES (?)", ("b",))
        assert db.fetch_one("SELECT COUNT(*) AS cnt FROM block_styles")["cnt"] == 2

    def test_transaction_rolls_back_every_statement(self, db: Database) -> None:
        with pytest.raises(sqlite3.IntegrityError):
            with db.transaction() as conn:
                conn.execute("INSERT INTO block_styles (id) VALUES (?)", ("a",))
                conn.execute("INSERT INTO block_styles (id) VALUES (?)", ("a",))
        assert db.fetch_one("SELECT COUNT(*) AS cnt FROM block_styles")["cnt"] == 0


class TestStyleRepository:
    def test_create_and_get(self, repo: StyleRepository) -> None:
        style = _make_style()
        repo.create(style)
        assert repo.get("sty-1") == style

    def test_get_missing(self, repo: StyleRepository) -> None:
        assert repo.get("nope") is None

    def test_update(self, repo: StyleRepository) -> None:
        repo.create(_make_style())
        repo.update(
            _make_style(
                title="Lead",
                slug="lead",
                status=StyleStatus.DRAFT,
                author="someone-else",
                block_name="core/paragraph",
                style_name="Lead",
                style_slug="lead",
                custom_css=".is-style-lead {}",
                created_at="2030-01-01T00:00:00Z",
                updated_at="2025-02-01T00:00:00Z",
            )
        )
        stored = repo.get("sty-1")
        assert stored.title == "Lead"
        assert stored.slug == "lead"
        assert stored.status == StyleStatus.DRAFT
        assert stored.block_name == "core/paragraph"
        assert stored.style_name == "Lead"
        assert stored.style_slug == "lead"
        assert stored.custom_css == ".is-style-lead {}"
        assert stored.updated_at == "2025-02-01T00:00:00Z"
        assert stored.author == "admin"
        assert stored.created_at == "2025-01-15T10:00:00Z"

    def test_update_block(self, repo: StyleRepository) -> None:
        repo.create(_make_style())
        repo.update_block("sty-1", "")
        assert repo.get("sty-1").block_name == ""

    def test_set_status(self, repo: StyleRepository) -> None:
        repo.create(_make_style())
        repo.set_status("sty-1", StyleStatus.TRASH, "2025-03-01T00:00:00Z")
        stored = repo.get("sty-1")
        assert stored.status == StyleStatus.TRASH
        assert stored.updated_at == "2025-03-01T00:00:00Z"

    def test_delete(self, repo: StyleRepository) -> None:
        repo.create(_make_style())
        repo.delete("sty-1")
        assert repo.get("sty-1") is None

    def test_list_all_excludes_trash(self, repo: StyleRepository) -> None:
        repo.create(_make_style(id="a", created_at="2025-01-01T00:00:00Z"))
        repo.create(_make_style(id="b", status=StyleStatus.DRAFT, created_at="2025-01-02T00:00:00Z"))
        repo.create(_make_style(id="c", status=StyleStatus.TRASH))
        assert [s.id for s in repo.list_all()] == ["b", "a"]

    def test_list_all_by_status(self, repo: StyleRepository) -> None:
        repo.create(_make_style(id="a"))
        repo.create(_make_style(id="c", status=StyleStatus.TRASH))
        assert [s.id for s in repo.list_all(status=StyleStatus.TRASH)] == ["c"]

    def test_list_all_by_block(self, repo: StyleRepository) -> None:
        repo.create(_make_style(id="a", block_name="core/quote"))
        repo.create(_make_style(id="b", block_name="core/paragraph"))
        assert [s.id for s in repo.list_all(block_name="core/paragraph")] == ["b"]

    def test_list_all_pagination(self, repo: StyleRepository) -> None:
        for i in range(5):
            repo.create(_make_style(id=f"s{i}", created_at=f"2025-01-0{i + 1}T00:00:00Z"))
        page = repo.list_all(limit=2, offset=1)
        assert [s.id for s in page] == ["s3", "s2"]

    def test_list_published(self, repo: StyleRepository) -> None:
        repo.create(_make_style(id="a"))
        repo.create(_make_style(id="b", status=StyleStatus.DRAFT))
        repo.create(_make_style(id="c", status=StyleStatus.TRASH))
        assert [s.id for s in repo.list_published()] == ["a"]

    def test_used_block_names(self, repo: StyleRepository) -> None:
        repo.create(_make_style(id="a", block_name="core/quote"))
        repo.create(_make_style(id="b", block_name="core/quote"))
        repo.create(_make_style(id="c", block_name=""))
        repo.create(_make_style(id="d", block_name="acme/gone"))
        repo.create(_make_style(id="e", block_name="core/list", status=StyleStatus.DRAFT))
        assert repo.used_block_names() == ("acme/gone", "core/quote")

    def test_count_by_status(self, repo: StyleRepository) -> None:
        repo.create(_make_style(id="a"))
        repo.create(_make_style(id="b"))
        repo.create(_make_style(id="c", status=StyleStatus.DRAFT))
        assert repo.count_by_status() == {"publish": 2, "draft": 1}

    def test_count_matches_list_filters(self, repo: StyleRepository) -> None:
        repo.create(_make_style(id="a", block_name="core/quote"))
        repo.create(_make_style(id="b", block_name="core/paragraph", status=StyleStatus.DRAFT))
        repo.create(_make_style(id="c", status=StyleStatus.TRASH))
        assert repo.count() == 2
        assert repo.count(status=StyleStatus.TRASH) == 1
        assert repo.count(block_name="core/paragraph") == 1
        assert repo.count(status=StyleStatus.PUBLISH, block_name="core/paragraph") == 0
