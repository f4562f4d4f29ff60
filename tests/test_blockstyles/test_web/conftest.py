from __future__ import annotations

import re

import pytest

from blockstyles.auth import Actor
from blockstyles.model.style import StyleRecord, StyleStatus
from blockstyles.registry.blocks import BlockRegistry
from blockstyles.store.db import Database
from blockstyles.store.migrations import run_migrations
from blockstyles.web.app import create_app

_SAVE_NONCE_RE = re.compile(r'name="_cbsm_meta_nonce"[^>]*value="([^"]+)"')
_BULK_NONCE_RE = re.compile(r'data-bulk-nonce="([^"]+)"')

ADMIN = Actor("admin", frozenset({"switch_themes", "edit_others_styles"}))
EDITOR = Actor("editor", frozenset({"switch_themes"}))
VIEWER = Actor("viewer", frozenset())


@pytest.fixture
def db():
    """Create a fresh in-memory database with migrations for each test."""
    database = Database(":memory:")
    database.connect()
    run_migrations(database)
    yield database
    database.close()


def build_app(db, actor=ADMIN, csrf: bool = False):
    """Flask app with two registered blocks and a fixed acting user."""
    return create_app(
        db=db,
        config={
            "TESTING": True,
            "SECRET_KEY": "test-secret",
            "WTF_CSRF_ENABLED": csrf,
        },
        blocks=BlockRegistry({"core/paragraph": "Paragraph", "core/quote": "Quote"}),
        actor_loader=lambda: actor,
    )


@pytest.fixture
def app(db):
    """App without CSRF checks, acting as an administrator."""
    return build_app(db)


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def csrf_app(db):
    """App with CSRF checks enabled."""
    return build_app(db, csrf=True)


@pytest.fixture
def csrf_client(csrf_app):
    return csrf_app.test_client()


# ---------------------------------------------------------------------------
# Shared factory helpers
# ---------------------------------------------------------------------------


def make_style(
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
        updated_at=created_at,
    )


def seed_style(app, publish: bool = True, **kwargs) -> StyleRecord:
    """Create a style in the database, republish, and return it."""
    style = make_style(**kwargs)
    app.extensions["style_repo"].create(style)
    if publish:
        app.extensions["publisher"].publish()
    return style


def save_nonce(html: bytes) -> str:
    """The edit/action token embedded in a rendered page."""
    match = _SAVE_NONCE_RE.search(html.decode())
    assert match, "no save token in page"
    return match.group(1)


def bulk_nonce(html: bytes) -> str:
    """The bulk-update token carried by the list table."""
    match = _BULK_NONCE_RE.search(html.decode())
    assert match, "no bulk token in page"
    return match.group(1)
