"""Request-scoped accessors for the services stored on the app."""
from __future__ import annotations

from flask import current_app, g

from blockstyles.auth import Action, Actor, Decision
from blockstyles.model.style import StyleRecord


def current_actor() -> Actor | None:
    if "actor" not in g:
        g.actor = current_app.extensions["actor_loader"]()
    return g.actor


def authorize(action: Action, record: StyleRecord | None = None) -> Decision:
    return current_app.extensions["gate"].authorize(current_actor(), action, record)


def republish() -> None:
    current_app.extensions["publisher"].publish()
