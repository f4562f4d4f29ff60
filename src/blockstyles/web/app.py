from __future__ import annotations

import logging
import secrets
from collections.abc import Callable

from flask import Flask, current_app, redirect, render_template, url_for

from blockstyles.auth import Actor, AuthorizationGate
from blockstyles.config import EDIT_OTHERS_CAPABILITY, MANAGE_CAPABILITY
from blockstyles.errors import AuthorizationError, StyleNotFoundError
from blockstyles.publisher import StylePublisher
from blockstyles.registry.blocks import BlockRegistry
from blockstyles.registry.variations import StyleVariationRegistry
from blockstyles.service import StyleService
from blockstyles.store.db import Database
from blockstyles.store.migrations import run_migrations
from blockstyles.store.repositories import StyleRepository

logger = logging.getLogger(__name__)

ActorLoader = Callable[[], Actor | None]


def _operator_loader() -> Actor | None:
    """Treat every request as the configured local operator."""
    config = current_app.config
    name = config.get("BLOCKSTYLES_OPERATOR", "admin")
    if not name:
        return None
    capabilities = config.get(
        "BLOCKSTYLES_OPERATOR_CAPABILITIES", (MANAGE_CAPABILITY, EDIT_OTHERS_CAPABILITY)
    )
    return Actor(name=name, capabilities=frozenset(capabilities))


def create_app(
    db: Database | None = None,
    config: dict | None = None,
    blocks: BlockRegistry | None = None,
    actor_loader: ActorLoader | None = None,
) -> Flask:
    """Create and configure the Flask app."""
    app = Flask(__name__)
    app.config.update(config or {})
    if not app.config.get("SECRET_KEY"):
        app.config["SECRET_KEY"] = secrets.token_hex(32)

    # Store db and services on app for access in routes
    if db is None:
        db = Database(":memory:")
        db.connect()
        run_migrations(db)

    blocks = blocks or BlockRegistry.with_core_blocks()
    repo = StyleRepository(db)
    gate = AuthorizationGate(
        capability=app.config.get("BLOCKSTYLES_CAPABILITY", MANAGE_CAPABILITY)
    )
    publisher = StylePublisher(repo, blocks, StyleVariationRegistry())

    app.extensions["db"] = db
    app.extensions["style_repo"] = repo
    app.extensions["blocks"] = blocks
    app.extensions["gate"] = gate
    app.extensions["style_service"] = StyleService(repo, blocks, gate)
    app.extensions["publisher"] = publisher
    app.extensions["actor_loader"] = actor_loader or _operator_loader

    # Register blueprints
    from blockstyles.web.routes.api import api_bp
    from blockstyles.web.routes.frontend import frontend_bp
    from blockstyles.web.routes.styles import styles_bp

    app.register_blueprint(styles_bp, url_prefix="/styles")
    app.register_blueprint(api_bp, url_prefix="/api")
    app.register_blueprint(frontend_bp)

    @app.route("/")
    def index():
        return redirect(url_for("styles.list_styles"))

    @app.errorhandler(AuthorizationError)
    def forbidden(error: AuthorizationError):
        return render_template("error.html", status=403, message=str(error)), 403

    @app.errorhandler(StyleNotFoundError)
    def not_found(error: StyleNotFoundError):
        return render_template("error.html", status=404, message=str(error)), 404

    publisher.publish()
    logger.debug("Block styles app ready with %d registered block type(s)", len(blocks))
    return app
