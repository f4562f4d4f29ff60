from __future__ import annotations

from flask import Blueprint, Response, current_app

frontend_bp = Blueprint("frontend", __name__)


@frontend_bp.route("/block-styles.css")
def stylesheet():
    """Inline CSS of every published style variation."""
    variations = current_app.extensions["publisher"].variations
    return Response(variations.stylesheet(), mimetype="text/css")
