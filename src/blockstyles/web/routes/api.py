from __future__ import annotations

import logging

from flask import Blueprint, current_app, jsonify, request
from wtforms import ValidationError

from blockstyles.auth import Action
from blockstyles.errors import InvalidBlockError
from blockstyles.reconcile import css_class, reconcile, resolve_slug
from blockstyles.web.context import authorize, current_actor, republish
from blockstyles.web.forms import check_bulk_nonce

logger = logging.getLogger(__name__)

api_bp = Blueprint("api", __name__)


def _error(message: str, status: int):
    return jsonify({"success": False, "data": {"message": message}}), status


@api_bp.route("/bulk-update-block", methods=["POST"])
def bulk_update_block():
    """Set the target block on many styles at once.

    Checks run in order: capability, anti-forgery token, block validity.
    Styles the caller may not edit are skipped without failing the request.
    """
    if not authorize(Action.BULK_UPDATE):
        return _error("forbidden", 403)

    try:
        check_bulk_nonce(request.form.get("nonce"))
    except ValidationError as exc:
        logger.info("Rejected bulk update: %s", exc)
        return _error("invalid_nonce", 403)

    style_ids = request.form.getlist("post_ids[]") or request.form.getlist("post_ids")
    block_name = request.form.get("block", "")

    service = current_app.extensions["style_service"]
    try:
        result = service.bulk_update_block(current_actor(), style_ids, block_name)
    except InvalidBlockError:
        return _error("invalid_block", 400)

    republish()
    return jsonify({"success": True, "data": {"updated": list(result.updated)}})


@api_bp.route("/preview", methods=["POST"])
def preview():
    """Compute the class name and CSS the edit screen should display.

    Nothing is stored; the save handler recomputes these values itself.
    """
    if not authorize(Action.VIEW):
        return _error("forbidden", 403)

    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return jsonify({"error": "JSON object required"}), 400

    slug = resolve_slug(
        str(data.get("title") or ""),
        str(data.get("slug") or ""),
        str(data.get("stored_slug") or ""),
    )
    css = reconcile(slug, str(data.get("css") or ""), force=data.get("force") is True)
    return jsonify({"slug": slug, "css_class": css_class(slug), "css": css})


@api_bp.route("/styles")
def published_styles():
    """List the currently published style variations."""
    variations = current_app.extensions["publisher"].variations
    return jsonify([
        {
            "block_name": v.block_name,
            "name": v.name,
            "label": v.label,
            "css_class": css_class(v.name),
            "inline_style": v.inline_style,
        }
        for v in variations.all()
    ])


@api_bp.route("/blocks")
def registered_blocks():
    """Return the registered block types in label order."""
    blocks = current_app.extensions["blocks"]
    return jsonify([
        {"name": name, "label": label} for name, label in blocks.list_all().items()
    ])
