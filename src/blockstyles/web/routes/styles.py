from __future__ import annotations

import math

from flask import Blueprint, abort, current_app, redirect, render_template, request, url_for

from blockstyles.auth import Action
from blockstyles.errors import InvalidBlockError
from blockstyles.model.style import StyleStatus
from blockstyles.reconcile import css_class, reconcile
from blockstyles.service import SaveRequest
from blockstyles.web.context import authorize, current_actor, republish
from blockstyles.web.forms import (
    NO_BLOCK,
    NO_CHANGE,
    SAVE_NONCE,
    ActionForm,
    BulkEditForm,
    StyleForm,
    bulk_nonce,
)

styles_bp = Blueprint("styles", __name__)

_STATUS_TABS = ("", StyleStatus.DRAFT.value, StyleStatus.PUBLISH.value, StyleStatus.TRASH.value)
PER_PAGE = 20


def _block_filter_options(repo, blocks) -> dict[str, str]:
    """Blocks used by published styles; unregistered ones keep their raw name."""
    return {name: blocks.label_for(name) for name in repo.used_block_names()}


@styles_bp.route("/")
def list_styles():
    """List block styles, optionally filtered by status and block."""
    if not authorize(Action.VIEW):
        abort(403)

    repo = current_app.extensions["style_repo"]
    blocks = current_app.extensions["blocks"]

    status_filter = request.args.get("status", "")
    if status_filter not in _STATUS_TABS:
        abort(400)
    block_filter = request.args.get("block", "")
    status = StyleStatus(status_filter) if status_filter else None

    total = repo.count(status=status, block_name=block_filter or None)
    pages = max(1, math.ceil(total / PER_PAGE))
    page = min(max(request.args.get("page", 1, type=int), 1), pages)
    styles = repo.list_all(
        status=status,
        block_name=block_filter or None,
        limit=PER_PAGE,
        offset=(page - 1) * PER_PAGE,
    )
    filter_options = _block_filter_options(repo, blocks)

    bulk_form = BulkEditForm()
    bulk_form.set_block_choices(blocks)

    return render_template(
        "styles/list.html",
        styles=styles,
        blocks=blocks,
        counts=repo.count_by_status(),
        status_filter=status_filter,
        block_filter=block_filter,
        page=page,
        pages=pages,
        total=total,
        filter_options=dict(sorted(filter_options.items(), key=lambda kv: kv[1].casefold())),
        bulk_form=bulk_form,
        action_form=ActionForm(),
        bulk_nonce=bulk_nonce(),
    )


@styles_bp.route("/new")
def new():
    """Create an empty draft and open it for editing."""
    service = current_app.extensions["style_service"]
    record = service.create_draft(current_actor())
    return redirect(url_for("styles.edit", style_id=record.id))


@styles_bp.route("/<style_id>/edit", methods=["GET", "POST"])
def edit(style_id: str):
    """Show the edit screen (GET) or save the submitted fields (POST)."""
    service = current_app.extensions["style_service"]
    blocks = current_app.extensions["blocks"]
    record = service.get(style_id)
    if not authorize(Action.UPDATE, record):
        abort(403)

    if request.method == "POST":
        form = StyleForm()
        form.set_block_choices(blocks)
        if not form.validate():
            if SAVE_NONCE in form.errors:
                abort(400)
            return _render_edit(record, form), 400

        service.save(
            current_actor(),
            style_id,
            SaveRequest(
                title=form.title.data or "",
                slug=form.slug.data or "",
                block_name=form.block_name.data or "",
                custom_css=form.custom_css.data or "",
                status=StyleStatus(form.status.data),
            ),
        )
        republish()
        return redirect(url_for("styles.edit", style_id=style_id, saved=1))

    form = StyleForm(
        formdata=None,
        data={
            "title": record.title,
            "slug": record.slug,
            "status": (
                record.status.value
                if record.status != StyleStatus.TRASH
                else StyleStatus.DRAFT.value
            ),
            "block_name": record.block_name,
            "custom_css": reconcile(record.resolved_slug, record.custom_css),
        },
    )
    form.set_block_choices(blocks)
    return _render_edit(record, form)


def _render_edit(record, form: StyleForm):
    slug = record.resolved_slug
    return render_template(
        "styles/edit.html",
        style=record,
        form=form,
        action_form=ActionForm(),
        style_slug=slug,
        style_class=css_class(slug),
        saved=request.args.get("saved") == "1",
    )


@styles_bp.route("/<style_id>/trash", methods=["POST"])
def trash(style_id: str):
    """Move a style to the trash."""
    _check_action_form()
    current_app.extensions["style_service"].trash(current_actor(), style_id)
    republish()
    return redirect(url_for("styles.list_styles"))


@styles_bp.route("/<style_id>/restore", methods=["POST"])
def restore(style_id: str):
    """Restore a trashed style as a draft."""
    _check_action_form()
    current_app.extensions["style_service"].restore(current_actor(), style_id)
    republish()
    return redirect(url_for("styles.list_styles", status=StyleStatus.TRASH.value))


@styles_bp.route("/<style_id>/delete", methods=["POST"])
def delete(style_id: str):
    """Permanently delete a style."""
    _check_action_form()
    current_app.extensions["style_service"].delete(current_actor(), style_id)
    republish()
    return redirect(url_for("styles.list_styles", status=StyleStatus.TRASH.value))


@styles_bp.route("/bulk-edit", methods=["POST"])
def bulk_edit():
    """Set the target block on every checked style from the list screen."""
    blocks = current_app.extensions["blocks"]
    form = BulkEditForm()
    form.set_block_choices(blocks)
    if not form.validate():
        abort(400)

    choice = form.block.data or NO_CHANGE
    style_ids = request.form.getlist("style_ids")
    if choice != NO_CHANGE and style_ids:
        block_name = "" if choice == NO_BLOCK else choice
        try:
            current_app.extensions["style_service"].bulk_update_block(
                current_actor(), style_ids, block_name
            )
        except InvalidBlockError:
            abort(400)
        republish()
    return redirect(url_for("styles.list_styles"))


def _check_action_form() -> None:
    if not ActionForm().validate():
        abort(400)
