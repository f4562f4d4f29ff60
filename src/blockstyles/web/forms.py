"""Edit-screen forms. Each action family signs its own CSRF token."""
from __future__ import annotations

from flask import current_app
from flask_wtf import FlaskForm
from flask_wtf.csrf import generate_csrf, validate_csrf
from wtforms import SelectField, StringField, TextAreaField

from blockstyles.model.style import StyleStatus
from blockstyles.registry.blocks import BlockRegistry

SAVE_NONCE = "_cbsm_meta_nonce"
BULK_NONCE = "cbsm_bulk_nonce"

NO_CHANGE = ""
NO_BLOCK = "__none__"


class StyleForm(FlaskForm):
    class Meta:
        csrf_field_name = SAVE_NONCE

    title = StringField("Title")
    slug = StringField("Slug")
    status = SelectField(
        "Status",
        choices=[
            (StyleStatus.DRAFT.value, "Draft"),
            (StyleStatus.PUBLISH.value, "Published"),
        ],
        default=StyleStatus.DRAFT.value,
    )
    # Unknown blocks are dropped by the service, not rejected here.
    block_name = SelectField("Target Block", choices=[], validate_choice=False)
    custom_css = TextAreaField("Custom CSS")

    def set_block_choices(self, blocks: BlockRegistry) -> None:
        self.block_name.choices = [("", "Select a block"), *blocks.list_all().items()]


class ActionForm(FlaskForm):
    """Trash, restore, delete and bulk-edit buttons share the save token."""

    class Meta:
        csrf_field_name = SAVE_NONCE


class BulkEditForm(ActionForm):
    block = SelectField("Block", choices=[], validate_choice=False)

    def set_block_choices(self, blocks: BlockRegistry) -> None:
        self.block.choices = [
            (NO_CHANGE, "— No change —"),
            (NO_BLOCK, "— No block —"),
            *blocks.list_all().items(),
        ]


def csrf_enabled() -> bool:
    return current_app.config.get("WTF_CSRF_ENABLED", True)


def bulk_nonce() -> str:
    return generate_csrf(token_key=BULK_NONCE)


def check_bulk_nonce(token: str | None) -> None:
    """Raise ``wtforms.ValidationError`` unless ``token`` is a valid bulk token."""
    if csrf_enabled():
        validate_csrf(token, token_key=BULK_NONCE)
