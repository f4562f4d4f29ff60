"""Server-side save, bulk-update and lifecycle operations for block styles.

Every entry point asks the :class:`~blockstyles.auth.AuthorizationGate` once and
raises :class:`~blockstyles.errors.AuthorizationError` on denial, before any
record is touched. Anti-forgery checks belong to the transport and happen
before these methods are called.
"""
from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass, replace
from datetime import datetime, timezone

from blockstyles.auth import Action, Actor, AuthorizationGate
from blockstyles.errors import AuthorizationError, InvalidBlockError, StyleNotFoundError
from blockstyles.model.style import StyleRecord, StyleStatus
from blockstyles.reconcile import reconcile, resolve_slug, strip_disallowed_markup
from blockstyles.registry.blocks import BlockRegistry
from blockstyles.store.repositories import StyleRepository

logger = logging.getLogger(__name__)


def _generate_id() -> str:
    """Generate a short unique ID."""
    return uuid.uuid4().hex[:12]


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


@dataclass(frozen=True)
class SaveRequest:
    """Raw fields submitted from the edit screen."""

    title: str = ""
    slug: str = ""
    block_name: str = ""
    custom_css: str = ""
    status: StyleStatus | None = None


@dataclass(frozen=True)
class BulkResult:
    updated: tuple[str, ...] = ()
    skipped: tuple[str, ...] = ()


class StyleService:
    def __init__(
        self,
        repo: StyleRepository,
        blocks: BlockRegistry,
        gate: AuthorizationGate | None = None,
    ) -> None:
        self.repo = repo
        self.blocks = blocks
        self.gate = gate or AuthorizationGate()

    def get(self, style_id: str) -> StyleRecord:
        record = self.repo.get(style_id)
        if record is None:
            raise StyleNotFoundError(style_id)
        return record

    def create_draft(self, actor: Actor | None, title: str = "") -> StyleRecord:
        """Create an empty draft style owned by ``actor``."""
        actor = self._require(actor, Action.CREATE)
        now = _now()
        record = StyleRecord(
            id=_generate_id(),
            title=title.strip(),
            status=StyleStatus.DRAFT,
            author=actor.name,
            created_at=now,
            updated_at=now,
        )
        self.repo.create(record)
        logger.info("Created block style %s for %s", record.id, actor.name)
        return record

    def save(self, actor: Actor | None, style_id: str, request: SaveRequest) -> StyleRecord:
        """Persist an edit and recompute the cached slug and CSS.

        An unregistered block name is stored as unset rather than rejected.
        """
        record = self.get(style_id)
        self._require(actor, Action.UPDATE, record)

        block_name = request.block_name.strip()
        if block_name and not self.blocks.is_registered(block_name):
            logger.debug("Dropping unregistered block %r on style %s", block_name, style_id)
            block_name = ""

        title = request.title.strip()
        # Stored as typed; resolve_slug normalises it wherever it is read.
        slug = request.slug.strip()
        style_slug = resolve_slug(title, slug, record.style_slug)
        updated = replace(
            record,
            title=title,
            slug=slug,
            status=request.status or record.status,
            block_name=block_name,
            style_name=title or record.style_name.strip(),
            style_slug=style_slug,
            custom_css=strip_disallowed_markup(reconcile(style_slug, request.custom_css)),
            updated_at=_now(),
        )
        self.repo.update(updated)
        logger.info(
            "Saved block style %s (slug=%r, block=%r, status=%s)",
            style_id,
            style_slug,
            block_name,
            updated.status,
        )
        return self.get(style_id)

    def bulk_update_block(
        self, actor: Actor | None, style_ids: list[str] | tuple[str, ...], block_name: str
    ) -> BulkResult:
        """Point many styles at one block type; an empty name clears it.

        The whole batch is rejected for an unregistered block. Styles the
        actor may not edit, or that do not exist, are skipped.
        """
        self._require(actor, Action.BULK_UPDATE)
        block_name = block_name.strip()
        if block_name and not self.blocks.is_registered(block_name):
            raise InvalidBlockError(block_name)

        updated: list[str] = []
        skipped: list[str] = []
        for style_id in style_ids:
            record = self.repo.get(style_id)
            if record is None or not self.gate.authorize(actor, Action.UPDATE, record):
                skipped.append(style_id)
                continue
            self.repo.update_block(style_id, block_name)
            updated.append(style_id)

        logger.info(
            "Bulk-set block %r on %d style(s), skipped %d",
            block_name,
            len(updated),
            len(skipped),
        )
        return BulkResult(updated=tuple(updated), skipped=tuple(skipped))

    def trash(self, actor: Actor | None, style_id: str) -> StyleRecord:
        return self._transition(actor, style_id, StyleStatus.TRASH)

    def restore(self, actor: Actor | None, style_id: str) -> StyleRecord:
        """Take a style out of the trash as a draft."""
        return self._transition(actor, style_id, StyleStatus.DRAFT)

    def delete(self, actor: Actor | None, style_id: str) -> None:
        """Permanently delete a style."""
        record = self.get(style_id)
        self._require(actor, Action.DELETE, record)
        self.repo.delete(style_id)
        logger.info("Deleted block style %s", style_id)

    def _transition(
        self, actor: Actor | None, style_id: str, status: StyleStatus
    ) -> StyleRecord:
        record = self.get(style_id)
        self._require(actor, Action.DELETE, record)
        self.repo.set_status(style_id, status, _now())
        logger.info("Moved block style %s to %s", style_id, status)
        return self.get(style_id)

    def _require(
        self, actor: Actor | None, action: Action, record: StyleRecord | None = None
    ) -> Actor:
        decision = self.gate.authorize(actor, action, record)
        if actor is None or not decision:
            logger.warning(
                "Rejected %s by %s: %s",
                action,
                actor.name if actor else "anonymous",
                decision.reason,
            )
            raise AuthorizationError(decision)
        return actor
