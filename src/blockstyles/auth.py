"""Single authorization gate for every style operation."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import StrEnum

from blockstyles.config import EDIT_OTHERS_CAPABILITY, MANAGE_CAPABILITY
from blockstyles.model.style import StyleRecord

logger = logging.getLogger(__name__)


class Action(StrEnum):
    VIEW = "view"
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"
    BULK_UPDATE = "bulk_update"


@dataclass(frozen=True)
class Actor:
    name: str
    capabilities: frozenset[str] = field(default_factory=frozenset)

    def can(self, capability: str) -> bool:
        return capability in self.capabilities


@dataclass(frozen=True)
class Decision:
    allowed: bool
    reason: str = ""

    def __bool__(self) -> bool:
        return self.allowed


ALLOW = Decision(True)


class AuthorizationGate:
    """Decide whether an actor may perform an action, optionally on a record.

    Every action needs the management capability. Record-level checks also
    require the actor to own the record or hold ``edit_others_styles``.
    """

    def __init__(
        self,
        capability: str = MANAGE_CAPABILITY,
        edit_others_capability: str = EDIT_OTHERS_CAPABILITY,
    ) -> None:
        self.capability = capability
        self.edit_others_capability = edit_others_capability

    def authorize(
        self,
        actor: Actor | None,
        action: Action,
        record: StyleRecord | None = None,
    ) -> Decision:
        if actor is None:
            return self._deny(actor, action, "not_authenticated")
        if not actor.can(self.capability):
            return self._deny(actor, action, "forbidden")
        if record is not None and not self.can_edit(actor, record):
            return self._deny(actor, action, "cannot_edit_record")
        return ALLOW

    def can_edit(self, actor: Actor, record: StyleRecord) -> bool:
        if actor.can(self.edit_others_capability):
            return True
        return bool(record.author) and record.author == actor.name

    @staticmethod
    def _deny(actor: Actor | None, action: Action, reason: str) -> Decision:
        logger.debug(
            "Denied %s for %s: %s",
            action,
            actor.name if actor else "anonymous",
            reason,
        )
        return Decision(False, reason)
