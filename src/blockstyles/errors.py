"""Error hierarchy for block style management."""
from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from blockstyles.auth import Decision


class BlockStylesError(Exception):
    """Base error for all blockstyles errors."""


class AuthorizationError(BlockStylesError):
    """The acting user may not perform the requested operation."""

    def __init__(self, decision: Decision) -> None:
        super().__init__(decision.reason or "forbidden")
        self.decision = decision


class InvalidBlockError(BlockStylesError):
    """A block type that is not in the registry was named."""

    def __init__(self, block_name: str) -> None:
        super().__init__(f"Block type is not registered: {block_name!r}")
        self.block_name = block_name


class StyleNotFoundError(BlockStylesError):
    """No style record exists with the given ID."""

    def __init__(self, style_id: str) -> None:
        super().__init__(f"Block style not found: {style_id!r}")
        self.style_id = style_id
