"""Blockstyles: custom block style variations backed by your own CSS."""
from __future__ import annotations

from blockstyles.config import BlockStylesConfig
from blockstyles.publisher import StylePublisher
from blockstyles.service import StyleService

__version__ = "1.0.0"

__all__ = [
    "BlockStylesConfig",
    "StylePublisher",
    "StyleService",
]
