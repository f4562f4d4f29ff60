from __future__ import annotations

from blockstyles.model.style import StyleRecord, StyleStatus
from blockstyles.model.variation import BlockType, StyleVariation

__all__ = [
    # style
    "StyleStatus",
    "StyleRecord",
    # variation
    "BlockType",
    "StyleVariation",
]
