from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class BlockType:
    name: str  # e.g. "core/paragraph"
    title: str = ""

    @property
    def label(self) -> str:
        return self.title or self.name


@dataclass(frozen=True)
class StyleVariation:
    """A style registered against a block type, as seen by the front end."""

    block_name: str
    name: str
    label: str
    inline_style: str = ""

    @property
    def key(self) -> tuple[str, str]:
        return (self.block_name, self.name)
