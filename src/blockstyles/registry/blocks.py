from __future__ import annotations

import json
import re
from pathlib import Path

from blockstyles.model.variation import BlockType

_DIGITS_RE = re.compile(r"(\d+)")

CORE_BLOCKS: dict[str, str] = {
    "core/paragraph": "Paragraph",
    "core/heading": "Heading",
    "core/list": "List",
    "core/quote": "Quote",
    "core/pullquote": "Pullquote",
    "core/image": "Image",
    "core/gallery": "Gallery",
    "core/cover": "Cover",
    "core/group": "Group",
    "core/columns": "Columns",
    "core/column": "Column",
    "core/button": "Button",
    "core/buttons": "Buttons",
    "core/separator": "Separator",
    "core/table": "Table",
    "core/code": "Code",
    "core/preformatted": "Preformatted",
    "core/details": "Details",
    "core/navigation": "Navigation",
    "core/site-title": "Site Title",
}


def natural_key(text: str) -> tuple:
    """Case-insensitive sort key that orders embedded numbers numerically."""
    return tuple(
        (0, int(part), "") if part.isdigit() else (1, 0, part.casefold())
        for part in _DIGITS_RE.split(text)
        if part
    )


class BlockRegistry:
    """Block types that styles may target."""

    def __init__(self, blocks: dict[str, str] | None = None) -> None:
        self._blocks: dict[str, BlockType] = {}
        for name, title in (blocks or {}).items():
            self.register(name, title)

    @classmethod
    def with_core_blocks(cls, extra: dict[str, str] | None = None) -> BlockRegistry:
        registry = cls(CORE_BLOCKS)
        for name, title in (extra or {}).items():
            registry.register(name, title)
        return registry

    @classmethod
    def from_file(cls, path: str | Path) -> BlockRegistry:
        """Core blocks plus a JSON object of ``{"name": "title"}`` from ``path``."""
        data = json.loads(Path(path).read_text(encoding="utf-8"))
        if not isinstance(data, dict):
            raise ValueError(f"Block file must contain a JSON object: {path}")
        return cls.with_core_blocks({str(k): str(v) for k, v in data.items()})

    def register(self, name: str, title: str = "") -> BlockType:
        if not name:
            raise ValueError("Block name must not be empty")
        block = BlockType(name=name, title=title)
        self._blocks[name] = block
        return block

    def unregister(self, name: str) -> None:
        self._blocks.pop(name, None)

    def is_registered(self, name: str) -> bool:
        return bool(name) and name in self._blocks

    def get(self, name: str) -> BlockType | None:
        return self._blocks.get(name)

    def label_for(self, name: str) -> str:
        """Label of a registered block, or the raw name for unknown ones."""
        block = self._blocks.get(name)
        return block.label if block else name

    def list_all(self) -> dict[str, str]:
        """Mapping of block name -> label, ordered naturally by label."""
        blocks = sorted(self._blocks.values(), key=lambda b: natural_key(b.label))
        return {b.name: b.label for b in blocks}

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.is_registered(name)

    def __len__(self) -> int:
        return len(self._blocks)
