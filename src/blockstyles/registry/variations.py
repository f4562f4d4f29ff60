from __future__ import annotations

from blockstyles.model.variation import StyleVariation


class StyleVariationRegistry:
    """Published style variations keyed by ``(block_name, name)``."""

    def __init__(self) -> None:
        self._variations: dict[tuple[str, str], StyleVariation] = {}

    def register(self, variation: StyleVariation) -> None:
        """Add or replace a variation. Registering the same one twice is a no-op."""
        self._variations[variation.key] = variation

    def unregister(self, block_name: str, name: str) -> bool:
        return self._variations.pop((block_name, name), None) is not None

    def clear(self) -> None:
        self._variations.clear()

    def get(self, block_name: str, name: str) -> StyleVariation | None:
        return self._variations.get((block_name, name))

    def for_block(self, block_name: str) -> tuple[StyleVariation, ...]:
        return tuple(
            v for key, v in sorted(self._variations.items()) if key[0] == block_name
        )

    def all(self) -> tuple[StyleVariation, ...]:
        return tuple(v for _, v in sorted(self._variations.items()))

    def snapshot(self) -> frozenset[StyleVariation]:
        return frozenset(self._variations.values())

    def stylesheet(self) -> str:
        """Inline CSS of every variation, one block per variation."""
        chunks = [v.inline_style for v in self.all() if v.inline_style]
        return "\n\n".join(chunks) + ("\n" if chunks else "")

    def __len__(self) -> int:
        return len(self._variations)
