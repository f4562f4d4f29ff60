from __future__ import annotations

import json

import pytest

from blockstyles.registry.blocks import CORE_BLOCKS, BlockRegistry, natural_key


class TestBlockRegistry:
    def test_register_and_lookup(self) -> None:
        registry = BlockRegistry()
        registry.register("acme/card", "Card")
        assert registry.is_registered("acme/card")
        assert "acme/card" in registry
        assert registry.get("acme/card").title == "Card"
        assert len(registry) == 1

    def test_unknown_and_empty_names(self) -> None:
        registry = BlockRegistry({"core/quote": "Quote"})
        assert not registry.is_registered("core/unknown")
        assert not registry.is_registered("")
        assert registry.get("core/unknown") is None

    def test_register_empty_name_rejected(self) -> None:
        with pytest.raises(ValueError):
            BlockRegistry().register("")

    def test_unregister(self) -> None:
        registry = BlockRegistry({"core/quote": "Quote"})
        registry.unregister("core/quote")
        registry.unregister("core/never-there")
        assert not registry.is_registered("core/quote")

    def test_label_falls_back_to_name(self) -> None:
        registry = BlockRegistry({"acme/untitled": ""})
        assert registry.list_all() == {"acme/untitled": "acme/untitled"}

    def test_label_for_unknown_block_is_raw_name(self) -> None:
        registry = BlockRegistry({"core/quote": "Quote"})
        assert registry.label_for("core/quote") == "Quote"
        assert registry.label_for("acme/gone") == "acme/gone"

    def test_list_all_natural_case_insensitive_order(self) -> None:
        registry = BlockRegistry({
            "acme/h10": "Heading 10",
            "acme/h2": "Heading 2",
            "acme/zeta": "zeta",
            "acme/apple": "Apple",
        })
        assert list(registry.list_all().values()) == [
            "Apple",
            "Heading 2",
            "Heading 10",
            "zeta",
        ]

    def test_with_core_blocks(self) -> None:
        registry = BlockRegistry.with_core_blocks({"acme/card": "Card"})
        assert len(registry) == len(CORE_BLOCKS) + 1
        assert registry.is_registered("core/paragraph")
        assert registry.is_registered("acme/card")

    def test_from_file(self, tmp_path) -> None:
        path = tmp_path / "blocks.json"
        path.write_text(json.dumps({"acme/card": "Card"}), encoding="utf-8")
        registry = BlockRegistry.from_file(path)
        assert registry.is_registered("acme/card")
        assert registry.is_registered("core/quote")

    def test_from_file_requires_object(self, tmp_path) -> None:
        path = tmp_path / "blocks.json"
        path.write_text("[1, 2]", encoding="utf-8")
        with pytest.raises(ValueError):
            BlockRegistry.from_file(path)


class TestNaturalKey:
    def test_numbers_compare_numerically(self) -> None:
        assert natural_key("item 9") < natural_key("item 10")

    def test_case_insensitive(self) -> None:
        assert natural_key("Quote") == natural_key("quote")
