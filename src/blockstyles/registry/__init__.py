from blockstyles.registry.blocks import CORE_BLOCKS, BlockRegistry
from blockstyles.registry.variations import StyleVariationRegistry

__all__ = ["CORE_BLOCKS", "BlockRegistry", "StyleVariationRegistry"]
