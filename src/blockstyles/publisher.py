"""Register published block styles as front-end style variations."""
from __future__ import annotations

import logging

from blockstyles.model.style import StyleRecord
from blockstyles.model.variation import StyleVariation
from blockstyles.reconcile import reconcile_for_publish
from blockstyles.registry.blocks import BlockRegistry
from blockstyles.registry.variations import StyleVariationRegistry
from blockstyles.store.repositories import StyleRepository

logger = logging.getLogger(__name__)


def variation_for(record: StyleRecord, blocks: BlockRegistry) -> StyleVariation | None:
    """Build the variation a published record contributes, or None to skip it."""
    if not record.block_name:
        return None
    if not blocks.is_registered(record.block_name):
        logger.debug(
            "Skipping style %s: block %r is not registered", record.id, record.block_name
        )
        return None
    slug = record.resolved_slug
    if not slug:
        logger.debug("Skipping style %s: no slug", record.id)
        return None
    return StyleVariation(
        block_name=record.block_name,
        name=slug,
        label=record.display_label,
        inline_style=reconcile_for_publish(slug, record.custom_css),
    )


def collect_variations(
    repo: StyleRepository, blocks: BlockRegistry
) -> tuple[StyleVariation, ...]:
    """Variations for every published style that targets a registered block."""
    variations = []
    for record in repo.list_published():
        variation = variation_for(record, blocks)
        if variation is not None:
            variations.append(variation)
    return tuple(variations)


class StylePublisher:
    """Keeps a variation registry in step with the stored styles.

    Each :meth:`publish` pass first withdraws what the previous pass
    registered, so trashed or deleted styles disappear and repeated passes
    over unchanged data leave the registry unchanged.
    """

    def __init__(
        self,
        repo: StyleRepository,
        blocks: BlockRegistry,
        variations: StyleVariationRegistry | None = None,
    ) -> None:
        self.repo = repo
        self.blocks = blocks
        self.variations = variations or StyleVariationRegistry()
        self._published: set[tuple[str, str]] = set()

    def publish(self) -> tuple[StyleVariation, ...]:
        for block_name, name in self._published:
            self.variations.unregister(block_name, name)
        self._published.clear()

        published = collect_variations(self.repo, self.blocks)
        for variation in published:
            self.variations.register(variation)
            self._published.add(variation.key)

        logger.info("Published %d block style variation(s)", len(published))
        return published
