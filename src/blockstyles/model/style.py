from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

from blockstyles.reconcile.slug import css_class, resolve_slug


class StyleStatus(StrEnum):
    DRAFT = "draft"
    PUBLISH = "publish"
    TRASH = "trash"


@dataclass(frozen=True)
class StyleRecord:
    id: str
    title: str = ""
    slug: str = ""  # typed on the edit screen, independent of the title
    status: StyleStatus = StyleStatus.DRAFT
    author: str = ""
    block_name: str = ""
    style_name: str = ""
    style_slug: str = ""  # resolved slug cached by the last save
    custom_css: str = ""
    created_at: str = ""
    updated_at: str = ""

    @property
    def resolved_slug(self) -> str:
        return resolve_slug(self.title, self.slug, self.style_slug)

    @property
    def css_class(self) -> str:
        return css_class(self.resolved_slug)

    @property
    def display_label(self) -> str:
        """Title, then the stored style name, then the slug."""
        return self.title or self.style_name or self.resolved_slug

    @property
    def is_published(self) -> bool:
        return self.status == StyleStatus.PUBLISH
