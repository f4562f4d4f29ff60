"""Slug resolution for style variations.

A style's slug becomes the CSS class fragment in ``.is-style-<slug>``, so it is
restricted to lowercase ASCII letters, digits, underscores and hyphens.
"""

from __future__ import annotations

import re

__all__ = ["slugify", "resolve_slug", "css_class", "selector", "CLASS_PREFIX"]

CLASS_PREFIX = "is-style-"

# Any run of characters that cannot appear in a class fragment.
_DISALLOWED_RUN_RE = re.compile(r"[^a-z0-9_-]+")


def slugify(value: str | None) -> str:
    """Turn arbitrary text into a class-safe slug.

    Trims and lowercases, collapses every run of disallowed characters into a
    single hyphen, then strips hyphens from both ends.

        >>> slugify("Hello World!!")
        'hello-world'
        >>> slugify("--a--")
        'a'
    """
    if not value:
        return ""
    text = _DISALLOWED_RUN_RE.sub("-", str(value).strip().lower())
    return text.strip("-")


def resolve_slug(
    title: str | None, explicit_slug: str | None = "", stored_slug: str | None = ""
) -> str:
    """Return the canonical slug for a style.

    The first non-empty source wins: the explicit slug typed on the edit
    screen, then the slug cached by a previous save, then the title. The
    winner is always normalised with :func:`slugify`. An empty result means
    the style has no class yet.
    """
    for source in (explicit_slug, stored_slug, title):
        if source and str(source).strip():
            return slugify(source)
    return ""


def css_class(slug: str) -> str:
    """``is-style-<slug>``, or an empty string when there is no slug."""
    return f"{CLASS_PREFIX}{slug}" if slug else ""


def selector(slug: str) -> str:
    """``.is-style-<slug>``, or an empty string when there is no slug."""
    return f".{css_class(slug)}" if slug else ""
