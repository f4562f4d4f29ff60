from blockstyles.reconcile.css import (
    boilerplate,
    looks_like_boilerplate,
    reconcile,
    reconcile_for_publish,
)
from blockstyles.reconcile.sanitize import strip_disallowed_markup
from blockstyles.reconcile.slug import css_class, resolve_slug, selector, slugify

__all__ = [
    "slugify",
    "resolve_slug",
    "css_class",
    "selector",
    "boilerplate",
    "looks_like_boilerplate",
    "reconcile",
    "reconcile_for_publish",
    "strip_disallowed_markup",
]
