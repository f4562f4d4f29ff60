"""Keep a style's CSS buffer in step with its slug.

The buffer starts out as an empty rule for the style's selector. As long as
the editor has not written anything inside that rule, renaming the style
rewrites the selector. Once there is real content the buffer is left alone.
"""

from __future__ import annotations

import re

from blockstyles.reconcile.sanitize import strip_disallowed_markup
from blockstyles.reconcile.slug import selector

__all__ = [
    "boilerplate",
    "looks_like_boilerplate",
    "reconcile",
    "reconcile_for_publish",
]

# A single `.is-style-<token>` rule with nothing but whitespace in its body.
# Matches rules for any token, so a stale selector is refreshed too.
_BOILERPLATE_RE = re.compile(r"^\.is-style-[a-z0-9_-]+\s*\{\s*\}$", re.IGNORECASE)


def boilerplate(slug: str) -> str:
    """Return the empty starter rule for ``slug``."""
    if not slug:
        return ""
    return f"{selector(slug)} {{\n\n}}\n"


def looks_like_boilerplate(css: str | None) -> bool:
    """True when ``css`` holds nothing the editor has meaningfully typed.

    Blank text counts, as does a lone empty ``.is-style-*`` rule. An
    intentionally empty rule is indistinguishable from an untouched one.
    """
    if not css:
        return True
    text = css.strip()
    return text == "" or _BOILERPLATE_RE.match(text) is not None


def reconcile(slug: str, current_css: str | None, force: bool = False) -> str:
    """Return the CSS buffer that should be shown and stored for ``slug``.

    With ``force`` or a boilerplate-looking buffer the result is a fresh
    :func:`boilerplate` (empty when ``slug`` is empty). Otherwise the buffer is
    returned untouched.
    """
    if force or looks_like_boilerplate(current_css):
        return boilerplate(slug)
    return current_css or ""


def reconcile_for_publish(slug: str, current_css: str | None) -> str:
    """Reconcile without force and pass the result through the sanitizer."""
    return strip_disallowed_markup(reconcile(slug, current_css))
