"""Strip markup from user-authored CSS before it is stored or emitted."""

from __future__ import annotations

from bs4 import BeautifulSoup

__all__ = ["strip_disallowed_markup", "SCRIPT_BEARING_TAGS"]

# Elements removed together with their contents; every other tag is unwrapped.
SCRIPT_BEARING_TAGS = (
    "script",
    "style",
    "iframe",
    "object",
    "embed",
    "svg",
    "math",
    "template",
    "noscript",
)


def strip_disallowed_markup(css: str | None) -> str:
    """Return ``css`` with all HTML markup removed and outer whitespace trimmed.

    Plain CSS has no tags, so selectors, declarations, comments and inner
    whitespace come back unchanged. Character references are kept as typed:
    ``&lt;`` stays ``&lt;`` and never turns into a tag.
    """
    if not css:
        return ""
    if "<" not in css:
        return css.strip()

    # Escaped ampersands decode back to exactly the input text.
    soup = BeautifulSoup(css.replace("&", "&amp;"), "html.parser")
    for tag in soup.find_all(list(SCRIPT_BEARING_TAGS)):
        # Nested matches are already gone once their ancestor is decomposed.
        if not tag.decomposed:
            tag.decompose()
    return soup.get_text().strip()
