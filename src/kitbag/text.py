"""String helpers: concatenation, truncation, slugs and value mapping."""

import math
import re
from typing import Any

from kitbag.common import UNDEFINED

_WHITESPACE = re.compile(r"\s+")


def concat(*items: Any) -> str:
    """Join the non-empty items with a single space.

    None, UNDEFINED, nan and blank strings are dropped; the rest are
    converted with `str()` and stripped.

    Examples:
        >>> concat("a", None, "  b ", float("nan"), "")
        'a b'
    """
    parts = []
    for item in items:
        if item is None or item is UNDEFINED:
            continue
        if isinstance(item, float) and math.isnan(item):
            continue
        text = str(item).strip()
        if text:
            parts.append(text)
    return " ".join(parts)


def truncate(v: str, length: int) -> str:
    """Truncate `v` to `length` characters, appending an ellipsis if cut."""
    if length <= 0:
        return ""
    return v if len(v) <= length else v[:length] + "..."


def _clean_items(items: tuple[str | None, ...]) -> list[str]:
    return [item.strip() for item in items if item is not None and item.strip()]


def _normalize_joiner(text: str, joiner: str) -> str:
    """Collapse repeated joiners and trim them from both ends."""
    if not joiner:
        return text
    escaped = re.escape(joiner)
    text = re.sub(f"(?:{escaped})+", lambda _: joiner, text)
    return re.sub(f"^(?:{escaped})+|(?:{escaped})+$", "", text)


def slugify(joiner: str, *items: str | None) -> str:
    """Build an ASCII slug from `items`.

    Items are stripped, lowercased and joined with `joiner`. Whitespace
    becomes `joiner`, anything outside ``a-z``, ``0-9`` and the joiner is
    removed, and repeated or leading/trailing joiners are cleaned up.

    Args:
        joiner: The string placed between words.
        items: The strings to slugify. Empty and None items are skipped.

    Returns:
        The slug.

    Examples:
        >>> slugify("-", "Hello World!")
        'hello-world'
        >>> slugify("_", "Foo Bar", "Baz")
        'foo_bar_baz'
    """
    text = joiner.join(item.lower() for item in _clean_items(items))
    text = _WHITESPACE.sub(lambda _: joiner, text)
    text = re.sub(f"[^a-z0-9{re.escape(joiner)}]+", "", text)
    return _normalize_joiner(text, joiner)


def slugify_unicode(joiner: str, *items: str | None) -> str:
    """Build a slug from `items`, keeping case and non-ASCII characters.

    Examples:
        >>> slugify_unicode("-", "سلام دنیا")
        'سلام-دنیا'
    """
    text = joiner.join(_clean_items(items))
    text = _WHITESPACE.sub(lambda _: joiner, text)
    return _normalize_joiner(text, joiner)


def map_value(v: str, replacements: dict[str, str]) -> str:
    """Map `v` through `replacements`.

    A ``"*"`` key acts as a wildcard for values that have no entry of
    their own. Values with no match are returned unchanged.
    """
    if v in replacements:
        return replacements[v]
    if "*" in replacements:
        return replacements["*"]
    return v
