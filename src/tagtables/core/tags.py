"""
TagTables Core - Tag Normalizer

Turns the freeform text of a tag cell into canonical tag tokens.

A tag cell holds comma-separated labels written by sheet designers, e.g.
"Character Name, ID". Tags are case-insensitive and space-insensitive, so the
cell above yields ["charactername", "id"].
"""
import re
from typing import Any, NewType

Tag = NewType("Tag", str)

_WHITESPACE = re.compile(r"\s+")


def normalize_tags(raw: Any) -> list[Tag]:
    """
    Split a raw tag cell into canonical tags.

    Empty tokens (",," or a trailing comma) are dropped. Repeats inside one cell
    are kept in order; duplicate detection across cells belongs to the tag map
    builder and verifier.

    Args:
        raw: Cell value. Anything that is not a non-empty string yields no tags.

    Returns:
        Tags in cell order.
    """
    if not raw or not isinstance(raw, str):
        return []
    collapsed = _WHITESPACE.sub("", raw.lower())
    return [Tag(token) for token in collapsed.split(",") if token]


def normalize_tag(raw: str) -> Tag:
    """Canonical form of a single tag name (used for lookup keys)."""
    return Tag(_WHITESPACE.sub("", str(raw).lower()).replace(",", ""))


def merge_tags(first: str | None, second: str | None) -> str:
    """Merge two raw tag strings into one sorted, de-duplicated, comma-joined string."""
    combined = f"{first or ''},{second or ''}"
    tokens = {token.strip() for token in combined.split(",")}
    return ",".join(sorted(token for token in tokens if token))
