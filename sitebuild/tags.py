"""Split comma-separated tag strings and count tags across a collection.

Tokens are kept verbatim: ``"a, b"`` yields ``#a`` and ``# b``, which is a
different key from the ``#b`` produced by ``"a,b"``.
"""

from __future__ import annotations

from typing import Iterable

from .metadata import ContentEntry

TAG_PREFIX = "#"


def split_tags(tags: str) -> list[str]:
    return [f"{TAG_PREFIX}{token}" for token in tags.split(",")]


def entry_tags(entry: ContentEntry) -> frozenset[str]:
    return frozenset(split_tags(entry.tags))


def format_tags(tags: str) -> str:
    """Display form used under each note, e.g. ``"#books, #review"``."""

    return ", ".join(split_tags(tags))


def build_tag_index(entries: Iterable[ContentEntry]) -> dict[str, int]:
    """Map each distinct tag to the number of entries that carry it."""

    index: dict[str, int] = {}
    for entry in entries:
        for tag in dict.fromkeys(split_tags(entry.tags)):
            index[tag] = index.get(tag, 0) + 1
    return index
