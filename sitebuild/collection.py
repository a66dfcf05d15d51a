"""Discover content files and load them into a date-sorted collection.

Files are visited in sorted path order so repeated builds are deterministic.
Entries whose ``date`` cannot be parsed sort after every dated entry and keep
their discovery order among themselves.
"""

from __future__ import annotations

import datetime as _dt
import pathlib
from typing import Iterable, Sequence

from .errors import DuplicateSlugError, EntryNotFound
from .metadata import CONTENT_EXTENSIONS, ContentEntry, read_entry, slug_from_path

Collection = tuple[ContentEntry, ...]


def discover_content_files(
    root: pathlib.Path | str,
    extensions: Sequence[str] = CONTENT_EXTENSIONS,
) -> list[pathlib.Path]:
    """Return every file below ``root`` with a recognised content extension."""

    root_path = pathlib.Path(root).expanduser()
    if not root_path.is_dir():
        return []

    found: list[pathlib.Path] = []
    for path in sorted(root_path.rglob("*")):
        if not path.is_file():
            continue
        if path.name.endswith(tuple(extensions)):
            found.append(path)
    return found


def _sort_key(entry: ContentEntry) -> _dt.datetime:
    return entry.parsed_date or _dt.datetime.min


def sort_entries(entries: Iterable[ContentEntry]) -> Collection:
    """Sort newest first; undated entries go last in their original order."""

    dated: list[ContentEntry] = []
    undated: list[ContentEntry] = []
    for entry in entries:
        (dated if entry.parsed_date is not None else undated).append(entry)
    dated.sort(key=_sort_key, reverse=True)
    return tuple(dated + undated)


def _check_unique_slugs(pairs: Iterable[tuple[pathlib.Path, ContentEntry]]) -> None:
    seen: dict[str, pathlib.Path] = {}
    for path, entry in pairs:
        previous = seen.get(entry.slug)
        if previous is not None:
            raise DuplicateSlugError(entry.slug, [previous, path])
        seen[entry.slug] = path


def load_collection(
    root: pathlib.Path | str,
    *,
    extensions: Sequence[str] = CONTENT_EXTENSIONS,
) -> Collection:
    """Load every published entry below ``root``, newest first.

    A malformed metadata header raises :class:`~sitebuild.errors.MetadataError`
    and aborts the load.
    """

    published: list[tuple[pathlib.Path, ContentEntry]] = []
    for path in discover_content_files(root, extensions):
        entry, _ = read_entry(path)
        if entry.published:
            published.append((path, entry))

    _check_unique_slugs(published)
    return sort_entries(entry for _, entry in published)


def _find_entry_file(
    root: pathlib.Path,
    slug: str,
    extensions: Sequence[str],
) -> pathlib.Path | None:
    for extension in extensions:
        direct = root / f"{slug}{extension}"
        if direct.is_file():
            return direct
    for path in discover_content_files(root, extensions):
        if slug_from_path(path) == slug:
            return path
    return None


def load_entry(
    root: pathlib.Path | str,
    slug: str,
    *,
    extensions: Sequence[str] = CONTENT_EXTENSIONS,
) -> tuple[ContentEntry, str]:
    """Resolve ``slug`` to its published entry and raw body.

    Raises :class:`~sitebuild.errors.EntryNotFound` when no file matches or
    the matching entry is unpublished.
    """

    root_path = pathlib.Path(root).expanduser()
    if not slug or "/" in slug or slug in {".", ".."}:
        raise EntryNotFound(slug, root_path)

    path = _find_entry_file(root_path, slug, extensions)
    if path is None:
        raise EntryNotFound(slug, root_path)

    entry, body = read_entry(path)
    if not entry.published:
        raise EntryNotFound(slug, root_path)
    return entry, body


def static_paths(entries: Iterable[ContentEntry], route: str) -> list[str]:
    """Detail routes to prerender, one ``/<route>/<slug>`` per entry."""

    prefix = "/" + route.strip("/") if route.strip("/") else ""
    return [f"{prefix}/{entry.slug}" for entry in entries]
