"""Exceptions raised while loading and building site content."""

from __future__ import annotations

import pathlib
from typing import Sequence

__all__ = [
    "SiteBuildError",
    "MetadataError",
    "DuplicateSlugError",
    "EntryNotFound",
]


class SiteBuildError(Exception):
    """Base class for build-time failures."""


class MetadataError(SiteBuildError, ValueError):
    """A content file has a missing or malformed metadata header."""

    def __init__(self, path: pathlib.Path | str | None, errors: Sequence[object]) -> None:
        self.path = pathlib.Path(path) if path is not None else None
        self.errors = list(errors)
        label = str(self.path) if self.path is not None else "<content>"
        details = "; ".join(str(error) for error in self.errors) or "invalid metadata"
        super().__init__(f"{label}: {details}")


class DuplicateSlugError(SiteBuildError, ValueError):
    """Two published files in one collection resolve to the same slug."""

    def __init__(self, slug: str, paths: Sequence[pathlib.Path]) -> None:
        self.slug = slug
        self.paths = list(paths)
        joined = ", ".join(str(path) for path in self.paths)
        super().__init__(f"duplicate slug {slug!r}: {joined}")


class EntryNotFound(SiteBuildError, LookupError):
    """No published entry exists for the requested slug."""

    def __init__(self, slug: str, root: pathlib.Path | None = None) -> None:
        self.slug = slug
        self.root = root
        where = f" in {root}" if root is not None else ""
        super().__init__(f"no published entry {slug!r}{where}")
