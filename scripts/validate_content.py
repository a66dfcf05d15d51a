#!/usr/bin/env python3
"""Validate the metadata header of every content file.

Unlike the build, which stops at the first bad file, this reports every
problem in every collection and exits non-zero if any were found.
"""

from __future__ import annotations

import argparse
import pathlib
import sys
from collections import defaultdict
from dataclasses import dataclass
from typing import Iterable, List, Sequence

from sitebuild.collection import discover_content_files
from sitebuild.config import load_config
from sitebuild.errors import MetadataError
from sitebuild.metadata import read_entry


@dataclass
class FileResult:
    path: pathlib.Path
    errors: List[str]


def validate_file(path: pathlib.Path, root: pathlib.Path) -> FileResult:
    try:
        relative = path.relative_to(root)
    except ValueError:
        relative = path
    try:
        read_entry(path)
    except MetadataError as exc:
        return FileResult(path, [f"{relative}: {error}" for error in exc.errors])
    return FileResult(path, [])


def duplicate_slug_errors(paths: Iterable[pathlib.Path], root: pathlib.Path) -> List[str]:
    """Report slugs shared by more than one published file."""

    by_slug: dict[str, list[pathlib.Path]] = defaultdict(list)
    for path in paths:
        try:
            entry, _ = read_entry(path)
        except MetadataError:
            continue
        if entry.published:
            by_slug[entry.slug].append(path)

    errors: List[str] = []
    for slug, matches in sorted(by_slug.items()):
        if len(matches) > 1:
            joined = ", ".join(str(match.relative_to(root)) for match in matches)
            errors.append(f"duplicate slug '{slug}': {joined}")
    return errors


def validate_collection(root: pathlib.Path) -> List[str]:
    paths = discover_content_files(root)
    errors: List[str] = []
    for path in paths:
        errors.extend(validate_file(path, root).errors)
    errors.extend(duplicate_slug_errors(paths, root))
    return errors


def main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Validate content metadata headers.")
    parser.add_argument("--content-dir", type=pathlib.Path, default=None, help="Root containing the collection folders")
    args = parser.parse_args(argv)

    config = load_config()
    if args.content_dir is not None:
        config.content_dir = args.content_dir

    errors: List[str] = []
    for collection in config.collections:
        root = config.collection_dir(collection.name)
        if not root.is_dir():
            errors.append(f"{collection.directory}: directory not found")
            continue
        errors.extend(validate_collection(root))

    if errors:
        for message in errors:
            print(message, file=sys.stderr)
        return 1
    print("All content files are valid.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
