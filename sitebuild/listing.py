#!/usr/bin/env python3
"""Print a collection listing filtered by tags.

Each ``--tag`` is toggled in order on a fresh selection, so passing the same
tag twice removes it again::

    python -m sitebuild.listing --collection notes --tag '#books' --tag '#review'
"""

from __future__ import annotations

import argparse
import pathlib
import sys
from typing import Iterable

from .collection import load_collection
from .config import load_config
from .errors import SiteBuildError
from .selection import TagSelectionState
from .tags import TAG_PREFIX
from .views import build_listing_view, render_listing_text


def _normalise_tag(raw: str) -> str:
    return raw if raw.startswith(TAG_PREFIX) else f"{TAG_PREFIX}{raw}"


def main(argv: Iterable[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Print a tag-filtered collection listing.")
    parser.add_argument("--collection", default="posts", help="Collection name (default: posts)")
    parser.add_argument("--tag", action="append", default=[], help="Tag to toggle; may be repeated")
    parser.add_argument("--content-dir", type=pathlib.Path, default=None, help="Root containing the collection folders")
    parser.add_argument("--config", type=pathlib.Path, default=None, help="Path to config.json")

    args = parser.parse_args(list(argv) if argv is not None else None)

    try:
        config = load_config(args.config)
    except ValueError as exc:
        print(exc, file=sys.stderr)
        return 1
    if args.content_dir is not None:
        config.content_dir = args.content_dir

    try:
        root = config.collection_dir(args.collection)
    except KeyError as exc:
        print(exc.args[0], file=sys.stderr)
        return 2

    try:
        entries = load_collection(root)
    except SiteBuildError as exc:
        print(f"Build failed: {exc}", file=sys.stderr)
        return 1

    state = TagSelectionState()
    for raw in args.tag:
        state.toggle(_normalise_tag(raw))

    view = build_listing_view(entries, state.selection)
    sys.stdout.write(render_listing_text(view))
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
