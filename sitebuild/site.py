#!/usr/bin/env python3
"""Build listing pages and JSON indexes for every configured collection.

For each collection the build writes::

    <output>/data/<name>.json         published entry metadata, newest first
    <output>/data/<name>-tags.json    tag -> entry count
    <output>/data/<name>-paths.json   detail routes to prerender
    <output>/<route>/index.html       unfiltered listing page

A malformed metadata header or a duplicate slug aborts the whole build; the
failure is recorded in ``_health/build.json`` before it propagates.
"""

from __future__ import annotations

import argparse
import json
import pathlib
import sys
from typing import Any

from .collection import load_collection, static_paths
from .config import SiteConfig, load_config
from .errors import SiteBuildError
from .health import BuildReport
from .selection import TagSelection
from .views import build_listing_view, render_listing


def write_json(path: pathlib.Path, payload: Any) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(payload, ensure_ascii=False, indent=2) + "\n", encoding="utf-8")


def build_site(config: SiteConfig) -> BuildReport:
    report = BuildReport("build", health_dir=config.health_dir)
    data_dir = config.output_dir / "data"

    try:
        for collection in config.collections:
            entries = load_collection(config.collection_dir(collection.name))
            view = build_listing_view(entries, TagSelection())

            write_json(data_dir / f"{collection.name}.json", [entry.to_dict() for entry in entries])
            write_json(data_dir / f"{collection.name}-tags.json", view.tag_index)
            write_json(
                data_dir / f"{collection.name}-paths.json",
                static_paths(entries, collection.route),
            )

            html = render_listing(
                view,
                title=f"{collection.title} | {config.site_title}",
                route=collection.route,
                show_tags=collection.show_tags,
            )
            page = config.output_dir / collection.route / "index.html"
            page.parent.mkdir(parents=True, exist_ok=True)
            page.write_text(html, encoding="utf-8")

            report.record_collection(collection.name, entries=len(entries), tags=len(view.tag_index))
            print(f"Built {collection.name}: {len(entries)} entries, {len(view.tag_index)} tags")
    except SiteBuildError as exc:
        report.record_error(exc)
        report.write()
        raise

    report.write()
    return report


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Build listing pages and content indexes.")
    parser.add_argument("--config", type=pathlib.Path, default=None, help="Path to config.json")
    parser.add_argument("--content-dir", type=pathlib.Path, default=None, help="Root containing the collection folders")
    parser.add_argument("--output", type=pathlib.Path, default=None, help="Where to write the built site")
    parser.add_argument("--health-dir", type=pathlib.Path, default=None, help="Where to write the build heartbeat")

    args = parser.parse_args(argv)

    try:
        config = load_config(args.config)
    except ValueError as exc:
        print(exc, file=sys.stderr)
        return 1

    if args.content_dir is not None:
        config.content_dir = args.content_dir
    if args.output is not None:
        config.output_dir = args.output
    if args.health_dir is not None:
        config.health_dir = args.health_dir

    try:
        report = build_site(config)
    except SiteBuildError as exc:
        print(f"Build failed: {exc}", file=sys.stderr)
        return 1

    print(f"Wrote {report.entries_published} entries to {config.output_dir}")
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
