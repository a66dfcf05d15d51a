"""Site configuration: project paths, collections and environment overrides.

Defaults resolve relative to the project root.  ``config.json`` (optional)
may override them, and the ``CONTENT_DIR``, ``OUTPUT_DIR`` and ``SITE_TITLE``
environment variables win over both.
"""

from __future__ import annotations

import dataclasses
import json
import os
import pathlib
from typing import Any

ROOT = pathlib.Path(__file__).resolve().parent.parent
CONFIG_PATH = ROOT / "config.json"
CONTENT_DIR = ROOT
OUTPUT_DIR = ROOT / "dist"
HEALTH_DIR = ROOT / "_health"

DEFAULT_SITE_TITLE = "Personal site"


@dataclasses.dataclass(frozen=True, slots=True)
class CollectionConfig:
    name: str
    directory: str
    route: str
    title: str
    show_tags: bool = True


DEFAULT_COLLECTIONS = (
    CollectionConfig("posts", "posts", "posts", "Posts", show_tags=False),
    CollectionConfig("notes", "notes", "notes", "Notes"),
)


@dataclasses.dataclass(slots=True)
class SiteConfig:
    content_dir: pathlib.Path = CONTENT_DIR
    output_dir: pathlib.Path = OUTPUT_DIR
    health_dir: pathlib.Path = HEALTH_DIR
    site_title: str = DEFAULT_SITE_TITLE
    collections: tuple[CollectionConfig, ...] = DEFAULT_COLLECTIONS

    def collection(self, name: str) -> CollectionConfig:
        for collection in self.collections:
            if collection.name == name:
                return collection
        known = ", ".join(collection.name for collection in self.collections)
        raise KeyError(f"unknown collection {name!r} (known: {known})")

    def collection_dir(self, name: str) -> pathlib.Path:
        return self.content_dir / self.collection(name).directory


def _read_json_object(path: pathlib.Path) -> dict[str, Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid JSON payload in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ValueError(f"Expected an object in {path}, got {type(data).__name__}")
    return data


def _parse_collections(raw: Any, path: pathlib.Path) -> tuple[CollectionConfig, ...]:
    if not isinstance(raw, dict):
        raise ValueError(f"{path}: 'collections' must be an object")

    collections: list[CollectionConfig] = []
    for name, meta in raw.items():
        if meta is None:
            meta = {}
        if not isinstance(meta, dict):
            raise ValueError(f"{path}: collection {name!r} must be an object, got {type(meta).__name__}")
        collections.append(
            CollectionConfig(
                name=name,
                directory=str(meta.get("dir") or name),
                route=str(meta.get("route") or name).strip("/"),
                title=str(meta.get("title") or name.title()),
                show_tags=bool(meta.get("show_tags", True)),
            )
        )
    return tuple(collections)


def load_config(path: pathlib.Path | None = None) -> SiteConfig:
    config_path = path or CONFIG_PATH
    config = SiteConfig()

    base = config_path.parent
    if config_path.exists():
        data = _read_json_object(config_path)
        if data.get("content_dir"):
            config.content_dir = base / str(data["content_dir"])
        if data.get("output_dir"):
            config.output_dir = base / str(data["output_dir"])
        if data.get("health_dir"):
            config.health_dir = base / str(data["health_dir"])
        if data.get("site_title"):
            config.site_title = str(data["site_title"])
        if "collections" in data:
            config.collections = _parse_collections(data["collections"], config_path)

    content_env = os.getenv("CONTENT_DIR", "").strip()
    if content_env:
        config.content_dir = pathlib.Path(content_env).expanduser()
    output_env = os.getenv("OUTPUT_DIR", "").strip()
    if output_env:
        config.output_dir = pathlib.Path(output_env).expanduser()
    title_env = os.getenv("SITE_TITLE", "").strip()
    if title_env:
        config.site_title = title_env

    return config
