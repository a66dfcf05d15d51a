"""Write build heartbeat files under ``_health``."""

from __future__ import annotations

import datetime as _dt
import json
import pathlib
from typing import Iterable, Sequence

__all__ = ["BuildReport"]


def _utc_now_iso() -> str:
    """Return a second-precision UTC timestamp with a ``Z`` suffix."""

    now = _dt.datetime.now(_dt.timezone.utc).replace(microsecond=0, tzinfo=None)
    return now.isoformat() + "Z"


def _coerce_errors(messages: Sequence[str], *, limit: int = 20) -> list[str]:
    """Clean and deduplicate error strings while preserving order."""

    seen: set[str] = set()
    cleaned: list[str] = []
    for raw in messages:
        text = str(raw or "").strip()
        if not text or text in seen:
            continue
        seen.add(text)
        cleaned.append(text)
        if len(cleaned) >= limit:
            break
    return cleaned


class BuildReport:
    """Accumulate build results and persist them to ``<health_dir>/<name>.json``."""

    def __init__(self, name: str, *, health_dir: pathlib.Path) -> None:
        self.name = name
        self.health_dir = health_dir
        self.errors: list[str] = []
        self.collections: dict[str, int] = {}
        self.tags: dict[str, int] = {}

    def record_error(self, message: object) -> None:
        text = str(message or "").strip()
        if text:
            self.errors.append(text)

    def extend_errors(self, messages: Iterable[object]) -> None:
        for message in messages:
            self.record_error(message)

    def record_collection(self, name: str, *, entries: int, tags: int) -> None:
        self.collections[name] = max(0, int(entries))
        self.tags[name] = max(0, int(tags))

    @property
    def has_errors(self) -> bool:
        return bool(_coerce_errors(self.errors))

    @property
    def entries_published(self) -> int:
        return sum(self.collections.values())

    def write(self, *, built_at: str | None = None) -> pathlib.Path:
        payload = {
            "built_at": built_at or _utc_now_iso(),
            "ok": not self.has_errors,
            "collections": dict(self.collections),
            "tags": dict(self.tags),
            "entries_published": self.entries_published,
            "errors": _coerce_errors(self.errors),
        }
        path = self.health_dir / f"{self.name}.json"
        self.health_dir.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(payload, ensure_ascii=False, indent=2) + "\n", encoding="utf-8")
        return path
