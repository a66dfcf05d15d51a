"""Parse and validate the YAML metadata header of a content file.

A content file starts with a ``---`` delimited YAML block followed by the
markup body::

    ---
    title: Notes on closures
    date: 2021-07-01
    published: true
    tags: javascript,functions
    ---
    Body text...

:func:`extract_entry` turns such a file into an immutable
:class:`ContentEntry`.  Missing or malformed fields are collected into a list
of :class:`FieldError` values and raised together as a
:class:`~sitebuild.errors.MetadataError`, which aborts the build for that file.
"""

from __future__ import annotations

import dataclasses
import datetime as _dt
import enum
import pathlib
import re
from typing import Any

import yaml

from .dates import parse_date
from .errors import MetadataError

CONTENT_EXTENSIONS = (".mdx", ".md")

_FRONT_MATTER_RE = re.compile(
    r"\A---[ \t]*\r?\n(.*?)^---[ \t]*(?:\r?\n|\Z)",
    re.DOTALL | re.MULTILINE,
)


class FieldProblem(enum.Enum):
    MISSING = "is missing"
    WRONG_TYPE = "has the wrong type"
    EMPTY = "is empty"


@dataclasses.dataclass(frozen=True, slots=True)
class FieldError:
    field: str
    problem: FieldProblem
    expected: str = ""

    def __str__(self) -> str:
        text = f"field '{self.field}' {self.problem.value}"
        if self.expected:
            text += f" (expected {self.expected})"
        return text


@dataclasses.dataclass(frozen=True, slots=True)
class ContentEntry:
    """Metadata for one post or note, plus the slug derived from its file name."""

    slug: str
    title: str
    date: str
    tags: str
    published: bool
    description: str = ""
    listed: bool = True
    last_update_date: str | None = None

    @property
    def parsed_date(self) -> _dt.datetime | None:
        return parse_date(self.date)

    def to_dict(self) -> dict[str, Any]:
        payload = {
            "slug": self.slug,
            "title": self.title,
            "date": self.date,
            "description": self.description,
            "tags": self.tags,
            "published": self.published,
            "listed": self.listed,
        }
        if self.last_update_date is not None:
            payload["lastUpdateDate"] = self.last_update_date
        return payload


def parse_front_matter(text: str, path: pathlib.Path | str | None = None) -> tuple[dict[str, Any], str]:
    """Split ``text`` into its YAML header mapping and the remaining body."""

    text = text.lstrip("\ufeff")
    match = _FRONT_MATTER_RE.match(text)
    if not match:
        raise MetadataError(path, ["metadata header is missing or not closed with '---'"])

    try:
        meta = yaml.safe_load(match.group(1))
    except (yaml.YAMLError, ValueError) as exc:
        # out-of-range timestamps such as 2021-13-01 surface as ValueError
        raise MetadataError(path, [f"invalid YAML in metadata header: {exc}"]) from exc

    if meta is None:
        meta = {}
    if not isinstance(meta, dict):
        raise MetadataError(path, [f"metadata header must be a mapping, got {type(meta).__name__}"])

    return meta, text[match.end():]


def _is_date_like(value: Any) -> bool:
    return isinstance(value, (str, _dt.date))


def _date_text(value: Any) -> str:
    if isinstance(value, (_dt.datetime, _dt.date)):
        return value.isoformat()
    return str(value).strip()


def validate_metadata(meta: dict[str, Any]) -> list[FieldError]:
    """Return every problem found in ``meta``; an empty list means it is valid."""

    errors: list[FieldError] = []

    title = meta.get("title")
    if "title" not in meta or title is None:
        errors.append(FieldError("title", FieldProblem.MISSING))
    elif not isinstance(title, str):
        errors.append(FieldError("title", FieldProblem.WRONG_TYPE, "string"))
    elif not title.strip():
        errors.append(FieldError("title", FieldProblem.EMPTY))

    date = meta.get("date")
    if "date" not in meta or date is None:
        errors.append(FieldError("date", FieldProblem.MISSING))
    elif not _is_date_like(date):
        errors.append(FieldError("date", FieldProblem.WRONG_TYPE, "date string"))
    elif isinstance(date, str) and not date.strip():
        errors.append(FieldError("date", FieldProblem.EMPTY))

    if "published" not in meta or meta["published"] is None:
        errors.append(FieldError("published", FieldProblem.MISSING))
    elif not isinstance(meta["published"], bool):
        errors.append(FieldError("published", FieldProblem.WRONG_TYPE, "true or false"))

    if "tags" not in meta or meta["tags"] is None:
        errors.append(FieldError("tags", FieldProblem.MISSING))
    elif not isinstance(meta["tags"], str):
        errors.append(FieldError("tags", FieldProblem.WRONG_TYPE, "comma-separated string"))

    description = meta.get("description")
    if description is not None and not isinstance(description, str):
        errors.append(FieldError("description", FieldProblem.WRONG_TYPE, "string"))

    listed = meta.get("listed")
    if listed is not None and not isinstance(listed, bool):
        errors.append(FieldError("listed", FieldProblem.WRONG_TYPE, "true or false"))

    updated = meta.get("lastUpdateDate")
    if updated is not None and not _is_date_like(updated):
        errors.append(FieldError("lastUpdateDate", FieldProblem.WRONG_TYPE, "date string"))

    return errors


def slug_from_path(path: pathlib.Path | str) -> str:
    """File base name with a recognised content extension stripped."""

    name = pathlib.PurePath(path).name
    for extension in CONTENT_EXTENSIONS:
        if name.endswith(extension):
            return name[: -len(extension)]
    return name


def extract_entry(text: str, path: pathlib.Path | str) -> ContentEntry:
    meta, _ = parse_front_matter(text, path)
    return entry_from_metadata(meta, path)


def entry_from_metadata(meta: dict[str, Any], path: pathlib.Path | str) -> ContentEntry:
    errors = validate_metadata(meta)
    if errors:
        raise MetadataError(path, errors)

    updated = meta.get("lastUpdateDate")
    listed = meta.get("listed")
    return ContentEntry(
        slug=slug_from_path(path),
        title=meta["title"],
        date=_date_text(meta["date"]),
        tags=meta["tags"],
        published=meta["published"],
        description=meta.get("description") or "",
        listed=True if listed is None else listed,
        last_update_date=_date_text(updated) if updated is not None else None,
    )


def read_entry(path: pathlib.Path) -> tuple[ContentEntry, str]:
    """Read ``path`` and return its entry together with the raw markup body."""

    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise MetadataError(path, [f"could not read file: {exc}"]) from exc
    meta, body = parse_front_matter(text, path)
    return entry_from_metadata(meta, path), body
