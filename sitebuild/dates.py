"""Date parsing and the display formats used by listing and entry pages."""

from __future__ import annotations

import datetime as _dt
from typing import Any

_FALLBACK_FORMATS = (
    "%Y-%m-%d",
    "%Y/%m/%d",
    "%d %b %Y",
    "%d %B %Y",
    "%b %d, %Y",
    "%B %d, %Y",
)


def _coerce_string(value: Any) -> str:
    if value is None or isinstance(value, bool):
        return ""
    if isinstance(value, str):
        return value.strip()
    return str(value).strip()


def parse_date(value: Any, *, utc: bool = True) -> _dt.datetime | None:
    """Return a naive ``datetime`` for ``value`` or ``None`` when unparseable.

    Offsets are converted to UTC for comparison.  With ``utc=False`` the
    offset is dropped instead, keeping the wall-clock time as written.
    """

    if value is None:
        return None

    if isinstance(value, _dt.datetime):
        dt = value
    elif isinstance(value, _dt.date):
        return _dt.datetime(value.year, value.month, value.day)
    else:
        text = _coerce_string(value)
        if not text:
            return None
        candidate = text
        if candidate.endswith("Z"):
            candidate = candidate[:-1] + "+00:00"
        try:
            dt = _dt.datetime.fromisoformat(candidate)
        except ValueError:
            dt = None
        if dt is None:
            for fmt in _FALLBACK_FORMATS:
                try:
                    dt = _dt.datetime.strptime(text, fmt)
                    break
                except ValueError:
                    continue
        if dt is None:
            return None

    if dt.tzinfo is not None:
        if utc:
            dt = dt.astimezone(_dt.timezone.utc)
        dt = dt.replace(tzinfo=None)
    return dt


def date_year(value: Any) -> int | None:
    parsed = parse_date(value, utc=False)
    return parsed.year if parsed is not None else None


def format_date_preview(value: Any) -> str:
    """``"Jul 01"`` as shown beside each entry in a listing."""

    parsed = parse_date(value, utc=False)
    if parsed is None:
        return _coerce_string(value)
    return parsed.strftime("%b %d")


def format_date_full(value: Any) -> str:
    """``"01 July, 2021"`` as shown in an entry header."""

    parsed = parse_date(value, utc=False)
    if parsed is None:
        return _coerce_string(value)
    return f"{parsed:%d} {parsed:%B}, {parsed.year}"


def valid_date(value: Any) -> str:
    """Machine-readable ``YYYY-MM-DD`` for ``<time datetime="...">``."""

    parsed = parse_date(value, utc=False)
    if parsed is None:
        return ""
    return parsed.date().isoformat()


def visible_date(value: Any) -> str:
    """Compact ``MM/YY`` form; unparseable values are returned as written."""

    parsed = parse_date(value, utc=False)
    if parsed is None:
        return _coerce_string(value)
    return f"{parsed.month:02d}/{parsed.year % 100:02d}"
