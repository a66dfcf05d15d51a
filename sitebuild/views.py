"""Build and render tag-filtered, year-grouped listing views."""

from __future__ import annotations

import dataclasses
import enum
import pathlib
from typing import Sequence

from jinja2 import Environment, FileSystemLoader

from . import dates
from .metadata import ContentEntry
from .selection import TagSelection
from .tags import build_tag_index, entry_tags, format_tags

TEMPLATES_DIR = pathlib.Path(__file__).resolve().parent / "templates"
UNKNOWN_YEAR = "Unknown"


class ViewState(enum.Enum):
    UNFILTERED = "unfiltered"
    FILTERED = "filtered"
    FILTERED_EMPTY = "filtered-empty"


@dataclasses.dataclass(frozen=True, slots=True)
class YearGroup:
    year: str
    entries: tuple[ContentEntry, ...]


@dataclasses.dataclass(frozen=True, slots=True)
class ListingView:
    state: ViewState
    selection: TagSelection
    tag_index: dict[str, int]
    groups: tuple[YearGroup, ...]

    @property
    def visible_count(self) -> int:
        return sum(len(group.entries) for group in self.groups)

    @property
    def show_reset(self) -> bool:
        return not self.selection.is_empty


def filter_entries(entries: Sequence[ContentEntry], selection: TagSelection) -> list[ContentEntry]:
    """Entries carrying every selected tag; all entries when nothing is selected."""

    if selection.is_empty:
        return list(entries)
    wanted = selection.tags
    return [entry for entry in entries if wanted <= entry_tags(entry)]


def group_by_year(entries: Sequence[ContentEntry]) -> list[YearGroup]:
    buckets: dict[int, list[ContentEntry]] = {}
    undated: list[ContentEntry] = []
    for entry in entries:
        year = dates.date_year(entry.date)
        if year is None:
            undated.append(entry)
            continue
        buckets.setdefault(year, []).append(entry)

    groups = [
        YearGroup(f"{year:04d}", tuple(buckets[year]))
        for year in sorted(buckets, reverse=True)
    ]
    if undated:
        groups.append(YearGroup(UNKNOWN_YEAR, tuple(undated)))
    return groups


def build_listing_view(entries: Sequence[ContentEntry], selection: TagSelection) -> ListingView:
    tag_index = build_tag_index(entries)
    visible = filter_entries(entries, selection)

    if selection.is_empty:
        state = ViewState.UNFILTERED
    elif visible:
        state = ViewState.FILTERED
    else:
        state = ViewState.FILTERED_EMPTY

    return ListingView(
        state=state,
        selection=selection,
        tag_index=tag_index,
        groups=tuple(group_by_year(visible)),
    )


def _environment(templates_dir: pathlib.Path | None = None) -> Environment:
    env = Environment(
        loader=FileSystemLoader(str(templates_dir or TEMPLATES_DIR)),
        autoescape=True,
        trim_blocks=True,
        lstrip_blocks=True,
    )
    env.filters["date_preview"] = dates.format_date_preview
    env.filters["valid_date"] = dates.valid_date
    env.filters["format_tags"] = format_tags
    return env


def render_listing(
    view: ListingView,
    *,
    title: str,
    route: str,
    show_tags: bool = True,
    templates_dir: pathlib.Path | None = None,
) -> str:
    template = _environment(templates_dir).get_template("listing.html")
    return template.render(
        view=view,
        title=title,
        route=route.strip("/"),
        show_tags=show_tags,
    )


def render_listing_text(view: ListingView) -> str:
    lines = ["tags:"]
    for tag, count in view.tag_index.items():
        marker = "*" if tag in view.selection else " "
        lines.append(f" {marker} {tag} ({count})")
    if view.show_reset:
        lines.append("")
        lines.append(f"selected: {', '.join(view.selection)}  [reset tags]")

    for group in view.groups:
        lines.append("")
        lines.append(group.year)
        for entry in group.entries:
            lines.append(f"  {dates.format_date_preview(entry.date):<7} {entry.title}  ({entry.slug})")

    if view.state is ViewState.FILTERED_EMPTY:
        lines.append("")
        lines.append("no entries match the selected tags")
    return "\n".join(lines) + "\n"
