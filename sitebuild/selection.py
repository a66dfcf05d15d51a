"""Active tag filter for one listing page session.

:class:`TagSelection` is an immutable snapshot; every mutation returns a new
one so views can detect changes by identity.  :class:`TagSelectionState` owns
the current snapshot and is created once per page session and handed to the
views that need it.
"""

from __future__ import annotations

import dataclasses
from typing import Iterable, Iterator


@dataclasses.dataclass(frozen=True, slots=True)
class TagSelection:
    tags: frozenset[str] = frozenset()

    @classmethod
    def of(cls, tags: Iterable[str]) -> "TagSelection":
        return cls(frozenset(tags))

    def toggle(self, tag: str) -> "TagSelection":
        if tag in self.tags:
            return TagSelection(self.tags - {tag})
        return TagSelection(self.tags | {tag})

    def reset(self) -> "TagSelection":
        selection = self
        for tag in self.tags:
            selection = selection.toggle(tag)
        return selection

    @property
    def is_empty(self) -> bool:
        return not self.tags

    def __contains__(self, tag: object) -> bool:
        return tag in self.tags

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self.tags))

    def __len__(self) -> int:
        return len(self.tags)


class TagSelectionState:
    """Mutable holder for the current :class:`TagSelection`."""

    def __init__(self, initial: TagSelection | None = None) -> None:
        self._selection = initial or TagSelection()

    @property
    def selection(self) -> TagSelection:
        return self._selection

    def toggle(self, tag: str) -> TagSelection:
        self._selection = self._selection.toggle(tag)
        return self._selection

    def reset(self) -> TagSelection:
        self._selection = self._selection.reset()
        return self._selection

    def focus(self, tag: str) -> TagSelection:
        """Clear the selection and select only ``tag``.

        Used when a tag is clicked on an entry page: the visitor lands on the
        listing filtered by that tag alone.
        """

        self.reset()
        return self.toggle(tag)

    def is_selected(self, tag: str) -> bool:
        return tag in self._selection
