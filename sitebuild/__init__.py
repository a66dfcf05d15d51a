"""Content indexing and tag filtering for a personal site."""

from .collection import load_collection, load_entry, static_paths
from .metadata import ContentEntry, extract_entry
from .selection import TagSelection, TagSelectionState
from .tags import build_tag_index
from .views import ListingView, ViewState, build_listing_view

__all__ = [
    "ContentEntry",
    "ListingView",
    "TagSelection",
    "TagSelectionState",
    "ViewState",
    "build_listing_view",
    "build_tag_index",
    "extract_entry",
    "load_collection",
    "load_entry",
    "static_paths",
]
