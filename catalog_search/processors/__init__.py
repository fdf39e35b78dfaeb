"""Pure filtering, scoring and merging logic for catalog results."""

from .filters import filter_listable_albums, is_valid_album, passes_track_rules
from .merge import dedupe_albums, merge_with_priority, sort_by_release_date
from .scoring import edition_score, relevance_score

__all__ = [
    "filter_listable_albums",
    "is_valid_album",
    "passes_track_rules",
    "dedupe_albums",
    "merge_with_priority",
    "sort_by_release_date",
    "edition_score",
    "relevance_score",
]
