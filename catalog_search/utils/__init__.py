"""Utility modules for caching, concurrency and text matching."""

from .cache import ThreadSafeCache
from .concurrency import best_effort_map, run_concurrently
from .text import extract_main_artist, normalize_edition_title, resolve_high_res

__all__ = [
    "ThreadSafeCache",
    "best_effort_map",
    "run_concurrently",
    "extract_main_artist",
    "normalize_edition_title",
    "resolve_high_res",
]
