"""Merging and deduplication of regional and global catalog results."""

from typing import Callable, Hashable, TypeVar

from ..models.catalog import CatalogAlbum
from ..utils.text import normalize_term, parse_release_date

T = TypeVar("T")


def _is_empty_key(key: Hashable | None) -> bool:
    return key is None or key == ""


def merge_with_priority(
    primary: list[T],
    secondary: list[T],
    key_of: Callable[[T], Hashable | None],
) -> list[T]:
    """Merge two result lists, giving the primary list priority.

    Every primary item is kept. A secondary item is appended only when
    its key is non-empty and not already taken by a primary item or an
    earlier secondary item. Order within each list is preserved.
    """
    seen = {key for key in map(key_of, primary) if not _is_empty_key(key)}
    merged = list(primary)

    for item in secondary:
        key = key_of(item)
        if _is_empty_key(key) or key in seen:
            continue
        seen.add(key)
        merged.append(item)

    return merged


def dedupe_by_key(items: list[T], key_of: Callable[[T], Hashable]) -> list[T]:
    """Drop later items whose key was already seen."""
    seen: set = set()
    unique = []
    for item in items:
        key = key_of(item)
        if key in seen:
            continue
        seen.add(key)
        unique.append(item)
    return unique


def album_identity_key(album: CatalogAlbum) -> tuple[str, str]:
    """Case-insensitive (title, artist) pair identifying a displayed album."""
    return normalize_term(album.title), normalize_term(album.artist_name)


def dedupe_albums(albums: list[CatalogAlbum]) -> list[CatalogAlbum]:
    """Drop albums repeating an already-kept catalog id or (title, artist) pair.

    Editions with different ids but identical display title and artist
    collapse to the first one seen.
    """
    seen_ids: set[int] = set()
    seen_pairs: set[tuple[str, str]] = set()
    unique = []

    for album in albums:
        pair = album_identity_key(album)
        if album.catalog_id in seen_ids or pair in seen_pairs:
            continue
        seen_ids.add(album.catalog_id)
        seen_pairs.add(pair)
        unique.append(album)

    return unique


def sort_by_release_date(albums: list[CatalogAlbum]) -> list[CatalogAlbum]:
    """Sort newest first; missing or unparsable dates sort last."""
    return sorted(albums, key=lambda album: parse_release_date(album.release_date), reverse=True)
