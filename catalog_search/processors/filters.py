"""Content validity and relevance filters for catalog results."""

import re

from ..models.catalog import CatalogAlbum, EditionType
from ..utils.text import (
    extract_main_artist,
    matches_half_of_words,
    normalize_term,
    significant_words,
)

# Title fragments marking unofficial or derivative releases
TITLE_DENYLIST = (
    "tribute",
    "cover",
    "parody",
    "bootleg",
    "unofficial",
    "fan made",
    "fan-made",
    "fanmade",
    "leak",
    "instrumental",
)

DENIED_GENRES = {"comedy"}

# "Abbey Road (Remastered)", "Kind of Blue - Remastered"
REMASTERED_SUFFIX_PATTERN = re.compile(r"\bremastered[\s)\]]*$")

SINGLE_MARKER = "- single"
SINGLE_SUFFIX = " single"

# Collections with fewer tracks are never listed
MIN_TRACK_COUNT = 2

# Singles with at least this many tracks are treated as EPs/albums
SINGLE_AS_ALBUM_TRACK_COUNT = 5


def is_valid_album(album: CatalogAlbum) -> bool:
    """Check that an album is not unofficial, derivative or comedy content.

    Never raises; missing fields count as empty.
    """
    title = normalize_term(album.title)

    if any(keyword in title for keyword in TITLE_DENYLIST):
        return False
    if REMASTERED_SUFFIX_PATTERN.search(title):
        return False
    if album.track_count < SINGLE_AS_ALBUM_TRACK_COUNT and (
        SINGLE_MARKER in title or title.endswith(SINGLE_SUFFIX)
    ):
        return False
    if normalize_term(album.genre) in DENIED_GENRES:
        return False
    return True


def passes_track_rules(album: CatalogAlbum) -> bool:
    """Apply the track-count rules for album listings.

    A single is kept only when it carries enough tracks to count as an EP.
    """
    if album.track_count < MIN_TRACK_COUNT:
        return False
    if album.edition_type == EditionType.SINGLE and album.track_count < SINGLE_AS_ALBUM_TRACK_COUNT:
        return False
    return True


def filter_listable_albums(albums: list[CatalogAlbum]) -> list[CatalogAlbum]:
    """Keep albums passing both the track-count rules and the validity filter."""
    return [album for album in albums if passes_track_rules(album) and is_valid_album(album)]


def is_artist_relevant(artist_name: str, term: str) -> bool:
    """Check if an artist name matches a search term.

    Matches on substring, or when at least half of the term's
    significant words appear in the name.
    """
    term_lower = normalize_term(term)
    name_lower = (artist_name or "").lower()

    if term_lower in name_lower:
        return True
    return matches_half_of_words(significant_words(term), name_lower)


def is_relevant_to_search(album: CatalogAlbum, term: str) -> bool:
    """Looser relevance check for free-text album search."""
    term_lower = normalize_term(term)
    credit = normalize_term(album.artist_name)
    main_artist = extract_main_artist(credit)
    title = normalize_term(album.title)

    if term_lower in main_artist or term_lower in title or term_lower in credit:
        return True
    return matches_half_of_words(significant_words(term), main_artist, title)
