"""Relevance scoring between search terms and catalog records."""

from typing import Callable

from ..models.catalog import CatalogAlbum, CatalogArtist
from ..utils.text import (
    extract_main_artist,
    has_artist_separator,
    normalize_term,
    overlaps,
    significant_words,
)

# Priority ladder, highest matching tier wins
SCORE_MAIN_ARTIST_EXACT = 1000
SCORE_MAIN_ARTIST_CONTAINS_TERM = 800
SCORE_TERM_CONTAINS_MAIN_ARTIST = 600
SCORE_CREDIT_EXACT = 500
SCORE_CREDIT_CONTAINS_TERM = 300
SCORE_TITLE_CONTAINS_TERM = 200
SCORE_WORD_IN_MAIN_ARTIST = 50
SCORE_WORD_IN_TITLE = 25

COLLABORATION_PENALTY = 500

EDITION_EXACT_MATCH_SCORE = 100
EDITION_KEYWORD_SCORE = 10
EDITION_KEYWORDS = ("anniversary", "deluxe", "remaster", "edition", "live")


def is_collaboration(album: CatalogAlbum, term: str) -> bool:
    """Check if the album is credited to a collaboration the term is not the lead of."""
    term_lower = normalize_term(term)
    main_artist = extract_main_artist(normalize_term(album.artist_name))
    if not has_artist_separator(album.artist_name):
        return False
    return not (main_artist == term_lower or term_lower in main_artist)


def relevance_score(album: CatalogAlbum, term: str) -> int:
    """Score how well an album matches a free-text search term.

    Only used for relative ordering; collaborations credited to
    someone else are pushed below the artist's own releases.
    """
    term_lower = normalize_term(term)
    credit = normalize_term(album.artist_name)
    main_artist = extract_main_artist(credit)
    title = normalize_term(album.title)

    if main_artist == term_lower:
        score = SCORE_MAIN_ARTIST_EXACT
    elif term_lower in main_artist:
        score = SCORE_MAIN_ARTIST_CONTAINS_TERM
    elif main_artist and main_artist in term_lower:
        score = SCORE_TERM_CONTAINS_MAIN_ARTIST
    elif credit == term_lower:
        score = SCORE_CREDIT_EXACT
    elif term_lower in credit:
        score = SCORE_CREDIT_CONTAINS_TERM
    elif term_lower in title:
        score = SCORE_TITLE_CONTAINS_TERM
    else:
        score = 0
        for word in significant_words(term):
            if word in main_artist:
                score += SCORE_WORD_IN_MAIN_ARTIST
            if word in title:
                score += SCORE_WORD_IN_TITLE

    if is_collaboration(album, term):
        score -= COLLABORATION_PENALTY
    return score


def rank_artists(
    artists: list[CatalogArtist],
    term: str,
    is_home_script: Callable[[str], bool],
) -> list[CatalogArtist]:
    """Order artists by how directly their name answers the search term.

    Names overlapping the term come first, exact names first among those.
    For home-locale queries, names in the home script win remaining ties.
    The sort is stable.
    """
    term_lower = normalize_term(term)
    home_query = is_home_script(term)

    def rank_key(artist: CatalogArtist) -> tuple[int, int, int]:
        name = artist.name.lower()
        overlapping = overlaps(name, term_lower)
        exact = overlapping and name == term_lower
        home_name = home_query and is_home_script(artist.name)
        return (not overlapping, not exact, not home_name)

    return sorted(artists, key=rank_key)


def edition_score(candidate_title: str | None, target_title: str | None) -> int:
    """Score how closely an album edition's title matches the requested edition.

    Exact titles score 100; otherwise each edition keyword present in
    both titles or absent from both adds 10.
    """
    candidate = (candidate_title or "").lower()
    target = (target_title or "").lower()

    if candidate == target:
        return EDITION_EXACT_MATCH_SCORE

    return sum(
        EDITION_KEYWORD_SCORE
        for keyword in EDITION_KEYWORDS
        if (keyword in candidate) == (keyword in target)
    )
