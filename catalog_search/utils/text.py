"""Text utilities for matching catalog metadata against search terms."""

import math
import re
from datetime import datetime, timezone

# Markers separating the main artist from featured/collaborating artists
ARTIST_SEPARATORS = ("&", "feat.", "featuring", ",")

# Words that distinguish editions of the same album
EDITION_WORDS_PATTERN = re.compile(r"remastered|remaster|deluxe|edition|anniversary|special")

LOW_RES_ARTWORK_PATTERN = re.compile(r"100x100bb\.jpg$")
HIGH_RES_ARTWORK_TOKEN = "600x600bb.jpg"

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def extract_year(date_value: str | int | None) -> int | None:
    """Extract the year as an integer from various date formats.

    Handles:
        - Integer year: 2024 -> 2024
        - ISO date: "2024-01-15" -> 2024
        - Catalog timestamp: "2024-01-15T08:00:00Z" -> 2024

    Returns:
        The year as an integer, or None if extraction fails.
    """
    if date_value is None:
        return None

    if isinstance(date_value, int):
        return date_value

    match = re.match(r"^(\d{4})", date_value.strip())
    return int(match.group(1)) if match else None


def parse_release_date(date_value: str | None) -> datetime:
    """Parse a catalog release date, falling back to the epoch.

    Unparsable or missing dates sort as the earliest possible release.
    """
    if not date_value:
        return EPOCH

    date_str = date_value.strip()
    if date_str.endswith("Z"):
        date_str = date_str[:-1] + "+00:00"

    try:
        parsed = datetime.fromisoformat(date_str)
    except ValueError:
        return EPOCH

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def resolve_high_res(url: str | None) -> str | None:
    """Upgrade a 100x100 artwork URL to its 600x600 variant.

    URLs not ending in the low-resolution token are returned unchanged,
    so applying this twice is the same as applying it once.
    """
    if not url:
        return url
    return LOW_RES_ARTWORK_PATTERN.sub(HIGH_RES_ARTWORK_TOKEN, url)


def normalize_term(text: str | None) -> str:
    """Lowercase and trim a string for case-insensitive comparison."""
    return (text or "").lower().strip()


def _first_separator_index(credit: str) -> int | None:
    lowered = credit.lower()
    positions = [lowered.find(sep) for sep in ARTIST_SEPARATORS]
    positions = [pos for pos in positions if pos >= 0]
    return min(positions) if positions else None


def extract_main_artist(artist_credit: str | None) -> str:
    """Extract the primary artist from a full artist credit.

    Splits on the earliest featuring/collaboration marker.
    Example: "IU feat. SUGA" -> "IU"
    """
    if not artist_credit:
        return ""
    index = _first_separator_index(artist_credit)
    if index is None:
        return artist_credit.strip()
    return artist_credit[:index].strip()


def has_artist_separator(artist_credit: str | None) -> bool:
    """Check if an artist credit names more than one artist."""
    if not artist_credit:
        return False
    return _first_separator_index(artist_credit) is not None


def significant_words(term: str) -> list[str]:
    """Split a search term into lowercase words longer than one character."""
    return [word for word in normalize_term(term).split() if len(word) > 1]


def matches_half_of_words(words: list[str], *haystacks: str) -> bool:
    """Check if at least half (rounded up) of the words occur in any haystack."""
    if not words:
        return True
    matched = sum(1 for word in words if any(word in hay for hay in haystacks))
    return matched >= math.ceil(len(words) / 2)


def overlaps(a: str, b: str) -> bool:
    """Check if either string contains the other."""
    return a in b or b in a


def normalize_edition_title(title: str | None) -> str:
    """Normalize an album title for matching editions of the same release.

    Drops bracketed segments, edition words and non-alphanumerics.

    Examples:
        "Abbey Road (Remastered)" -> "abbeyroad"
        "1989 [Deluxe Edition]" -> "1989"
    """
    normalized = (title or "").lower()
    normalized = re.sub(r"\(.*\)", "", normalized)
    normalized = re.sub(r"\[.*\]", "", normalized)
    normalized = EDITION_WORDS_PATTERN.sub("", normalized)
    normalized = re.sub(r"[^a-z0-9]", "", normalized)
    return normalized.strip()
