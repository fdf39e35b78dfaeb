"""Unit tests for catalog_search/utils/text.py."""

import sys
from datetime import datetime, timezone
from pathlib import Path

import pytest

# Add parent dir to path so catalog_search is importable as a package
sys.path.insert(0, str(Path(__file__).parent.parent))

from catalog_search.utils.text import (
    EPOCH,
    extract_main_artist,
    extract_year,
    has_artist_separator,
    matches_half_of_words,
    normalize_edition_title,
    parse_release_date,
    resolve_high_res,
    significant_words,
)


class TestExtractYear:
    """Tests for extract_year() function."""

    def test_integer_year(self):
        """Integer year should be returned as-is."""
        assert extract_year(2024) == 2024

    def test_catalog_timestamp(self):
        """Catalog timestamps should extract the year."""
        assert extract_year("2014-09-19T07:00:00Z") == 2014

    def test_none_and_garbage(self):
        """None and non-date strings should return None."""
        assert extract_year(None) is None
        assert extract_year("unknown") is None


class TestParseReleaseDate:
    """Tests for parse_release_date() function."""

    def test_zulu_timestamp(self):
        """Trailing Z should parse as UTC."""
        assert parse_release_date("2020-03-01T08:00:00Z") == datetime(
            2020, 3, 1, 8, tzinfo=timezone.utc
        )

    def test_plain_date(self):
        """Plain ISO dates should parse as UTC midnight."""
        assert parse_release_date("2019-12-31") == datetime(2019, 12, 31, tzinfo=timezone.utc)

    @pytest.mark.parametrize("value", [None, "", "not a date", "2020-13-45"])
    def test_unparsable_is_epoch(self, value):
        """Missing or unparsable dates fall back to the epoch."""
        assert parse_release_date(value) == EPOCH


class TestResolveHighRes:
    """Tests for resolve_high_res() function."""

    def test_upgrades_low_res(self):
        """100x100bb.jpg suffix should become 600x600bb.jpg."""
        url = "https://is1.example.com/image/thumb/abc/100x100bb.jpg"
        assert resolve_high_res(url) == "https://is1.example.com/image/thumb/abc/600x600bb.jpg"

    def test_none_passes_through(self):
        """None should return None without error."""
        assert resolve_high_res(None) is None

    def test_other_urls_unchanged(self):
        """URLs without the low-res suffix are returned unchanged."""
        url = "https://is1.example.com/image/thumb/abc/300x300bb.png"
        assert resolve_high_res(url) == url

    def test_idempotent(self):
        """Re-applying to an upgraded URL should not change it."""
        url = "https://is1.example.com/a/100x100bb.jpg"
        once = resolve_high_res(url)
        assert resolve_high_res(once) == once


class TestExtractMainArtist:
    """Tests for extract_main_artist() function."""

    def test_single_artist(self):
        """A plain credit is returned trimmed."""
        assert extract_main_artist("  Prince ") == "Prince"

    def test_featuring_markers(self):
        """Featured artists should be stripped."""
        assert extract_main_artist("IU feat. SUGA") == "IU"
        assert extract_main_artist("Drake featuring Rihanna") == "Drake"

    def test_ampersand_and_comma(self):
        """Collaboration separators should split the credit."""
        assert extract_main_artist("Simon & Garfunkel") == "Simon"
        assert extract_main_artist("Beyonce, Jay-Z") == "Beyonce"

    def test_earliest_separator_wins(self):
        """The first separator in the string decides the split."""
        assert extract_main_artist("A, B & C") == "A"
        assert extract_main_artist("A & B, C") == "A"

    def test_case_insensitive_marker(self):
        """Markers should match regardless of case."""
        assert extract_main_artist("Someone FEAT. Other") == "Someone"

    def test_empty(self):
        """Empty credit returns empty string."""
        assert extract_main_artist("") == ""
        assert extract_main_artist(None) == ""

    def test_has_separator(self):
        """Multi-artist credits should be detected."""
        assert has_artist_separator("A & B") is True
        assert has_artist_separator("Prince") is False


class TestWordMatching:
    """Tests for significant_words() and matches_half_of_words()."""

    def test_short_words_dropped(self):
        """Single-character words are not significant."""
        assert significant_words("a Tribe Called Quest") == ["tribe", "called", "quest"]

    def test_half_rounded_up(self):
        """At least half of the words, rounded up, must match."""
        words = ["tribe", "called", "quest"]
        assert matches_half_of_words(words, "a tribe called red") is True
        assert matches_half_of_words(words, "tribe") is False

    def test_no_words_matches(self):
        """A term without significant words matches everything."""
        assert matches_half_of_words([], "anything") is True


class TestNormalizeEditionTitle:
    """Tests for normalize_edition_title() function."""

    def test_parenthetical_stripped(self):
        """Bracketed segments should be removed."""
        assert normalize_edition_title("Abbey Road (Remastered)") == "abbeyroad"
        assert normalize_edition_title("1989 [Deluxe Edition]") == "1989"

    def test_edition_words_stripped(self):
        """Edition words outside brackets should also be removed."""
        assert normalize_edition_title("Rumours Deluxe Edition") == "rumours"
        assert normalize_edition_title("OK Computer - 20th Anniversary") == "okcomputer20th"

    def test_punctuation_stripped(self):
        """Non-alphanumerics should be removed."""
        assert normalize_edition_title("Sgt. Pepper's Lonely Hearts") == "sgtpepperslonelyhearts"

    def test_none(self):
        """None normalizes to an empty string."""
        assert normalize_edition_title(None) == ""
