"""Tests for catalog_search/services/albums.py."""

import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

from catalog_search.errors import InputError, NotFound, UpstreamUnavailable
from catalog_search.services.albums import AlbumListService, parse_catalog_id
from helpers import FakeCatalogClient, album_record, artist_record, make_config

ARTIST_ID = 100


@pytest.fixture
def client():
    return FakeCatalogClient()


@pytest.fixture
def service(client):
    return AlbumListService(client, make_config())


def add_albums(client, regional, global_=None):
    client.add_lookup(ARTIST_ID, [artist_record(ARTIST_ID, "Artist"), *regional], entity="album")
    if global_ is not None:
        client.add_lookup(ARTIST_ID, global_, entity="album", regional=False)


class TestParseCatalogId:
    """Tests for parse_catalog_id()."""

    @pytest.mark.parametrize("value,expected", [(5, 5), ("42", 42), (" 7 ", 7), (3.0, 3)])
    def test_valid(self, value, expected):
        """Ints, digit strings and whole floats are accepted."""
        assert parse_catalog_id(value, "artist id") == expected

    @pytest.mark.parametrize("value", ["abc", "", None, float("nan"), float("inf"), 1.5, True])
    def test_invalid(self, value):
        """Anything else is an InputError."""
        with pytest.raises(InputError):
            parse_catalog_id(value, "artist id")


class TestListArtistAlbums:
    """Tests for AlbumListService.list_artist_albums()."""

    def test_merges_regional_first(self, client, service):
        """Regional records win; global adds only new ids."""
        add_albums(
            client,
            [album_record(1, "Regional Title", release_date="2020-01-01T00:00:00Z")],
            [
                album_record(1, "Global Title", release_date="2020-01-01T00:00:00Z"),
                album_record(2, "Global Only", release_date="2019-01-01T00:00:00Z"),
            ],
        )
        albums = service.list_artist_albums(ARTIST_ID)
        assert [(a.catalog_id, a.title) for a in albums] == [(1, "Regional Title"), (2, "Global Only")]

    def test_single_reclassification(self, client, service):
        """Singles survive only with five or more tracks."""
        add_albums(client, [
            album_record(1, "Five", collection_type="Single", track_count=5),
            album_record(2, "Four", collection_type="Single", track_count=4),
            album_record(3, "Album Five", collection_type="Album", track_count=5),
        ])
        ids = {a.catalog_id for a in service.list_artist_albums(ARTIST_ID)}
        assert ids == {1, 3}

    def test_invalid_content_dropped(self, client, service):
        """Tributes and comedy albums are dropped."""
        add_albums(client, [
            album_record(1, "Real Album"),
            album_record(2, "A Tribute to Artist"),
            album_record(3, "Stand-up Night", genre="Comedy"),
        ])
        assert [a.catalog_id for a in service.list_artist_albums(ARTIST_ID)] == [1]

    def test_title_artist_dedup(self, client, service):
        """Different ids with the same title and artist collapse to one."""
        add_albums(
            client,
            [album_record(1, "Same Title", artist="Artist")],
            [album_record(2, "same title ", artist="ARTIST")],
        )
        assert [a.catalog_id for a in service.list_artist_albums(ARTIST_ID)] == [1]

    def test_sorted_newest_first(self, client, service):
        """Albums are sorted by release date descending, bad dates last."""
        add_albums(client, [
            album_record(1, "Old", release_date="2001-01-01T00:00:00Z"),
            album_record(2, "Undated", release_date="???"),
            album_record(3, "New", release_date="2022-06-01T00:00:00Z"),
        ])
        assert [a.catalog_id for a in service.list_artist_albums(ARTIST_ID)] == [3, 1, 2]

    def test_localized_title_backfill(self, client, service):
        """Latin titles are replaced with home-script titles when available."""
        add_albums(client, [album_record(1, "Palette"), album_record(2, "Lilac")])
        client.add_lookup(1, [album_record(1, "팔레트")])
        client.add_lookup(2, [album_record(2, "Lilac")])

        titles = {a.catalog_id: a.title for a in service.list_artist_albums(ARTIST_ID)}
        assert titles == {1: "팔레트", 2: "Lilac"}

    def test_localized_title_failure_keeps_original(self, client, service):
        """A failing title lookup leaves the title unchanged."""
        add_albums(client, [album_record(1, "Palette")])
        client.add_lookup(1, UpstreamUnavailable("boom"))
        assert service.list_artist_albums(ARTIST_ID)[0].title == "Palette"

    def test_home_script_titles_not_looked_up(self, client, service):
        """Titles already in the home script are left alone."""
        add_albums(client, [album_record(1, "꽃갈피")])
        service.list_artist_albums(ARTIST_ID)
        assert client.count("lookup", item_id=1) == 0

    def test_one_store_failing_uses_other(self, client, service):
        """If only the global request fails, regional data is used."""
        add_albums(client, [album_record(1, "Album")], UpstreamUnavailable("down"))
        assert [a.catalog_id for a in service.list_artist_albums(ARTIST_ID)] == [1]

    def test_both_stores_failing(self, client, service):
        """Both requests failing is a hard error."""
        client.add_lookup(ARTIST_ID, UpstreamUnavailable("down"), entity="album")
        client.add_lookup(ARTIST_ID, UpstreamUnavailable("down"), entity="album", regional=False)
        with pytest.raises(UpstreamUnavailable):
            service.list_artist_albums(ARTIST_ID)

    def test_no_records_is_not_found(self, service):
        """No records from either store raises NotFound."""
        with pytest.raises(NotFound):
            service.list_artist_albums(ARTIST_ID)

    def test_records_but_nothing_listable(self, client, service):
        """Records that all fail the rules yield an empty list."""
        add_albums(client, [album_record(1, "Tiny", track_count=1)])
        assert service.list_artist_albums(ARTIST_ID) == []

    def test_invalid_artist_id(self, service):
        """Non-numeric ids are rejected before any request."""
        with pytest.raises(InputError):
            service.list_artist_albums("not-a-number")

    def test_limit_passed_to_both_stores(self, client, service):
        """The limit is requested from each store."""
        add_albums(client, [album_record(1, "Album")])
        service.list_artist_albums(ARTIST_ID, limit=20)
        assert client.count("lookup", item_id=ARTIST_ID, entity="album", limit=20, regional=True) == 1
        assert client.count("lookup", item_id=ARTIST_ID, entity="album", limit=20, regional=False) == 1
