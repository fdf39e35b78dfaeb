"""Raw catalog records and a fake catalog client for service tests."""

import sys
import threading
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from catalog_search.config import CatalogConfig, Config
from catalog_search.models.catalog import parse_results


def make_config(**catalog_overrides) -> Config:
    """Config with no throttling and a small pool."""
    return Config(catalog=CatalogConfig(**catalog_overrides), max_workers=4)


def artist_record(artist_id, name, **extra) -> dict:
    return {"wrapperType": "artist", "artistType": "Artist", "artistId": artist_id, "artistName": name, **extra}


def album_record(
    collection_id,
    title,
    artist="Artist",
    track_count=10,
    release_date="2020-01-01T08:00:00Z",
    genre="Pop",
    collection_type="Album",
    **extra,
) -> dict:
    return {
        "wrapperType": "collection",
        "collectionType": collection_type,
        "collectionId": collection_id,
        "collectionName": title,
        "artistName": artist,
        "artworkUrl100": f"https://is1.example.com/{collection_id}/100x100bb.jpg",
        "releaseDate": release_date,
        "primaryGenreName": genre,
        "trackCount": track_count,
        **extra,
    }


def track_record(
    track_id,
    title,
    track_number,
    collection_id,
    collection_name,
    artist="Artist",
    track_count=10,
    **extra,
) -> dict:
    return {
        "wrapperType": "track",
        "kind": "song",
        "trackId": track_id,
        "trackName": title,
        "trackNumber": track_number,
        "trackTimeMillis": 200000,
        "collectionId": collection_id,
        "collectionName": collection_name,
        "artistName": artist,
        "trackCount": track_count,
        "releaseDate": "2020-01-01T08:00:00Z",
        "primaryGenreName": "Pop",
        **extra,
    }


class FakeCatalogClient:
    """In-memory stand-in for CatalogClient.

    Responses are registered as raw records (or an exception to raise)
    and parsed exactly like real responses. Unregistered calls return [].
    """

    def __init__(self) -> None:
        self._searches: dict[tuple, list | Exception] = {}
        self._lookups: dict[tuple, list | Exception] = {}
        self.calls: list[tuple] = []
        self._lock = threading.Lock()

    def add_search(self, term, entity, records, regional=True) -> None:
        self._searches[(term, entity, regional)] = records

    def add_lookup(self, item_id, records, entity=None, regional=True) -> None:
        self._lookups[(item_id, entity, regional)] = records

    def _respond(self, response):
        if isinstance(response, Exception):
            raise response
        return parse_results(response or [])

    def search(self, term, entity, limit, regional=True):
        with self._lock:
            self.calls.append(("search", term, entity, limit, regional))
        return self._respond(self._searches.get((term, entity, regional)))

    def lookup(self, item_id, entity=None, limit=None, regional=True, localized=True):
        results, _ = self.lookup_counted(item_id, entity, limit, regional, localized)
        return results

    def lookup_counted(self, item_id, entity=None, limit=None, regional=True, localized=True):
        with self._lock:
            self.calls.append(("lookup", item_id, entity, limit, regional))
        response = self._lookups.get((item_id, entity, regional))
        return self._respond(response), len(response or [])

    def count(self, kind, **criteria) -> int:
        """Count recorded calls of a kind matching the given fields."""
        names = {
            "search": ("term", "entity", "limit", "regional"),
            "lookup": ("item_id", "entity", "limit", "regional"),
        }[kind]
        total = 0
        for call in self.calls:
            if call[0] != kind:
                continue
            fields = dict(zip(names, call[1:]))
            if all(fields.get(k) == v for k, v in criteria.items()):
                total += 1
        return total
