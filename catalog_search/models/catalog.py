"""Catalog data models and response parsing."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Union

from ..utils.text import extract_year, resolve_high_res
from .track import CatalogTrack

logger = logging.getLogger(__name__)


class EditionType(str, Enum):
    """Release format reported by the catalog."""

    ALBUM = "Album"
    EP = "EP"
    SINGLE = "Single"
    UNKNOWN = "unknown"

    @classmethod
    def from_api(cls, collection_type: str | None, title: str | None = None) -> "EditionType":
        """Derive the edition type from collectionType and the title suffix.

        The catalog types most singles and EPs as "Album" and only marks
        them with a " - Single" / " - EP" title suffix.
        """
        kind = (collection_type or "").strip().lower()
        if kind == "single":
            return cls.SINGLE
        if kind == "ep":
            return cls.EP
        if kind != "album":
            return cls.UNKNOWN

        title_lower = (title or "").strip().lower()
        if title_lower.endswith(" - single"):
            return cls.SINGLE
        if title_lower.endswith(" - ep"):
            return cls.EP
        return cls.ALBUM


@dataclass(frozen=True)
class CatalogAlbum:
    """An album (collection) record from the catalog."""

    catalog_id: int
    title: str
    artist_name: str
    artwork_url: str | None = None
    release_date: str | None = None  # ISO timestamp as returned by the catalog
    genre: str = ""
    edition_type: EditionType = EditionType.UNKNOWN
    track_count: int = 0
    artist_id: int | None = None
    copyright: str | None = None
    country: str | None = None

    @property
    def high_res_artwork_url(self) -> str | None:
        """600x600 artwork URL."""
        return resolve_high_res(self.artwork_url)

    @property
    def release_year(self) -> int | None:
        return extract_year(self.release_date)

    def with_title(self, title: str) -> "CatalogAlbum":
        """Return a copy carrying a replacement (e.g. localized) title."""
        return replace(self, title=title)

    def to_dict(self) -> dict:
        """Convert to JSON-serializable dictionary."""
        return {
            "catalog_id": self.catalog_id,
            "title": self.title,
            "artist_name": self.artist_name,
            "artist_id": self.artist_id,
            "artwork_url": self.artwork_url,
            "artwork_url_600": self.high_res_artwork_url,
            "release_date": self.release_date,
            "genre": self.genre,
            "edition_type": self.edition_type.value,
            "track_count": self.track_count,
            "copyright": self.copyright,
            "country": self.country,
        }


@dataclass(frozen=True)
class CatalogArtist:
    """An artist record from the catalog."""

    artist_id: int
    name: str
    genre: str | None = None
    image_url: str | None = None

    def with_image(self, image_url: str) -> "CatalogArtist":
        """Return a copy carrying a derived profile image."""
        return replace(self, image_url=image_url)

    def to_dict(self) -> dict:
        """Convert to JSON-serializable dictionary."""
        return {
            "artist_id": self.artist_id,
            "name": self.name,
            "genre": self.genre,
            "image_url": self.image_url,
        }


@dataclass
class AlbumDetail:
    """An album together with its reconciled track listing."""

    album: CatalogAlbum
    tracks: list[CatalogTrack] = field(default_factory=list)

    def to_dict(self) -> dict:
        """Convert to JSON-serializable dictionary."""
        return {
            "album": self.album.to_dict(),
            "tracks": [track.to_dict() for track in self.tracks],
        }


CatalogResult = Union[CatalogArtist, CatalogAlbum, CatalogTrack]


def _as_int(value: Any) -> int | None:
    """Coerce an id/count field to int, rejecting booleans and junk."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return None
    return None


def _as_str(value: Any) -> str | None:
    return value if isinstance(value, str) else None


def _parse_artist(data: dict) -> CatalogArtist | None:
    artist_id = _as_int(data.get("artistId"))
    if artist_id is None:
        return None
    return CatalogArtist(
        artist_id=artist_id,
        name=_as_str(data.get("artistName")) or "",
        genre=_as_str(data.get("primaryGenreName")),
        image_url=_as_str(data.get("artworkUrl100")),
    )


def _parse_collection(data: dict) -> CatalogAlbum | None:
    catalog_id = _as_int(data.get("collectionId"))
    if catalog_id is None:
        return None
    title = _as_str(data.get("collectionName")) or ""
    return CatalogAlbum(
        catalog_id=catalog_id,
        title=title,
        artist_name=_as_str(data.get("artistName")) or _as_str(data.get("collectionArtistName")) or "",
        artwork_url=_as_str(data.get("artworkUrl100")),
        release_date=_as_str(data.get("releaseDate")),
        genre=_as_str(data.get("primaryGenreName")) or "",
        edition_type=EditionType.from_api(_as_str(data.get("collectionType")), title),
        track_count=_as_int(data.get("trackCount")) or 0,
        artist_id=_as_int(data.get("artistId")),
        copyright=_as_str(data.get("copyright")),
        country=_as_str(data.get("country")),
    )


def _parse_track(data: dict) -> CatalogTrack | None:
    track_id = _as_int(data.get("trackId"))
    if track_id is None:
        return None

    kind = data.get("kind")
    if kind is not None and kind != "song":
        return None  # music videos, podcasts, ...

    # Track records embed their collection's fields (trackCount included)
    parent_album = _parse_collection(data)
    return CatalogTrack(
        track_id=track_id,
        title=_as_str(data.get("trackName")) or "",
        track_number=_as_int(data.get("trackNumber")) or 0,
        duration_millis=_as_int(data.get("trackTimeMillis")) or 0,
        preview_url=_as_str(data.get("previewUrl")),
        parent_album_id=_as_int(data.get("collectionId")),
        parent_album_title=_as_str(data.get("collectionName")),
        disc_number=_as_int(data.get("discNumber")),
        artist_name=_as_str(data.get("artistName")),
        parent_album=parent_album,
    )


_PARSERS = {
    "artist": _parse_artist,
    "collection": _parse_collection,
    "track": _parse_track,
}


def parse_result(data: Any) -> CatalogResult | None:
    """Parse one catalog record, dispatching on its wrapperType.

    Returns None for unknown record kinds and for records missing their id.
    """
    if not isinstance(data, dict):
        return None

    wrapper = data.get("wrapperType")
    parser = _PARSERS.get(wrapper) if isinstance(wrapper, str) else None
    if parser is None:
        logger.debug(f"Skipping catalog record with wrapperType={wrapper!r}")
        return None
    return parser(data)


def parse_results(records: list) -> list[CatalogResult]:
    """Parse a catalog results array, dropping records that do not parse."""
    parsed = (parse_result(record) for record in records)
    return [result for result in parsed if result is not None]


def albums_of(results: list[CatalogResult]) -> list[CatalogAlbum]:
    return [r for r in results if isinstance(r, CatalogAlbum)]


def artists_of(results: list[CatalogResult]) -> list[CatalogArtist]:
    return [r for r in results if isinstance(r, CatalogArtist)]


def tracks_of(results: list[CatalogResult]) -> list[CatalogTrack]:
    return [r for r in results if isinstance(r, CatalogTrack)]
