"""Artist album catalog listing."""

from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING, Any

from ..config import Config
from ..errors import CatalogError, InputError, NotFound, UpstreamUnavailable
from ..models.catalog import CatalogAlbum, albums_of
from ..processors.filters import filter_listable_albums
from ..processors.merge import dedupe_albums, merge_with_priority, sort_by_release_date
from ..utils.concurrency import best_effort_map
from .catalog_client import LOOKUP_ALBUMS
from .hybrid import fetch_regional_and_global

if TYPE_CHECKING:
    from .catalog_client import CatalogClient

logger = logging.getLogger(__name__)


def parse_catalog_id(value: Any, label: str) -> int:
    """Validate a catalog identifier given as int or numeric string.

    Raises:
        InputError: If the value is not a finite whole number
    """
    if isinstance(value, bool):
        raise InputError(f"Invalid {label}: {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, float) and math.isfinite(value) and value.is_integer():
        return int(value)
    if isinstance(value, str) and value.strip().isdigit():
        return int(value.strip())
    raise InputError(f"Invalid {label}: {value!r}")


class AlbumListService:
    """Lists an artist's albums merged from the regional and global stores."""

    def __init__(self, client: CatalogClient, config: Config) -> None:
        self._client = client
        self._catalog_config = config.catalog
        self._max_workers = config.max_workers

    def list_artist_albums(self, artist_id: int | str, limit: int = 50) -> list[CatalogAlbum]:
        """Fetch an artist's listable albums, newest first.

        Args:
            artist_id: Catalog artist id
            limit: Number of collections requested from each store

        Raises:
            InputError: If artist_id is not numeric
            NotFound: If neither store returned any record
            UpstreamUnavailable: If both store requests failed
        """
        artist_id = parse_catalog_id(artist_id, "artist id")

        try:
            return self._list_artist_albums(artist_id, limit)
        except CatalogError:
            raise
        except Exception as e:
            logger.warning(f"Album list lookup failed for artist {artist_id}: {e}")
            raise UpstreamUnavailable("Album list lookup failed") from e

    def _list_artist_albums(self, artist_id: int, limit: int) -> list[CatalogAlbum]:
        regional, global_ = fetch_regional_and_global(
            lambda regional: self._client.lookup(
                artist_id, entity=LOOKUP_ALBUMS, limit=limit, regional=regional
            ),
            self._max_workers,
            "Album list lookup",
        )

        if not regional and not global_:
            raise NotFound(f"Album list unavailable for artist {artist_id}")

        albums = merge_with_priority(
            albums_of(regional), albums_of(global_), key_of=lambda album: album.catalog_id
        )
        albums = dedupe_albums(filter_listable_albums(albums))
        albums = self.localize_titles(albums)

        logger.debug(f"Artist {artist_id}: {len(albums)} listable albums")
        return sort_by_release_date(albums)

    def localized_title(self, catalog_id: int) -> str | None:
        """Look up a collection's title in the home-region store.

        Returns the title only when it is written in the home-locale script.
        """
        albums = albums_of(self._client.lookup(catalog_id, regional=True))
        if not albums:
            return None
        title = albums[0].title
        return title if self._catalog_config.contains_home_script(title) else None

    def _localize(self, album: CatalogAlbum) -> CatalogAlbum:
        if self._catalog_config.contains_home_script(album.title):
            return album
        title = self.localized_title(album.catalog_id)
        return album.with_title(title) if title else album

    def localize_titles(self, albums: list[CatalogAlbum]) -> list[CatalogAlbum]:
        """Replace titles with their home-locale variants where one exists.

        Best-effort: a failed lookup leaves that album's title unchanged.
        """
        return best_effort_map(
            self._localize,
            albums,
            default=lambda album: album,
            max_workers=self._max_workers,
            description="title localization",
        )
