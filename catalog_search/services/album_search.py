"""Free-text album search."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Callable

from ..config import Config
from ..errors import CatalogError, UpstreamUnavailable
from ..models.catalog import CatalogAlbum, CatalogResult, albums_of, artists_of, tracks_of
from ..processors.filters import is_relevant_to_search, is_valid_album, passes_track_rules
from ..processors.merge import dedupe_by_key
from ..processors.scoring import relevance_score
from ..utils.concurrency import best_effort_map
from ..utils.text import normalize_term, overlaps
from .catalog_client import ENTITY_ALBUM, ENTITY_ARTIST, ENTITY_TRACK

if TYPE_CHECKING:
    from .albums import AlbumListService
    from .catalog_client import CatalogClient

logger = logging.getLogger(__name__)

SEARCH_FETCH_LIMIT = 100
# Fewer album hits than this triggers a search over tracks
SPARSE_RESULT_THRESHOLD = 10
TRACK_TOP_UP_LIMIT = 30
FALLBACK_ARTIST_LIMIT = 5
FALLBACK_ALBUMS_PER_ARTIST = 20


def _albums_from_tracks(results: list[CatalogResult]) -> list[CatalogAlbum]:
    albums = [track.parent_album for track in tracks_of(results) if track.parent_album]
    return dedupe_by_key(albums, lambda album: album.catalog_id)


def _mentions_term(album: CatalogAlbum, term_lower: str) -> bool:
    title = normalize_term(album.title)
    artist = normalize_term(album.artist_name)
    return bool(title and overlaps(title, term_lower)) or bool(artist and overlaps(artist, term_lower))


def rank_albums(albums: list[CatalogAlbum], term: str) -> list[CatalogAlbum]:
    """Order albums mentioning the term first, then by relevance score."""
    term_lower = normalize_term(term)
    return sorted(
        albums,
        key=lambda album: (not _mentions_term(album, term_lower), -relevance_score(album, term)),
    )


class AlbumSearchService:
    """Searches albums by free text across album and track entities."""

    def __init__(
        self,
        client: CatalogClient,
        album_list: AlbumListService,
        config: Config,
    ) -> None:
        self._client = client
        self._album_list = album_list
        self._catalog_config = config.catalog
        self._max_workers = config.max_workers

    def search_albums(self, term: str, limit: int = 20) -> list[CatalogAlbum]:
        """Search albums matching a free-text term, best matches first.

        Raises:
            UpstreamUnavailable: If the initial album search failed in both stores
        """
        if not term or not term.strip():
            return []
        term = term.strip()

        try:
            return self._search_albums(term, limit)
        except CatalogError:
            raise
        except Exception as e:
            logger.warning(f"Album search failed for '{term}': {e}")
            raise UpstreamUnavailable("Album search failed") from e

    def _search_albums(self, term: str, limit: int) -> list[CatalogAlbum]:
        albums = self._search_entity(term, ENTITY_ALBUM, albums_of)

        if len(albums) < SPARSE_RESULT_THRESHOLD:
            albums.extend(self._track_top_up(term, {album.catalog_id for album in albums}))

        albums = dedupe_by_key(albums, lambda album: album.catalog_id)

        if not albums and self._catalog_config.contains_home_script(term):
            albums = self._albums_by_artist_name(term)

        albums = self._album_list.localize_titles(albums)
        return rank_albums(albums, term)[:limit]

    def _search_entity(
        self,
        term: str,
        entity: str,
        project: Callable[[list[CatalogResult]], list[CatalogAlbum]],
    ) -> list[CatalogAlbum]:
        """Search one entity type, regional store first, global if that is empty.

        Raises:
            UpstreamUnavailable: If both stores failed
        """
        regional_error: CatalogError | None = None
        try:
            albums = project(
                self._client.search(term, entity, SEARCH_FETCH_LIMIT, regional=True)
            )
        except CatalogError as e:
            logger.debug(f"Regional {entity} search failed for '{term}': {e}")
            regional_error = e
            albums = []

        if not albums:
            try:
                albums = project(
                    self._client.search(term, entity, SEARCH_FETCH_LIMIT, regional=False)
                )
            except CatalogError as e:
                if regional_error is not None:
                    raise UpstreamUnavailable("Album search failed") from e
                logger.debug(f"Global {entity} search failed for '{term}': {e}")
                albums = []

        return [
            album
            for album in albums
            if passes_track_rules(album)
            and is_valid_album(album)
            and is_relevant_to_search(album, term)
        ]

    def _track_top_up(self, term: str, known_ids: set[int]) -> list[CatalogAlbum]:
        """Recover albums the album search missed through their indexed tracks."""
        try:
            found = self._search_entity(term, ENTITY_TRACK, _albums_from_tracks)
        except CatalogError as e:
            logger.debug(f"Track search top-up failed for '{term}': {e}")
            return []

        extra = [album for album in found if album.catalog_id not in known_ids]
        return extra[:TRACK_TOP_UP_LIMIT]

    def _albums_by_artist_name(self, term: str) -> list[CatalogAlbum]:
        """Last resort: enumerate the catalogs of artists whose name matches the term."""
        try:
            results = self._client.search(
                term, ENTITY_ARTIST, FALLBACK_ARTIST_LIMIT * 4, regional=True
            )
        except CatalogError as e:
            logger.debug(f"Artist fallback search failed for '{term}': {e}")
            return []

        term_lower = normalize_term(term)
        matches = [
            artist
            for artist in artists_of(results)
            if artist.name and overlaps(artist.name.lower(), term_lower)
        ][:FALLBACK_ARTIST_LIMIT]

        catalogs = best_effort_map(
            lambda artist: self._album_list.list_artist_albums(
                artist.artist_id, FALLBACK_ALBUMS_PER_ARTIST
            ),
            matches,
            default=lambda artist: [],
            max_workers=self._max_workers,
            description="artist album fallback",
        )
        albums = [album for catalog in catalogs for album in catalog]
        return dedupe_by_key(albums, lambda album: album.catalog_id)
