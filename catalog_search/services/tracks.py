"""Album detail lookup with cross-edition track reconciliation."""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import TYPE_CHECKING, Any

from ..errors import CatalogError, InputError, NotFound, UpstreamUnavailable
from ..models.catalog import AlbumDetail, CatalogAlbum, CatalogResult, albums_of, tracks_of
from ..models.track import CatalogTrack
from ..processors.scoring import edition_score
from ..utils.text import normalize_edition_title
from .albums import parse_catalog_id
from .catalog_client import LOOKUP_SONGS, LOOKUP_SONGS_AND_ALBUM

if TYPE_CHECKING:
    from .catalog_client import CatalogClient

logger = logging.getLogger(__name__)

LOOKUP_LIMIT = 200


def is_same_release(track: CatalogTrack, target_id: int, target_title: str) -> bool:
    """Check if a track belongs to the target album or another edition of it.

    Args:
        track: Candidate track from the artist's catalog
        target_id: Catalog id of the requested album
        target_title: Normalized title of the requested album
    """
    if track.parent_album_id == target_id:
        return True

    title = normalize_edition_title(track.parent_album_title)
    if not title or not target_title:
        return False
    return title == target_title or target_title in title or title in target_title


def dedupe_by_track_number(tracks: list[CatalogTrack], target_title: str) -> list[CatalogTrack]:
    """Keep one track per track number, preferring the closest edition.

    Ties keep the track seen first.
    """
    best: dict[int, CatalogTrack] = {}
    for track in tracks:
        current = best.get(track.track_number)
        if current is None:
            best[track.track_number] = track
        elif edition_score(track.parent_album_title, target_title) > edition_score(
            current.parent_album_title, target_title
        ):
            best[track.track_number] = track
    return list(best.values())


class TrackReconciliationService:
    """Fetches an album's track listing, recovering tracks filed under other editions."""

    def __init__(self, client: CatalogClient) -> None:
        self._client = client

    def get_album_detail(self, catalog_id: Any) -> AlbumDetail:
        """Get an album and its reconciled track listing.

        Raises:
            InputError: If catalog_id is not numeric
            NotFound: If no collection record exists for the id
            UpstreamUnavailable: If the catalog could not be queried
        """
        try:
            catalog_id = parse_catalog_id(catalog_id, "album id")
        except InputError:
            raise InputError("Invalid album id") from None

        try:
            return self._get_album_detail(catalog_id)
        except CatalogError:
            raise
        except Exception as e:
            logger.warning(f"Album detail lookup failed for {catalog_id}: {e}")
            raise UpstreamUnavailable("Album detail lookup failed") from e

    def _lookup(self, catalog_id: int, regional: bool) -> tuple[list[CatalogResult], int]:
        # The regional store keeps the store's own titles
        return self._client.lookup_counted(
            catalog_id,
            entity=LOOKUP_SONGS_AND_ALBUM,
            limit=LOOKUP_LIMIT,
            regional=regional,
            localized=False,
        )

    def _get_album_detail(self, catalog_id: int) -> AlbumDetail:
        regional_error: CatalogError | None = None
        try:
            results, _ = self._lookup(catalog_id, regional=True)
        except CatalogError as e:
            logger.debug(f"Regional album lookup failed for {catalog_id}: {e}")
            regional_error = e
            results = []

        collection = next(iter(albums_of(results)), None)
        tracks = tracks_of(results)

        if not tracks:
            try:
                global_results, global_count = self._lookup(catalog_id, regional=False)
            except CatalogError as e:
                if regional_error is not None:
                    raise UpstreamUnavailable("Album detail lookup failed") from e
                logger.debug(f"Global album lookup failed for {catalog_id}: {e}")
                global_results, global_count = [], 0

            # A lone record is no better than what we have; counted before parsing
            if global_count > 1:
                collection = next(iter(albums_of(global_results)), None) or collection
                tracks = tracks_of(global_results)

        if collection is None:
            raise NotFound("Album not found")

        if len(tracks) < (collection.track_count or 1) and collection.artist_id:
            tracks = self._reconcile(collection, tracks)

        tracks = sorted(
            (track for track in tracks if track.title), key=lambda track: track.track_number
        )

        album = replace(
            collection,
            title=collection.title or "Unknown Album",
            artist_name=collection.artist_name or "Unknown Artist",
            track_count=collection.track_count or len(tracks),
        )
        logger.debug(f"Album {catalog_id}: {len(tracks)} tracks")
        return AlbumDetail(album=album, tracks=tracks)

    def _reconcile(self, collection: CatalogAlbum, tracks: list[CatalogTrack]) -> list[CatalogTrack]:
        """Pool tracks from equivalent editions in the artist's full song catalog.

        Best-effort: if the artist catalog cannot be fetched the tracks
        already found are returned unchanged.
        """
        try:
            artist_songs = tracks_of(
                self._client.lookup(
                    collection.artist_id,
                    entity=LOOKUP_SONGS,
                    limit=LOOKUP_LIMIT,
                    regional=False,
                )
            )
        except CatalogError as e:
            logger.debug(f"Artist song catalog unavailable for {collection.artist_id}: {e}")
            return tracks

        target_title = normalize_edition_title(collection.title)
        pooled = [
            track
            for track in artist_songs
            if is_same_release(track, collection.catalog_id, target_title)
        ]
        if not pooled:
            return tracks

        logger.debug(
            f"Pooled {len(pooled)} tracks from editions of '{collection.title}' "
            f"({len(tracks)} found directly)"
        )
        return dedupe_by_track_number(tracks + pooled, collection.title)
