"""Artist search with album-catalog verification."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ..config import Config
from ..errors import CatalogError, NotFound, UpstreamUnavailable
from ..models.catalog import CatalogArtist, albums_of, artists_of
from ..processors.filters import is_artist_relevant
from ..processors.merge import dedupe_by_key, merge_with_priority
from ..processors.scoring import rank_artists
from ..utils.concurrency import best_effort_map
from ..utils.text import normalize_term, overlaps
from .catalog_client import ENTITY_ARTIST, LOOKUP_ALBUMS
from .hybrid import fetch_regional_and_global

if TYPE_CHECKING:
    from .albums import AlbumListService
    from .catalog_client import CatalogClient

logger = logging.getLogger(__name__)

# Albums fetched per candidate when checking it has a listable catalog
VERIFY_ALBUM_LIMIT = 50


class ArtistSearchService:
    """Searches artists and keeps only those with at least one listable album."""

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

    def search_artists(self, term: str, limit: int = 20) -> list[CatalogArtist]:
        """Search artists by name.

        Returns an empty list for a blank term or when no candidate
        survives filtering and verification.

        Raises:
            NotFound: If the catalog returned no artist records at all
            UpstreamUnavailable: If the catalog could not be queried
        """
        if not term or not term.strip():
            return []
        term = term.strip()

        try:
            return self._search_artists(term, limit)
        except CatalogError:
            raise
        except Exception as e:
            logger.warning(f"Artist search failed for '{term}': {e}")
            raise UpstreamUnavailable("Artist search failed") from e

    def _search_artists(self, term: str, limit: int) -> list[CatalogArtist]:
        candidate_limit = limit * 2
        regional, global_ = fetch_regional_and_global(
            lambda regional: self._client.search(
                term, ENTITY_ARTIST, candidate_limit, regional=regional
            ),
            self._max_workers,
            "Artist search",
        )

        artists = merge_with_priority(
            artists_of(regional), artists_of(global_), key_of=lambda artist: artist.artist_id
        )
        if not artists:
            raise NotFound(f"No artist results for '{term}'")

        relevant = self._filter_relevant(artists, term, candidate_limit)
        ranked = rank_artists(
            dedupe_by_key(relevant, lambda artist: artist.artist_id),
            term,
            self._catalog_config.contains_home_script,
        )

        verified = self._verify(ranked[:limit])
        if len(verified) < limit and len(ranked) > limit:
            backfill = self._verify(ranked[limit : limit * 2])
            verified.extend(backfill[: limit - len(verified)])

        logger.debug(
            f"Artist search '{term}': {len(artists)} candidates, "
            f"{len(ranked)} relevant, {len(verified)} verified"
        )
        return self._backfill_images(verified)

    def _filter_relevant(
        self, artists: list[CatalogArtist], term: str, candidate_limit: int
    ) -> list[CatalogArtist]:
        """Drop candidates that do not plausibly answer the term.

        Home-locale queries trust the catalog's own ranking; everything
        else must match the artist name textually.
        """
        if not self._catalog_config.contains_home_script(term):
            return [artist for artist in artists if artist.name and is_artist_relevant(artist.name, term)]

        relevant = [artist for artist in artists if artist.name]
        if not relevant:
            relevant = self._regional_name_matches(term, candidate_limit)
        return relevant

    def _regional_name_matches(self, term: str, limit: int) -> list[CatalogArtist]:
        """Retry against the regional store, keeping substring name matches."""
        try:
            results = self._client.search(term, ENTITY_ARTIST, limit, regional=True)
        except CatalogError as e:
            logger.debug(f"Regional artist retry failed for '{term}': {e}")
            return []

        term_lower = normalize_term(term)
        return [
            artist
            for artist in artists_of(results)
            if artist.name and overlaps(artist.name.lower(), term_lower)
        ]

    def _has_albums(self, artist: CatalogArtist) -> bool:
        return bool(self._album_list.list_artist_albums(artist.artist_id, VERIFY_ALBUM_LIMIT))

    def _verify(self, candidates: list[CatalogArtist]) -> list[CatalogArtist]:
        """Keep candidates with a non-empty album list; lookup failures exclude."""
        has_albums = best_effort_map(
            self._has_albums,
            candidates,
            default=lambda artist: False,
            max_workers=self._max_workers,
            description="artist verification",
        )
        return [artist for artist, keep in zip(candidates, has_albums) if keep]

    def artist_image(self, artist_id: int) -> str | None:
        """Derive a profile image from the artist's first album artwork."""
        albums = albums_of(
            self._client.lookup(artist_id, entity=LOOKUP_ALBUMS, limit=1, regional=True)
        )
        return albums[0].high_res_artwork_url if albums else None

    def _with_image(self, artist: CatalogArtist) -> CatalogArtist:
        if artist.image_url:
            return artist
        image_url = self.artist_image(artist.artist_id)
        return artist.with_image(image_url) if image_url else artist

    def _backfill_images(self, artists: list[CatalogArtist]) -> list[CatalogArtist]:
        return best_effort_map(
            self._with_image,
            artists,
            default=lambda artist: artist,
            max_workers=self._max_workers,
            description="artist image lookup",
        )
