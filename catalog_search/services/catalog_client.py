"""HTTP client for the external music catalog search/lookup API."""

import logging
import threading
import time

import requests

from ..config import CatalogConfig
from ..errors import UpstreamUnavailable
from ..models.catalog import CatalogResult, parse_results
from ..utils.cache import ThreadSafeCache

logger = logging.getLogger(__name__)

HEADERS = {"Accept": "application/json"}

# Search entity names understood by the catalog
ENTITY_ARTIST = "musicArtist"
ENTITY_ALBUM = "album"
ENTITY_TRACK = "musicTrack"
# Lookup entity names
LOOKUP_SONGS = "song"
LOOKUP_ALBUMS = "album"
LOOKUP_SONGS_AND_ALBUM = "song,album"


class CatalogClient:
    """Client for the catalog's /search and /lookup endpoints.

    Every call targets either the home-region store (country and
    language set) or the global store (neither set).
    """

    def __init__(self, config: CatalogConfig) -> None:
        self._config = config
        self._last_request_time = 0.0
        self._rate_limit_lock = threading.Lock()
        self._response_cache: ThreadSafeCache[tuple, dict] | None = (
            ThreadSafeCache() if config.cache_responses else None
        )

    def _rate_limit(self) -> None:
        """Enforce the configured minimum interval between requests.

        Thread-safe: uses a lock so concurrent fan-out cannot bypass it.
        """
        interval = self._config.min_request_interval
        if interval <= 0:
            return
        with self._rate_limit_lock:
            elapsed = time.time() - self._last_request_time
            if elapsed < interval:
                time.sleep(interval - elapsed)
            self._last_request_time = time.time()

    def _region_params(self, regional: bool, localized: bool = True) -> dict:
        if not regional:
            return {}
        params = {"country": self._config.country}
        if localized:
            params["lang"] = self._config.language
        return params

    def _make_request(self, endpoint: str, params: dict) -> dict:
        """Make an API request, served from the response cache when enabled.

        Failed requests are never cached.
        """
        if self._response_cache is None:
            return self._fetch(endpoint, params)

        cache_key = (endpoint, tuple(sorted(params.items())))
        return self._response_cache.get_or_compute(
            cache_key, lambda: self._fetch(endpoint, params)
        )

    def _fetch(self, endpoint: str, params: dict) -> dict:
        """Make an API request with retry logic.

        Args:
            endpoint: API endpoint ('search' or 'lookup')
            params: Query parameters

        Returns:
            The decoded JSON object

        Raises:
            UpstreamUnavailable: If every attempt failed or the body is not
                a catalog response
        """
        url = f"{self._config.api_url}/{endpoint}"
        max_retries = self._config.max_retries
        last_error: Exception | None = None

        for attempt in range(max_retries):
            self._rate_limit()
            try:
                response = requests.get(
                    url, params=params, headers=HEADERS, timeout=self._config.timeout
                )
                response.raise_for_status()
                data = response.json()
                break
            except (requests.RequestException, ValueError) as e:
                last_error = e
                if attempt < max_retries - 1:
                    sleep_time = 2**attempt  # Exponential backoff: 1, 2, 4 seconds
                    logger.debug(
                        f"Catalog request failed (attempt {attempt + 1}/{max_retries}), "
                        f"retrying in {sleep_time}s: {e}"
                    )
                    time.sleep(sleep_time)
        else:
            logger.warning(f"Catalog {endpoint} request failed for {params}: {last_error}")
            raise UpstreamUnavailable(f"Catalog {endpoint} request failed") from last_error

        if not isinstance(data, dict) or not isinstance(data.get("results"), list):
            logger.warning(f"Malformed catalog {endpoint} response for {params}")
            raise UpstreamUnavailable(f"Malformed catalog {endpoint} response")

        return data

    def search(
        self, term: str, entity: str, limit: int, regional: bool = True
    ) -> list[CatalogResult]:
        """Search the catalog for music entities matching a term."""
        params = {
            "term": term,
            "media": "music",
            "entity": entity,
            "limit": limit,
            **self._region_params(regional),
        }
        data = self._make_request("search", params)
        return parse_results(data["results"])

    def lookup(
        self,
        item_id: int,
        entity: str | None = None,
        limit: int | None = None,
        regional: bool = True,
        localized: bool = True,
    ) -> list[CatalogResult]:
        """Look up a catalog record by id, optionally with related entities."""
        results, _ = self.lookup_counted(item_id, entity, limit, regional, localized)
        return results

    def lookup_counted(
        self,
        item_id: int,
        entity: str | None = None,
        limit: int | None = None,
        regional: bool = True,
        localized: bool = True,
    ) -> tuple[list[CatalogResult], int]:
        """Like lookup(), also returning how many raw records the catalog sent.

        The count includes records the parser drops (music videos, unknown kinds).
        """
        params: dict = {"id": item_id}
        if entity:
            params["entity"] = entity
        if limit is not None:
            params["limit"] = limit
        params.update(self._region_params(regional, localized))

        data = self._make_request("lookup", params)
        return parse_results(data["results"]), len(data["results"])
