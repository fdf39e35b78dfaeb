#!/usr/bin/env python3
"""
Music Catalog Search

Searches artists and albums in the external music catalog, merging the
home-region and global stores, and prints the results as JSON.
"""

import argparse
import json
import logging
import sys
from pathlib import Path

from .config import Config, configure_logging
from .errors import CatalogError
from .models.catalog import AlbumDetail, CatalogAlbum, CatalogArtist
from .services.album_search import AlbumSearchService
from .services.albums import AlbumListService
from .services.artists import ArtistSearchService
from .services.catalog_client import CatalogClient
from .services.tracks import TrackReconciliationService

logger = logging.getLogger(__name__)


class CatalogSearch:
    """Entry point to the catalog search operations.

    Builds one client and the services sharing it from a Config.
    """

    def __init__(self, config: Config, client: CatalogClient | None = None) -> None:
        self._config = config
        self._client = client or CatalogClient(config.catalog)
        self._album_list = AlbumListService(self._client, config)
        self._artists = ArtistSearchService(self._client, self._album_list, config)
        self._album_search = AlbumSearchService(self._client, self._album_list, config)
        self._tracks = TrackReconciliationService(self._client)

    def search_artists(self, term: str, limit: int = 20) -> list[CatalogArtist]:
        return self._artists.search_artists(term, limit)

    def get_artist_albums(self, artist_id: int | str, limit: int = 50) -> list[CatalogAlbum]:
        return self._album_list.list_artist_albums(artist_id, limit)

    def search_albums(self, term: str, limit: int = 20) -> list[CatalogAlbum]:
        return self._album_search.search_albums(term, limit)

    def get_album_detail(self, catalog_id: int | str) -> AlbumDetail:
        return self._tracks.get_album_detail(catalog_id)

    def run(self, command: str, argument: str, limit: int | None = None) -> dict | list:
        """Run one CLI command and return its JSON-serializable result."""
        if command == "artists":
            return [a.to_dict() for a in self.search_artists(argument, limit or 20)]
        if command == "albums":
            return [a.to_dict() for a in self.get_artist_albums(argument, limit or 50)]
        if command == "search":
            return [a.to_dict() for a in self.search_albums(argument, limit or 20)]
        if command == "album":
            return self.get_album_detail(argument).to_dict()
        raise ValueError(f"Unknown command: {command}")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(description="Search the music catalog")
    parser.add_argument(
        "command",
        choices=["artists", "albums", "search", "album"],
        help="artists TERM | albums ARTIST_ID | search TERM | album COLLECTION_ID",
    )
    parser.add_argument("argument", help="Search term or catalog id")
    parser.add_argument(
        "--limit",
        type=int,
        default=None,
        help="Maximum number of results",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Verbose output",
    )
    parser.add_argument(
        "--env",
        type=Path,
        default=None,
        help="Path to a .env file",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = parse_args(argv)

    configure_logging(verbose=args.verbose)

    try:
        config = Config.from_environment(args.env)
        config.validate()
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    search = CatalogSearch(config)
    try:
        result = search.run(args.command, args.argument, args.limit)
    except CatalogError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return 1

    print(json.dumps(result, indent=2, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    sys.exit(main())
