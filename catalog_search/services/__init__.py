"""Service modules for the external music catalog."""

from .catalog_client import CatalogClient
from .albums import AlbumListService
from .album_search import AlbumSearchService
from .artists import ArtistSearchService
from .tracks import TrackReconciliationService

__all__ = [
    "CatalogClient",
    "AlbumListService",
    "AlbumSearchService",
    "ArtistSearchService",
    "TrackReconciliationService",
]
