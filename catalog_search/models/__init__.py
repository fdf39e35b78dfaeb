"""Data models for catalog albums, artists and tracks."""

from .track import CatalogTrack
from .catalog import (
    AlbumDetail,
    CatalogAlbum,
    CatalogArtist,
    CatalogResult,
    EditionType,
    parse_result,
    parse_results,
)

__all__ = [
    "CatalogTrack",
    "AlbumDetail",
    "CatalogAlbum",
    "CatalogArtist",
    "CatalogResult",
    "EditionType",
    "parse_result",
    "parse_results",
]
