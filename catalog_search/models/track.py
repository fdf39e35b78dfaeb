"""Track data models."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .catalog import CatalogAlbum


@dataclass
class CatalogTrack:
    """A single track record from the catalog."""

    track_id: int
    title: str
    track_number: int
    duration_millis: int = 0
    preview_url: str | None = None
    parent_album_id: int | None = None
    parent_album_title: str | None = None
    disc_number: int | None = None
    artist_name: str | None = None
    # Collection fields embedded in the track record, used to recover albums
    # from track searches
    parent_album: CatalogAlbum | None = field(default=None, repr=False, compare=False)

    def to_dict(self) -> dict:
        """Convert to JSON-serializable dictionary."""
        return {
            "track_id": self.track_id,
            "title": self.title,
            "track_number": self.track_number,
            "duration_millis": self.duration_millis,
            "preview_url": self.preview_url,
            "parent_album_id": self.parent_album_id,
            "parent_album_title": self.parent_album_title,
            "disc_number": self.disc_number,
        }
