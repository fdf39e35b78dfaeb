"""Error types raised by the catalog search services."""


class CatalogError(Exception):
    """Base error for catalog operations, carrying a human-readable message."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InputError(CatalogError, ValueError):
    """Malformed or missing identifier or argument."""


class UpstreamUnavailable(CatalogError):
    """The catalog API could not be reached or returned an unusable response."""


class NotFound(CatalogError):
    """A lookup produced no matching collection or artist after all fallbacks."""
