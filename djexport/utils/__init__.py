"""Utility functions for DJ Export."""

from djexport.utils.helpers import (
    chunked,
    sanitize_filename,
    spotify_id_from_uri,
    unique,
)

__all__ = [
    "chunked",
    "sanitize_filename",
    "spotify_id_from_uri",
    "unique",
]
