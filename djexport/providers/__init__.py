"""Provider adapters for DJ Export.

Playlist contents come from the Spotify Web API; so do the bulk audio
feature, ISRC and artist genre endpoints the export enriches them with.
"""

from djexport.providers.spotify import (
    SpotifyMetadataProvider,
    SpotifyPlaylistProvider,
    create_spotify_client,
    extract_playlist_id,
    is_playlist_ref,
    normalize_playlist_ref,
)

__all__ = [
    "SpotifyMetadataProvider",
    "SpotifyPlaylistProvider",
    "create_spotify_client",
    "extract_playlist_id",
    "is_playlist_ref",
    "normalize_playlist_ref",
]
