"""Spotify Web API access for DJ Export."""

import logging
import os
import re
from typing import Any, Dict, List, Optional

from djexport.models import ArtistRef, AudioFeatures, PlaylistItem
from djexport.utils.helpers import spotify_id_from_uri

logger = logging.getLogger("djexport.providers.spotify")

PLAYLIST_URI_PREFIX = "spotify:playlist:"
UNKNOWN_ISRC = "N/A"

_PLAYLIST_URL = re.compile(r"open\.spotify\.com/(?:[a-z-]+/)?playlist/([a-zA-Z0-9]+)")
_BARE_ID = re.compile(r"^[a-zA-Z0-9]{22}$")


def extract_playlist_id(url: str) -> Optional[str]:
    """Extract Spotify playlist ID from URL.

    Supports:
    - https://open.spotify.com/playlist/PLAYLIST_ID
    - https://open.spotify.com/playlist/PLAYLIST_ID?si=...
    - https://open.spotify.com/intl-de/playlist/PLAYLIST_ID
    """
    if not url:
        return None
    match = _PLAYLIST_URL.search(url)
    if match:
        return match.group(1)
    return None


def is_playlist_ref(ref: Optional[str]) -> bool:
    """Whether ``ref`` points at a playlist (URI or open.spotify.com URL)."""
    if not ref:
        return False
    if ref.startswith(PLAYLIST_URI_PREFIX):
        return bool(spotify_id_from_uri(ref))
    return extract_playlist_id(ref) is not None


def normalize_playlist_ref(ref: str) -> str:
    """Turn a playlist URI, URL or bare id into ``spotify:playlist:<id>``."""
    ref = (ref or "").strip()
    if is_playlist_ref(ref):
        if ref.startswith(PLAYLIST_URI_PREFIX):
            return ref
        return f"{PLAYLIST_URI_PREFIX}{extract_playlist_id(ref)}"
    if _BARE_ID.match(ref):
        return f"{PLAYLIST_URI_PREFIX}{ref}"
    raise ValueError(f"Not a Spotify playlist reference: {ref!r}")


def create_spotify_client(config: Dict[str, Any]):
    """Create a read-only Spotify client using the client credentials flow."""
    import spotipy
    from spotipy.oauth2 import SpotifyClientCredentials

    client_id = config.get("client_id") or os.getenv("SPOTIPY_CLIENT_ID")
    client_secret = config.get("client_secret") or os.getenv("SPOTIPY_CLIENT_SECRET")

    if not client_id or not client_secret:
        raise ValueError(
            "Spotify credentials not configured. Set spotify.client_id and "
            "spotify.client_secret, or SPOTIPY_CLIENT_ID and SPOTIPY_CLIENT_SECRET."
        )

    auth = SpotifyClientCredentials(client_id=client_id, client_secret=client_secret)
    return spotipy.Spotify(auth_manager=auth)


def _to_playlist_item(entry: Dict[str, Any]) -> PlaylistItem:
    track = entry.get("track") or {}
    return PlaylistItem(
        uri=track.get("uri"),
        name=track.get("name"),
        album=(track.get("album") or {}).get("name"),
        artists=[
            ArtistRef(uri=artist.get("uri"), name=artist.get("name") or "")
            for artist in track.get("artists") or []
            if artist
        ],
    )


class SpotifyPlaylistProvider:
    """Playlist contents and metadata."""

    def __init__(self, client, market: Optional[str] = None) -> None:
        self._client = client
        self._market = market

    def get_contents(self, playlist_ref: str) -> List[PlaylistItem]:
        """All entries of the playlist in playlist order, following pagination."""
        playlist_id = spotify_id_from_uri(normalize_playlist_ref(playlist_ref))
        items: List[PlaylistItem] = []

        results = self._client.playlist_items(
            playlist_id, additional_types=("track",), market=self._market
        )
        while results:
            for entry in results.get("items", []):
                if entry:
                    items.append(_to_playlist_item(entry))
            if results.get("next"):
                results = self._client.next(results)
            else:
                break

        logger.debug(f"Fetched {len(items)} entries from playlist {playlist_id}")
        return items

    def get_metadata(self, playlist_ref: str) -> Dict[str, Any]:
        playlist_id = spotify_id_from_uri(normalize_playlist_ref(playlist_ref))
        playlist = self._client.playlist(playlist_id, fields="name", market=self._market)
        return {"name": (playlist or {}).get("name")}


class SpotifyMetadataProvider:
    """Bulk track and artist endpoints. Each method is one remote call.

    Ids the API doesn't know come back as ``None`` and are left out of the
    returned mapping.
    """

    def __init__(self, client) -> None:
        self._client = client

    def audio_features(self, track_ids: List[str]) -> Dict[str, AudioFeatures]:
        features: Dict[str, AudioFeatures] = {}
        for entry in self._client.audio_features(track_ids) or []:
            if not entry or not entry.get("id"):
                continue
            features[entry["id"]] = AudioFeatures(
                tempo=entry.get("tempo"),
                key=entry.get("key") if entry.get("key") is not None else -1,
                mode=entry.get("mode") if entry.get("mode") is not None else -1,
                energy=entry.get("energy"),
            )
        return features

    def isrcs(self, track_ids: List[str]) -> Dict[str, str]:
        response = self._client.tracks(track_ids) or {}
        isrcs: Dict[str, str] = {}
        for track in response.get("tracks") or []:
            if track and track.get("id"):
                isrcs[track["id"]] = (track.get("external_ids") or {}).get("isrc") or UNKNOWN_ISRC
        return isrcs

    def artist_genres(self, artist_ids: List[str]) -> Dict[str, List[str]]:
        response = self._client.artists(artist_ids) or {}
        genres: Dict[str, List[str]] = {}
        for artist in response.get("artists") or []:
            if artist and artist.get("id"):
                genres[artist["id"]] = list(artist.get("genres") or [])
        return genres
