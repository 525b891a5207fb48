"""Shared fakes for the Spotify client and providers."""

import threading

from djexport.models import ArtistRef, PlaylistItem


def track_item(track_id, name, artists, album="Album"):
    """Playlist item for a track; ``artists`` is a list of (artist_id, name)."""
    return PlaylistItem(
        uri=f"spotify:track:{track_id}",
        name=name,
        album=album,
        artists=[ArtistRef(uri=f"spotify:artist:{aid}", name=aname) for aid, aname in artists],
    )


class FakePlaylistProvider:
    def __init__(self, items, name="Friday Night", fail_metadata=False):
        self.items = items
        self.name = name
        self.fail_metadata = fail_metadata
        self.content_calls = []

    def get_contents(self, playlist_ref):
        self.content_calls.append(playlist_ref)
        return list(self.items)

    def get_metadata(self, playlist_ref):
        if self.fail_metadata:
            raise RuntimeError("metadata unavailable")
        return {"name": self.name}


class FakeSpotifyClient:
    """Stands in for ``spotipy.Spotify`` on the bulk endpoints."""

    def __init__(self, features=None, tracks=None, artists=None, fail=()):
        self.features = features or {}
        self.track_payloads = tracks or {}
        self.artist_payloads = artists or {}
        self.fail = set(fail)
        self.calls = {"audio_features": [], "tracks": [], "artists": []}
        self._lock = threading.Lock()

    def _record(self, endpoint, ids):
        with self._lock:
            index = len(self.calls[endpoint])
            self.calls[endpoint].append(list(ids))
        if (endpoint, index) in self.fail:
            raise RuntimeError(f"{endpoint} failed")

    def audio_features(self, tracks=None):
        self._record("audio_features", tracks)
        return [self.features.get(track_id) for track_id in tracks]

    def tracks(self, tracks, market=None):
        self._record("tracks", tracks)
        return {"tracks": [self.track_payloads.get(track_id) for track_id in tracks]}

    def artists(self, artists):
        self._record("artists", artists)
        return {"artists": [self.artist_payloads.get(artist_id) for artist_id in artists]}
