"""Data models for DJ Export."""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from djexport.utils.helpers import spotify_id_from_uri

TRACK_URI_PREFIX = "spotify:track:"


class ArtistRef(BaseModel):
    """Artist as it appears on a playlist item."""

    uri: Optional[str] = None
    name: str = ""

    @property
    def artist_id(self) -> Optional[str]:
        return spotify_id_from_uri(self.uri)


class PlaylistItem(BaseModel):
    """One entry of a playlist's contents."""

    uri: Optional[str] = None
    name: Optional[str] = None
    album: Optional[str] = None
    artists: List[ArtistRef] = Field(default_factory=list)

    @property
    def is_track(self) -> bool:
        """Whether the item is a Spotify track (episodes and local files are not)."""
        return bool(self.uri) and self.uri.startswith(TRACK_URI_PREFIX) and self.track_id is not None

    @property
    def track_id(self) -> Optional[str]:
        return spotify_id_from_uri(self.uri)

    @property
    def artist_ids(self) -> List[str]:
        return [artist.artist_id for artist in self.artists if artist.artist_id]


class AudioFeatures(BaseModel):
    """Tempo, key, mode and energy of a track.

    The defaults are the unknown values: tempo and energy ``None``, key and
    mode ``-1``.
    """

    tempo: Optional[float] = None
    key: int = -1
    mode: int = -1
    energy: Optional[float] = None


class TrackRecord(BaseModel):
    """A fully enriched playlist track, ready for CSV export."""

    model_config = ConfigDict(frozen=True)

    title: str = "N/A"
    artist: str = "N/A"
    album: str = "N/A"
    isrc: str = "N/A"
    spotify_id: str
    bpm: Optional[float] = None
    key: int = -1
    mode: int = -1
    energy: Optional[float] = None
    genres: List[str] = Field(default_factory=list)

    def __str__(self) -> str:
        """String representation of track."""
        return f"{self.artist} - {self.title}"


class ExportOutcome(str, Enum):
    EXPORTED = "exported"
    EMPTY = "empty"
    FAILED = "failed"


class ExportResult(BaseModel):
    """Summary of one export attempt."""

    outcome: ExportOutcome
    playlist_ref: str
    playlist_name: Optional[str] = None
    filename: Optional[str] = None
    path: Optional[str] = None
    track_count: int = 0

    @property
    def ok(self) -> bool:
        return self.outcome is not ExportOutcome.FAILED
