"""Main DJ Export application class."""

import asyncio
import logging
from typing import Optional

from djexport.config import DJExportConfig
from djexport.core.cache import GenreCache, default_genre_cache
from djexport.core.lookup import BatchedLookup, GenreLookup
from djexport.export.sinks import FileSink, Notifier
from djexport.models import AudioFeatures, ExportOutcome, ExportResult
from djexport.providers import spotify as spotify_provider
from djexport.workflows.export import export_playlist

logger = logging.getLogger("djexport")


class DJExport:
    """Wires the Spotify providers, lookups, cache and sinks together."""

    def __init__(
        self,
        config: Optional[DJExportConfig] = None,
        client=None,
        genre_cache: Optional[GenreCache] = None,
        notifier: Optional[Notifier] = None,
    ):
        """Initialize DJ Export.

        Args:
            config: Loaded configuration; defaults are used when omitted
            client: Spotify client; built from ``config.spotify`` when omitted
            genre_cache: Artist genre cache; an explicit bound from
                ``config.cache`` or else the process-wide cache
            notifier: Sink for user-facing notices
        """
        self.config = config or DJExportConfig.default()

        self.client = client or spotify_provider.create_spotify_client(
            self.config.spotify.model_dump()
        )
        self.playlists = spotify_provider.SpotifyPlaylistProvider(
            self.client, market=self.config.spotify.market
        )
        self.metadata = spotify_provider.SpotifyMetadataProvider(self.client)

        cache_config = self.config.cache
        if genre_cache is not None:
            self.genre_cache = genre_cache
        elif cache_config.genre_max_size is not None or cache_config.genre_ttl is not None:
            self.genre_cache = GenreCache(
                max_size=cache_config.genre_max_size, ttl=cache_config.genre_ttl
            )
        else:
            self.genre_cache = default_genre_cache()

        lookups = self.config.lookups
        self.features_lookup: BatchedLookup[AudioFeatures] = BatchedLookup(
            "audio features",
            self.metadata.audio_features,
            lookups.audio_features_batch_size,
            AudioFeatures,
            delay=lookups.batch_delay,
        )
        self.isrc_lookup: BatchedLookup[str] = BatchedLookup(
            "ISRCs",
            self.metadata.isrcs,
            lookups.isrc_batch_size,
            lambda: spotify_provider.UNKNOWN_ISRC,
            delay=lookups.batch_delay,
        )
        self.genre_lookup = GenreLookup(
            self.metadata.artist_genres,
            self.genre_cache,
            batch_size=lookups.genre_batch_size,
            delay=lookups.batch_delay,
        )

        self.notifier = notifier or Notifier()
        self.file_sink = FileSink(self.config.export.output_dir)

    @classmethod
    def from_config_file(cls, config_path: Optional[str] = None, **kwargs) -> "DJExport":
        """Load ``config_path`` if given, otherwise run on defaults."""
        config = DJExportConfig.from_file(config_path) if config_path else DJExportConfig.default()
        return cls(config, **kwargs)

    def can_export(self, ref: Optional[str]) -> bool:
        """Whether ``ref`` is a playlist URI, open.spotify.com URL or bare playlist id."""
        try:
            spotify_provider.normalize_playlist_ref(ref)
        except ValueError:
            return False
        return True

    async def export_async(self, playlist_ref: str) -> ExportResult:
        return await export_playlist(
            playlist_ref,
            playlist_provider=self.playlists,
            features_lookup=self.features_lookup,
            isrc_lookup=self.isrc_lookup,
            genre_lookup=self.genre_lookup,
            notifier=self.notifier,
            file_sink=self.file_sink,
        )

    def export(self, playlist_ref: str) -> ExportResult:
        """Export one playlist. Non-playlist references are rejected without any calls."""
        try:
            playlist_ref = spotify_provider.normalize_playlist_ref(playlist_ref)
        except ValueError:
            logger.error(f"Refusing to export non-playlist reference: {playlist_ref}")
            self.notifier.notify("Not a playlist.", is_error=True)
            return ExportResult(outcome=ExportOutcome.FAILED, playlist_ref=playlist_ref)
        return asyncio.run(self.export_async(playlist_ref))
