"""Playlist export workflow: fetch, enrich, join, write CSV."""

import asyncio
import logging
from itertools import chain
from typing import Dict, List, Optional, Sequence

from djexport.core.lookup import BatchedLookup, GenreLookup
from djexport.export.encoder import build_filename, encode
from djexport.export.sinks import FileSink, Notifier
from djexport.models import AudioFeatures, ExportOutcome, ExportResult, PlaylistItem, TrackRecord
from djexport.providers.spotify import normalize_playlist_ref
from djexport.utils.helpers import spotify_id_from_uri, unique

logger = logging.getLogger("djexport.export")


async def fetch_playlist_tracks(playlist_provider, playlist_ref: str) -> List[PlaylistItem]:
    """Playlist entries that are Spotify tracks, in playlist order."""
    items = await asyncio.to_thread(playlist_provider.get_contents, playlist_ref)
    return [item for item in items or [] if item.is_track]


async def fetch_playlist_name(playlist_provider, playlist_ref: str) -> Optional[str]:
    try:
        metadata = await asyncio.to_thread(playlist_provider.get_metadata, playlist_ref)
    except Exception as e:
        logger.debug(f"Could not fetch playlist name for {playlist_ref}: {e}")
        return None
    return (metadata or {}).get("name") or None


def collect_artist_ids(items: Sequence[PlaylistItem]) -> List[str]:
    """Unique artist ids across all items, first-seen order."""
    return unique(chain.from_iterable(item.artist_ids for item in items))


def track_genres(item: PlaylistItem, genre_map: Dict[str, List[str]]) -> List[str]:
    """Genres of all the track's artists, each genre once, first occurrence wins."""
    return unique(
        chain.from_iterable(genre_map.get(artist_id) or [] for artist_id in item.artist_ids)
    )


def build_records(
    items: Sequence[PlaylistItem],
    features: Sequence[AudioFeatures],
    isrc_map: Dict[str, str],
    genre_map: Dict[str, List[str]],
) -> List[TrackRecord]:
    """Join playlist items with lookup results.

    ``features`` is positional: entry ``i`` belongs to ``items[i]``.
    """
    if len(features) != len(items):
        raise ValueError(
            f"Audio features misaligned with playlist: {len(features)} features for {len(items)} tracks"
        )

    records = []
    for item, info in zip(items, features):
        track_id = item.track_id
        genres = track_genres(item, genre_map)
        records.append(
            TrackRecord(
                title=item.name or "N/A",
                artist=", ".join(artist.name for artist in item.artists) or "N/A",
                album=item.album or "N/A",
                isrc=isrc_map.get(track_id) or "N/A",
                spotify_id=track_id,
                bpm=info.tempo,
                key=info.key,
                mode=info.mode,
                energy=info.energy,
                genres=genres,
            )
        )
    return records


async def fetch_audio_features(
    lookup: BatchedLookup[AudioFeatures],
    track_ids: Sequence[str],
) -> List[AudioFeatures]:
    """Audio features for ``track_ids`` in order, one entry per position."""
    return await lookup.alookup_ordered(track_ids)


async def export_playlist(
    playlist_ref: str,
    playlist_provider,
    features_lookup: BatchedLookup[AudioFeatures],
    isrc_lookup: BatchedLookup[str],
    genre_lookup: GenreLookup,
    notifier: Notifier,
    file_sink: FileSink,
) -> ExportResult:
    """Export one playlist to a DJ CSV file.

    Failures are reported through ``notifier`` and the returned outcome,
    never raised.
    """
    notifier.notify("Fetching track data…")
    result = ExportResult(outcome=ExportOutcome.FAILED, playlist_ref=playlist_ref)

    try:
        playlist_ref = normalize_playlist_ref(playlist_ref)
        items, playlist_name = await asyncio.gather(
            fetch_playlist_tracks(playlist_provider, playlist_ref),
            fetch_playlist_name(playlist_provider, playlist_ref),
        )
        result.playlist_ref = playlist_ref
        result.playlist_name = playlist_name

        if not items:
            notifier.notify("No tracks found in playlist.", is_error=True)
            result.outcome = ExportOutcome.EMPTY
            return result

        track_ids = [item.track_id for item in items]
        artist_ids = collect_artist_ids(items)
        logger.debug(
            f"Enriching {len(track_ids)} tracks with {len(artist_ids)} unique artists"
        )

        features, isrc_map, genre_map = await asyncio.gather(
            fetch_audio_features(features_lookup, track_ids),
            isrc_lookup.alookup(track_ids),
            genre_lookup.alookup(artist_ids),
        )

        records = build_records(items, features, isrc_map, genre_map)
        filename = build_filename(playlist_name, spotify_id_from_uri(playlist_ref) or playlist_ref)
        path = file_sink.deliver(encode(records).encode("utf-8"), filename)

        result.outcome = ExportOutcome.EXPORTED
        result.filename = filename
        result.path = str(path)
        result.track_count = len(records)
        notifier.notify(f"Successfully exported {len(records)} tracks!")
        logger.info(f"Exported {len(records)} tracks from {playlist_ref} to {path}")
        return result

    except Exception as e:
        logger.exception(f"Export failed for {playlist_ref}: {e}")
        notifier.notify("Export failed. Check logs for details.", is_error=True)
        result.outcome = ExportOutcome.FAILED
        return result


def run_export(playlist_ref: str, **kwargs) -> ExportResult:
    """Synchronous entry point for :func:`export_playlist`."""
    return asyncio.run(export_playlist(playlist_ref, **kwargs))
