"""CSV rendering of enriched playlist tracks.

The output is tuned for DJ software importers: CRLF row terminators, a fixed
column order, and ``N/A`` wherever a value is unknown. Fields are quoted only
when they contain a comma, a double quote or a line break.
"""

import csv
import io
import math
from typing import Any, Iterable, List, Optional

from djexport.core.camelot import transpose
from djexport.models import TrackRecord
from djexport.utils.helpers import sanitize_filename

UNKNOWN = "N/A"
LINE_TERMINATOR = "\r\n"
GENRE_SEPARATOR = "; "
FILENAME_PREFIX = "dj-export-"

HEADERS = [
    "Title",
    "Artist",
    "Album",
    "ISRC",
    "Spotify ID",
    "BPM",
    "Key (Camelot)",
    "Energy",
    "Genres",
]


def field_value(value: Any) -> str:
    """Text of one field before quoting; ``None`` becomes ``N/A``."""
    if value is None:
        return UNKNOWN
    return str(value)


def _number_or_unknown(value: Optional[float]) -> Any:
    if value is None:
        return UNKNOWN
    if isinstance(value, float):
        if math.isnan(value):
            return UNKNOWN
        if value.is_integer():
            return int(value)
    return value


def _genres_field(genres: List[str]) -> str:
    return GENRE_SEPARATOR.join(genres) if genres else UNKNOWN


def to_row(record: TrackRecord) -> List[str]:
    return [
        field_value(record.title),
        field_value(record.artist),
        field_value(record.album),
        field_value(record.isrc),
        field_value(record.spotify_id),
        field_value(_number_or_unknown(record.bpm)),
        field_value(transpose(record.key, record.mode)),
        field_value(_number_or_unknown(record.energy)),
        field_value(_genres_field(record.genres)),
    ]


def encode(records: Iterable[TrackRecord]) -> str:
    """Header plus one row per record, rows joined by CRLF."""
    buffer = io.StringIO(newline="")
    writer = csv.writer(buffer, quoting=csv.QUOTE_MINIMAL, lineterminator=LINE_TERMINATOR)
    writer.writerow(HEADERS)
    writer.writerows(to_row(record) for record in records)
    # No terminator after the last row
    return buffer.getvalue()[: -len(LINE_TERMINATOR)]


def build_filename(name: Optional[str], fallback: str) -> str:
    """``dj-export-<name>.csv`` with the name reduced to filesystem-safe characters."""
    safe = sanitize_filename(name or "") or sanitize_filename(fallback)
    return f"{FILENAME_PREFIX}{safe}.csv"
