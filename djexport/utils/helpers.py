"""Utility helper functions for DJ Export."""

import re
from typing import Iterable, Iterator, List, Optional, Sequence, TypeVar

T = TypeVar("T")

_UNSAFE_FILENAME_CHARS = re.compile(r"[^a-zA-Z0-9_\- ]")


def spotify_id_from_uri(uri: Optional[str]) -> Optional[str]:
    """Return the id part of a ``spotify:<kind>:<id>`` URI."""
    if not uri:
        return None
    parts = uri.split(":")
    if len(parts) < 3 or not parts[2]:
        return None
    return parts[2]


def chunked(items: Sequence[T], size: int) -> Iterator[List[T]]:
    """Yield consecutive slices of ``items`` holding at most ``size`` entries."""
    if size < 1:
        raise ValueError(f"Chunk size must be positive, got {size}")
    for i in range(0, len(items), size):
        yield list(items[i : i + size])


def unique(items: Iterable[T]) -> List[T]:
    """Drop duplicates, keeping the first occurrence of each item."""
    return list(dict.fromkeys(items))


def sanitize_filename(name: str) -> str:
    """Strip characters outside ``[a-zA-Z0-9_- ]`` and trim."""
    if not name:
        return ""
    return _UNSAFE_FILENAME_CHARS.sub("", name).strip()
