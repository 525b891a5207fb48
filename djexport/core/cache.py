"""Artist genre cache for DJ Export."""

import logging
import sys
import time
from typing import Callable, Dict, Iterable, List, MutableMapping, Optional

from cachetools import LRUCache, TTLCache

logger = logging.getLogger("djexport.cache")


class GenreCache:
    """In-memory artist id -> genre list cache.

    Without bounds the cache only ever grows. ``max_size`` switches to
    least-recently-used eviction and ``ttl`` (seconds) to time-based expiry.
    """

    def __init__(
        self,
        max_size: Optional[int] = None,
        ttl: Optional[float] = None,
        timer: Callable[[], float] = time.monotonic,
    ):
        self.max_size = max_size
        self.ttl = ttl
        self._timer = timer
        self._store: MutableMapping[str, List[str]] = self._make_store()
        logger.debug(f"Initializing genre cache (max_size={max_size}, ttl={ttl})")

    def _make_store(self) -> MutableMapping[str, List[str]]:
        if self.ttl is not None:
            return TTLCache(maxsize=self.max_size or sys.maxsize, ttl=self.ttl, timer=self._timer)
        if self.max_size is not None:
            return LRUCache(maxsize=self.max_size)
        return {}

    def get(self, artist_id: str) -> Optional[List[str]]:
        """Return cached genres, or ``None`` when the artist is not cached."""
        return self._store.get(artist_id)

    def set(self, artist_id: str, genres: List[str]) -> None:
        self._store[artist_id] = list(genres)

    def missing(self, artist_ids: Iterable[str]) -> List[str]:
        """Ids not in the cache, in input order, without duplicates."""
        return [artist_id for artist_id in dict.fromkeys(artist_ids) if artist_id not in self._store]

    def snapshot(self, artist_ids: Iterable[str]) -> Dict[str, List[str]]:
        """Genres for every requested id; uncached ids map to an empty list."""
        return {artist_id: list(self._store.get(artist_id) or []) for artist_id in artist_ids}

    def clear(self) -> None:
        self._store.clear()

    def __contains__(self, artist_id: object) -> bool:
        return artist_id in self._store

    def __len__(self) -> int:
        return len(self._store)


_default_cache: Optional[GenreCache] = None


def default_genre_cache() -> GenreCache:
    """Process-wide unbounded cache shared by exports that don't bring their own."""
    global _default_cache
    if _default_cache is None:
        _default_cache = GenreCache()
    return _default_cache
