"""Batched id -> value lookups against bulk remote endpoints.

Every lookup returns a value for every requested id. A batch whose remote
call fails, or a remote response that omits an id, degrades to the lookup's
default value instead of raising.
"""

import asyncio
import logging
import time
from typing import Any, Callable, Dict, Generic, Iterable, List, Mapping, Optional, Sequence, TypeVar

from djexport.core.cache import GenreCache
from djexport.utils.helpers import chunked, unique

logger = logging.getLogger("djexport.lookup")

V = TypeVar("V")

FetchFn = Callable[[List[str]], Mapping[str, Any]]


class BatchedLookup(Generic[V]):
    """Look up values for a set of ids, ``batch_size`` ids per remote call.

    Args:
        name: Label used in log messages
        fetch: Callable taking a list of ids and returning ``{id: value}``;
            ids may be missing from its result
        batch_size: Maximum ids per ``fetch`` call
        default: Factory for the value of ids the remote side didn't return
        delay: Seconds to wait between consecutive batches
    """

    def __init__(
        self,
        name: str,
        fetch: FetchFn,
        batch_size: int,
        default: Callable[[], V],
        delay: float = 0.0,
    ):
        if batch_size < 1:
            raise ValueError(f"batch_size must be positive, got {batch_size}")
        self.name = name
        self.fetch = fetch
        self.batch_size = batch_size
        self.default = default
        self.delay = delay

    def _pending(self, ids: Iterable[str]) -> List[str]:
        """Ids that need a remote call."""
        return unique(ids)

    def _merge(self, batch: List[str], fetched: Optional[Mapping[str, Any]], result: Dict[str, V]) -> None:
        fetched = fetched or {}
        for item_id in batch:
            if item_id in fetched and fetched[item_id] is not None:
                result[item_id] = fetched[item_id]
            elif item_id not in result:
                result[item_id] = self.default()
        self._on_batch(batch, result)

    def _on_batch(self, batch: List[str], result: Dict[str, V]) -> None:
        """Hook run after each batch has been merged and backfilled."""

    def _finish(self, ids: Sequence[str], result: Dict[str, V]) -> Dict[str, V]:
        for item_id in ids:
            if item_id not in result:
                result[item_id] = self.default()
        return result

    def _log_failure(self, batch: List[str], error: Exception) -> None:
        logger.error(f"Error fetching {self.name} for {len(batch)} ids: {error}")

    def lookup(self, ids: Iterable[str]) -> Dict[str, V]:
        """Fetch values for ``ids`` one batch at a time."""
        ids = list(ids)
        result: Dict[str, V] = {}

        for index, batch in enumerate(chunked(self._pending(ids), self.batch_size)):
            if index and self.delay:
                time.sleep(self.delay)
            fetched = None
            try:
                fetched = self.fetch(batch)
            except Exception as e:
                self._log_failure(batch, e)
            self._merge(batch, fetched, result)

        return self._finish(ids, result)

    async def alookup(self, ids: Iterable[str]) -> Dict[str, V]:
        """Like :meth:`lookup`, running each blocking ``fetch`` in a worker thread."""
        ids = list(ids)
        result: Dict[str, V] = {}

        for index, batch in enumerate(chunked(self._pending(ids), self.batch_size)):
            if index and self.delay:
                await asyncio.sleep(self.delay)
            fetched = None
            try:
                fetched = await asyncio.to_thread(self.fetch, batch)
            except Exception as e:
                self._log_failure(batch, e)
            self._merge(batch, fetched, result)

        return self._finish(ids, result)

    def lookup_ordered(self, ids: Sequence[str]) -> List[V]:
        """Values aligned position-for-position with ``ids``, duplicates included."""
        values = self.lookup(ids)
        return [values[item_id] for item_id in ids]

    async def alookup_ordered(self, ids: Sequence[str]) -> List[V]:
        values = await self.alookup(ids)
        return [values[item_id] for item_id in ids]


class GenreLookup(BatchedLookup[List[str]]):
    """Artist genre lookup that only asks the remote side for uncached artists.

    Cached genres are read once, before any batch runs, so entries evicted or
    expired while this call fills the cache still come back with their genres.
    """

    def __init__(
        self,
        fetch: FetchFn,
        cache: GenreCache,
        batch_size: int = 50,
        delay: float = 0.0,
    ):
        super().__init__("artist genres", fetch, batch_size, list, delay)
        self.cache = cache

    def _pending(self, ids: Iterable[str]) -> List[str]:
        uncached = self.cache.missing(ids)
        if uncached:
            logger.debug(f"Genre cache miss for {len(uncached)} artists")
        return uncached

    def _on_batch(self, batch: List[str], result: Dict[str, List[str]]) -> None:
        for artist_id in batch:
            self.cache.set(artist_id, result[artist_id])

    def _finish(self, ids: Sequence[str], result: Dict[str, List[str]]) -> Dict[str, List[str]]:
        return result

    def _combine(
        self,
        ids: Sequence[str],
        cached: Dict[str, List[str]],
        fetched: Dict[str, List[str]],
    ) -> Dict[str, List[str]]:
        genres: Dict[str, List[str]] = {}
        for artist_id in ids:
            source = fetched if artist_id in fetched else cached
            genres[artist_id] = list(source.get(artist_id, []))
        return genres

    def lookup(self, ids: Iterable[str]) -> Dict[str, List[str]]:
        ids = list(ids)
        cached = self.cache.snapshot(ids)
        return self._combine(ids, cached, super().lookup(ids))

    async def alookup(self, ids: Iterable[str]) -> Dict[str, List[str]]:
        ids = list(ids)
        cached = self.cache.snapshot(ids)
        return self._combine(ids, cached, await super().alookup(ids))
