"""Per-chunk cache of match results keyed by query string."""

from __future__ import annotations

import threading
from typing import Any, Optional, Sequence

from fuzzyfind.chunklist import Chunk
from fuzzyfind.constants import QUERY_CACHE_MAX


class ChunkCache:
    """Thread-safe mapping of (chunk, query) to the list of results.

    Only full chunks are cached, and only for selective queries.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._cache: dict[Chunk, dict[str, Sequence[Any]]] = {}

    def add(self, chunk: Chunk, key: str, results: Sequence[Any]) -> None:
        """Store ``results`` unless the key is empty, the chunk is not full,
        or there are too many results."""
        if not key or not chunk.is_full() or len(results) > QUERY_CACHE_MAX:
            return
        with self._lock:
            self._cache.setdefault(chunk, {})[key] = results

    def lookup(self, chunk: Chunk, key: str) -> Optional[Sequence[Any]]:
        """Return the results cached for exactly ``key``, or ``None``."""
        if not key or not chunk.is_full():
            return None
        with self._lock:
            return self._cache.get(chunk, {}).get(key)

    def search(self, chunk: Chunk, key: str) -> Optional[Sequence[Any]]:
        """Return cached results of the longest proper prefix or suffix of ``key``."""
        if not key or not chunk.is_full():
            return None
        with self._lock:
            queries = self._cache.get(chunk)
            if queries is None:
                return None
            for trim in range(1, len(key)):
                for substr in (key[: len(key) - trim], key[trim:]):
                    if substr in queries:
                        return queries[substr]
        return None