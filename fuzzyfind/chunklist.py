"""Append-only list of items stored in fixed-size chunks."""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import Any, Callable, Optional, Sequence

from fuzzyfind.constants import CHUNK_SIZE
from fuzzyfind.item import Item

ItemBuilder = Callable[[Any], Optional[Item]]
"""Builds an item from raw input, or returns ``None`` to skip it."""


@dataclass(eq=False)
class Chunk:
    """Up to ``CHUNK_SIZE`` items. Chunks compare and hash by identity."""

    items: list[Item] = field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.items)

    def push(self, builder: ItemBuilder, data: Any) -> bool:
        """Build an item from ``data`` and add it; False if it was skipped."""
        if self.is_full():
            raise IndexError("chunk is full")
        item = builder(data)
        if item is None:
            return False
        self.items.append(item)
        return True

    def is_full(self) -> bool:
        return len(self.items) >= CHUNK_SIZE


def count_items(chunks: Sequence[Chunk]) -> int:
    """Total number of items, assuming every chunk but the last is full."""
    if not chunks:
        return 0
    return CHUNK_SIZE * (len(chunks) - 1) + chunks[-1].count


class ChunkList:
    """Thread-safe list of chunks fed by an item builder."""

    def __init__(self, builder: ItemBuilder) -> None:
        self.builder = builder
        self._chunks: list[Chunk] = []
        self._lock = threading.Lock()

    def push(self, data: Any) -> bool:
        """Add an item built from ``data``; False if the builder skipped it."""
        with self._lock:
            if not self._chunks or self._chunks[-1].is_full():
                self._chunks.append(Chunk())
            return self._chunks[-1].push(self.builder, data)

    def clear(self) -> None:
        with self._lock:
            self._chunks = []

    def snapshot(self) -> tuple[list[Chunk], int]:
        """Return an unchanging view of the chunks and the item count.

        The last chunk, the only one that can still grow, is copied.
        """
        with self._lock:
            chunks = list(self._chunks)
            if chunks:
                chunks[-1] = Chunk(list(chunks[-1].items))
        return chunks, count_items(chunks)