"""A single ordered view over several partial lists of match results."""

from __future__ import annotations

import heapq
from typing import Any, Callable, Iterator, Optional, Sequence

from fuzzyfind.chunklist import Chunk
from fuzzyfind.constants import CHUNK_SIZE, MERGER_CACHE_MAX


class Merger:
    """Read-only sequence over partial result lists.

    With ``sort`` the lists are each expected to be ordered by ``key`` and
    are merged lazily; on equal keys the earlier list comes first. Without
    it the lists are concatenated, reversed when ``tac`` is set.
    """

    def __init__(
        self,
        lists: Sequence[Sequence[Any]] = (),
        sort: bool = False,
        tac: bool = False,
        pattern: Any = None,
        key: Optional[Callable[[Any], Any]] = None,
    ) -> None:
        self.pattern = pattern
        self.lists = [list(lst) for lst in lists]
        self.sorted = sort
        self.tac = tac
        self.final = False
        self._key = key
        self._chunks: Optional[list[Chunk]] = None
        self._merged: list[Any] = []
        self._heap: Optional[list[tuple[Any, int, int]]] = None
        self._count = sum(len(lst) for lst in self.lists)

    def __len__(self) -> int:
        return self._count

    def __iter__(self) -> Iterator[Any]:
        return (self[i] for i in range(self._count))

    def __getitem__(self, idx: int) -> Any:
        if not isinstance(idx, int):
            raise TypeError(f"merger indices must be integers, not {type(idx).__name__}")
        if idx < 0:
            idx += self._count
        if not 0 <= idx < self._count:
            raise IndexError(f"index out of range ({idx}/{self._count})")

        if self._chunks is not None:
            if self.tac:
                idx = self._count - idx - 1
            return self._chunks[idx // CHUNK_SIZE].items[idx % CHUNK_SIZE]

        if self.sorted:
            return self._merged_get(idx)

        if self.tac:
            idx = self._count - idx - 1
        for lst in self.lists:
            if idx < len(lst):
                return lst[idx]
            idx -= len(lst)
        raise IndexError(f"index out of range ({idx}/{self._count})")

    def cacheable(self) -> bool:
        return self._count < MERGER_CACHE_MAX

    def _sort_key(self, value: Any) -> Any:
        return value if self._key is None else self._key(value)

    def _merged_get(self, idx: int) -> Any:
        if self._heap is None:
            self._heap = [
                (self._sort_key(lst[0]), list_idx, 0)
                for list_idx, lst in enumerate(self.lists)
                if lst
            ]
            heapq.heapify(self._heap)
        while len(self._merged) <= idx:
            _, list_idx, cursor = heapq.heappop(self._heap)
            lst = self.lists[list_idx]
            self._merged.append(lst[cursor])
            cursor += 1
            if cursor < len(lst):
                heapq.heappush(self._heap, (self._sort_key(lst[cursor]), list_idx, cursor))
        return self._merged[idx]


def pass_merger(chunks: Sequence[Chunk], tac: bool = False) -> Merger:
    """Merger that yields the items of ``chunks`` in input order (reversed with ``tac``)."""
    merger = Merger(tac=tac)
    merger._chunks = list(chunks)
    merger._count = sum(chunk.count for chunk in merger._chunks)
    return merger


def empty_merger() -> Merger:
    """Merger with no results."""
    return Merger([])