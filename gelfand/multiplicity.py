# -*- coding: utf-8 -*-
"""
Multiplicity Map
================

Accumulates weight -> occurrence count for one engine instance.

Engine leaves write into private ``collections.Counter`` objects keyed by
integer weight codes (one per worker in fork-join mode). Those partial maps
are folded into the shared MultiplicityMap at a single join point; merging is
plain addition, so the order in which partial maps arrive does not matter.
"""

import threading
from collections import Counter
from types import MappingProxyType
from typing import Callable, Dict, Hashable, Iterable, Iterator, Mapping, Optional, Tuple


def merge_partial_maps(partials: Iterable[Mapping[Hashable, int]]) -> Counter:
    """Sum any number of partial maps into a new Counter."""
    total: Counter = Counter()
    for partial in partials:
        for key, count in partial.items():
            total[key] += count
    return total


class MultiplicityMap:
    """
    Weight -> multiplicity table published by the branching engine.

    Cleared at the start of every top-level generation and read-only for
    callers afterwards (``view()``). ``merge`` may be called from several
    threads; it is serialized by an internal lock.
    """

    def __init__(self):
        self._counts: Dict[Hashable, int] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._counts)

    def __iter__(self) -> Iterator[Hashable]:
        return iter(self._counts)

    def __contains__(self, weight: Hashable) -> bool:
        return weight in self._counts

    def __getitem__(self, weight: Hashable) -> int:
        return self._counts[weight]

    def get(self, weight: Hashable, default: int = 0) -> int:
        return self._counts.get(weight, default)

    def items(self):
        return self._counts.items()

    def clear(self) -> None:
        with self._lock:
            self._counts.clear()

    def merge(
        self,
        partial: Mapping[Hashable, int],
        decode: Optional[Callable[[int], Hashable]] = None,
    ) -> None:
        """
        Add a partial map into this one.

        Args:
            partial: key -> count, typically a worker's private Counter
            decode: Optional mapping from integer weight codes to published
                weight labels
        """
        with self._lock:
            counts = self._counts
            if decode is None:
                for key, count in partial.items():
                    counts[key] = counts.get(key, 0) + count
            else:
                for code, count in partial.items():
                    key = decode(code)
                    counts[key] = counts.get(key, 0) + count

    def view(self) -> Mapping[Hashable, int]:
        """Read-only live view of the table."""
        return MappingProxyType(self._counts)

    def total(self) -> int:
        """Total number of Gelfand patterns counted (equals dim of the U(N) irrep)."""
        return sum(self._counts.values())

    def sorted_items(self) -> Tuple[Tuple[Hashable, int], ...]:
        return tuple(sorted(self._counts.items()))
