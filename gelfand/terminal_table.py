# -*- coding: utf-8 -*-
"""
Terminal Table (precomputed bottom of the recursion)
====================================================

Once the residual row total drops to 3 or less, the rest of the recursion is
independent of the input irrep: a row of total t <= 3 always expands into the
same multiset of weight offsets, each an integer combination

    c0 * w[0] + c1 * w[1] + c2 * w[2]

of the three lowest weight-space entries. This module enumerates those
expansions once, by running the branching rule symbolically, and stores them
in an arena:

    coefficients : (K, 3) int64   coefficient triples (c0, c1, c2)
    counts       : (K,)   int64   number of patterns producing each triple
    spans        : (4**5, 2)      [start, stop) into the arrays, per row key

The row key is the base-4 number n4 n3 n2 n1 n0 (every count is <= 3 here).
Keys outside the table domain hold (-1, -1).

Rows made only of zeros complete in exactly one way and add nothing; their
span is empty and the engine counts the partial weight itself once.

The coefficient part is built once per process. Concrete offsets are
recomputed whenever the weight space changes (``rebuild``).
"""

from collections import Counter
from functools import lru_cache
from itertools import product
from typing import Dict, List, Optional, Sequence, Tuple

import numpy as np

from .errors import PrecomputeCoverageError
from .rows import admissible_branches, leaf_multiplier
from .weight_space import WeightSpace

MAX_TOTAL = 3
N_KEYS = 4 ** 5


def row_key(row: Sequence[int]) -> int:
    """Injective key of a row whose class counts are all <= 3."""
    n4, n3, n2, n1, n0 = row
    return (((n4 * 4 + n3) * 4 + n2) * 4 + n1) * 4 + n0


def table_rows() -> List[Tuple[int, ...]]:
    """Every row with total count 1..MAX_TOTAL, in key order."""
    rows = [r for r in product(range(MAX_TOTAL + 1), repeat=5)
            if 1 <= sum(r) <= MAX_TOTAL]
    return sorted(rows, key=row_key)


def expand_symbolic(row: Sequence[int]) -> Dict[Tuple[int, int, int], int]:
    """
    Fully expand a short row with the branching rule.

    Args:
        row: Class counts with total 1..3

    Returns:
        Mapping (c0, c1, c2) -> number of Gelfand patterns whose weight is
        c0*w[0] + c1*w[1] + c2*w[2]
    """
    result: Counter = Counter()

    def walk(r, coeffs):
        level = sum(r) - 1
        if level == 0:
            leaf = list(coeffs)
            leaf[0] += leaf_multiplier(r)
            result[tuple(leaf)] += 1
            return
        for child, k in admissible_branches(r):
            c = list(coeffs)
            c[level] += k
            walk(child, c)

    walk(tuple(row), [0, 0, 0])
    return dict(result)


@lru_cache(maxsize=1)
def _symbolic_arena() -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    coefficients: List[Tuple[int, int, int]] = []
    counts: List[int] = []
    spans = np.full((N_KEYS, 2), -1, dtype=np.int64)

    for row in table_rows():
        expansion = expand_symbolic(row)
        start = len(counts)
        if list(expansion) != [(0, 0, 0)]:
            for coeff in sorted(expansion):
                coefficients.append(coeff)
                counts.append(expansion[coeff])
        spans[row_key(row)] = (start, len(counts))

    coefficients_arr = np.array(coefficients, dtype=np.int64).reshape(-1, 3)
    counts_arr = np.array(counts, dtype=np.int64)
    for arr in (coefficients_arr, counts_arr, spans):
        arr.setflags(write=False)
    return coefficients_arr, counts_arr, spans


class TerminalTable:
    """
    Precomputed leaf contributions for residual rows of total <= 3.

    Usage:
        table = TerminalTable(SO3WeightSpace(2))
        for offset, count in table.entries((0, 0, 1, 1, 1)):
            ...
    """

    max_total = MAX_TOTAL

    def __init__(self, weight_space: Optional[WeightSpace] = None):
        self.coefficients, self.counts, self.spans = _symbolic_arena()
        self.offsets: Optional[np.ndarray] = None

        # Plain-list views used by the recursion hot path
        self.spans_list: List[List[int]] = self.spans.tolist()
        self.counts_list: List[int] = self.counts.tolist()
        self.offsets_list: List[int] = []

        if weight_space is not None:
            self.rebuild(weight_space)

    def __len__(self) -> int:
        return int(np.count_nonzero(self.spans[:, 0] >= 0))

    @property
    def is_built(self) -> bool:
        return self.offsets is not None

    def rebuild(self, weight_space: WeightSpace) -> None:
        """Recompute concrete offsets for a new weight space."""
        offsets = self.coefficients @ weight_space.lowest_codes(3)
        offsets.setflags(write=False)
        self.offsets = offsets
        self.offsets_list = offsets.tolist()

    def covers(self, row: Sequence[int]) -> bool:
        if not 1 <= sum(row) <= MAX_TOTAL:
            return False
        return self.spans_list[row_key(row)][0] >= 0

    def span(self, row: Sequence[int]) -> Tuple[int, int]:
        """
        Arena slice for ``row``.

        Raises:
            PrecomputeCoverageError: if the row lies outside the table domain
        """
        if not self.covers(row):
            raise PrecomputeCoverageError(
                f"Row {tuple(row)} (total {sum(row)}) is not covered by the terminal table"
            )
        start, stop = self.spans_list[row_key(row)]
        return start, stop

    def entries(self, row: Sequence[int]) -> List[Tuple[int, int]]:
        """(offset, count) pairs for ``row``; empty for all-zero rows."""
        if not self.is_built:
            raise RuntimeError("TerminalTable.rebuild() must be called before lookups")
        start, stop = self.span(row)
        return list(zip(self.offsets_list[start:stop], self.counts_list[start:stop]))

    def pattern_count(self, row: Sequence[int]) -> int:
        """Number of Gelfand patterns completing ``row``."""
        start, stop = self.span(row)
        return sum(self.counts_list[start:stop]) if stop > start else 1
