# -*- coding: utf-8 -*-
"""
Gelfand Pattern Rows and the Branching Rule
===========================================

A row of a Gelfand pattern for a U(N) irrep with labels in {4,3,2,1,0} is
stored in compressed form as five class counts (n4, n3, n2, n1, n0): the
number of fours, threes, twos, ones and zeros in the row. The total count is
the row length; every step of the pattern shortens the row by one.

The branching rule lists every admissible row one level below a given row,
together with the multiplier k of the elementary weight consumed at that
level. All listed branches are taken (exhaustive enumeration).

Sibling order is fixed: class-4 group, class-3 group, class-2 group, class 1,
class 0. The last sibling is always the pure decrement of the lowest nonzero
class, which is what the engine applies in place when tail calls are enabled.

Example:
    >>> admissible_branches((0, 0, 1, 0, 1))
    [((0, 0, 0, 0, 1), 2), ((0, 0, 0, 1, 0), 1), ((0, 0, 1, 0, 0), 0)]
"""

from typing import List, NamedTuple, Sequence, Tuple

import numpy as np

from .errors import RowMismatchError

# Label values in class order n4, n3, n2, n1, n0
CLASS_LABELS: Tuple[int, ...] = (4, 3, 2, 1, 0)

Row = Tuple[int, int, int, int, int]
Branch = Tuple[Row, int]


class GelfandRow(NamedTuple):
    """Class counts of a single Gelfand pattern row."""
    n4: int
    n3: int
    n2: int
    n1: int
    n0: int

    @property
    def total(self) -> int:
        return self.n4 + self.n3 + self.n2 + self.n1 + self.n0

    def labels(self) -> List[int]:
        """Expand to the nonincreasing label list, e.g. (0,0,1,2,1) -> [2,1,1,0]."""
        return row_to_labels(self)


def as_row(*args) -> GelfandRow:
    """
    Normalize user input to a GelfandRow.

    Accepts either five counts ``as_row(n4, n3, n2, n1, n0)`` or a single
    five-element sequence ``as_row((n4, n3, n2, n1, n0))``.

    Raises:
        RowMismatchError: wrong arity, non-integer or negative counts
    """
    if len(args) == 1 and not isinstance(args[0], int):
        counts = tuple(args[0])
    else:
        counts = tuple(args)

    if len(counts) != 5:
        raise RowMismatchError(
            f"A Gelfand row needs 5 class counts (n4, n3, n2, n1, n0), got {len(counts)}"
        )
    for name, value in zip(GelfandRow._fields, counts):
        if isinstance(value, (bool, np.bool_)):
            raise RowMismatchError(f"Class count {name} must be an integer, got {value!r}")
        if not isinstance(value, int):
            # numpy integers are accepted, everything else is not
            try:
                value = int(value.__index__())
            except AttributeError:
                raise RowMismatchError(
                    f"Class count {name} must be an integer, got {value!r}"
                ) from None
        if value < 0:
            raise RowMismatchError(f"Class count {name} must be nonnegative, got {value}")

    return GelfandRow(*(int(c) for c in counts))


def labels_to_row(labels: Sequence[int]) -> GelfandRow:
    """
    Compress a U(N) irrep label list into class counts.

    Args:
        labels: Nonincreasing labels, each in {4,3,2,1,0}

    Raises:
        RowMismatchError: labels out of range or not nonincreasing
    """
    labels = [int(f) for f in labels]
    for f in labels:
        if f not in CLASS_LABELS:
            raise RowMismatchError(f"Irrep labels must lie in {{0,1,2,3,4}}, got {f}")
    if any(a < b for a, b in zip(labels, labels[1:])):
        raise RowMismatchError(f"Irrep labels must be nonincreasing, got {labels}")
    return GelfandRow(*(labels.count(c) for c in CLASS_LABELS))


def row_to_labels(row: Sequence[int]) -> List[int]:
    """Expand class counts into the nonincreasing U(N) label list."""
    labels: List[int] = []
    for label, count in zip(CLASS_LABELS, row):
        labels.extend([label] * count)
    return labels


def leaf_multiplier(row: Sequence[int]) -> int:
    """Multiplier of w[0] contributed by a row of total count 1."""
    n4, n3, n2, n1, _ = row
    return 4 * n4 + 3 * n3 + 2 * n2 + n1


# =============================================================================
# Branching Rule
# =============================================================================

def admissible_branches(row: Sequence[int]) -> List[Branch]:
    """
    All rows one level below ``row`` and the weight multiplier of each.

    Args:
        row: Class counts (n4, n3, n2, n1, n0) with total >= 1

    Returns:
        List of ((n4', n3', n2', n1', n0'), k); the branch adds k * w[N]
        to the partial weight, where N = total(row) - 1.
    """
    n4, n3, n2, n1, n0 = row
    out: List[Branch] = []

    if n4:
        out.append(((n4 - 1, n3, n2, n1, n0), 4))
        if n3 or n2 or n1 or n0:
            if n2:
                out.append(((n4 - 1, n3 + 1, n2 - 1, n1, n0), 3))
                if n0:
                    out.append(((n4 - 1, n3 + 1, n2 - 1, n1 + 1, n0 - 1), 2))
            if n1:
                out.append(((n4 - 1, n3 + 1, n2, n1 - 1, n0), 2))
                out.append(((n4 - 1, n3, n2 + 1, n1 - 1, n0), 3))
            if n0:
                out.append(((n4 - 1, n3 + 1, n2, n1, n0 - 1), 1))
                out.append(((n4 - 1, n3, n2 + 1, n1, n0 - 1), 2))
                out.append(((n4 - 1, n3, n2, n1 + 1, n0 - 1), 3))

    if n3:
        out.append(((n4, n3 - 1, n2, n1, n0), 3))
        if n1:
            out.append(((n4, n3 - 1, n2 + 1, n1 - 1, n0), 2))
        if n0:
            out.append(((n4, n3 - 1, n2 + 1, n1, n0 - 1), 1))
            out.append(((n4, n3 - 1, n2, n1 + 1, n0 - 1), 2))

    if n2:
        out.append(((n4, n3, n2 - 1, n1, n0), 2))
        if n0:
            out.append(((n4, n3, n2 - 1, n1 + 1, n0 - 1), 1))

    if n1:
        out.append(((n4, n3, n2, n1 - 1, n0), 1))

    if n0:
        out.append(((n4, n3, n2, n1, n0 - 1), 0))

    return out
