# -*- coding: utf-8 -*-
"""
Level Dimensionalities and Irrep Dimensions
===========================================

Raw weight multiplicities count every state of every sub-irrep, so each irrep
of the target group shows up not only at its highest weight but along its
whole descent ladder. The level dimensionality removes that double counting
and returns the number of sub-irreps whose highest weight is exactly the
queried weight:

    SO(3):  D(l) = m(l) - m(l+1)

    U(3):   D(f1,f2,f3) = m(f1,f2,f3) + m(f1+1,f2+1,f3-2) + m(f1+2,f2-1,f3-1)
                        - m(f1+2,f2,f3-2) - m(f1+1,f2-1,f3) - m(f1,f2+1,f3-1)

with missing neighbours counted as zero.

The analytic dimension formulas at the bottom give an independent check:

    sum_w D(w) * dim(w) == dim[f]   (the U(N) irrep)
"""

from math import prod
from typing import Callable, Hashable, Mapping, Sequence, Tuple

from .errors import WeightNotFoundError

MultMapping = Mapping[Hashable, int]


def _self_term(mult: MultMapping, weight, strict: bool) -> int:
    if weight in mult:
        return mult[weight]
    if strict:
        raise WeightNotFoundError(
            f"Weight {weight} is not present in the multiplicity map; "
            f"iterate over mult_map() keys or pass strict=False"
        )
    return 0


def so3_level_dimensionality(mult: MultMapping, l: int, *, strict: bool = True) -> int:
    """
    Number of SO(3) irreps with angular momentum ``l``.

    Args:
        mult: SO(3) weight -> multiplicity
        l: Weight label (negative labels give 0)
        strict: If True, a label missing from ``mult`` raises

    Raises:
        WeightNotFoundError: ``strict`` and ``l`` not in ``mult``
    """
    l = int(l)
    if l < 0:
        return 0
    return _self_term(mult, l, strict) - mult.get(l + 1, 0)


def u3_level_dimensionality(
    mult: MultMapping,
    weight: Sequence[int],
    *,
    strict: bool = True,
) -> int:
    """
    Number of U(3) irreps with highest weight ``(f1, f2, f3)``.

    Non-dominant triples (f1 < f2 or f2 < f3) give 0.

    Raises:
        WeightNotFoundError: ``strict`` and the triple is not in ``mult``
    """
    f1, f2, f3 = (int(f) for f in weight)
    if f1 < f2 or f2 < f3:
        return 0

    get = mult.get
    d = _self_term(mult, (f1, f2, f3), strict)
    d += get((f1 + 1, f2 + 1, f3 - 2), 0)
    d += get((f1 + 2, f2 - 1, f3 - 1), 0)
    d -= get((f1 + 2, f2, f3 - 2), 0)
    d -= get((f1 + 1, f2 - 1, f3), 0)
    d -= get((f1, f2 + 1, f3 - 1), 0)
    return d


# =============================================================================
# Irrep Dimensions
# =============================================================================

def so3_irrep_dimension(l: int) -> int:
    return 2 * int(l) + 1


def u3_irrep_dimension(weight: Sequence[int]) -> int:
    """Weyl dimension of the U(3) irrep [f1, f2, f3]."""
    f1, f2, f3 = (int(f) for f in weight)
    return (f1 - f2 + 1) * (f2 - f3 + 1) * (f1 - f3 + 2) // 2


def un_irrep_dimension(labels: Sequence[int]) -> int:
    """
    Exact dimension of the U(N) irrep [f1, ..., fN].

        dim[f] = prod_{1 <= k < l <= N} (f_k - f_l + l - k) / (l - k)

    Numerator and denominator are accumulated as integers and divided once,
    so the result is exact for any N.

    Raises:
        ValueError: labels not nonincreasing
    """
    f = [int(x) for x in labels]
    if any(a < b for a, b in zip(f, f[1:])):
        raise ValueError(f"Irrep labels must be nonincreasing, got {f}")

    N = len(f)
    pairs = [(k, l) for l in range(2, N + 1) for k in range(1, l)]
    numerator = prod(f[k - 1] - f[l - 1] + l - k for k, l in pairs)
    denominator = prod(l - k for k, l in pairs)

    dim, remainder = divmod(numerator, denominator)
    assert remainder == 0, "Weyl dimension formula must give an integer"
    return dim


def total_dimension(
    mult: MultMapping,
    level_dimensionality: Callable[[MultMapping, Hashable], int],
    irrep_dimension: Callable[[Hashable], int],
) -> int:
    """Sum of D(w) * dim(w) over every weight in ``mult``."""
    total = 0
    for weight in mult:
        d = level_dimensionality(mult, weight)
        if d:
            total += d * irrep_dimension(weight)
    return total


def nonzero_dimensionalities(
    mult: MultMapping,
    level_dimensionality: Callable[[MultMapping, Hashable], int],
) -> Tuple[Tuple[Hashable, int], ...]:
    """(weight, D) for every weight in ``mult`` with D != 0, sorted by weight."""
    out = []
    for weight in sorted(mult):
        d = level_dimensionality(mult, weight)
        if d:
            out.append((weight, d))
    return tuple(out)
