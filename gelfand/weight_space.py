# -*- coding: utf-8 -*-
"""
Weight Spaces
=============

Ordered tables of elementary weight vectors, one per level of the subgroup
chain:

    SO(3):  m = -l, -l+1, ..., l                        (length 2l + 1)
    U(3):   (nx, ny, nz) with nx + ny + nz = n          (length (n+1)(n+2)/2)

Index N is consumed by the branching engine when the residual row total is
N + 1, i.e. from the last entry down to index 0.

Every weight is also given an additive integer code, so that the engine adds
plain Python integers regardless of the target group:

    SO(3):  code(m) = m
    U(3):   code(x, y, z) = x + (y << S) + (z << 2S)

U(3) components are never negative along a pattern (every elementary weight
and every multiplier is nonnegative) and never exceed 4 * n * N, so S is
chosen wide enough that packed components cannot carry into each other.

A weight space is immutable once built; building a new one is how the engine
changes its subgroup parameter.
"""

from typing import Tuple, Union

import numpy as np

Weight = Union[int, Tuple[int, int, int]]


class WeightSpace:
    """
    Immutable sequence of elementary weights plus their integer codes.

    Subclasses fill ``_vectors`` (read-only numpy array) and implement
    ``encode`` / ``decode``.
    """

    target: str = ""
    _vectors: np.ndarray
    _codes: Tuple[int, ...]

    def __len__(self) -> int:
        return len(self._codes)

    def __getitem__(self, index: int) -> Weight:
        return self.decode(self._codes[index])

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.parameter})"

    @property
    def parameter(self) -> int:
        raise NotImplementedError

    @property
    def vectors(self) -> np.ndarray:
        """Elementary weights as a read-only array, one row per level."""
        return self._vectors

    @property
    def codes(self) -> Tuple[int, ...]:
        """Additive integer codes of the elementary weights."""
        return self._codes

    def encode(self, weight: Weight) -> int:
        raise NotImplementedError

    def decode(self, code: int) -> Weight:
        raise NotImplementedError

    def lowest_codes(self, count: int = 3) -> np.ndarray:
        """Codes of entries 0..count-1, zero-padded when the space is shorter."""
        out = np.zeros(count, dtype=np.int64)
        head = self._codes[:count]
        out[:len(head)] = head
        return out


class SO3WeightSpace(WeightSpace):
    """Angular-momentum projections -l..l for a single-particle level l."""

    target = "SO3"

    def __init__(self, l: int):
        l = int(l)
        if l < 0:
            raise ValueError(f"Angular momentum level must be nonnegative, got l={l}")
        self._l = l

        vectors = np.arange(-l, l + 1, dtype=np.int64)
        vectors.setflags(write=False)
        self._vectors = vectors
        self._codes = tuple(vectors.tolist())

    @property
    def parameter(self) -> int:
        return self._l

    def encode(self, weight: Weight) -> int:
        return int(weight)

    def decode(self, code: int) -> int:
        return int(code)


class U3WeightSpace(WeightSpace):
    """Harmonic-oscillator quanta (nx, ny, nz) of the n-th oscillator shell."""

    target = "U3"

    def __init__(self, n: int):
        n = int(n)
        if n < 0:
            raise ValueError(f"Oscillator shell number must be nonnegative, got n={n}")
        self._n = n

        triples = []
        for k in range(n + 1):
            nz = n - k
            for nx in range(k, -1, -1):
                triples.append((nx, n - nz - nx, nz))

        vectors = np.array(triples, dtype=np.int64).reshape(-1, 3)
        vectors.setflags(write=False)
        self._vectors = vectors

        # Largest component a full pattern can accumulate
        bound = 4 * n * len(triples)
        self._shift = max(bound.bit_length(), 1) + 1
        if 3 * self._shift + 4 >= 63:
            raise ValueError(f"Oscillator shell n={n} too large for 64-bit weight packing")
        self._mask = (1 << self._shift) - 1

        self._codes = tuple(self.encode(t) for t in triples)

    @property
    def parameter(self) -> int:
        return self._n

    @property
    def shift(self) -> int:
        """Bit width of one packed component."""
        return self._shift

    def encode(self, weight: Weight) -> int:
        x, y, z = (int(c) for c in weight)
        return x + (y << self._shift) + (z << (2 * self._shift))

    def decode(self, code: int) -> Tuple[int, int, int]:
        s, mask = self._shift, self._mask
        return (code & mask, (code >> s) & mask, code >> (2 * s))
