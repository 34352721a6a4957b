"""
Weight Space Tests
==================

Tests for SO(3) projections and U(3) oscillator quanta tables.
"""
import pytest
import numpy as np
import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent))

from gelfand.weight_space import SO3WeightSpace, U3WeightSpace


class TestSO3WeightSpace:
    """Tests for m = -l..l."""

    def test_ordering(self):
        ws = SO3WeightSpace(2)
        assert len(ws) == 5
        assert ws.vectors.tolist() == [-2, -1, 0, 1, 2]
        assert ws.codes == (-2, -1, 0, 1, 2)
        assert [ws[i] for i in range(5)] == [-2, -1, 0, 1, 2]

    def test_level_zero(self):
        ws = SO3WeightSpace(0)
        assert len(ws) == 1
        assert ws[0] == 0

    def test_negative_level(self):
        with pytest.raises(ValueError):
            SO3WeightSpace(-1)

    def test_vectors_read_only(self):
        ws = SO3WeightSpace(1)
        with pytest.raises(ValueError):
            ws.vectors[0] = 5

    def test_lowest_codes_padded(self):
        assert SO3WeightSpace(0).lowest_codes(3).tolist() == [0, 0, 0]
        assert SO3WeightSpace(3).lowest_codes(3).tolist() == [-3, -2, -1]

    def test_repr(self):
        assert repr(SO3WeightSpace(4)) == "SO3WeightSpace(4)"
        assert SO3WeightSpace(4).parameter == 4


class TestU3WeightSpace:
    """Tests for (nx, ny, nz) with nx + ny + nz = n."""

    def test_shell_one_order(self):
        ws = U3WeightSpace(1)
        assert ws.vectors.tolist() == [[0, 0, 1], [1, 0, 0], [0, 1, 0]]

    def test_shell_two_order(self):
        ws = U3WeightSpace(2)
        assert [ws[i] for i in range(len(ws))] == [
            (0, 0, 2),
            (1, 0, 1), (0, 1, 1),
            (2, 0, 0), (1, 1, 0), (0, 2, 0),
        ]

    @pytest.mark.parametrize("n", [0, 1, 2, 3, 4])
    def test_length_and_sums(self, n):
        ws = U3WeightSpace(n)
        assert len(ws) == (n + 1) * (n + 2) // 2
        assert ws.vectors.shape == (len(ws), 3)
        assert np.all(ws.vectors.sum(axis=1) == n)
        assert np.all(ws.vectors >= 0)
        assert len({tuple(v) for v in ws.vectors.tolist()}) == len(ws)

    def test_negative_shell(self):
        with pytest.raises(ValueError):
            U3WeightSpace(-2)

    def test_codes_are_additive(self):
        """Sums of codes decode to component-wise sums of weights."""
        ws = U3WeightSpace(3)
        a, b = (2, 1, 0), (0, 1, 2)
        code = 3 * ws.encode(a) + 2 * ws.encode(b)
        assert ws.decode(code) == (6, 5, 4)

    def test_codes_match_vectors(self):
        ws = U3WeightSpace(2)
        for vec, code in zip(ws.vectors.tolist(), ws.codes):
            assert ws.decode(code) == tuple(vec)

    def test_components_do_not_overlap(self):
        """The largest accumulated component still fits inside one field."""
        ws = U3WeightSpace(2)
        bound = 4 * 2 * len(ws)
        assert ws.decode(ws.encode((bound, 0, bound))) == (bound, 0, bound)
        assert ws.decode(ws.encode((0, bound, 0))) == (0, bound, 0)

    def test_shell_too_large_for_packing(self):
        with pytest.raises(ValueError, match="too large"):
            U3WeightSpace(300)
