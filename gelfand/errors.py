# -*- coding: utf-8 -*-
"""
Error Types
===========

Configuration errors (weight space missing, row/weight-space mismatch) and
query errors (weight absent from the multiplicity map) are fatal to the call
that raised them. The enumeration itself is deterministic and performs no I/O,
so nothing here is meant to be retried.
"""


class BranchingError(Exception):
    """Base class for all errors raised by the gelfand package."""


class WeightSpaceNotBuiltError(BranchingError, RuntimeError):
    """generate_weights() was called before generate_m() / generate_xyz()."""


class RowMismatchError(BranchingError, ValueError):
    """Malformed Gelfand row, or row total differs from the weight space length."""


class WeightNotFoundError(BranchingError, KeyError):
    """Level dimensionality requested for a weight that was never generated."""

    def __str__(self) -> str:
        # KeyError quotes its argument; keep the message readable
        return str(self.args[0]) if self.args else ""


class PrecomputeCoverageError(BranchingError, AssertionError):
    """The engine reached a residual row that the terminal table does not cover."""
