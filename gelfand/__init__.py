# -*- coding: utf-8 -*-
"""
Gelfand: U(N) Irrep Reduction to SO(3) and U(3)
===============================================

Weight multiplicities and level dimensionalities of U(N) irreps with labels
in {4,3,2,1,0}, obtained by enumerating Gelfand patterns.

Modules:
    - rows: Gelfand row class counts and the branching rule
    - weight_space: SO(3) and U(3) elementary weight tables
    - terminal_table: precomputed completions of short rows
    - multiplicity: weight -> multiplicity accumulator
    - engine: recursive / fork-join / memoized branching engine
    - dimensionality: level dimensionalities and analytic irrep dimensions
"""

from .config import BranchingConfig
from .dimensionality import (
    so3_irrep_dimension,
    so3_level_dimensionality,
    u3_irrep_dimension,
    u3_level_dimensionality,
    un_irrep_dimension,
)
from .engine import BranchingEngine, PatternWalker, SO3Branching, U3Branching
from .errors import (
    BranchingError,
    PrecomputeCoverageError,
    RowMismatchError,
    WeightNotFoundError,
    WeightSpaceNotBuiltError,
)
from .multiplicity import MultiplicityMap, merge_partial_maps
from .rows import GelfandRow, admissible_branches, as_row, labels_to_row, row_to_labels
from .terminal_table import TerminalTable
from .weight_space import SO3WeightSpace, U3WeightSpace, WeightSpace

__version__ = "0.1.0"

__all__ = [
    # Engines
    'BranchingEngine',
    'SO3Branching',
    'U3Branching',
    'PatternWalker',
    'BranchingConfig',
    # Data model
    'GelfandRow',
    'as_row',
    'labels_to_row',
    'row_to_labels',
    'admissible_branches',
    'WeightSpace',
    'SO3WeightSpace',
    'U3WeightSpace',
    'TerminalTable',
    'MultiplicityMap',
    'merge_partial_maps',
    # Dimensionality
    'so3_level_dimensionality',
    'u3_level_dimensionality',
    'so3_irrep_dimension',
    'u3_irrep_dimension',
    'un_irrep_dimension',
    # Errors
    'BranchingError',
    'WeightSpaceNotBuiltError',
    'RowMismatchError',
    'WeightNotFoundError',
    'PrecomputeCoverageError',
]
