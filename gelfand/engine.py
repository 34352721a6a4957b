# -*- coding: utf-8 -*-
"""
Branching Engine: U(N) -> SO(3) / U(3) Weight Multiplicities
============================================================

Enumerates every Gelfand pattern of an input U(N) irrep (labels in
{4,3,2,1,0}) from the top row down, adding k * w[N] to the partial weight at
each level N, and counts the resulting weights.

Usage:
------
    from gelfand import SO3Branching

    engine = SO3Branching()
    engine.generate_m(2)                      # l = 2, N = 5
    engine.generate_weights(0, 0, 1, 2, 2)    # irrep [2,1,1,0,0]
    for l in engine.mult_map():
        D = engine.get_level_dimensionality(l)

Execution paths (all give identical maps, see BranchingConfig):
    - plain recursion, optionally with the last sibling applied in place
      (tail-call loop) instead of a recursive call
    - terminal table: recursion stops at residual total <= 3 and adds the
      precomputed completions of that row
    - fork-join: the top levels are expanded by the coordinator, the frontier
      is split into joblib tasks, each task fills a private Counter, and the
      partial maps are merged at the join
    - memoization: each distinct row is expanded once into a map of weight
      offsets, reused wherever the row reappears
"""

import time
import warnings
from collections import Counter
from typing import Dict, Hashable, List, Mapping, Optional, Sequence, Tuple

from joblib import Parallel, cpu_count, delayed
from tqdm import tqdm

from .config import BranchingConfig
from .dimensionality import (
    nonzero_dimensionalities,
    so3_irrep_dimension,
    so3_level_dimensionality,
    total_dimension,
    u3_irrep_dimension,
    u3_level_dimensionality,
)
from .errors import PrecomputeCoverageError, RowMismatchError, WeightSpaceNotBuiltError
from .multiplicity import MultiplicityMap
from .rows import GelfandRow, admissible_branches, as_row, leaf_multiplier
from .terminal_table import TerminalTable, row_key
from .weight_space import SO3WeightSpace, U3WeightSpace, WeightSpace

Seed = Tuple[Tuple[int, ...], int]


# =============================================================================
# Sequential Recursion
# =============================================================================

class PatternWalker:
    """
    Recursive Gelfand pattern enumerator with a private accumulator.

    Holds only plain lists (weight codes, terminal table arena views), so it
    can be shipped to joblib workers; ``spawn()`` gives a copy with an empty
    accumulator.
    """

    def __init__(
        self,
        codes: Sequence[int],
        table: Optional[TerminalTable] = None,
        tail_calls: bool = True,
    ):
        self.codes: List[int] = list(codes)
        self.tail_calls = tail_calls
        self.counts: Counter = Counter()
        self._memo: Dict[Tuple[int, ...], Dict[int, int]] = {}

        if table is not None:
            self.floor = table.max_total - 1
            self._spans = table.spans_list
            self._offsets = table.offsets_list
            self._table_counts = table.counts_list
        else:
            self.floor = 0
            self._spans = None
            self._offsets = None
            self._table_counts = None

    def __getstate__(self):
        state = self.__dict__.copy()
        state['counts'] = Counter()
        state['_memo'] = {}
        return state

    def spawn(self) -> 'PatternWalker':
        """Same tables, fresh accumulator."""
        child = object.__new__(PatternWalker)
        child.__dict__.update(self.__getstate__())
        return child

    def descend(self, row: Tuple[int, ...], pp: int, factor: int = 1) -> None:
        """
        Count every pattern below ``row``.

        Args:
            row: Class counts; level N = sum(row) - 1 is processed first
            pp: Encoded partial weight accumulated above this row
            factor: Multiplicity of this (row, pp) seed
        """
        codes = self.codes
        level = sum(row) - 1

        while level > self.floor:
            w = codes[level]
            branches = admissible_branches(row)
            if not self.tail_calls:
                for child, k in branches:
                    self.descend(child, pp + k * w, factor)
                return

            # the last sibling is a pure decrement: continue with it in place
            row, k = branches.pop()
            for child, kc in branches:
                self.descend(child, pp + kc * w, factor)
            pp += k * w
            level -= 1

        self._leaf(row, pp, factor)

    def _leaf(self, row: Tuple[int, ...], pp: int, factor: int) -> None:
        counts = self.counts
        if self._spans is None:
            counts[pp + leaf_multiplier(row) * self.codes[0]] += factor
            return

        start, stop = self._span(row)
        if stop > start:
            offsets, table_counts = self._offsets, self._table_counts
            for i in range(start, stop):
                counts[pp + offsets[i]] += factor * table_counts[i]
        else:
            counts[pp] += factor

    def _span(self, row: Tuple[int, ...]) -> Tuple[int, int]:
        if max(row) > 3:
            raise PrecomputeCoverageError(f"Residual row {row} outside terminal table domain")
        start, stop = self._spans[row_key(row)]
        if start < 0:
            raise PrecomputeCoverageError(f"Residual row {row} outside terminal table domain")
        return start, stop

    # -------------------------------------------------------------------------
    # Memoized traversal
    # -------------------------------------------------------------------------

    def expand(self, row: Tuple[int, ...]) -> Dict[int, int]:
        """
        Weight offsets (and counts) of every pattern below ``row``.

        The result depends on the row alone, so it is cached per row and
        shifted by the caller's partial weight.
        """
        cached = self._memo.get(row)
        if cached is not None:
            return cached

        level = sum(row) - 1
        result: Counter = Counter()
        if level <= self.floor:
            if self._spans is None:
                result[leaf_multiplier(row) * self.codes[0]] += 1
            else:
                start, stop = self._span(row)
                if stop > start:
                    for i in range(start, stop):
                        result[self._offsets[i]] += self._table_counts[i]
                else:
                    result[0] += 1
        else:
            w = self.codes[level]
            for child, k in admissible_branches(row):
                shift = k * w
                for offset, count in self.expand(child).items():
                    result[offset + shift] += count

        expansion = dict(result)
        self._memo[row] = expansion
        return expansion


# =============================================================================
# Fork-Join Helpers
# =============================================================================

def split_frontier(
    row: Tuple[int, ...],
    codes: Sequence[int],
    granularity: int,
    max_seeds: int,
) -> Counter:
    """
    Expand the top of the recursion tree breadth-first.

    Stops when the level index drops to ``granularity`` or the frontier holds
    at least ``max_seeds`` distinct (row, partial weight) pairs. Identical
    pairs are merged; the Counter value is how many paths reach them.
    """
    frontier: Counter = Counter({(tuple(row), 0): 1})
    level = sum(row) - 1
    while level > granularity and len(frontier) < max_seeds:
        w = codes[level]
        expanded: Counter = Counter()
        for (r, pp), paths in frontier.items():
            for child, k in admissible_branches(r):
                expanded[(child, pp + k * w)] += paths
        frontier = expanded
        level -= 1
    return frontier


def chunk_seeds(frontier: Mapping[Seed, int], n_tasks: int) -> List[List[Tuple[Seed, int]]]:
    """Round-robin split of the frontier into at most ``n_tasks`` task payloads."""
    items = sorted(frontier.items())
    n_tasks = max(1, min(n_tasks, len(items)))
    return [items[i::n_tasks] for i in range(n_tasks)]


def _walk_seeds(walker: PatternWalker, seeds: List[Tuple[Seed, int]]) -> Counter:
    private = walker.spawn()
    for (row, pp), paths in seeds:
        private.descend(row, pp, paths)
    return private.counts


# =============================================================================
# Engine
# =============================================================================

class BranchingEngine:
    """
    Generic U(N) branching engine over a weight space.

    Subclasses bind the target group: how the weight space is built and how
    level dimensionalities / irrep dimensions are evaluated.
    """

    target: str = ""

    def __init__(self, config: Optional[BranchingConfig] = None):
        self.config = config if config is not None else BranchingConfig()
        self._weight_space: Optional[WeightSpace] = None
        self._table: Optional[TerminalTable] = (
            TerminalTable() if self.config.use_terminal_table else None
        )
        self._walker: Optional[PatternWalker] = None
        self._mult = MultiplicityMap()
        self._row: Optional[GelfandRow] = None

    def __repr__(self) -> str:
        return f"{type(self).__name__}(weight_space={self._weight_space!r}, row={self._row})"

    # -------------------------------------------------------------------------
    # Weight space
    # -------------------------------------------------------------------------

    @property
    def weight_space(self) -> Optional[WeightSpace]:
        return self._weight_space

    @property
    def terminal_table(self) -> Optional[TerminalTable]:
        return self._table

    @property
    def row(self) -> Optional[GelfandRow]:
        """Row passed to the last generate_weights() call."""
        return self._row

    def set_weight_space(self, weight_space: WeightSpace) -> None:
        """Install a new weight space; invalidates table offsets, caches and results."""
        if self.target and weight_space.target != self.target:
            raise ValueError(
                f"{type(self).__name__} needs a {self.target} weight space, "
                f"got {weight_space!r}"
            )
        self._weight_space = weight_space
        if self._table is not None:
            self._table.rebuild(weight_space)
        self._walker = PatternWalker(weight_space.codes, self._table, self.config.tail_calls)
        self._mult.clear()
        self._row = None

    # -------------------------------------------------------------------------
    # Generation
    # -------------------------------------------------------------------------

    def generate_weights(self, *row) -> None:
        """
        Generate the target-group weights of the U(N) irrep given by ``row``.

        Args:
            row: (n4, n3, n2, n1, n0) as five integers or one sequence; the
                total must equal the weight space length

        Raises:
            WeightSpaceNotBuiltError: no weight space set yet
            RowMismatchError: malformed row or total != len(weight space)
        """
        gpr = as_row(*row)
        ws = self._weight_space
        if ws is None:
            raise WeightSpaceNotBuiltError(
                f"{type(self).__name__}: build the weight space before generating weights"
            )
        if gpr.total != len(ws):
            raise RowMismatchError(
                f"Row {tuple(gpr)} has total {gpr.total}, but {ws!r} has {len(ws)} entries"
            )

        self._mult.clear()
        self._row = gpr
        start = time.perf_counter()
        cfg = self.config

        if cfg.memoize:
            if cfg.parallel:
                warnings.warn("memoize=True ignores n_jobs; running sequentially")
            self._mult.merge(self._walker.expand(tuple(gpr)), ws.decode)
        elif cfg.parallel:
            self._generate_parallel(tuple(gpr))
        else:
            walker = self._walker.spawn()
            walker.descend(tuple(gpr), 0)
            self._mult.merge(walker.counts, ws.decode)

        if cfg.verbose:
            elapsed = time.perf_counter() - start
            print(f"[Gelfand] {ws!r} row {tuple(gpr)}: {len(self._mult)} weights, "
                  f"{self._mult.total()} patterns in {elapsed:.3f}s")

    def _generate_parallel(self, row: Tuple[int, ...]) -> None:
        cfg = self.config
        ws = self._weight_space
        n_workers = cpu_count() if cfg.n_jobs == -1 else cfg.n_jobs
        n_tasks = n_workers * cfg.tasks_per_worker

        frontier = split_frontier(row, ws.codes, cfg.granularity, n_tasks)
        payloads = chunk_seeds(frontier, n_tasks)
        if cfg.verbose:
            print(f"[Gelfand] fork-join: {len(frontier)} seeds in {len(payloads)} tasks "
                  f"on {n_workers} workers ({cfg.backend})")

        partials = Parallel(n_jobs=cfg.n_jobs, backend=cfg.backend, return_as='generator')(
            delayed(_walk_seeds)(self._walker, seeds) for seeds in payloads
        )
        if cfg.verbose:
            partials = tqdm(partials, total=len(payloads), desc="join")
        for partial in partials:
            self._mult.merge(partial, ws.decode)

    # -------------------------------------------------------------------------
    # Results
    # -------------------------------------------------------------------------

    def mult_map(self) -> Mapping[Hashable, int]:
        """Read-only weight -> multiplicity view of the last generation."""
        return self._mult.view()

    def _level_dimensionality(self, mult, weight, strict=True) -> int:
        raise NotImplementedError

    def _irrep_dimension(self, weight) -> int:
        raise NotImplementedError

    def get_level_dimensionality(self, weight) -> int:
        """
        Number of target-group irreps with highest weight ``weight``.

        Raises:
            WeightNotFoundError: ``weight`` is not a key of mult_map()
        """
        return self._level_dimensionality(self._mult, weight)

    def level_dimensionality_or_zero(self, weight) -> int:
        """Like get_level_dimensionality, but 0 for weights never generated."""
        return self._level_dimensionality(self._mult, weight, strict=False)

    def level_dimensionalities(self) -> Dict[Hashable, int]:
        """Every generated weight with a nonzero level dimensionality."""
        return dict(nonzero_dimensionalities(self._mult, self._level_dimensionality))

    def total_dimension(self) -> int:
        """Sum of D(w) * dim(w); equals the dimension of the U(N) irrep."""
        return total_dimension(self._mult, self._level_dimensionality, self._irrep_dimension)


class SO3Branching(BranchingEngine):
    """U(2l+1) -> SO(3) reduction: weights are angular-momentum projections."""

    target = "SO3"

    def generate_m(self, l: int) -> None:
        """Build the weight space m = -l..l (must precede generate_weights)."""
        self.set_weight_space(SO3WeightSpace(l))

    def _level_dimensionality(self, mult, weight, strict=True) -> int:
        return so3_level_dimensionality(mult, weight, strict=strict)

    def _irrep_dimension(self, weight) -> int:
        return so3_irrep_dimension(weight)


class U3Branching(BranchingEngine):
    """U((n+1)(n+2)/2) -> U(3) reduction: weights are HO quanta totals (x, y, z)."""

    target = "U3"

    def generate_xyz(self, n: int) -> None:
        """Build the HO quanta vectors of shell n (must precede generate_weights)."""
        self.set_weight_space(U3WeightSpace(n))

    def _level_dimensionality(self, mult, weight, strict=True) -> int:
        return u3_level_dimensionality(mult, weight, strict=strict)

    def _irrep_dimension(self, weight) -> int:
        return u3_irrep_dimension(weight)
