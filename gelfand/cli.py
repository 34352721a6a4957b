# -*- coding: utf-8 -*-
"""
Command-line driver
===================

Reduces one U(N) irrep and prints its level dimensionalities.

    python -m gelfand so3 L  n4 n3 n2 n1 n0     # N = 2L + 1
    python -m gelfand u3  n  n4 n3 n2 n1 n0     # N = (n+1)(n+2)/2

Example:
    $ python -m gelfand so3 10 0 0 6 1 14 --memoize
    U(N) irrep dim = 2168999910
     [0] : ...
    SO(3) irreps total dim = 2168999910
"""

import argparse
import sys
from typing import List, Optional

from .config import BranchingConfig
from .dimensionality import un_irrep_dimension
from .engine import BranchingEngine, SO3Branching, U3Branching
from .errors import RowMismatchError
from .rows import as_row, row_to_labels


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gelfand",
        description="Reduce a U(N) irrep with labels in {4,3,2,1,0} to SO(3) or U(3) irreps"
    )
    parser.add_argument('target', choices=['so3', 'u3'],
                        help='Target subgroup')
    parser.add_argument('level', type=int,
                        help='Angular momentum l (so3) or oscillator shell n (u3)')
    parser.add_argument('counts', type=int, nargs=5, metavar='n',
                        help='Class counts n4 n3 n2 n1 n0 of the U(N) irrep')

    # Engine toggles
    parser.add_argument('--no-tce', action='store_true',
                        help='Disable the in-place tail-call loop')
    parser.add_argument('--no-precalc', action='store_true',
                        help='Disable the terminal table')
    parser.add_argument('--memoize', action='store_true',
                        help='Expand each distinct row once (fast for large irreps)')
    parser.add_argument('--jobs', type=int, default=None,
                        help='Workers for fork-join execution (default: GELFAND_N_JOBS or 1)')
    parser.add_argument('--backend', type=str, default=None,
                        choices=['loky', 'threading', 'multiprocessing'],
                        help='joblib backend for fork-join execution')

    # Output
    parser.add_argument('--plot', type=str, default=None, metavar='PATH',
                        help='Save a bar chart of level dimensionalities')
    parser.add_argument('--verbose', action='store_true',
                        help='Print timing and task diagnostics')
    return parser


def make_engine(target: str, level: int, config: BranchingConfig) -> BranchingEngine:
    if target == 'so3':
        engine = SO3Branching(config)
        engine.generate_m(level)
    else:
        engine = U3Branching(config)
        engine.generate_xyz(level)
    return engine


def _format_weight(weight) -> str:
    if isinstance(weight, tuple):
        return ",".join(str(f) for f in weight)
    return str(weight)


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    overrides = dict(
        tail_calls=not args.no_tce,
        use_terminal_table=not args.no_precalc,
        memoize=args.memoize,
        verbose=args.verbose,
    )
    if args.jobs is not None:
        overrides['n_jobs'] = args.jobs
    if args.backend is not None:
        overrides['backend'] = args.backend

    try:
        config = BranchingConfig.from_env(**overrides)
        engine = make_engine(args.target, args.level, config)
        row = as_row(args.counts)
        print(f"U(N) irrep dim = {un_irrep_dimension(row_to_labels(row))}")
        engine.generate_weights(row)
    except (RowMismatchError, ValueError) as e:
        parser.error(str(e))

    dims = engine.level_dimensionalities()
    for weight, d in dims.items():
        print(f" [{_format_weight(weight)}] : {d}")

    group = "SO(3)" if args.target == 'so3' else "U(3)"
    print(f"{group} irreps total dim = {engine.total_dimension()}")

    if args.plot:
        from .plotting import plot_level_dimensionalities
        path = plot_level_dimensionalities(
            dims, args.plot,
            title=f"U({len(engine.weight_space)}) {list(args.counts)} -> {group}",
            xlabel="l" if args.target == 'so3' else "(f1,f2,f3)",
        )
        print(f"Saved plot to {path}")

    return 0


if __name__ == '__main__':
    sys.exit(main())
