# -*- coding: utf-8 -*-
"""
Branching Engine Configuration
==============================

Performance toggles for the branching engine. None of them changes a result:
every combination produces the same multiplicity map.

Environment overrides (see ``BranchingConfig.from_env``):
    GELFAND_N_JOBS=4         run the top of the recursion on 4 workers
    GELFAND_BACKEND=loky     joblib backend ('loky', 'threading', 'multiprocessing')
"""

import os
from dataclasses import dataclass, replace

_BACKENDS = ('loky', 'threading', 'multiprocessing')


@dataclass(frozen=True)
class BranchingConfig:
    """Configuration for BranchingEngine."""

    # Recursion
    tail_calls: bool         = True   # apply the last sibling branch in place
    use_terminal_table: bool = True   # stop recursing at residual total <= 3
    memoize: bool            = False  # expand each distinct row only once

    # Fork-join execution (joblib)
    n_jobs: int              = 1      # 1 = sequential
    backend: str             = 'loky'
    granularity: int         = 8      # only levels N > granularity are split into tasks
    tasks_per_worker: int    = 4

    # Diagnostics
    verbose: bool            = False

    def __post_init__(self):
        if self.n_jobs == 0 or self.n_jobs < -1:
            raise ValueError(f"n_jobs must be -1 or a positive integer, got {self.n_jobs}")
        if self.backend not in _BACKENDS:
            raise ValueError(f"Unknown backend: {self.backend} (expected one of {_BACKENDS})")
        if self.granularity < 0:
            raise ValueError(f"granularity must be nonnegative, got {self.granularity}")
        if self.tasks_per_worker < 1:
            raise ValueError(f"tasks_per_worker must be >= 1, got {self.tasks_per_worker}")

    @property
    def parallel(self) -> bool:
        return self.n_jobs != 1

    @classmethod
    def from_env(cls, **overrides) -> 'BranchingConfig':
        """Defaults, then GELFAND_* environment variables, then ``overrides``."""
        values = {}
        env_jobs = os.environ.get('GELFAND_N_JOBS', '').strip()
        if env_jobs:
            values['n_jobs'] = int(env_jobs)
        env_backend = os.environ.get('GELFAND_BACKEND', '').strip().lower()
        if env_backend:
            values['backend'] = env_backend
        values.update(overrides)
        return cls(**values)

    def with_options(self, **changes) -> 'BranchingConfig':
        return replace(self, **changes)
