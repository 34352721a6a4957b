"""
Pytest Configuration and Fixtures
"""

import pytest
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

# Every execution path of the engine; all must agree on every map
ENGINE_CONFIGS = {
    'default': dict(),
    'no_tce': dict(tail_calls=False),
    'no_table': dict(use_terminal_table=False),
    'plain_recursion': dict(tail_calls=False, use_terminal_table=False),
    'memoize': dict(memoize=True),
    'memoize_no_table': dict(memoize=True, use_terminal_table=False),
    'threads': dict(n_jobs=2, backend='threading', granularity=0),
    'threads_no_table': dict(n_jobs=2, backend='threading', granularity=1,
                             use_terminal_table=False, tail_calls=False),
}


@pytest.fixture(params=sorted(ENGINE_CONFIGS))
def branching_config(request):
    """Each engine configuration in turn."""
    from gelfand.config import BranchingConfig
    return BranchingConfig(**ENGINE_CONFIGS[request.param])


@pytest.fixture
def so3_engine():
    """Factory: SO(3) engine with weight space built for level l."""
    from gelfand.engine import SO3Branching

    def _make(l, **config):
        from gelfand.config import BranchingConfig
        engine = SO3Branching(BranchingConfig(**config))
        engine.generate_m(l)
        return engine
    return _make


@pytest.fixture
def u3_engine():
    """Factory: U(3) engine with weight space built for shell n."""
    from gelfand.engine import U3Branching

    def _make(n, **config):
        from gelfand.config import BranchingConfig
        engine = U3Branching(BranchingConfig(**config))
        engine.generate_xyz(n)
        return engine
    return _make


@pytest.fixture(scope='session')
def reference_so3_map():
    """Plain-recursion reference maps, keyed by (l, row)."""
    from gelfand.config import BranchingConfig
    from gelfand.engine import SO3Branching

    cache = {}

    def _reference(l, row):
        key = (l, tuple(row))
        if key not in cache:
            engine = SO3Branching(BranchingConfig(tail_calls=False, use_terminal_table=False))
            engine.generate_m(l)
            engine.generate_weights(row)
            cache[key] = dict(engine.mult_map())
        return cache[key]
    return _reference
