"""
Configuration Tests
===================

Tests for BranchingConfig validation and environment overrides.
"""
import pytest
import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent))

from gelfand.config import BranchingConfig


class TestBranchingConfig:
    """Tests for BranchingConfig."""

    def test_defaults(self):
        cfg = BranchingConfig()
        assert cfg.tail_calls
        assert cfg.use_terminal_table
        assert not cfg.memoize
        assert cfg.n_jobs == 1
        assert not cfg.parallel

    def test_parallel_flag(self):
        assert BranchingConfig(n_jobs=4).parallel
        assert BranchingConfig(n_jobs=-1).parallel

    @pytest.mark.parametrize("kwargs", [
        dict(n_jobs=0),
        dict(n_jobs=-3),
        dict(backend='dask'),
        dict(granularity=-1),
        dict(tasks_per_worker=0),
    ])
    def test_invalid_values(self, kwargs):
        with pytest.raises(ValueError):
            BranchingConfig(**kwargs)

    def test_frozen(self):
        cfg = BranchingConfig()
        with pytest.raises(AttributeError):
            cfg.n_jobs = 3

    def test_with_options(self):
        cfg = BranchingConfig().with_options(memoize=True, verbose=True)
        assert cfg.memoize and cfg.verbose
        assert cfg.tail_calls

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv('GELFAND_N_JOBS', '3')
        monkeypatch.setenv('GELFAND_BACKEND', 'Threading')
        cfg = BranchingConfig.from_env()
        assert cfg.n_jobs == 3
        assert cfg.backend == 'threading'

    def test_overrides_beat_env(self, monkeypatch):
        monkeypatch.setenv('GELFAND_N_JOBS', '3')
        cfg = BranchingConfig.from_env(n_jobs=1, memoize=True)
        assert cfg.n_jobs == 1
        assert cfg.memoize

    def test_empty_env_ignored(self, monkeypatch):
        monkeypatch.setenv('GELFAND_N_JOBS', '')
        monkeypatch.delenv('GELFAND_BACKEND', raising=False)
        assert BranchingConfig.from_env() == BranchingConfig()
