"""
Command-Line Driver Tests
=========================
"""
import pytest
import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent))

from gelfand.cli import build_parser, main


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    monkeypatch.delenv('GELFAND_N_JOBS', raising=False)
    monkeypatch.delenv('GELFAND_BACKEND', raising=False)


class TestCLI:
    """Tests for gelfand.cli.main."""

    def test_parser_defaults(self):
        args = build_parser().parse_args(['so3', '2', '1', '1', '1', '1', '1'])
        assert args.target == 'so3'
        assert args.level == 2
        assert args.counts == [1, 1, 1, 1, 1]
        assert not args.memoize
        assert args.jobs is None

    def test_so3_output(self, capsys):
        assert main(['so3', '1', '1', '0', '0', '0', '2']) == 0
        lines = capsys.readouterr().out.splitlines()
        assert lines == [
            "U(N) irrep dim = 15",
            " [0] : 1",
            " [2] : 1",
            " [4] : 1",
            "SO(3) irreps total dim = 15",
        ]

    def test_u3_output(self, capsys):
        assert main(['u3', '1', '0', '0', '0', '1', '2']) == 0
        lines = capsys.readouterr().out.splitlines()
        assert lines == [
            "U(N) irrep dim = 3",
            " [1,0,0] : 1",
            "U(3) irreps total dim = 3",
        ]

    @pytest.mark.parametrize("flags", [
        ['--no-tce'],
        ['--no-precalc'],
        ['--memoize'],
        ['--jobs', '2', '--backend', 'threading'],
    ])
    def test_flags_do_not_change_output(self, capsys, flags):
        main(['so3', '2', '1', '1', '1', '1', '1'])
        baseline = capsys.readouterr().out
        main(['so3', '2', '1', '1', '1', '1', '1'] + flags)
        assert capsys.readouterr().out == baseline

    def test_row_mismatch_exits(self, capsys):
        with pytest.raises(SystemExit) as exc:
            main(['so3', '1', '0', '0', '1', '2', '2'])
        assert exc.value.code == 2
        assert "total" in capsys.readouterr().err

    def test_negative_level_exits(self):
        with pytest.raises(SystemExit) as exc:
            main(['so3', '-1', '0', '0', '0', '0', '1'])
        assert exc.value.code == 2

    def test_plot(self, tmp_path, capsys):
        path = tmp_path / "plots" / "so3.png"
        main(['so3', '1', '1', '0', '0', '0', '2', '--plot', str(path)])
        assert path.exists()
        assert path.stat().st_size > 0
        assert f"Saved plot to {path}" in capsys.readouterr().out
