# cli_test.py
import pytest

from odesteppers import InvalidGrid, cli
from odesteppers.cli import build_parser, main


def test_decay_defaults(capsys):
    assert main(["decay"]) == 0
    out = capsys.readouterr().out
    assert "Method  : RK2" in out
    assert "steps          : 50" in out
    assert "rhs calls      : 100" in out
    assert "max |error|" in out


def test_oscillator_sweep(capsys):
    assert main(["oscillator", "--method", "rk4", "--dt", "0.05", "--T", "2",
                 "--sweep", "--levels", "3"]) == 0
    out = capsys.readouterr().out
    assert "--- convergence" in out
    assert "observed order" in out


def test_vdp_with_torch_and_verbose(capsys):
    assert main(["vdp", "--mu", "2", "--T", "2", "--dt", "0.01",
                 "--torch", "--verbose"]) == 0
    out = capsys.readouterr().out
    assert "VanDerPol(mu=2.0)" in out
    assert "rk2: steps 200, rhs calls 400" in out
    assert "max |error|" not in out


def test_custom_initial_condition(capsys):
    assert main(["decay", "--u0", "1.0", "--method", "euler"]) == 0
    assert "u(T)           : [1.0]" in capsys.readouterr().out


def test_bad_step_size_is_reported(capsys):
    assert main(["decay", "--dt", "0.3", "--T", "1"]) == 2
    assert "does not divide" in capsys.readouterr().err


def test_divergence_is_reported(capsys):
    assert main(["decay", "--u0", "1e308", "--method", "euler",
                 "--dt", "3", "--T", "30"]) == 2
    assert "non-finite" in capsys.readouterr().err


def test_oscillator_needs_two_initial_values(capsys):
    assert main(["oscillator", "--u0", "1"]) == 2
    assert "needs 2 initial values" in capsys.readouterr().err


def test_free_oscillator_error_is_finite(capsys):
    assert main(["oscillator", "--omega", "0", "--T", "1"]) == 0
    out = capsys.readouterr().out
    assert "max |error|" in out and "nan" not in out


def test_sweep_errors_are_reported(monkeypatch, capsys):
    def failing_study(*args, **kwargs):
        raise InvalidGrid("grid too coarse for a sweep")

    monkeypatch.setattr(cli, "convergence_study", failing_study)
    assert main(["decay", "--sweep"]) == 2
    assert "grid too coarse" in capsys.readouterr().err


def test_sweep_needs_two_levels():
    with pytest.raises(SystemExit):
        main(["decay", "--sweep", "--levels", "1"])


def test_plot_is_written(tmp_path, capsys):
    target = tmp_path / "forced.png"
    assert main(["forced", "--plot", str(target)]) == 0
    assert target.exists() and target.stat().st_size > 0


def test_unknown_method_rejected_by_parser():
    with pytest.raises(SystemExit):
        build_parser().parse_args(["decay", "--method", "rk45"])
