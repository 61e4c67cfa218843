# methods_test.py
"""Step methods: observed order, registry, and the history-access contract."""
import math

import numpy as np
import pytest

from odesteppers import (METHODS, Decay, Oscillator, StepMethod, ab2,
                         convergence_study, euler, get_method, heun, rk2, rk4,
                         solve, uniform_grid)


# ----------------------------------------------------------------------
@pytest.mark.parametrize("method, expected", [
    (euler, 1.0),
    (rk2,   2.0),
    (heun,  2.0),
    (ab2,   2.0),
])
def test_observed_order_on_decay(method, expected):
    study = convergence_study(Decay(), 0.0, 0.0, 5.0, 50, method, levels=3)
    assert abs(study.observed_order - expected) < 0.15, study.table()


def test_rk4_is_fourth_order_on_the_oscillator():
    study = convergence_study(Oscillator(), [1.0, 0.0], 0.0, 2.0, 10, rk4,
                              levels=3)
    assert abs(study.observed_order - 4.0) < 0.2, study.table()


def test_single_rk2_step_by_hand():
    u = np.array([0.0, np.nan])
    t = np.array([0.0, 0.1])
    # K1 = 0.1, K2 = 0.1 * (-(0.05) + 1) = 0.095
    assert rk2(u, 0, t, Decay()) == pytest.approx(0.095, abs=1e-15)


def test_ab2_second_order_on_nonuniform_grid():
    def final_error(n):
        s    = np.linspace(0.0, 1.0, n + 1)
        t    = 2.5 * (s + s ** 2)
        u, _ = solve(Decay(), 0.0, t, ab2)
        return abs(u[-1] - (1.0 - math.exp(-5.0)))

    ratio = final_error(100) / final_error(200)
    assert 3.0 < ratio < 5.5, f"ratio {ratio:.3f}"


def test_ab2_first_step_is_rk2():
    t = np.linspace(0.0, 0.1, 2)
    a, _ = solve(Decay(), 0.0, t, ab2)
    b, _ = solve(Decay(), 0.0, t, rk2)
    assert a[1] == b[1]


# ----------------------------------------------------------------------
#  registry
# ----------------------------------------------------------------------
def test_registry_contents():
    assert set(METHODS) == {"euler", "rk2", "heun", "rk4", "ab2"}
    for name, method in METHODS.items():
        assert method.name == name
        assert isinstance(method, StepMethod)
    assert [rk2.order, rk4.order, euler.order] == [2, 4, 1]


def test_get_method():
    assert get_method("RK4") is rk4
    assert get_method(heun) is heun

    def custom(u, k, t, rhs):
        return u[k]

    assert get_method(custom) is custom
    with pytest.raises(ValueError, match="Unknown method"):
        get_method("rk45")


def test_solve_accepts_method_names():
    t = uniform_grid(0.0, 1.0, n=10)
    a, _ = solve(Decay(), 0.0, t, "heun")
    b, _ = solve(Decay(), 0.0, t, heun)
    assert np.array_equal(a, b)


# ----------------------------------------------------------------------
#  user methods
# ----------------------------------------------------------------------
def test_user_method_only_sees_written_entries():
    seen = []

    def checked_euler(u, k, t, rhs):
        seen.append(k)
        assert np.all(np.isfinite(u[:k + 1]))
        assert np.all(np.isnan(u[k + 1:]))
        return euler(u, k, t, rhs)

    u, _ = solve(Oscillator(), [1.0, 0.0], np.linspace(0.0, 1.0, 6), checked_euler)
    assert seen == [0, 1, 2, 3, 4]
    ref, _ = solve(Oscillator(), [1.0, 0.0], np.linspace(0.0, 1.0, 6), euler)
    assert np.array_equal(u, ref)


def test_user_multistep_method_reads_history():
    def leapfrog(u, k, t, rhs):
        if k == 0:
            return rk2(u, k, t, rhs)
        return u[k - 1] + (float(t[k + 1]) - float(t[k - 1])) * rhs(u[k], float(t[k]))

    u, t = solve(Oscillator(), [1.0, 0.0], uniform_grid(0.0, 5.0, dt=0.01), leapfrog)
    ref  = np.stack([np.cos(t), -np.sin(t)], axis=1)
    assert np.max(np.abs(u - ref)) < 1e-3
