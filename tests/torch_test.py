# torch_test.py
"""The same integrators with torch tensors as state."""
import math

import numpy as np
import pytest
import torch

from odesteppers import (Decay, Oscillator, ShapeMismatch, Solver, VanDerPol,
                         ab2, rk2, rk4, solve, time_first, uniform_grid)


def test_scalar_tensor_state():
    u0   = torch.tensor(0.0, dtype=torch.float64)
    u, t = solve(Decay(), u0, uniform_grid(0.0, 5.0, dt=0.1), rk2)
    assert isinstance(u, torch.Tensor) and isinstance(t, torch.Tensor)
    assert u.shape == (51,) and u.dtype == torch.float64
    assert abs(u[-1].item() - (1.0 - math.exp(-5.0))) < 1e-3


@pytest.mark.parametrize("method", [rk2, rk4, ab2])
def test_tensor_and_ndarray_runs_agree(method):
    t        = uniform_grid(0.0, 4.0, dt=0.05)
    u_np, _  = solve(Oscillator(), [1.0, 0.0], t, method)
    u_pt, tp = solve(Oscillator(), torch.tensor([1.0, 0.0]), t, method)
    assert u_pt.shape == (len(t), 2)
    assert np.allclose(u_pt.numpy(), u_np, rtol=1e-13, atol=1e-14)
    assert np.array_equal(tp.numpy(), t)


def test_float32_initial_condition_is_promoted():
    u0   = torch.tensor([1.0, 0.0], dtype=torch.float32)
    u, _ = solve(Oscillator(), u0, [0.0, 0.1, 0.2])
    assert u.dtype == torch.float64
    assert u0.dtype == torch.float32


def test_rhs_returning_list_of_scalars():
    # torch-style RHS: list of 0-d tensors, as in the usual vdp examples
    def vdp(t, y):
        return [y[1], (1.0 - y[0] ** 2) * y[1] - y[0]]

    t    = uniform_grid(0.0, 2.0, n=40)
    a, _ = solve(time_first(vdp), torch.tensor([2.0, 0.0]), t, rk4)
    b, _ = solve(VanDerPol(mu=1.0), np.array([2.0, 0.0]), t, rk4)
    assert np.allclose(a.numpy(), b, atol=1e-12)


def test_tensor_shape_mismatch():
    with pytest.raises(ShapeMismatch):
        solve(lambda u, t: torch.zeros(3), torch.tensor([1.0, 0.0]), [0.0, 1.0])


def test_ragged_tensor_rhs_is_a_shape_mismatch():
    u0 = torch.tensor([1.0, 0.0])
    with pytest.raises(ShapeMismatch):
        solve(lambda u, t: [1.0, [2.0, 3.0]], u0, [0.0, 1.0])
    with pytest.raises(ShapeMismatch):
        solve(lambda u, t: [u[1], torch.zeros(2)], u0, [0.0, 1.0])


def test_matrix_tensor_initial_condition():
    with pytest.raises(ShapeMismatch):
        solve(Decay(), torch.zeros(2, 2), [0.0, 1.0])


def test_tensor_iterate_and_determinism():
    t      = uniform_grid(0.0, 1.0, n=10)
    solver = Solver(Oscillator(), torch.tensor([1.0, 0.0]), t, rk2)
    states = [uk for _, uk in solver.iterate()]
    assert len(states) == 11
    assert torch.equal(torch.stack(states), solver.u)

    again, _ = solve(Oscillator(), torch.tensor([1.0, 0.0]), t, rk2)
    assert torch.equal(again, solver.u)
