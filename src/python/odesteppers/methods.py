# methods.py
"""
Fixed-step update rules.

A step method is any callable

    method(u, k, t, rhs) -> u_next

where ``u`` is the state history (entries 0..k are valid), ``t`` the time
grid and ``rhs(u, t)`` the problem.  It returns the state at ``t[k+1]`` and
must not read ``u[k+1:]``.  Methods hold no state between calls, so one
function object can drive any number of runs.

Derivatives are multiplied by the step size as soon as they are returned;
problems that hand back a reused buffer (``Oscillator(reuse_buffer=True)``)
rely on that.
"""
from typing import Callable, Dict, Protocol, Union, runtime_checkable


@runtime_checkable
class StepMethod(Protocol):
    """Capability: advance the history by one step."""

    def __call__(self, u, k: int, t, rhs: Callable): ...


METHODS: Dict[str, Callable] = {}


def step_method(name: str, order: int):
    """Tag ``fn`` with ``name``/``order`` and register it under ``name``."""
    def register(fn):
        fn.name  = name
        fn.order = order
        METHODS[name] = fn
        return fn
    return register


def get_method(method: Union[str, Callable]) -> Callable:
    """Look up a registered method by name; callables pass straight through."""
    if callable(method):
        return method
    try:
        return METHODS[str(method).lower()]
    except KeyError:
        raise ValueError(f"Unknown method: {method!r} "
                         f"(choose from {', '.join(sorted(METHODS))})") from None


def _span(t, k: int):
    # python floats, so numpy and torch states see the same scalars
    tk = float(t[k])
    return tk, float(t[k + 1]) - tk


# --------------------------------------------------------------------------- #
@step_method("euler", order=1)
def euler(u, k, t, rhs):
    """Forward Euler: u[k+1] = u[k] + dt f(u[k], t[k])."""
    tk, dt = _span(t, k)
    return u[k] + dt * rhs(u[k], tk)


@step_method("rk2", order=2)
def rk2(u, k, t, rhs):
    """
    Second-order Runge-Kutta (midpoint form).

        K1      = dt f(u[k], t[k])
        K2      = dt f(u[k] + K1/2, t[k] + dt/2)
        u[k+1]  = u[k] + K2

    Local error O(dt^3), global error O(dt^2).
    """
    tk, dt = _span(t, k)
    K1 = dt * rhs(u[k], tk)
    K2 = dt * rhs(u[k] + 0.5 * K1, tk + 0.5 * dt)
    return u[k] + K2


@step_method("heun", order=2)
def heun(u, k, t, rhs):
    """Heun's method: Euler predictor, trapezoidal corrector."""
    tk, dt = _span(t, k)
    K1 = dt * rhs(u[k], tk)
    K2 = dt * rhs(u[k] + K1, tk + dt)
    return u[k] + 0.5 * (K1 + K2)


@step_method("rk4", order=4)
def rk4(u, k, t, rhs):
    """Classical fourth-order Runge-Kutta."""
    tk, dt = _span(t, k)
    K1 = dt * rhs(u[k], tk)
    K2 = dt * rhs(u[k] + 0.5 * K1, tk + 0.5 * dt)
    K3 = dt * rhs(u[k] + 0.5 * K2, tk + 0.5 * dt)
    K4 = dt * rhs(u[k] + K3, tk + dt)
    return u[k] + (K1 + 2.0 * K2 + 2.0 * K3 + K4) / 6.0


@step_method("ab2", order=2)
def ab2(u, k, t, rhs):
    """
    Two-step Adams-Bashforth on a possibly non-uniform grid.

    With r = dt_k / dt_{k-1}:
        u[k+1] = u[k] + dt_k ((1 + r/2) f_k - (r/2) f_{k-1})

    The first step has no u[k-1] yet and is taken with ``rk2``.
    """
    if k == 0:
        return rk2(u, k, t, rhs)
    tk, dt = _span(t, k)
    tkm1   = float(t[k - 1])
    r      = dt / (tk - tkm1)
    new    = dt * (1.0 + 0.5 * r) * rhs(u[k], tk)
    old    = dt * (0.5 * r) * rhs(u[k - 1], tkm1)
    return u[k] + new - old
