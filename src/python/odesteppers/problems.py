# problems.py
"""
Right-hand sides  u' = f(u, t).

Any callable ``rhs(u, t) -> du/dt`` returning something shaped like ``u`` is a
problem.  The classes here are the stock ones; each works on numpy and torch
states.  A problem with a closed-form solution also has

    exact(t, u0, t0=0.0) -> ndarray of shape (len(t),) + shape(u0)

which the convergence tools and the CLI use as reference.
"""
import math
from typing import Callable, Optional, Protocol, runtime_checkable

import numpy as np

from .backend import is_torch, stack, to_numpy


@runtime_checkable
class Problem(Protocol):
    """Capability: evaluate the derivative at state ``u`` and time ``t``."""

    def __call__(self, u, t): ...


def _tau(t, t0: float, u0: np.ndarray) -> np.ndarray:
    # elapsed time as a column that broadcasts against u0
    tau = np.asarray(t, dtype=np.float64) - t0
    return tau.reshape(tau.shape + (1,) * u0.ndim)


# --------------------------------------------------------------------------- #
class Decay:
    """Relaxation to equilibrium, u' = -a*u + b.  Defaults: u' = -u + 1."""

    def __init__(self, a: float = 1.0, b: float = 1.0):
        self.a, self.b = float(a), float(b)

    def __call__(self, u, t):
        return -self.a * u + self.b

    def exact(self, t, u0, t0: float = 0.0) -> np.ndarray:
        u0  = to_numpy(u0)
        tau = _tau(t, t0, u0)
        if self.a == 0.0:
            return u0 + self.b * tau
        ueq = self.b / self.a
        return ueq + (u0 - ueq) * np.exp(-self.a * tau)

    def __repr__(self):
        return f"Decay(a={self.a}, b={self.b})"


class ForcedDecay:
    """
    u' = -u + f(t) for a scalar forcing ``f``.

    ``solution(t, u0, t0)`` may be supplied when the forcing has a closed
    form; it then becomes the ``exact`` method of the instance.
    """

    def __init__(self, f: Callable[[float], float],
                 solution: Optional[Callable] = None):
        self.f = f
        if solution is not None:
            self.exact = solution

    def __call__(self, u, t):
        return -u + float(self.f(t))

    @classmethod
    def exponential(cls) -> "ForcedDecay":
        """f(t) = exp(-t); then (u e^t)' = 1 and u = e^{-t} (t - t0 + u0 e^{t0})."""
        def solution(t, u0, t0=0.0):
            u0 = to_numpy(u0)
            t  = _tau(t, 0.0, u0)
            return np.exp(-t) * (t - t0 + u0 * math.exp(t0))

        return cls(lambda t: math.exp(-t), solution=solution)

    def __repr__(self):
        return f"ForcedDecay(f={getattr(self.f, '__name__', self.f)!r})"


class Oscillator:
    """
    Harmonic oscillator as a first-order system, u' = [u1, -omega**2 u0].

    With ``reuse_buffer=True`` the derivative of a numpy state is written
    into one pre-allocated array and that same array is returned on every
    call: the caller must consume it before calling again.  The built-in
    step methods scale the result straight away, so they are safe with it.
    Torch states always get a fresh tensor.
    """

    def __init__(self, omega: float = 1.0, reuse_buffer: bool = False):
        self.omega        = float(omega)
        self.w2           = self.omega ** 2
        self.reuse_buffer = reuse_buffer
        self._buf         = np.empty(2, dtype=np.float64)

    def __call__(self, u, t):
        if self.reuse_buffer and not is_torch(u):
            self._buf[0] = u[1]
            self._buf[1] = -self.w2 * u[0]
            return self._buf
        return stack([u[1], -self.w2 * u[0]], like=u)

    def exact(self, t, u0, t0: float = 0.0) -> np.ndarray:
        u0   = to_numpy(u0)
        tau  = np.asarray(t, dtype=np.float64) - t0
        w    = self.omega
        c, s = np.cos(w * tau), np.sin(w * tau)
        # omega = 0 is free motion, sin(w tau)/w -> tau
        s_w  = s / w if w != 0.0 else tau
        x    = u0[0] * c + u0[1] * s_w
        v    = -u0[0] * w * s + u0[1] * c
        return np.stack([x, v], axis=-1)

    def __repr__(self):
        return f"Oscillator(omega={self.omega})"


class VanDerPol:
    """Van der Pol oscillator, u' = [u1, mu (1 - u0^2) u1 - u0].  No closed form."""

    def __init__(self, mu: float = 1.0):
        self.mu = float(mu)

    def __call__(self, u, t):
        return stack([u[1], self.mu * (1.0 - u[0] ** 2) * u[1] - u[0]], like=u)

    def __repr__(self):
        return f"VanDerPol(mu={self.mu})"


# --------------------------------------------------------------------------- #
# adapters between the (u, t) and the SciPy (t, y) argument orders
# --------------------------------------------------------------------------- #
def time_first(f: Callable, *args) -> Callable:
    """Wrap a SciPy-style ``f(t, y, *args)`` as ``rhs(u, t)``."""
    def rhs(u, t):
        return f(t, u, *args)
    rhs.__name__ = getattr(f, "__name__", "rhs")
    return rhs


def as_scipy(rhs: Callable) -> Callable:
    """Wrap ``rhs(u, t)`` as ``fun(t, y)`` for ``scipy.integrate.solve_ivp``."""
    def fun(t, y):
        # copied: a problem may hand back a reused buffer
        return np.array(to_numpy(rhs(y, t)), dtype=np.float64).reshape(np.shape(y))
    return fun
