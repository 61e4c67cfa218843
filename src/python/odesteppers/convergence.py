# convergence.py
"""
Accuracy checks for the fixed-step methods.

* ``max_error``           – max-norm distance of a history from a closed form
* ``reference_solution``  – tight-tolerance SciPy solution on a grid, for
                            problems without a closed form
* ``convergence_study``   – halve dt repeatedly and estimate the order
"""
import math
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Union

import numpy as np
from scipy.integrate import solve_ivp

from .backend import to_numpy
from .grid import uniform_grid, validate_grid
from .methods import rk2
from .problems import as_scipy
from .solver import solve


def max_error(u, t, exact: Callable, u0=None) -> float:
    """max_k |u[k] - exact(t[k])| with the exact solution started from ``u0``."""
    u, t = to_numpy(u), to_numpy(t)
    if u0 is None:
        u0 = u[0]
    ref = exact(t, to_numpy(u0), float(t[0]))
    return float(np.max(np.abs(u - ref)))


def reference_solution(rhs: Callable, u0, t, *, method: str = "Radau",
                       rtol: float = 1e-10, atol: float = 1e-12) -> np.ndarray:
    """
    Solve with ``scipy.integrate.solve_ivp`` and sample on the grid ``t``.

    Returns an ndarray shaped like a history, (len(t),) + shape(u0).
    """
    t   = validate_grid(t)
    u0  = to_numpy(u0)
    sol = solve_ivp(as_scipy(rhs), (t[0], t[-1]), np.atleast_1d(u0),
                    method=method, t_eval=t, rtol=rtol, atol=atol)
    if not sol.success:
        raise RuntimeError(f"reference solve failed: {sol.message}")
    return sol.y.T.reshape((len(t),) + u0.shape)


@dataclass
class ConvergenceStudy:
    """Final-time errors for a sequence of step counts n, 2n, 4n, ..."""
    n:      List[int]   = field(default_factory=list)
    dt:     List[float] = field(default_factory=list)
    errors: List[float] = field(default_factory=list)
    orders: List[float] = field(default_factory=list)

    @property
    def observed_order(self) -> float:
        return self.orders[-1] if self.orders else math.nan

    def table(self) -> str:
        lines = [f"{'n':>8} {'dt':>12} {'error':>12} {'order':>7}"]
        for i, (n, dt, err) in enumerate(zip(self.n, self.dt, self.errors)):
            order = f"{self.orders[i - 1]:7.3f}" if i else " " * 7
            lines.append(f"{n:8d} {dt:12.4e} {err:12.4e} {order}")
        return "\n".join(lines)


def convergence_study(rhs: Callable, u0, t0: float, tfinal: float, n: int,
                      method: Union[str, Callable] = rk2, *, levels: int = 3,
                      exact: Optional[Callable] = None) -> ConvergenceStudy:
    """
    Integrate on uniform grids with n, 2n, ..., n 2^(levels-1) steps.

    The error is measured at ``tfinal`` against ``exact`` (default: the
    problem's own ``exact`` method) or, failing both, a SciPy reference.
    Each order estimate is log2(e_coarse / e_fine).
    """
    if levels < 2:
        raise ValueError(f"need at least 2 levels, got {levels}")
    if exact is None:
        exact = getattr(rhs, "exact", None)
    if exact is not None:
        target = exact(np.array([t0, tfinal]), to_numpy(u0), t0)[-1]
    else:
        target = reference_solution(rhs, u0, [t0, tfinal])[-1]

    study = ConvergenceStudy()
    for level in range(levels):
        steps = n * 2 ** level
        u, _  = solve(rhs, u0, uniform_grid(t0, tfinal, n=steps), method)
        err   = float(np.max(np.abs(to_numpy(u[-1]) - target)))
        if study.errors:
            prev = study.errors[-1]
            study.orders.append(math.log2(prev / err) if err > 0.0 and prev > 0.0
                                else math.nan)
        study.n.append(steps)
        study.dt.append((tfinal - t0) / steps)
        study.errors.append(err)
    return study
