# solver.py
"""
Fixed-grid driver.

``solve(rhs, u0, t, method)`` allocates a history with one entry per grid
point, stores ``u0`` in entry 0 and fills entry k+1 with
``method(u, k, t, rhs)``.  The grid is checked once on entry, every
derivative and every step result is checked against the shape of ``u0``
as it is produced.
"""
from typing import Callable, Iterator, Tuple, Union

from . import backend
from .errors import NumericDivergence, ShapeMismatch
from .grid import validate_grid
from .methods import get_method, rk2


def method_name(method: Callable) -> str:
    return getattr(method, "name", getattr(method, "__name__", repr(method)))


class Solver:
    """
    One fixed-step integration of ``u' = rhs(u, t)`` over the grid ``t``.

    Parameters
    ----------
    rhs          : callable ``rhs(u, t) -> du/dt``
    u0           : scalar or 1-D vector (sequence, ndarray or tensor)
    t            : strictly increasing grid with at least two points
    method       : step method or its registered name (default ``rk2``)
    check_finite : raise ``NumericDivergence`` on the first NaN/inf state
    verbose      : print a one-line summary after the run

    After ``run()`` (or an exhausted ``iterate()``) the history is in ``u``,
    the float64 grid in ``t`` and the counters in ``stats``.
    """

    def __init__(self, rhs: Callable, u0, t,
                 method: Union[str, Callable] = rk2, *,
                 check_finite: bool = False, verbose: bool = False):
        if not callable(rhs):
            raise TypeError(f"rhs must be callable, got {type(rhs).__name__}")
        self.rhs          = rhs
        self.method       = get_method(method)
        try:
            self.u0       = backend.as_state(u0)
        except (TypeError, ValueError, RuntimeError) as exc:
            raise ShapeMismatch("initial condition is not a real scalar "
                                f"or vector: {exc}") from exc
        self.shape        = backend.shape_of(self.u0)
        if len(self.shape) > 1 or self.shape == (0,):
            raise ShapeMismatch("initial condition must be a scalar or a "
                                f"non-empty 1-D vector, got shape {self.shape}")
        self.t            = validate_grid(t, like=self.u0)
        self.check_finite = check_finite
        self.verbose      = verbose

        self.u     = None
        self.stats = dict(step=0, fcall=0)

    # ---- shape-checked collaborators ----------------------------------------
    def _conform(self, value, what: str, t: float):
        # torch.stack reports ragged lists as RuntimeError
        try:
            value = backend.as_like(value, self.u0)
        except (TypeError, ValueError, RuntimeError) as exc:
            raise ShapeMismatch(f"{what} at t={t!r} is not a real array: {exc}") from exc
        shape = backend.shape_of(value)
        if shape != self.shape:
            raise ShapeMismatch(f"{what} at t={t!r} has shape {shape}, "
                                f"state has shape {self.shape}")
        return value

    def _rhs(self, u, t):
        self.stats["fcall"] += 1
        return self._conform(self.rhs(u, t), "derivative", t)

    # ---- main loop ------------------------------------------------------------
    def _start(self):
        self.stats = dict(step=0, fcall=0)
        self.u     = backend.new_history(self.u0, len(self.t))
        self.u[0]  = self.u0

    def _advance(self, k: int):
        t_next = float(self.t[k + 1])
        u_next = self._conform(self.method(self.u, k, self.t, self._rhs),
                               "step result", t_next)
        if self.check_finite and not backend.is_finite(u_next):
            raise NumericDivergence(f"non-finite state at t={t_next!r} "
                                    f"(step {k + 1}); the step size is "
                                    "probably too large for this problem")
        self.u[k + 1] = u_next
        self.stats["step"] += 1

    def _finish(self):
        if self.verbose:
            print(f"{method_name(self.method)}: steps {self.stats['step']}, "
                  f"rhs calls {self.stats['fcall']}, "
                  f"t_final {float(self.t[-1]):.6g}")

    def run(self) -> Tuple[object, object]:
        """Integrate over the whole grid and return ``(u, t)``."""
        self._start()
        for k in range(len(self.t) - 1):
            self._advance(k)
        self._finish()
        return self.u, self.t

    def iterate(self) -> Iterator[Tuple[float, object]]:
        """
        Integrate lazily, yielding ``(t_k, u_k)`` for k = 0..N.

        Each yielded state is a copy, the history buffer itself is only
        written by the solver.
        """
        self._start()
        yield float(self.t[0]), backend.copy(self.u[0])
        for k in range(len(self.t) - 1):
            self._advance(k)
            yield float(self.t[k + 1]), backend.copy(self.u[k + 1])
        self._finish()


def solve(rhs: Callable, u0, t, method: Union[str, Callable] = rk2, *,
          check_finite: bool = False, verbose: bool = False):
    """Convenience wrapper: ``Solver(...).run()``, returns ``(u, t)``."""
    return Solver(rhs, u0, t, method,
                  check_finite=check_finite, verbose=verbose).run()
