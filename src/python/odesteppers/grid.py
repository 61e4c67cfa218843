# grid.py
"""Time grids: validation of user grids and uniform grid construction."""
import math
from typing import Optional

import numpy as np
import torch

from .backend import is_torch
from .errors import InvalidGrid


def validate_grid(t, like=None):
    """
    Return a float64 copy of ``t`` after checking it is usable.

    Parameters
    ----------
    t    : sequence of floats, ndarray or 1-D tensor
    like : optional state; when it is a tensor the grid is returned as a
           tensor on the same device, otherwise as an ndarray

    Raises
    ------
    InvalidGrid  fewer than two points, not 1-D, non-finite entries,
                 or entries that are not strictly increasing
    """
    if is_torch(t):
        t = t.detach().cpu().numpy()
    try:
        grid = np.array(t, dtype=np.float64)
    except (TypeError, ValueError) as exc:
        raise InvalidGrid(f"time grid is not a sequence of reals: {exc}") from exc

    if grid.ndim != 1:
        raise InvalidGrid(f"time grid must be 1-D, got shape {grid.shape}")
    if grid.size < 2:
        raise InvalidGrid(f"time grid needs at least 2 points, got {grid.size}")
    if not np.all(np.isfinite(grid)):
        raise InvalidGrid("time grid contains NaN or inf")
    steps = np.diff(grid)
    if np.any(steps <= 0.0):
        k = int(np.argmax(steps <= 0.0))
        raise InvalidGrid(f"time grid is not strictly increasing at index {k}: "
                          f"t[{k}]={grid[k]!r}, t[{k + 1}]={grid[k + 1]!r}")

    if like is not None and is_torch(like):
        return torch.as_tensor(grid, dtype=torch.float64, device=like.device)
    return grid


def uniform_grid(t0: float, tfinal: float, *,
                 n: Optional[int] = None, dt: Optional[float] = None) -> np.ndarray:
    """
    Equally spaced grid on [t0, tfinal] with ``n`` steps (n+1 points).

    Give exactly one of ``n`` or ``dt``.  A ``dt`` must divide the interval
    (to 1e-9 relative), the step count is then round((tfinal - t0)/dt).
    """
    if (n is None) == (dt is None):
        raise ValueError("give exactly one of n or dt")
    if not (math.isfinite(t0) and math.isfinite(tfinal)) or tfinal <= t0:
        raise InvalidGrid(f"need finite t0 < tfinal, got [{t0}, {tfinal}]")

    span = tfinal - t0
    if dt is not None:
        if not dt > 0.0:
            raise InvalidGrid(f"dt must be positive, got {dt}")
        n = int(round(span / dt))
        if n < 1 or abs(n * dt - span) > 1e-9 * span:
            raise InvalidGrid(f"dt={dt} does not divide [{t0}, {tfinal}]")
    if n < 1:
        raise InvalidGrid(f"need at least one step, got n={n}")
    return np.linspace(t0, tfinal, int(n) + 1)
