# plotting.py
"""matplotlib views of a solution history."""
from typing import Callable, Optional, Sequence

import matplotlib.pyplot as plt
import numpy as np

from .backend import to_numpy


def _columns(u: np.ndarray) -> np.ndarray:
    # scalar histories become a single column
    return u.reshape(len(u), -1)


def plot_solution(t, u, *, exact: Optional[Callable] = None,
                  labels: Optional[Sequence[str]] = None,
                  ax=None, title: Optional[str] = None):
    """
    One line per state component against time; ``exact(t, u0, t0)`` adds
    dashed reference curves.  Returns the Figure.
    """
    t, u = to_numpy(t), to_numpy(u)
    if ax is None:
        fig, ax = plt.subplots(figsize=(8, 4))
    else:
        fig = ax.figure

    cols = _columns(u)
    if labels is None:
        labels = ["u"] if cols.shape[1] == 1 else [f"u[{i}]" for i in range(cols.shape[1])]
    for i, label in enumerate(labels):
        ax.plot(t, cols[:, i], label=label)

    if exact is not None:
        ref = _columns(exact(t, u[0], float(t[0])))
        for i, label in enumerate(labels):
            ax.plot(t, ref[:, i], "--", color="k", lw=0.8,
                    label="exact" if i == 0 else None)

    ax.set_xlabel("t")
    if title:
        ax.set_title(title)
    ax.grid(True)
    ax.legend()
    return fig


def plot_phase(u, ax=None, title: Optional[str] = None):
    """Phase portrait u[1] against u[0] of a 2-D history.  Returns the Figure."""
    u = to_numpy(u)
    if u.ndim != 2 or u.shape[1] != 2:
        raise ValueError(f"phase plot needs a 2-D state, history has shape {u.shape}")
    if ax is None:
        fig, ax = plt.subplots(figsize=(5, 5))
    else:
        fig = ax.figure
    ax.plot(u[:, 0], u[:, 1])
    ax.plot(u[0, 0], u[0, 1], "o", label="start")
    ax.set_xlabel("u[0]")
    ax.set_ylabel("u[1]")
    ax.set_aspect("equal", adjustable="datalim")
    if title:
        ax.set_title(title)
    ax.grid(True)
    ax.legend()
    return fig
