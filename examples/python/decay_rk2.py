#!/usr/bin/env python3
# examples/python/decay_rk2.py
"""
u' = -u + 1 from u(0) = 0 with the midpoint RK2 rule, plotted against the
closed form 1 - exp(-t).
"""
import matplotlib.pyplot as plt
import numpy as np

from odesteppers import Decay, max_error, rk2, solve, uniform_grid
from odesteppers.plotting import plot_solution


if __name__ == "__main__":
    problem = Decay()
    for dt in (0.5, 0.1, 0.02):
        u, t = solve(problem, 0.0, uniform_grid(0.0, 5.0, dt=dt), rk2)
        print(f"dt = {dt:5.2f}   u(5) = {u[-1]:.8f}   "
              f"max error = {max_error(u, t, problem.exact):.3e}")

    plot_solution(t, u, exact=problem.exact, title="u' = -u + 1, RK2")
    plt.show()
