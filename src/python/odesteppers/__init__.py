# __init__.py
"""Pluggable fixed-step ODE integrators on numpy arrays and torch tensors."""
from .errors import InvalidGrid, NumericDivergence, ShapeMismatch, SolverError
from .grid import uniform_grid, validate_grid
from .methods import METHODS, StepMethod, ab2, euler, get_method, heun, rk2, rk4
from .problems import (Decay, ForcedDecay, Oscillator, Problem, VanDerPol,
                       as_scipy, time_first)
from .solver import Solver, solve
from .convergence import (ConvergenceStudy, convergence_study, max_error,
                          reference_solution)

__version__ = "0.1.0"
