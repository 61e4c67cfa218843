# errors.py
"""Exceptions raised by the fixed-step integrators."""


class SolverError(Exception):
    """Base class for everything the package raises on purpose."""


class InvalidGrid(SolverError, ValueError):
    """Time grid is too short, not strictly increasing, or not finite."""


class ShapeMismatch(SolverError, ValueError):
    """A state, derivative or step result has the wrong shape."""


class NumericDivergence(SolverError, ArithmeticError):
    """A step produced NaN or inf (only raised when asked to check)."""
