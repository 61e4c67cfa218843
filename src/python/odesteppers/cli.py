# cli.py
"""
Command-line driver for the stock problems.

    odesteppers decay --method rk2 --dt 0.1 --T 5
    odesteppers oscillator --method rk4 --dt 0.05 --T 10 --plot osc.png
    odesteppers vdp --mu 2 --sweep
"""
import argparse, sys, time

import numpy as np
import torch

from .backend import to_numpy
from .convergence import convergence_study, max_error
from .errors import SolverError
from .grid import uniform_grid
from .methods import METHODS
from .problems import Decay, ForcedDecay, Oscillator, VanDerPol
from .solver import Solver


# problem name -> (factory(args), default initial condition)
PROBLEMS = {
    "decay":      (lambda a: Decay(),                       [0.0]),
    "forced":     (lambda a: ForcedDecay.exponential(),     [0.0]),
    "oscillator": (lambda a: Oscillator(omega=a.omega),     [1.0, 0.0]),
    "vdp":        (lambda a: VanDerPol(mu=a.mu),            [2.0, 0.0]),
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="odesteppers",
        description="Fixed-step integration of the stock ODE problems")
    parser.add_argument("problem", choices=sorted(PROBLEMS),
                        help="right-hand side to integrate")
    parser.add_argument("--method", choices=sorted(METHODS), default="rk2",
                        help="step method")
    parser.add_argument("--dt", type=float, default=0.1, help="step size")
    parser.add_argument("--T", type=float, default=5.0, help="final time")
    parser.add_argument("--u0", type=float, nargs="+", default=None,
                        help="initial condition (one value per component)")
    parser.add_argument("--mu", type=float, default=1.0,
                        help="van der Pol parameter μ")
    parser.add_argument("--omega", type=float, default=1.0,
                        help="oscillator frequency")
    parser.add_argument("--torch", action="store_true",
                        help="integrate with torch tensors instead of ndarrays")
    parser.add_argument("--sweep", action="store_true",
                        help="print a step-halving convergence table")
    parser.add_argument("--levels", type=int, default=4,
                        help="number of grids in the sweep")
    parser.add_argument("--plot", metavar="FILE", default=None,
                        help="save a plot of the solution to FILE")
    parser.add_argument("--verbose", action="store_true",
                        help="print the solver summary line")
    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args   = parser.parse_args(argv)
    if args.levels < 2:
        parser.error(f"--levels must be at least 2, got {args.levels}")

    factory, default_u0 = PROBLEMS[args.problem]
    problem = factory(args)
    u0      = args.u0 if args.u0 is not None else default_u0
    if len(default_u0) > 1 and len(u0) != len(default_u0):
        print(f"error: {args.problem} needs {len(default_u0)} initial values "
              f"(--u0), got {len(u0)}", file=sys.stderr)
        return 2
    u0      = u0[0] if len(u0) == 1 else u0
    if args.torch:
        u0 = torch.tensor(u0, dtype=torch.float64)

    print(f"\nProblem : {problem!r}")
    print(f"Method  : {args.method.upper()}")
    print(f"t span  : [0.0, {args.T}]   dt = {args.dt}")

    try:
        grid   = uniform_grid(0.0, args.T, dt=args.dt)
        solver = Solver(problem, u0, grid, args.method,
                        check_finite=True, verbose=args.verbose)
        t_start = time.perf_counter()
        u, t    = solver.run()
        t_end   = time.perf_counter()

        print("\n--- results -------------------------------------------------")
        print(f"steps          : {solver.stats['step']}")
        print(f"rhs calls      : {solver.stats['fcall']}")
        print(f"wall time      : {1e3 * (t_end - t_start):.1f} ms")
        print(f"u(T)           : {np.atleast_1d(to_numpy(u[-1])).tolist()}")

        exact = getattr(problem, "exact", None)
        if exact is not None:
            print(f"max |error|    : {max_error(u, t, exact):.3e}")

        if args.sweep:
            study = convergence_study(problem, u0, 0.0, args.T, len(grid) - 1,
                                      args.method, levels=args.levels)
            print("\n--- convergence ---------------------------------------------")
            print(study.table())
            print(f"observed order : {study.observed_order:.3f}")
    except SolverError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    if args.plot:
        import matplotlib
        matplotlib.use("Agg")
        from .plotting import plot_solution

        fig = plot_solution(t, u, exact=exact,
                            title=f"{problem!r}, {args.method}, dt={args.dt}")
        fig.savefig(args.plot)
        print(f"figure         : {args.plot}")
    return 0
