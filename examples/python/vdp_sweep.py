#!/usr/bin/env python3
# examples/python/vdp_sweep.py
"""
Step-halving sweep on the van der Pol oscillator against a SciPy Radau
reference.  Switch the rule with  --method {euler,rk2,heun,rk4,ab2}
"""
import argparse

from odesteppers import METHODS, VanDerPol, convergence_study


def main():
    parser = argparse.ArgumentParser()
    parser.add_argument("--method", choices=sorted(METHODS), default="rk2")
    parser.add_argument("--mu", type=float, default=1.0,
                        help="van der Pol parameter μ")
    parser.add_argument("--n", type=int, default=50, help="coarsest step count")
    parser.add_argument("--T", type=float, default=5.0)
    args = parser.parse_args()

    study = convergence_study(VanDerPol(mu=args.mu), [2.0, 0.0], 0.0, args.T,
                              args.n, args.method, levels=5)
    print(f"\nMethod : {args.method.upper()}   μ = {args.mu}")
    print(study.table())
    print(f"observed order : {study.observed_order:.3f} "
          f"(nominal {METHODS[args.method].order})")


if __name__ == "__main__":
    main()
