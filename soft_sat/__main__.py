"""
Command line driver.

    python -m soft_sat solve clauses.txt
    python -m soft_sat solve --dimacs problem.cnf --optimizer L-BFGS-B
    python -m soft_sat convert problem.cnf > clauses.txt
    python -m soft_sat stats clauses.txt --detailed

Clause files hold the variable count on the first line and one clause per
line after it. `-` reads from stdin.
"""

import argparse
import sys
from pathlib import Path

from .circuit.core.errors import CircuitError, DimacsFormatError
from .circuit.core.graph_utils import print_graph_summary
from .circuit.graph import ComputationGraph
from .solver.descent import SolverConfig, SCIPY_METHODS, solve
from .solver.dimacs import read_dimacs, format_clause_text


def _read(path: str) -> str:
    if path == "-":
        return sys.stdin.read()
    return Path(path).read_text()


def _load_graph(args) -> ComputationGraph:
    text = _read(args.input)
    if args.dimacs:
        return ComputationGraph.from_dimacs(text)
    return ComputationGraph.from_text(text)


def cmd_solve(args) -> int:
    graph = _load_graph(args)
    config = SolverConfig(
        optimizer=args.optimizer,
        learning_rate=args.learning_rate,
        iterations=args.iterations,
        seed=args.seed,
        verbose=args.verbose,
    )
    result = solve(graph, config)
    for i, t in enumerate(result.truth_values):
        print(f"${i} = {t:f}")
    return 0


def cmd_convert(args) -> int:
    n_vars, clauses = read_dimacs(_read(args.input))
    sys.stdout.write(format_clause_text(n_vars, clauses))
    return 0


def cmd_stats(args) -> int:
    print_graph_summary(_load_graph(args), detailed=args.detailed)
    return 0


def build_parser() -> argparse.ArgumentParser:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="soft_sat",
        description="Gradient-descent search for satisfying assignments of soft-logic clauses",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    sub = parser.add_subparsers(dest="command", required=True)

    p_solve = sub.add_parser("solve", help="minimise the clause cost and print truth values",
                             formatter_class=argparse.ArgumentDefaultsHelpFormatter)
    p_solve.add_argument("input", help="clause file ('-' for stdin)")
    p_solve.add_argument("--dimacs", action="store_true", help="input is DIMACS-CNF")
    p_solve.add_argument("--optimizer", default="gd",
                         help=f"'gd' or a scipy method ({', '.join(SCIPY_METHODS)})")
    p_solve.add_argument("--iterations", type=int, default=4000,
                         help="gradient steps (gd) or max iterations (scipy)")
    p_solve.add_argument("--learning-rate", type=float, default=0.1,
                         help="step size for gd")
    p_solve.add_argument("--seed", type=int, default=None,
                         help="seed for the random starting point")
    p_solve.add_argument("--verbose", action="store_true", help="print progress")
    p_solve.set_defaults(func=cmd_solve)

    p_convert = sub.add_parser("convert", help="convert DIMACS-CNF to clause text")
    p_convert.add_argument("input", help="DIMACS file ('-' for stdin)")
    p_convert.set_defaults(func=cmd_convert)

    p_stats = sub.add_parser("stats", help="print circuit statistics")
    p_stats.add_argument("input", help="clause file ('-' for stdin)")
    p_stats.add_argument("--dimacs", action="store_true", help="input is DIMACS-CNF")
    p_stats.add_argument("--detailed", action="store_true", help="list every node")
    p_stats.set_defaults(func=cmd_stats)

    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    try:
        return args.func(args)
    except (CircuitError, DimacsFormatError, ValueError, OSError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
