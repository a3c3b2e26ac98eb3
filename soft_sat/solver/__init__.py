# soft_sat/solver/__init__.py
"""
Drivers around a ComputationGraph.

Exports:
    SolverConfig, SolverResult : run settings and outcome.
    solve                      : dispatch on SolverConfig.optimizer.
    gradient_descent           : fixed-iteration steepest descent.
    minimize_cost              : scipy.optimize.minimize with analytic gradients.
    read_dimacs                : DIMACS-CNF -> (n_vars, clause lines).
    format_clause_text         : (n_vars, clause lines) -> program-input text.
"""

from .descent import (
    SolverConfig,
    SolverResult,
    SCIPY_METHODS,
    initial_values,
    gradient_descent,
    minimize_cost,
    solve,
)
from .dimacs import read_dimacs, format_clause_text

__all__ = [
    "SolverConfig", "SolverResult", "SCIPY_METHODS",
    "initial_values", "gradient_descent", "minimize_cost", "solve",
    "read_dimacs", "format_clause_text",
]
