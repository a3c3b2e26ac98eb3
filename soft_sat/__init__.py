# soft_sat/__init__.py
# Soft-logic circuits and gradient-descent SAT search

from .circuit import (
    CircuitError,
    WiringError,
    IllegalOperationError,
    InvalidVariableError,
    ClauseSyntaxError,
    ComputationGraph,
    value_and_grad,
    numeric_grad,
)
from .circuit.core import DimacsFormatError
from .solver import (
    SolverConfig,
    SolverResult,
    solve,
    gradient_descent,
    minimize_cost,
    read_dimacs,
    format_clause_text,
)

__version__ = "0.1.0"

__all__ = [
    # Errors
    'CircuitError',
    'WiringError',
    'IllegalOperationError',
    'InvalidVariableError',
    'ClauseSyntaxError',
    'DimacsFormatError',
    # Circuit
    'ComputationGraph',
    'value_and_grad',
    'numeric_grad',
    # Solver
    'SolverConfig',
    'SolverResult',
    'solve',
    'gradient_descent',
    'minimize_cost',
    'read_dimacs',
    'format_clause_text',
]
