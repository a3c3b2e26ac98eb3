# soft_sat/circuit/core/errors.py
"""
Exceptions raised while building or propagating through a logic circuit.

All of them are fatal at the point of detection: nothing here is retried
or skipped, the caller is expected to discard the half-built graph.
"""


class CircuitError(Exception):
    """Base class for every circuit failure."""


class WiringError(CircuitError):
    """An operand or consumer slot was filled twice, or is missing when needed."""


class IllegalOperationError(CircuitError):
    """A node was asked to do something its kind never supports."""


class InvalidVariableError(CircuitError, ValueError):
    """A clause references a variable outside ``[0, n_vars)``."""

    def __init__(self, index: int, n_vars: int):
        super().__init__(f"Variable ${index} out of range: circuit declares {n_vars} variable(s)")
        self.index = index
        self.n_vars = n_vars


class ClauseSyntaxError(CircuitError, ValueError):
    """A clause line could not be folded into a single expression."""

    def __init__(self, message: str, clause: str = None, position: int = None):
        if clause is not None:
            where = f" at column {position}" if position is not None else ""
            message = f"{message}{where} in clause {clause!r}"
        super().__init__(message)
        self.clause = clause
        self.position = position


class DimacsFormatError(ValueError):
    """The DIMACS-CNF input is malformed."""

    def __init__(self, message: str, line_no: int = None):
        if line_no is not None:
            message = f"line {line_no}: {message}"
        super().__init__(message)
        self.line_no = line_no
