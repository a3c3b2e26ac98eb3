# soft_sat/circuit/core/__init__.py

"""
Core protocol of a soft-logic circuit.

Exports:
    Node, InputNode : node base class and the real-valued leaf.
    Tape            : arena handing out ids and owning every node.
    total_cost      : sum of clause-root forwards.
    pull_gradients  : per-input gradient pull.
    reset_from      : clear caches and gradients downstream of the inputs.
    errors          : CircuitError and its subclasses.
"""

from .errors import (
    CircuitError,
    WiringError,
    IllegalOperationError,
    InvalidVariableError,
    ClauseSyntaxError,
    DimacsFormatError,
)
from .node import Node, InputNode
from .tape import Tape
from .engine import total_cost, pull_gradients, reset_from

__all__ = [
    "CircuitError", "WiringError", "IllegalOperationError",
    "InvalidVariableError", "ClauseSyntaxError", "DimacsFormatError",
    "Node", "InputNode",
    "Tape",
    "total_cost", "pull_gradients", "reset_from",
]
