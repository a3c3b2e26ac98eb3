# soft_sat/circuit/__init__.py
# Differentiable soft-logic circuits

from .core import (
    CircuitError,
    WiringError,
    IllegalOperationError,
    InvalidVariableError,
    ClauseSyntaxError,
    Node,
    InputNode,
    Tape,
)
from .ops import NotGate, AndGate, OrGate, SigmoidGate, CostNode, sigmoid
from .parser import ClauseBuilder, tokenize
from .graph import ComputationGraph
from .gradcheck import value_and_grad, numeric_grad, max_grad_error

__all__ = [
    # Errors
    'CircuitError',
    'WiringError',
    'IllegalOperationError',
    'InvalidVariableError',
    'ClauseSyntaxError',
    # Nodes
    'Node',
    'InputNode',
    'Tape',
    'NotGate',
    'AndGate',
    'OrGate',
    'SigmoidGate',
    'CostNode',
    'sigmoid',
    # Parsing
    'ClauseBuilder',
    'tokenize',
    # Facade
    'ComputationGraph',
    'value_and_grad',
    'numeric_grad',
    'max_grad_error',
]
