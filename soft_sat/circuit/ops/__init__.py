# soft_sat/circuit/ops/__init__.py

# Convenience re-exports so users can do: from soft_sat.circuit.ops import AndGate, ...
from .logic import NotGate, AndGate, OrGate, BinaryGate
from .transcendental import SigmoidGate, CostNode, sigmoid

__all__ = [
    "NotGate", "AndGate", "OrGate", "BinaryGate",
    "SigmoidGate", "CostNode", "sigmoid",
]
