# soft_sat/circuit/ops/transcendental.py
from __future__ import annotations
from typing import List, Tuple

import numpy as np

from ..core.node import Node
from ..core.errors import IllegalOperationError


def sigmoid(x):
    return 1.0 / (1.0 + np.exp(-x))


class SigmoidGate(Node):
    """
    Squashes one variable's raw value into a truth value in (0, 1).

    This is the only fan-out point of a circuit: every clause that mentions
    the variable registers itself here, in parse order. Backward pulls all of
    them before pushing f * (1 - f) * grad into the input.
    """
    op_tag = "s"

    def __init__(self, source: Node, node_id: int):
        super().__init__(node_id)
        self.a = self._attach(source)
        self.children: List[Node] = []

    @property
    def consumers(self) -> Tuple[Node, ...]:
        return tuple(self.children)

    @property
    def inputs(self) -> Tuple[Node, ...]:
        return (self.a,)

    def set_consumer(self, node: Node) -> None:
        self.children.append(node)

    def _pull_targets(self) -> Tuple[Node, ...]:
        return tuple(self.children)

    def _compute(self) -> float:
        return sigmoid(self.a.forward())

    def _push(self) -> None:
        f = self.forward()
        self.a.set_grad(self.grad * f * (1.0 - f))


class CostNode(Node):
    """
    Cross-entropy cost -ln(x) of one clause's truth value x.

    The root of a clause: it has no consumer and its upstream gradient is
    fixed at 1.0, since the total loss is a plain sum of clause costs.
    """
    op_tag = "c"
    baseline_grad = 1.0

    def __init__(self, source: Node, node_id: int):
        super().__init__(node_id)
        self.a = self._attach(source)

    @property
    def inputs(self) -> Tuple[Node, ...]:
        return (self.a,)

    def truth(self) -> float:
        """Continuous truth value of the clause."""
        return self.a.forward()

    def set_consumer(self, node: Node) -> None:
        raise IllegalOperationError(f"Cost node {self.id} is a clause root and feeds nothing")

    def set_grad(self, d: float) -> None:
        raise IllegalOperationError(f"Gradient of cost node {self.id} is fixed at {self.baseline_grad}")

    def _pull_targets(self) -> Tuple[Node, ...]:
        return ()

    def _compute(self) -> float:
        return -np.log(self.a.forward())

    def _push(self) -> None:
        self.a.set_grad(self.grad * -np.reciprocal(self.a.forward()))
