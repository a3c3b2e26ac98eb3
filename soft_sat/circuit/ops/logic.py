# soft_sat/circuit/ops/logic.py
"""
Soft-logic gates on truth values in [0, 1].

    NOT a   = 1 - a            d/da = -1
    a AND b = a * b            d/da = b,      d/db = a
    a OR b  = a + b - a * b    d/da = 1 - b,  d/db = 1 - a

On {0, 1} these agree with the boolean tables.
"""
from __future__ import annotations
from typing import Optional, Tuple

from ..core.node import Node
from ..core.errors import WiringError


class NotGate(Node):
    """Unary prefix gate; its single operand is wired after construction."""
    op_tag = "~"

    def __init__(self, node_id: int):
        super().__init__(node_id)
        self.a: Optional[Node] = None

    @property
    def inputs(self) -> Tuple[Node, ...]:
        return () if self.a is None else (self.a,)

    def add_input(self, node: Node) -> None:
        if self.a is not None:
            raise WiringError(f"NOT gate {self.id} already has operand {self.a.id}")
        self.a = self._attach(node)

    def _operand(self) -> Node:
        if self.a is None:
            raise WiringError(f"NOT gate {self.id} has no operand")
        return self.a

    def _compute(self) -> float:
        return 1.0 - self._operand().forward()

    def _push(self) -> None:
        self._operand().set_grad(-self.grad)


class BinaryGate(Node):
    """
    Infix gate: `first` is known when the operator token is read,
    `second` arrives once the right-hand operand has been parsed.
    """

    def __init__(self, first: Node, node_id: int):
        super().__init__(node_id)
        self.a: Node = self._attach(first)
        self.b: Optional[Node] = None

    @property
    def inputs(self) -> Tuple[Node, ...]:
        return (self.a,) if self.b is None else (self.a, self.b)

    def add_input(self, node: Node) -> None:
        if self.b is not None:
            raise WiringError(
                f"Gate {self.id} ({self.op_tag}) already has both operands "
                f"({self.a.id}, {self.b.id}); cannot wire node {node.id}"
            )
        self.b = self._attach(node)

    def _operands(self) -> Tuple[float, float]:
        if self.b is None:
            raise WiringError(f"Gate {self.id} ({self.op_tag}) used before its second operand was wired")
        return self.a.forward(), self.b.forward()

    def _pull_targets(self) -> Tuple[Node, ...]:
        if self.b is None:
            raise WiringError(f"Gate {self.id} ({self.op_tag}) backpropagated with an undefined operand")
        return super()._pull_targets()


class AndGate(BinaryGate):
    op_tag = "^"

    def _compute(self) -> float:
        a, b = self._operands()
        return a * b

    def _push(self) -> None:
        a, b = self._operands()
        self.a.set_grad(self.grad * b)
        self.b.set_grad(self.grad * a)


class OrGate(BinaryGate):
    op_tag = "v"

    def _compute(self) -> float:
        a, b = self._operands()
        return a + b - a * b

    def _push(self) -> None:
        a, b = self._operands()
        self.a.set_grad(self.grad * (1.0 - b))
        self.b.set_grad(self.grad * (1.0 - a))
