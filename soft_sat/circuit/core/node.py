# soft_sat/circuit/core/node.py
from __future__ import annotations
from typing import Optional, Tuple

from .errors import IllegalOperationError, WiringError


class Node:
    """
    One unit of a soft-logic circuit.

    Attributes
    ----------
    id     : int
        Monotonic id handed out by the owning Tape (diagnostics only).
    output : Optional[float]
        Memoised forward value; None until `forward` runs in this cycle.
    grad   : float
        Accumulated sensitivity of the total cost to this node's output.
    op_tag : str
        One-character kind tag: 'i', 's', '~', '^', 'v' or 'c'.

    Backward is pull-then-push: a node first asks its consumer(s) to run
    their own backward step, which adds their contributions into `grad`,
    and only then pushes `grad` times its local partials into its inputs.
    Each node pushes at most once between two resets.
    """
    op_tag = "?"
    baseline_grad = 0.0

    def __init__(self, node_id: int):
        self.id = node_id
        self.output: Optional[float] = None
        self.grad = self.baseline_grad
        self._consumer: Optional[Node] = None
        self._propagated = False

    def __repr__(self):
        return f"{type(self).__name__}(id={self.id}, output={self.output!r}, grad={self.grad!r})"

    # ------------------------------------------------------------------ #
    # linkage
    # ------------------------------------------------------------------ #
    @property
    def consumers(self) -> Tuple[Node, ...]:
        return () if self._consumer is None else (self._consumer,)

    @property
    def inputs(self) -> Tuple[Node, ...]:
        return ()

    def set_consumer(self, node: Node) -> None:
        if self._consumer is not None:
            raise WiringError(
                f"Node {self.id} ({self.op_tag}) already feeds node {self._consumer.id}; "
                f"cannot also feed node {node.id}"
            )
        self._consumer = node

    def add_input(self, node: Node) -> None:
        raise IllegalOperationError(f"Node {self.id} ({self.op_tag}) takes no further inputs")

    def _attach(self, node: Node) -> Node:
        """Register self as the consumer of `node` and return it."""
        node.set_consumer(self)
        return node

    # ------------------------------------------------------------------ #
    # propagation
    #
    # All three walks use an explicit stack, never Python recursion.
    # ------------------------------------------------------------------ #
    def forward(self) -> float:
        """Evaluate every stale node under self, inputs before consumers."""
        stack = [(self, False)]
        while stack:
            node, expanded = stack.pop()
            if node._is_evaluated():
                continue
            if expanded:
                node.output = float(node._compute())
            else:
                stack.append((node, True))
                stack.extend((p, False) for p in node.inputs)
        return self.output

    def backward(self) -> None:
        """
        Pull, then push. Every consumer reachable from self finishes its own
        push before self pushes into its inputs.
        """
        stack = [(self, False)]
        while stack:
            node, expanded = stack.pop()
            if node._propagated:
                continue
            if expanded:
                node._propagated = True
                node._push()
            else:
                stack.append((node, True))
                stack.extend((c, False) for c in node._pull_targets())

    def set_grad(self, d: float) -> None:
        self.grad += d

    def reset(self) -> None:
        """Restore baseline gradient, drop the cache, and reset every consumer."""
        seen = set()
        stack = [self]
        while stack:
            node = stack.pop()
            if id(node) in seen:
                continue
            seen.add(id(node))
            node.grad = node.baseline_grad
            node.output = None
            node._propagated = False
            stack.extend(node.consumers)

    def _is_evaluated(self) -> bool:
        return self.output is not None

    def _pull_targets(self) -> Tuple[Node, ...]:
        """Nodes whose backward must finish before this one pushes."""
        if self._consumer is None:
            raise WiringError(f"Node {self.id} ({self.op_tag}) has no consumer to pull gradient from")
        return (self._consumer,)

    def _compute(self) -> float:
        raise NotImplementedError

    def _push(self) -> None:
        raise NotImplementedError


class InputNode(Node):
    """
    Leaf holding one real-valued variable. It is never cached: `forward`
    always returns the value last written, and `reset` leaves it alone.
    """
    op_tag = "i"

    def __init__(self, value: float, node_id: int):
        super().__init__(node_id)
        self.value = float(value)

    def update_value(self, value: float) -> None:
        self.value = float(value)

    def forward(self) -> float:
        return self.value

    def backward(self) -> None:
        raise IllegalOperationError(
            f"Input node {self.id} is the origin of a pull; use resulting_grad() instead"
        )

    def resulting_grad(self) -> float:
        """Pull gradient through the consumer chain and return d(cost)/d(value)."""
        for c in self._pull_targets():
            c.backward()
        return self.grad

    def _is_evaluated(self) -> bool:
        return True
