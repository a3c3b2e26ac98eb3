# soft_sat/circuit/graph.py
"""
ComputationGraph: a soft-logic circuit over n real-valued variables.

Each variable i is an InputNode feeding a SigmoidGate, which turns the raw
value into a truth value in (0, 1). Every clause line is parsed into gates
reading from those sigmoids and ends in a CostNode computing -ln(truth).
The total cost is the sum over clauses; minimising it pushes every clause
towards true.

Typical cycle:

    g = ComputationGraph(["$0 v $1", "~$0"], n_vars=2)
    cost = g.forward([0.1, -0.3])
    grads = g.backward()      # also resets the circuit for the next cycle
"""
from __future__ import annotations
from typing import Iterable, List, Sequence

import numpy as np

from .core.engine import pull_gradients, reset_from, total_cost
from .core.node import InputNode
from .core.tape import Tape
from .ops.transcendental import CostNode, SigmoidGate, sigmoid
from .parser import ClauseBuilder


class ComputationGraph:
    """
    Owns every node of one circuit: one InputNode and one SigmoidGate per
    variable, and one CostNode per non-blank clause.

    Contract: `forward` only writes the inputs, it never invalidates caches.
    `backward` resets the whole circuit once the gradients are read, so a
    forward/backward pair can be repeated indefinitely. Callers that run
    `forward` twice without `backward` in between must call `reset` first.
    """

    def __init__(self, clauses: Iterable[str], n_vars: int):
        if isinstance(n_vars, bool) or not isinstance(n_vars, (int, np.integer)):
            raise TypeError(f"n_vars must be an integer, got {type(n_vars)}")
        if n_vars < 0:
            raise ValueError(f"n_vars must be non-negative, got {n_vars}")

        self.tape = Tape()
        self.inputs: List[InputNode] = [
            self.tape.record(InputNode(0.0, self.tape.new_id())) for _ in range(n_vars)
        ]
        self.sigmoids: List[SigmoidGate] = [
            self.tape.record(SigmoidGate(leaf, self.tape.new_id())) for leaf in self.inputs
        ]

        builder = ClauseBuilder(self.sigmoids, self.tape)
        self.clauses: List[str] = []
        self.costs: List[CostNode] = []
        for line in clauses:
            if not line.strip():
                continue
            self.costs.append(builder.build(line))
            self.clauses.append(line.strip())

    # ------------------------------------------------------------------ #
    # construction helpers
    # ------------------------------------------------------------------ #
    @classmethod
    def from_text(cls, text: str) -> "ComputationGraph":
        """
        Build from the program-input format: the variable count on the first
        non-blank line, then one clause per line (blank lines ignored).
        """
        lines = text.splitlines()
        while lines and not lines[0].strip():
            lines.pop(0)
        if not lines:
            raise ValueError("Input is empty: expected the variable count on the first line")
        header = lines[0].strip()
        try:
            n_vars = int(header)
        except ValueError:
            raise ValueError(f"First line must be the variable count, got {header!r}") from None
        return cls(lines[1:], n_vars)

    @classmethod
    def from_dimacs(cls, text: str) -> "ComputationGraph":
        """Build from a DIMACS-CNF document."""
        from ..solver.dimacs import read_dimacs  # local import to avoid cycles
        n_vars, clauses = read_dimacs(text)
        return cls(clauses, n_vars)

    # ------------------------------------------------------------------ #
    # propagation
    # ------------------------------------------------------------------ #
    @property
    def n_vars(self) -> int:
        return len(self.inputs)

    @property
    def n_clauses(self) -> int:
        return len(self.costs)

    def _write_inputs(self, values: Sequence[float]) -> None:
        vals = np.asarray(values, dtype=float)
        if vals.shape != (self.n_vars,):
            raise ValueError(f"Expected {self.n_vars} value(s), got shape {vals.shape}")
        for leaf, v in zip(self.inputs, vals):
            leaf.update_value(v)

    def forward(self, values: Sequence[float]) -> float:
        """Total cross-entropy cost of all clauses at the given raw values."""
        self._write_inputs(values)
        return total_cost(self.costs)

    def backward(self) -> np.ndarray:
        """
        Gradient of the total cost w.r.t. each raw value, evaluated at the
        values of the last `forward` call. Resets the circuit afterwards.
        """
        grads = pull_gradients(self.inputs)
        self.reset()
        return grads

    def reset(self) -> None:
        """Drop every cached output and restore baseline gradients."""
        reset_from(self.inputs)

    # ------------------------------------------------------------------ #
    # evaluation helpers
    # ------------------------------------------------------------------ #
    @staticmethod
    def truth_values(values: Sequence[float]) -> np.ndarray:
        """Squash raw values into truth values in (0, 1)."""
        return sigmoid(np.asarray(values, dtype=float))

    def clause_truths(self, values: Sequence[float]) -> np.ndarray:
        """Continuous truth value of each clause at `values`."""
        self._write_inputs(values)
        truths = np.array([c.truth() for c in self.costs], dtype=float)
        self.reset()
        return truths

    def is_satisfied(self, assignment: Sequence[bool]) -> bool:
        """
        Exact boolean check of an assignment. The inputs are driven to +/-inf
        so every sigmoid yields exactly 1.0 or 0.0 and the gates reduce to
        their boolean tables.
        """
        bits = np.asarray(assignment, dtype=bool)
        truths = self.clause_truths(np.where(bits, np.inf, -np.inf))
        return bool(np.all(truths == 1.0))

    def __repr__(self):
        return f"ComputationGraph(n_vars={self.n_vars}, n_clauses={self.n_clauses}, nodes={len(self.tape)})"
