# soft_sat/circuit/core/engine.py
from __future__ import annotations
from typing import Sequence

import numpy as np

from .node import InputNode, Node


def total_cost(costs: Sequence[Node]) -> float:
    """Sum the forward values of every clause root."""
    cost = 0.0
    for c in costs:
        cost += c.forward()
    return cost


def pull_gradients(inputs: Sequence[InputNode]) -> np.ndarray:
    """
    Pull d(cost)/d(value) for each input, in order.

    Every pull walks from the input up to each reachable clause root before
    pushing back down. Nodes already visited by an earlier pull keep their
    contributions, so shared gates are only pushed once per cycle.
    """
    grads = np.zeros(len(inputs), dtype=float)
    for i, leaf in enumerate(inputs):
        grads[i] = leaf.resulting_grad()
    return grads


def reset_from(inputs: Sequence[InputNode]) -> None:
    """
    Reset every node reachable downstream of `inputs` (cache + gradient).
    Nodes reached along several paths are simply reset again.
    """
    for leaf in inputs:
        leaf.reset()
