# soft_sat/circuit/gradcheck.py

#-----------------------------------------------------------------------------
# Analytic gradients come from one forward/backward pair; numeric ones from
# central differences. Both leave the circuit reset.
#-----------------------------------------------------------------------------
from __future__ import annotations
from typing import Sequence, Tuple

import numpy as np

from .graph import ComputationGraph


def value_and_grad(graph: ComputationGraph, values: Sequence[float]) -> Tuple[float, np.ndarray]:
    """Total cost and its gradient at `values`."""
    graph.reset()
    cost = graph.forward(values)
    return cost, graph.backward()


def numeric_grad(graph: ComputationGraph, values: Sequence[float], eps: float = 1e-6) -> np.ndarray:
    """
    Central-difference gradient (f(x+eps) - f(x-eps)) / (2 eps), one
    coordinate at a time. The circuit is reset around every evaluation.
    """
    x = np.asarray(values, dtype=float)
    grads = np.zeros_like(x)
    graph.reset()
    for i in range(x.size):
        step = np.zeros_like(x)
        step[i] = eps
        up = graph.forward(x + step)
        graph.reset()
        down = graph.forward(x - step)
        graph.reset()
        grads[i] = (up - down) / (2.0 * eps)
    return grads


def max_grad_error(graph: ComputationGraph, values: Sequence[float], eps: float = 1e-6) -> float:
    """Largest absolute gap between analytic and numeric gradients."""
    _, analytic = value_and_grad(graph, values)
    numeric = numeric_grad(graph, values, eps)
    if analytic.size == 0:
        return 0.0
    return float(np.max(np.abs(analytic - numeric)))
