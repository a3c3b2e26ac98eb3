"""
Gradient-based search for variable values that make every clause true.

The objective is the circuit's total cross-entropy cost

    L(x) = sum_j -ln(t_j(sigmoid(x)))

where t_j is the soft truth value of clause j. L -> 0 exactly when every
clause's truth value -> 1, so driving L down is a continuous relaxation of
SAT. Two drivers are provided:

1. `gradient_descent`: fixed-iteration steepest descent x <- x - lr * dL/dx
2. `minimize_cost`: any gradient method of scipy.optimize.minimize, fed by
   the same forward/backward pair (jac=True)
"""

import warnings
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

import numpy as np
from scipy.optimize import minimize, OptimizeResult

from ..circuit.graph import ComputationGraph

SCIPY_METHODS = ('CG', 'BFGS', 'L-BFGS-B', 'SLSQP')


@dataclass
class SolverConfig:
    """Configuration for a solver run."""
    # Optimization
    optimizer: str = 'gd'       # 'gd' or one of SCIPY_METHODS
    learning_rate: float = 0.1  # step size, 'gd' only
    iterations: int = 4000      # fixed steps for 'gd', maxiter for scipy
    tolerance: float = 1e-9     # scipy only

    # Initial guess: uniform in [0, init_scale)
    init_scale: float = 0.1
    seed: Optional[int] = None

    # Logging
    verbose: bool = False
    log_every: int = 500

    def __post_init__(self):
        if self.optimizer != 'gd' and self.optimizer.upper() not in SCIPY_METHODS:
            raise ValueError(
                f"Unknown optimizer: {self.optimizer!r} (expected 'gd' or one of {', '.join(SCIPY_METHODS)})"
            )
        if self.learning_rate <= 0:
            raise ValueError(f"learning_rate must be positive, got {self.learning_rate}")
        if self.iterations < 0:
            raise ValueError(f"iterations must be non-negative, got {self.iterations}")
        if self.init_scale < 0:
            raise ValueError(f"init_scale must be non-negative, got {self.init_scale}")
        if self.log_every < 1:
            raise ValueError(f"log_every must be >= 1, got {self.log_every}")


@dataclass
class SolverResult:
    values: np.ndarray          # raw variable values
    truth_values: np.ndarray    # sigmoid(values)
    cost: float                 # total cost at `values`
    assignment: np.ndarray      # truth_values > 0.5
    satisfied: bool             # does `assignment` satisfy every clause
    n_iterations: int
    message: str
    cost_history: List[float] = field(default_factory=list)


def initial_values(n_vars: int, config: SolverConfig) -> np.ndarray:
    """Small random starting point, uniform in [0, init_scale)."""
    rng = np.random.default_rng(config.seed)
    return rng.random(n_vars) * config.init_scale


def _start(graph: ComputationGraph, config: SolverConfig, x0) -> np.ndarray:
    if x0 is None:
        return initial_values(graph.n_vars, config)
    x = np.array(x0, dtype=float)
    if x.shape != (graph.n_vars,):
        raise ValueError(f"x0 must have shape ({graph.n_vars},), got {x.shape}")
    return x


def _finish(graph: ComputationGraph, x: np.ndarray, history: List[float],
            n_iterations: int, message: str, config: SolverConfig) -> SolverResult:
    cost = graph.forward(x)
    graph.reset()
    truth = graph.truth_values(x)
    assignment = truth > 0.5
    satisfied = graph.is_satisfied(assignment)

    if config.verbose:
        print(f"\nSolve Complete:")
        print(f"  Status: {message}")
        print(f"  Iterations: {n_iterations}")
        print(f"  Final cost: {cost:.6e}")
        print(f"  Rounded assignment satisfies all clauses: {satisfied}")

    return SolverResult(
        values=x,
        truth_values=truth,
        cost=cost,
        assignment=assignment,
        satisfied=satisfied,
        n_iterations=n_iterations,
        message=message,
        cost_history=history,
    )


def gradient_descent(graph: ComputationGraph,
                     config: Optional[SolverConfig] = None,
                     x0: Optional[Sequence[float]] = None) -> SolverResult:
    """
    Run `config.iterations` steps of x <- x - lr * dL/dx.

    Args:
        graph: circuit to minimise
        config: solver settings (defaults if None)
        x0: starting raw values (random if None)
    """
    config = config or SolverConfig()
    x = _start(graph, config, x0)

    if config.verbose:
        print(f"\nRunning gradient descent...")
        print(f"  Variables: {graph.n_vars}, clauses: {graph.n_clauses}")
        print(f"  Learning rate: {config.learning_rate}, iterations: {config.iterations}")

    history: List[float] = []
    warned = False
    for it in range(config.iterations):
        cost = graph.forward(x)
        grads = graph.backward()
        history.append(cost)

        if not warned and not (np.isfinite(cost) and np.all(np.isfinite(grads))):
            warnings.warn(
                f"Non-finite cost or gradient at iteration {it + 1}; "
                f"some clause truth value underflowed to 0",
                RuntimeWarning,
                stacklevel=2,
            )
            warned = True

        x = x - config.learning_rate * grads

        if config.verbose and (it + 1) % config.log_every == 0:
            print(f"  Iteration {it + 1}: Cost = {cost:.6e}")

    return _finish(graph, x, history, config.iterations,
                   f"Completed {config.iterations} gradient steps", config)


def minimize_cost(graph: ComputationGraph,
                  config: Optional[SolverConfig] = None,
                  x0: Optional[Sequence[float]] = None) -> SolverResult:
    """
    Minimise the total cost with scipy.optimize.minimize.

    Every objective evaluation is one forward/backward pair, so the circuit
    is always reset before scipy asks for the next point.
    """
    config = config or SolverConfig(optimizer='L-BFGS-B')
    if config.optimizer == 'gd':
        raise ValueError("minimize_cost needs a scipy method, not 'gd'")
    x = _start(graph, config, x0)

    history: List[float] = []
    if graph.n_vars == 0:
        return _finish(graph, x, history, 0, "Nothing to optimize: circuit has no variables", config)

    def objective(v: np.ndarray):
        cost = graph.forward(v)
        grads = graph.backward()
        history.append(cost)
        if config.verbose and len(history) % config.log_every == 0:
            print(f"  Evaluation {len(history)}: Cost = {cost:.6e}")
        return cost, grads

    if config.verbose:
        print(f"\nRunning {config.optimizer} optimization...")
        print(f"  Variables: {graph.n_vars}, clauses: {graph.n_clauses}")

    result: OptimizeResult = minimize(
        fun=objective,
        x0=x,
        method=config.optimizer,
        jac=True,
        tol=config.tolerance,
        options={'maxiter': config.iterations},
    )

    return _finish(graph, np.asarray(result.x, dtype=float), history,
                   int(result.nit), str(result.message), config)


def solve(graph: ComputationGraph,
          config: Optional[SolverConfig] = None,
          x0: Optional[Sequence[float]] = None) -> SolverResult:
    """Dispatch on `config.optimizer`."""
    config = config or SolverConfig()
    if config.optimizer == 'gd':
        return gradient_descent(graph, config, x0)
    return minimize_cost(graph, config, x0)
