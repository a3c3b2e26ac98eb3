"""
Node protocol: forward formulas, pull-then-push gradients, wiring rules
and reset semantics, exercised on hand-wired circuits.
"""

import numpy as np
import pytest

from soft_sat.circuit import (
    AndGate,
    CostNode,
    IllegalOperationError,
    InputNode,
    NotGate,
    OrGate,
    SigmoidGate,
    WiringError,
)


def _and(x, y, base=0):
    a, b = InputNode(x, base), InputNode(y, base + 1)
    gate = AndGate(a, base + 2)
    gate.add_input(b)
    return a, b, gate


def _or(x, y, base=0):
    a, b = InputNode(x, base), InputNode(y, base + 1)
    gate = OrGate(a, base + 2)
    gate.add_input(b)
    return a, b, gate


# ----------------------------- forward ----------------------------- #
def test_and_forward():
    _, _, gate = _and(0.3, 0.7)
    assert gate.forward() == pytest.approx(0.21)


def test_or_forward():
    _, _, gate = _or(0.3, 0.7)
    assert gate.forward() == pytest.approx(0.3 + 0.7 - 0.21)


def test_not_forward():
    a = InputNode(0.4, 0)
    gate = NotGate(1)
    gate.add_input(a)
    assert gate.forward() == pytest.approx(0.6)


def test_sigmoid_forward():
    s = SigmoidGate(InputNode(0.0, 0), 1)
    assert s.forward() == pytest.approx(0.5)


def test_cost_forward_is_negative_log():
    c = CostNode(InputNode(0.25, 0), 1)
    assert c.forward() == pytest.approx(-np.log(0.25))
    assert c.truth() == pytest.approx(0.25)


def test_forward_is_memoised_until_reset():
    a, b, gate = _and(0.3, 0.7)
    CostNode(gate, 3)
    assert gate.forward() == pytest.approx(0.21)

    # new input value is not seen until the cache is cleared
    a.update_value(1.0)
    assert gate.forward() == pytest.approx(0.21)

    a.reset()
    assert gate.output is None
    assert gate.forward() == pytest.approx(0.7)


# ----------------------------- gradients ----------------------------- #
def _check_against_finite_difference(leaves, cost, eps=1e-6, tol=1e-6):
    """Compare each leaf's pulled gradient with a central difference of cost."""
    cost.forward()
    analytic = [leaf.resulting_grad() for leaf in leaves]
    for leaf in leaves:
        leaf.reset()

    for leaf, g in zip(leaves, analytic):
        x = leaf.value
        leaf.update_value(x + eps)
        up = cost.forward()
        for l in leaves:
            l.reset()
        leaf.update_value(x - eps)
        down = cost.forward()
        for l in leaves:
            l.reset()
        leaf.update_value(x)
        assert g == pytest.approx((up - down) / (2 * eps), abs=tol)


@pytest.mark.parametrize("seed", range(5))
def test_binary_gate_gradients(seed):
    rng = np.random.default_rng(seed)
    x, y = rng.uniform(0.05, 0.95, size=2)
    for build in (_and, _or):
        a, b, gate = build(x, y)
        cost = CostNode(gate, 3)
        _check_against_finite_difference([a, b], cost)


@pytest.mark.parametrize("seed", range(5))
def test_not_gate_gradient(seed):
    x = np.random.default_rng(seed).uniform(0.05, 0.95)
    a = InputNode(x, 0)
    gate = NotGate(1)
    gate.add_input(a)
    cost = CostNode(gate, 2)
    _check_against_finite_difference([a], cost)


@pytest.mark.parametrize("x", [-4.0, -0.7, 0.0, 1.3, 6.0])
def test_sigmoid_gradient(x):
    a = InputNode(x, 0)
    cost = CostNode(SigmoidGate(a, 1), 2)
    _check_against_finite_difference([a], cost)


def test_and_pushes_into_both_operands():
    a, b, gate = _and(0.3, 0.7)
    CostNode(gate, 3)
    gate.forward()
    ga = a.resulting_grad()
    gb = b.resulting_grad()
    # d(-ln(ab))/da = -1/a
    assert ga == pytest.approx(-1 / 0.3)
    assert gb == pytest.approx(-1 / 0.7)


def test_second_pull_does_not_double_count():
    a, b, gate = _and(0.3, 0.7)
    CostNode(gate, 3)
    gate.forward()
    first = a.resulting_grad()
    b.resulting_grad()
    assert a.resulting_grad() == pytest.approx(first)
    assert gate.grad == pytest.approx(-1 / 0.21)


def test_shared_sigmoid_sums_consumer_contributions():
    x = InputNode(0.3, 0)
    s = SigmoidGate(x, 1)
    gate = AndGate(s, 2)
    gate.add_input(s)          # s AND s
    CostNode(gate, 3)
    assert s.consumers == (gate, gate)

    gate.forward()
    f = s.forward()
    # cost = -ln(f^2) = -2 ln f, d/dx = -2 (1 - f)
    assert x.resulting_grad() == pytest.approx(-2 * (1 - f))


# ----------------------------- wiring ----------------------------- #
def test_binary_gate_rejects_third_operand():
    _, _, gate = _and(0.1, 0.2)
    with pytest.raises(WiringError):
        gate.add_input(InputNode(0.5, 9))


def test_not_gate_rejects_second_operand():
    gate = NotGate(0)
    gate.add_input(InputNode(0.5, 1))
    with pytest.raises(WiringError):
        gate.add_input(InputNode(0.5, 2))


def test_single_consumer_slot():
    a = InputNode(0.5, 0)
    NotGate(1).add_input(a)
    with pytest.raises(WiringError):
        NotGate(2).add_input(a)


def test_sigmoid_accepts_many_consumers():
    s = SigmoidGate(InputNode(0.0, 0), 1)
    gates = [NotGate(i) for i in range(2, 5)]
    for g in gates:
        g.add_input(s)
    assert s.consumers == tuple(gates)


@pytest.mark.parametrize("node", [InputNode(0.0, 0), SigmoidGate(InputNode(0.0, 1), 2)])
def test_fixed_input_nodes_reject_add_input(node):
    with pytest.raises(IllegalOperationError):
        node.add_input(InputNode(0.0, 9))


def test_cost_node_protocol_misuse():
    c = CostNode(InputNode(0.5, 0), 1)
    with pytest.raises(IllegalOperationError):
        c.set_grad(0.1)
    with pytest.raises(IllegalOperationError):
        c.set_consumer(NotGate(2))
    with pytest.raises(IllegalOperationError):
        c.add_input(InputNode(0.5, 3))
    assert c.grad == 1.0


def test_input_backward_is_illegal():
    with pytest.raises(IllegalOperationError):
        InputNode(0.0, 0).backward()


def test_pull_without_consumer():
    with pytest.raises(WiringError):
        InputNode(0.0, 0).resulting_grad()


@pytest.mark.parametrize("cls", [AndGate, OrGate])
def test_binary_gate_needs_second_operand(cls):
    gate = cls(InputNode(0.5, 0), 1)
    CostNode(gate, 2)
    with pytest.raises(WiringError):
        gate.forward()
    with pytest.raises(WiringError):
        gate.backward()


def test_not_gate_needs_operand():
    with pytest.raises(WiringError):
        NotGate(0).forward()


# ----------------------------- reset ----------------------------- #
def test_reset_is_idempotent():
    a, b, gate = _and(0.3, 0.7)
    cost = CostNode(gate, 3)
    before = cost.forward()
    a.resulting_grad()
    b.resulting_grad()

    for _ in range(2):
        a.reset()
        b.reset()

    for node in (a, b, gate):
        assert node.grad == 0.0
    assert gate.output is None and cost.output is None
    assert cost.grad == 1.0
    assert a.value == pytest.approx(0.3)   # held value survives

    assert cost.forward() == pytest.approx(before)
    _, _, fresh = _and(0.3, 0.7, base=10)
    assert cost.forward() == pytest.approx(CostNode(fresh, 13).forward())
