# soft_sat/circuit/parser.py
"""
Clause-expression language.

One clause per line:

    $<k>   variable k (0 <= k < n_vars)
    ^      AND (infix)
    v      OR  (infix)
    ~      NOT (prefix)
    ( )    grouping

Any other character separates tokens. There is no operator precedence:
operators are folded strictly left to right as soon as their right-hand
operand is complete, so `$0 ^ $1 v $2` reads as `($0 ^ $1) v $2` and
`$0 v $1 ^ $2` as `($0 v $1) ^ $2`.

Example:
    $10 v ~($11 ^ ~$12)
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import List, Sequence, Union

from .core.errors import ClauseSyntaxError, InvalidVariableError
from .core.node import Node
from .core.tape import Tape
from .ops.logic import AndGate, NotGate, OrGate
from .ops.transcendental import CostNode, SigmoidGate

VAR, AND, OR, NOT, LPAREN, RPAREN = "var", "^", "v", "~", "(", ")"

_OPERATORS = {"^": AND, "v": OR, "~": NOT, "(": LPAREN, ")": RPAREN}
_DIGITS = "0123456789"


@dataclass(frozen=True)
class Token:
    kind: str
    pos: int
    index: int = -1   # variable index, VAR tokens only


@dataclass(frozen=True)
class OpenParen:
    """Operator-stack sentinel. Draws an id but never becomes a node."""
    id: int


def tokenize(text: str, n_vars: int) -> List[Token]:
    """
    Split one clause into tokens, validating variable references.

    Raises InvalidVariableError for an index outside [0, n_vars) and
    ClauseSyntaxError for a `$` with no digits after it. Nothing is wired
    yet, so a failure here leaves the circuit untouched.
    """
    tokens: List[Token] = []
    i, n = 0, len(text)
    while i < n:
        c = text[i]
        if c == "$":
            j = i + 1
            while j < n and text[j] in _DIGITS:
                j += 1
            if j == i + 1:
                raise ClauseSyntaxError("'$' is not followed by a variable index", text, i)
            index = int(text[i + 1:j])
            if index >= n_vars:
                raise InvalidVariableError(index, n_vars)
            tokens.append(Token(VAR, i, index))
            i = j
        elif c in _OPERATORS:
            tokens.append(Token(_OPERATORS[c], i))
            i += 1
        else:
            i += 1
    return tokens


class ClauseBuilder:
    """
    Wires clause text into gates on top of the shared per-variable sigmoids.

    Two LIFO stacks drive the build: `ops` holds gates still waiting for an
    operand (and open-parenthesis sentinels), `vals` holds finished
    sub-expressions. Every completed operand is immediately folded into the
    pending gates down to the nearest open parenthesis.
    """

    def __init__(self, sigmoids: Sequence[SigmoidGate], tape: Tape):
        self.sigmoids = sigmoids
        self.tape = tape

    def build(self, text: str) -> CostNode:
        """Parse one clause and return its CostNode root."""
        tokens = tokenize(text, len(self.sigmoids))

        ops: List[Union[Node, OpenParen]] = []
        vals: List[Node] = []

        for tok in tokens:
            if tok.kind == VAR:
                leaf = self.sigmoids[tok.index]
                if not ops or isinstance(ops[-1], OpenParen):
                    vals.append(leaf)
                else:
                    gate = ops.pop()
                    gate.add_input(leaf)
                    vals.append(gate)
                    self._fold(ops, vals, text, tok.pos)
            elif tok.kind == RPAREN:
                if not ops or not isinstance(ops[-1], OpenParen):
                    raise ClauseSyntaxError("')' without a matching '('", text, tok.pos)
                ops.pop()
                self._fold(ops, vals, text, tok.pos)
            elif tok.kind in (AND, OR):
                if not vals:
                    raise ClauseSyntaxError(f"'{tok.kind}' has no left operand", text, tok.pos)
                cls = AndGate if tok.kind == AND else OrGate
                ops.append(self.tape.record(cls(vals.pop(), self.tape.new_id())))
            elif tok.kind == NOT:
                ops.append(self.tape.record(NotGate(self.tape.new_id())))
            else:
                ops.append(OpenParen(self.tape.new_id()))

        self._fold(ops, vals, text, len(text))
        # the fold only stops at a sentinel, so anything left is an unclosed group
        if ops:
            raise ClauseSyntaxError("Clause ends with an unclosed '('", text)
        if len(vals) != 1:
            if not vals:
                raise ClauseSyntaxError("Clause has no operands", text)
            raise ClauseSyntaxError(f"Clause leaves {len(vals)} unconnected operands", text)

        return self.tape.record(CostNode(vals.pop(), self.tape.new_id()))

    @staticmethod
    def _fold(ops, vals, text, pos) -> None:
        while ops and not isinstance(ops[-1], OpenParen):
            gate = ops.pop()
            if not vals:
                raise ClauseSyntaxError(f"'{gate.op_tag}' has no operand", text, pos)
            gate.add_input(vals.pop())
            vals.append(gate)
