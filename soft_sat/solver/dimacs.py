"""
DIMACS-CNF reader.

Turns a CNF document

    c comment
    p cnf 3 2
    1 -3 0
    2 3 -1 0

into clause-expression lines over 0-based variables:

    $0 v ~$2
    $1 v $2 v ~$0

DIMACS variables are 1-based; literal k becomes $k-1 and -k becomes ~$k-1.
Clauses may span several lines and end at a 0 literal; a line starting
with '%' ends the document (SATLIB benchmark convention).
"""

import warnings
from typing import Iterable, List, Tuple

from ..circuit.core.errors import DimacsFormatError


def _clause_expr(literals: List[int]) -> str:
    return " v ".join(f"~${-lit - 1}" if lit < 0 else f"${lit - 1}" for lit in literals)


def read_dimacs(text: str) -> Tuple[int, List[str]]:
    """
    Parse a DIMACS-CNF document.

    Returns:
        n_vars: number of variables declared in the `p cnf` header
        clauses: one clause-expression line per CNF clause

    Raises:
        DimacsFormatError on a missing or garbled header, non-integer
        literals, literals beyond the declared variable count, empty
        clauses, or a final clause without its terminating 0
    """
    n_vars = None
    n_declared = 0
    clauses: List[str] = []
    current: List[int] = []
    line_no = 0

    for line_no, raw in enumerate(text.splitlines(), start=1):
        line = raw.strip()
        if not line or line.startswith("c"):
            continue
        if line.startswith("%"):
            break
        if line.startswith("p"):
            if n_vars is not None:
                raise DimacsFormatError("duplicate 'p cnf' header", line_no)
            parts = line.split()
            if len(parts) != 4 or parts[1] != "cnf":
                raise DimacsFormatError(f"expected 'p cnf <vars> <clauses>', got {line!r}", line_no)
            try:
                n_vars, n_declared = int(parts[2]), int(parts[3])
            except ValueError:
                raise DimacsFormatError(f"non-integer counts in header {line!r}", line_no) from None
            if n_vars < 0 or n_declared < 0:
                raise DimacsFormatError(f"negative counts in header {line!r}", line_no)
            continue
        if n_vars is None:
            raise DimacsFormatError("clause found before the 'p cnf' header", line_no)

        for tok in line.split():
            try:
                lit = int(tok)
            except ValueError:
                raise DimacsFormatError(f"literal {tok!r} is not an integer", line_no) from None
            if lit == 0:
                if not current:
                    raise DimacsFormatError("empty clause", line_no)
                clauses.append(_clause_expr(current))
                current = []
            elif abs(lit) > n_vars:
                raise DimacsFormatError(
                    f"literal {lit} exceeds the {n_vars} declared variable(s)", line_no
                )
            else:
                current.append(lit)

    if n_vars is None:
        raise DimacsFormatError("missing 'p cnf' header")
    if current:
        raise DimacsFormatError("last clause is not terminated by 0", line_no)
    if len(clauses) != n_declared:
        warnings.warn(
            f"Header declares {n_declared} clause(s) but {len(clauses)} were read",
            stacklevel=2,
        )
    return n_vars, clauses


def format_clause_text(n_vars: int, clauses: Iterable[str]) -> str:
    """Render the program-input format: variable count, then one clause per line."""
    return "\n".join([str(n_vars), *clauses]) + "\n"
