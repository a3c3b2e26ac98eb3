"""
DIMACS-CNF reader.
"""

import pytest

from soft_sat import ComputationGraph, DimacsFormatError, format_clause_text, read_dimacs

SAMPLE = """\
c simple example
c
p cnf 3 2
1 -3 0
2 3 -1 0
"""


def test_read_sample():
    n_vars, clauses = read_dimacs(SAMPLE)
    assert n_vars == 3
    assert clauses == ["$0 v ~$2", "$1 v $2 v ~$0"]


def test_clause_spanning_lines_and_percent_terminator():
    text = "p cnf 4 2\n1 2\n-3 0 4\n0\n%\n0\n"
    n_vars, clauses = read_dimacs(text)
    assert n_vars == 4
    assert clauses == ["$0 v $1 v ~$2", "$3"]


def test_format_clause_text_round_trips_into_graph():
    n_vars, clauses = read_dimacs(SAMPLE)
    text = format_clause_text(n_vars, clauses)
    assert text == "3\n$0 v ~$2\n$1 v $2 v ~$0\n"
    g = ComputationGraph.from_text(text)
    assert (g.n_vars, g.n_clauses) == (3, 2)


def test_graph_from_dimacs():
    g = ComputationGraph.from_dimacs(SAMPLE)
    assert g.n_vars == 3
    assert g.is_satisfied([True, True, False])
    assert not g.is_satisfied([False, False, True])


def test_clause_count_mismatch_warns():
    with pytest.warns(UserWarning, match="declares 3"):
        read_dimacs("p cnf 2 3\n1 2 0\n")


@pytest.mark.parametrize("text", [
    "1 2 0\n",                  # no header
    "p cnf 2\n1 2 0\n",         # short header
    "p sat 2 1\n1 2 0\n",       # wrong format
    "p cnf x 1\n1 0\n",         # non-integer count
    "p cnf 2 1\np cnf 2 1\n",   # duplicate header
    "p cnf 2 1\n1 a 0\n",       # bad literal
    "p cnf 2 1\n1 3 0\n",       # literal out of range
    "p cnf 2 1\n0\n",           # empty clause
    "p cnf 2 1\n1 2\n",         # unterminated
    "",
])
def test_malformed_dimacs(text):
    with pytest.raises(DimacsFormatError):
        read_dimacs(text)


def test_error_reports_line_number():
    with pytest.raises(DimacsFormatError, match="line 3"):
        read_dimacs("c x\np cnf 2 1\n1 -5 0\n")
