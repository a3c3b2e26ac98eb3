"""
Circuit inspection helpers.
Used by the command line `stats` subcommand and by tests to check wiring.
"""

from collections import Counter
from typing import Dict

import numpy as np


def _depth(root, memo: Dict[int, int]) -> int:
    """Gate levels between `root` and the input leaves."""
    stack = [root]
    while stack:
        node = stack[-1]
        if node.id in memo:
            stack.pop()
            continue
        ins = node.inputs
        pending = [p for p in ins if p.id not in memo]
        if pending:
            stack.extend(pending)
            continue
        stack.pop()
        memo[node.id] = 0 if not ins else 1 + max(memo[p.id] for p in ins)
    return memo[root.id]


def get_graph_stats(graph) -> Dict:
    """
    Collect structural statistics of a ComputationGraph (no printing).

    Returns:
        dict with node/edge counts, fan-out, clause depth and per-tag counts
    """
    nodes = list(graph.tape)
    if not nodes:
        return {
            'nodes': 0,
            'edges': 0,
            'variables': 0,
            'clauses': 0,
            'max_fan_out': 0,
            'avg_fan_out': 0.0,
            'max_depth': 0,
            'operations': {},
        }

    fan_outs = [len(n.consumers) for n in nodes]
    n_edges = sum(len(n.inputs) for n in nodes)

    memo: Dict[int, int] = {}
    depths = [_depth(c, memo) for c in graph.costs]

    return {
        'nodes': len(nodes),
        'edges': n_edges,
        'variables': graph.n_vars,
        'clauses': graph.n_clauses,
        'max_fan_out': max(fan_outs),
        'avg_fan_out': float(np.mean(fan_outs)),
        'max_depth': max(depths) if depths else 0,
        'operations': dict(Counter(n.op_tag for n in nodes)),
    }


def describe_graph(graph, max_nodes: int = 50) -> str:
    """One line per node: id, tag and the ids it reads from."""
    lines = []
    nodes = list(graph.tape)
    for node in nodes[:max_nodes]:
        if node.inputs:
            src = ", ".join(str(p.id) for p in node.inputs)
            lines.append(f"Node {node.id:4d}: {node.op_tag}  <- [{src}]")
        else:
            lines.append(f"Node {node.id:4d}: {node.op_tag}  [leaf/input]")
    if len(nodes) > max_nodes:
        lines.append(f"... ({len(nodes) - max_nodes} more nodes)")
    return "\n".join(lines)


def summarize(graph, detailed: bool = False) -> str:
    """
    Human-readable circuit summary built from `get_graph_stats`.

    Args:
        graph: ComputationGraph to inspect
        detailed: also list the nodes (first 100)
    """
    stats = get_graph_stats(graph)
    if stats['nodes'] == 0:
        return "Empty circuit"

    lines = [
        "",
        "=" * 70,
        "CIRCUIT SUMMARY",
        "=" * 70,
        f"Variables:          {stats['variables']:,}",
        f"Clauses:            {stats['clauses']:,}",
        f"Total nodes:        {stats['nodes']:,}",
        f"Total edges:        {stats['edges']:,}",
        f"Max fan-out:        {stats['max_fan_out']}",
        f"Avg fan-out:        {stats['avg_fan_out']:.2f}",
        f"Max clause depth:   {stats['max_depth']}",
        "",
        "Gate breakdown:",
    ]
    for tag, count in Counter(stats['operations']).most_common():
        pct = 100.0 * count / stats['nodes']
        lines.append(f"  {tag:4s}: {count:6,} ({pct:5.1f}%)")

    if detailed:
        lines.append("")
        lines.append(describe_graph(graph, max_nodes=100))

    lines.append("=" * 70)
    lines.append("")
    return "\n".join(lines)


def print_graph_summary(graph, detailed: bool = False) -> Dict:
    """Print `summarize(graph)` and return the statistics."""
    print(summarize(graph, detailed=detailed))
    return get_graph_stats(graph)
