# soft_sat/circuit/core/tape.py
from __future__ import annotations
from typing import Dict, Iterator, List

from .node import Node


class Tape:
    """
    Arena owning every node of one circuit, in creation order.

    Ids are handed out monotonically. Parser-only markers (open parentheses)
    draw an id too but are never recorded, so ids may have gaps.
    """
    def __init__(self):
        self.nodes: List[Node] = []
        self._by_id: Dict[int, Node] = {}
        self._counter = 0

    def new_id(self) -> int:
        idx = self._counter
        self._counter += 1
        return idx

    def record(self, node: Node) -> Node:
        """Append `node` to the arena and return it."""
        if node.id in self._by_id:
            raise ValueError(f"Node id {node.id} recorded twice")
        self.nodes.append(node)
        self._by_id[node.id] = node
        return node

    @property
    def next_id(self) -> int:
        return self._counter

    def __getitem__(self, node_id: int) -> Node:
        return self._by_id[node_id]

    def __contains__(self, node_id: int) -> bool:
        return node_id in self._by_id

    def __iter__(self) -> Iterator[Node]:
        return iter(self.nodes)

    def __len__(self) -> int:
        return len(self.nodes)
