"""Leaf-weighted angular partition of the descendant tree."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional

from .config import check_generations
from .tree import Node

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class LayoutNode:
    node: Node
    depth: int
    x0: float
    x1: float
    id: int
    weight: float
    parent_id: Optional[int] = None

    @property
    def width(self) -> float:
        return self.x1 - self.x0

    @property
    def mid(self) -> float:
        return self.x0 + self.width / 2

    @property
    def is_degenerate(self) -> bool:
        return self.width <= 0


def leaf_weight(generation: int, max_generations: int) -> float:
    """Angular share of a node without children.

    A branch cut off early by the generation cap gets the same terminal share
    a leaf in the last generation would get.
    """
    remaining = max_generations - generation + 1
    if remaining <= 0:
        return 0.0
    return 1.0 / remaining


def visible_children(node: Node, max_generations: int) -> List[Node]:
    """Children inside the generation cap; deeper ones are not part of the chart."""
    return [child for child in node.children if child.generation <= max_generations]


def subtree_weights(root: Node, max_generations: int) -> Dict[int, float]:
    """Accumulated weight of every node, keyed by ``id(node)``."""
    weights: Dict[int, float] = {}
    # post-order without recursion; deep trees are bounded by the cap anyway
    stack = [(root, False)]
    while stack:
        node, visited = stack.pop()
        children = visible_children(node, max_generations)
        if not children:
            weights[id(node)] = leaf_weight(node.generation, max_generations)
        elif visited:
            weights[id(node)] = sum(weights[id(child)] for child in children)
        else:
            stack.append((node, True))
            stack.extend((child, False) for child in children)
    return weights


def layout(root: Node, max_generations: int) -> List[LayoutNode]:
    """Assign every node its angular interval [x0, x1) and depth, in pre-order."""
    check_generations(max_generations)
    weights = subtree_weights(root, max_generations)
    sequence = 0
    nodes: List[LayoutNode] = []

    stack = [(root, 0.0, 1.0, None)]
    while stack:
        node, x0, x1, parent_id = stack.pop()
        placed = LayoutNode(
            node=node,
            depth=node.generation - 1,
            x0=x0,
            x1=x1,
            id=sequence,
            weight=weights[id(node)],
            parent_id=parent_id,
        )
        sequence += 1
        nodes.append(placed)

        children = visible_children(node, max_generations)
        if not children:
            continue

        intervals = _split(x0, x1, [weights[id(child)] for child in children])
        if placed.weight <= 0:
            log.warning("zero weight below %s, children get no angular width", node.data.xref)

        # push in reverse so children are visited first to last
        for child, (c0, c1) in reversed(list(zip(children, intervals))):
            stack.append((child, c0, c1, placed.id))

    return nodes


def _split(x0: float, x1: float, weights: List[float]):
    total = sum(weights)
    if total <= 0:
        return [(x0, x0) for _ in weights]

    k = (x1 - x0) / total
    intervals = []
    cursor = x0
    for index, weight in enumerate(weights):
        end = x1 if index == len(weights) - 1 else cursor + weight * k
        intervals.append((cursor, end))
        cursor = end
    return intervals
