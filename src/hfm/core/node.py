from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, Tuple, Union


@dataclass(frozen=True)
class Leaf:
    symbol: int


@dataclass(frozen=True)
class Internal:
    left: "Node"
    right: "Node"


Node = Union[Leaf, Internal]


@dataclass(order=True)
class WeightedNode:
    """
    Heap entry used only while building a tree.
    Ordered by (weight, order); the node itself never takes part in comparisons.
    """
    weight: int
    order: int
    node: Node = field(compare=False)


def iter_leaves(root: Node) -> Iterator[Tuple[int, int]]:
    """
    Yields (symbol, depth) for every leaf, left to right.
    """
    stack = [(root, 0)]
    while stack:
        node, depth = stack.pop()
        if isinstance(node, Leaf):
            yield node.symbol, depth
        else:
            stack.append((node.right, depth + 1))
            stack.append((node.left, depth + 1))
