from __future__ import annotations

from typing import List, Optional, Set

from hfm.core.alphabet import ALPHABET_SIZE, CLOSE, INTERNAL, OPEN
from hfm.core.errors import MalformedTreeEncoding
from hfm.core.node import Internal, Leaf, Node


def _emit(out: bytearray, node: Node) -> None:
    out.append(OPEN)
    if isinstance(node, Internal):
        _emit(out, node.left)
        out.append(INTERNAL)
        _emit(out, node.right)
    else:
        out.append(node.symbol)
    out.append(CLOSE)


def serialize_tree(root: Node) -> bytes:
    """
    Pre-order, self-delimiting:
      leaf     -> OPEN sym CLOSE
      internal -> OPEN <left> INTERNAL <right> CLOSE
    A tree with L leaves takes 6L - 3 bytes.
    """
    out = bytearray()
    _emit(out, root)
    return bytes(out)


MAX_DEPTH = ALPHABET_SIZE - 1  # deepest leaf a 128-symbol tree can have


def parse_tree(data: bytes, start: int = 0, end: Optional[int] = None) -> Node:
    """
    Inverse of serialize_tree() over data[start:end].
    The separator byte between two subtrees is skipped without looking at it.
    Repeated symbols, more than ALPHABET_SIZE leaves and nesting deeper than
    MAX_DEPTH are rejected.
    """
    if end is None:
        end = len(data)
    return _parse(data, start, end, 0, set())


def _parse(data: bytes, start: int, end: int, level: int, seen: Set[int]) -> Node:
    if level > MAX_DEPTH:
        raise MalformedTreeEncoding(f"tree nests deeper than {MAX_DEPTH} levels at offset {start}")
    if end - start < 3:
        raise MalformedTreeEncoding(f"tree fragment too short ({end - start} bytes) at offset {start}")
    if data[start] != OPEN or data[end - 1] != CLOSE:
        raise MalformedTreeEncoding(f"tree fragment at offset {start} is not wrapped in OPEN/CLOSE")

    if end - start == 3:
        sym = data[start + 1]
        if sym >= ALPHABET_SIZE:
            raise MalformedTreeEncoding(f"leaf byte {sym} at offset {start + 1} is not a symbol")
        if sym in seen:
            raise MalformedTreeEncoding(f"symbol {sym} at offset {start + 1} already has a leaf")
        if len(seen) >= ALPHABET_SIZE:
            raise MalformedTreeEncoding(f"more than {ALPHABET_SIZE} leaves in tree")
        seen.add(sym)
        return Leaf(sym)

    p = start + 1
    if data[p] != OPEN:
        raise MalformedTreeEncoding(f"expected nested subtree at offset {p}")

    depth = 0
    while True:
        if p >= end - 1:
            raise MalformedTreeEncoding(f"unbalanced OPEN/CLOSE in tree fragment at offset {start}")
        b = data[p]
        if b == OPEN:
            depth += 1
        elif b == CLOSE:
            depth -= 1
        p += 1
        if depth == 0:
            break

    # data[p] is the separator
    left = _parse(data, start + 1, p, level + 1, seen)
    right = _parse(data, p + 1, end - 1, level + 1, seen)
    return Internal(left, right)


def render_tree(root: Node) -> str:
    parts: List[str] = []

    def walk(node: Node) -> None:
        parts.append("(")
        if isinstance(node, Internal):
            walk(node.left)
            walk(node.right)
        else:
            parts.append(str(node.symbol))
        parts.append(")")

    walk(root)
    return "".join(parts)
