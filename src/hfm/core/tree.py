from __future__ import annotations

import heapq
from typing import Dict, List, Set

from hfm.core.alphabet import ALPHABET_SIZE, Text, check_symbols, from_symbols, to_symbols
from hfm.core.bitio import PackedStream, pack, unpack
from hfm.core.codetable import CodeTable, generate_code_table
from hfm.core.errors import DegenerateAlphabet, EmptyAlphabet, MalformedTreeEncoding
from hfm.core.frequency import FrequencyTable
from hfm.core.node import Internal, Leaf, Node, WeightedNode, iter_leaves
from hfm.core.treecodec import MAX_DEPTH, parse_tree, render_tree, serialize_tree


def build_tree(freqs: FrequencyTable) -> Node:
    """
    Greedy Huffman merge over a min-heap.

    Ties on weight are broken by `order`: leaves use their symbol value,
    merged nodes get 128, 129, ... in creation order. The same table
    therefore always yields the same tree.
    """
    heap: List[WeightedNode] = [
        WeightedNode(n, sym, Leaf(sym)) for sym, n in freqs.nonzero()
    ]

    if not heap:
        raise EmptyAlphabet("cannot build a code tree from an empty text")
    if len(heap) == 1:
        raise DegenerateAlphabet(
            f"text uses a single symbol ({heap[0].node.symbol}); need at least two"
        )

    heapq.heapify(heap)
    next_order = ALPHABET_SIZE
    while len(heap) > 1:
        a = heapq.heappop(heap)
        b = heapq.heappop(heap)
        heapq.heappush(heap, WeightedNode(a.weight + b.weight, next_order, Internal(a.node, b.node)))
        next_order += 1

    return heap[0].node


def _check_leaves(root: Node) -> None:
    seen: Set[int] = set()
    for sym, depth in iter_leaves(root):
        if not 0 <= sym < ALPHABET_SIZE:
            raise MalformedTreeEncoding(f"leaf symbol {sym} is outside the alphabet")
        if sym in seen:
            raise MalformedTreeEncoding(f"symbol {sym} appears on more than one leaf")
        if depth > MAX_DEPTH:
            raise MalformedTreeEncoding(f"leaf {sym} sits deeper than {MAX_DEPTH} levels")
        seen.add(sym)


class CodeTree:
    """
    A built (or parsed) Huffman tree plus the code table derived from it.
    Never mutated after construction.
    """

    def __init__(self, root: Node) -> None:
        if isinstance(root, Leaf):
            raise DegenerateAlphabet(f"a lone leaf ({root.symbol}) cannot carry a code")
        _check_leaves(root)
        self._root = root
        self._codes = generate_code_table(root)

    @classmethod
    def from_frequencies(cls, freqs: FrequencyTable) -> "CodeTree":
        return cls(build_tree(freqs))

    @classmethod
    def from_text(cls, text: Text) -> "CodeTree":
        return cls(build_tree(FrequencyTable.from_text(text)))

    @classmethod
    def from_bytes(cls, data: bytes) -> "CodeTree":
        return cls(parse_tree(data))

    @property
    def root(self) -> Node:
        return self._root

    @property
    def codes(self) -> CodeTable:
        return self._codes

    def symbols(self) -> List[int]:
        return sorted(sym for sym, _ in iter_leaves(self._root))

    def depths(self) -> Dict[int, int]:
        return dict(iter_leaves(self._root))

    def serialize(self) -> bytes:
        return serialize_tree(self._root)

    def render(self) -> str:
        return render_tree(self._root)

    def encode(self, text: Text) -> PackedStream:
        return pack(check_symbols(to_symbols(text)), self._codes)

    def decode(self, packed: PackedStream) -> str:
        return from_symbols(unpack(self._root, packed))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CodeTree):
            return NotImplemented
        return self._root == other._root

    def __repr__(self) -> str:
        return f"CodeTree({self.render()})"

