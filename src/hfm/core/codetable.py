from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional, Tuple

from hfm.core.alphabet import ALPHABET_SIZE
from hfm.core.errors import AlphabetViolation
from hfm.core.node import Internal, Node


@dataclass(frozen=True)
class Code:
    """
    Root-to-leaf path as explicit bits (0 = left, 1 = right).
    Kept as a tuple, not an int, because leading zeros matter.
    """
    bits: Tuple[int, ...]

    def __len__(self) -> int:
        return len(self.bits)

    def __iter__(self) -> Iterator[int]:
        return iter(self.bits)

    def __str__(self) -> str:
        return "".join("1" if b else "0" for b in self.bits)

    def is_prefix_of(self, other: "Code") -> bool:
        return len(self) <= len(other) and other.bits[: len(self)] == self.bits


class CodeTable:
    def __init__(self, codes: List[Optional[Code]]) -> None:
        if len(codes) != ALPHABET_SIZE:
            raise ValueError(f"code table needs {ALPHABET_SIZE} slots, got {len(codes)}")
        self._codes = codes

    def __getitem__(self, sym: int) -> Optional[Code]:
        if not 0 <= sym < ALPHABET_SIZE:
            raise AlphabetViolation(f"symbol {sym} is outside the 7-bit alphabet")
        return self._codes[sym]

    def __contains__(self, sym: int) -> bool:
        return 0 <= sym < ALPHABET_SIZE and self._codes[sym] is not None

    def items(self) -> Iterator[Tuple[int, Code]]:
        for sym, code in enumerate(self._codes):
            if code is not None:
                yield sym, code

    def lengths(self) -> Dict[int, int]:
        return {sym: len(code) for sym, code in self.items()}

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CodeTable):
            return NotImplemented
        return self._codes == other._codes

    def __repr__(self) -> str:
        return "CodeTable({" + ", ".join(f"{sym}: '{code}'" for sym, code in self.items()) + "})"


def generate_code_table(root: Node) -> CodeTable:
    codes: List[Optional[Code]] = [None] * ALPHABET_SIZE
    path: List[int] = []

    def dfs(node: Node, depth: int) -> None:
        if not isinstance(node, Internal):
            codes[node.symbol] = Code(tuple(path[:depth]))
            return
        if len(path) <= depth:
            path.append(0)
        path[depth] = 1
        dfs(node.right, depth + 1)
        path[depth] = 0
        dfs(node.left, depth + 1)

    dfs(root, 0)
    return CodeTable(codes)
