from __future__ import annotations

from typing import Dict, Iterator, List, Tuple

from hfm.core.alphabet import ALPHABET_SIZE, Text, to_symbols
from hfm.core.errors import AlphabetViolation


class FrequencyTable:
    """
    Occurrence count for each of the 128 symbols.
    Symbols that never appear simply stay at 0.
    """

    def __init__(self) -> None:
        self._counts: List[int] = [0] * ALPHABET_SIZE

    @classmethod
    def from_text(cls, text: Text) -> "FrequencyTable":
        table = cls()
        for sym in to_symbols(text):
            table[sym] += 1
        return table

    @classmethod
    def from_counts(cls, counts: Dict[int, int]) -> "FrequencyTable":
        table = cls()
        for sym, n in counts.items():
            table[sym] = n
        return table

    @staticmethod
    def _check(sym: int) -> None:
        if not 0 <= sym < ALPHABET_SIZE:
            raise AlphabetViolation(f"symbol {sym} is outside the 7-bit alphabet")

    def __getitem__(self, sym: int) -> int:
        self._check(sym)
        return self._counts[sym]

    def __setitem__(self, sym: int, count: int) -> None:
        self._check(sym)
        if count < 0:
            raise ValueError("frequency cannot be negative")
        self._counts[sym] = count

    def __len__(self) -> int:
        return ALPHABET_SIZE

    def nonzero(self) -> Iterator[Tuple[int, int]]:
        for sym, n in enumerate(self._counts):
            if n:
                yield sym, n

    def total(self) -> int:
        return sum(self._counts)

    def __repr__(self) -> str:
        return f"FrequencyTable({dict(self.nonzero())})"
