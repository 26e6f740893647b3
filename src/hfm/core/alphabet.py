from typing import List, Union

from hfm.core.errors import AlphabetViolation


ALPHABET_SIZE = 128  # 7-bit text, one byte per symbol

# Tree markers live in the high half of a byte, so they never collide with a symbol.
OPEN = 0x80
CLOSE = 0x81
INTERNAL = 0xFF  # separator written between the two subtrees of an internal node

Text = Union[str, bytes, bytearray]


def to_symbols(text: Text) -> List[int]:
    """
    str -> code points, bytes -> byte values.
    No range check here; see check_symbols().
    """
    if isinstance(text, str):
        return [ord(ch) for ch in text]
    return list(text)


def check_symbols(symbols: List[int]) -> List[int]:
    for i, s in enumerate(symbols):
        if not 0 <= s < ALPHABET_SIZE:
            raise AlphabetViolation(f"byte {s} at offset {i} is outside the 7-bit alphabet")
    return symbols


def from_symbols(symbols: List[int]) -> str:
    return "".join(chr(s) for s in symbols)
