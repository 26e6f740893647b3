from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List

from hfm.core.codetable import CodeTable
from hfm.core.errors import AlphabetViolation, MalformedStream
from hfm.core.node import Internal, Leaf, Node


@dataclass(frozen=True)
class PackedStream:
    data: bytes
    bit_length: int  # meaningful bits; the tail of the last byte is zero padding

    @property
    def padding_bits(self) -> int:
        return len(self.data) * 8 - self.bit_length


class BitWriter:
    """
    MSB-first bit sink with one cursor shared across all writes.
    """

    def __init__(self) -> None:
        self._out = bytearray()
        self._cur = 0
        self._nbits = 0
        self.bit_length = 0

    def write_bit(self, bit: int) -> None:
        self._cur = (self._cur << 1) | (1 if bit else 0)
        self._nbits += 1
        self.bit_length += 1
        if self._nbits == 8:
            self._out.append(self._cur)
            self._cur = 0
            self._nbits = 0

    def write_bits(self, bits: Iterable[int]) -> None:
        for bit in bits:
            self.write_bit(bit)

    def getvalue(self) -> PackedStream:
        out = bytes(self._out)
        if self._nbits > 0:
            out += bytes([self._cur << (8 - self._nbits)])
        return PackedStream(out, self.bit_length)


class BitReader:
    def __init__(self, data: bytes, bit_length: int) -> None:
        if bit_length < 0 or bit_length > len(data) * 8:
            raise MalformedStream(
                f"bit length {bit_length} does not fit in {len(data)} bytes"
            )
        self._data = data
        self._bit_length = bit_length
        self._pos = 0

    @property
    def remaining(self) -> int:
        return self._bit_length - self._pos

    def read_bit(self) -> int:
        if self._pos >= self._bit_length:
            raise MalformedStream("read past the end of the packed stream")
        byte = self._data[self._pos >> 3]
        bit = (byte >> (7 - (self._pos & 7))) & 1
        self._pos += 1
        return bit


def pack(symbols: Iterable[int], codes: CodeTable) -> PackedStream:
    w = BitWriter()
    for sym in symbols:
        if sym not in codes:
            raise AlphabetViolation(f"symbol {sym} has no code in this tree")
        w.write_bits(codes[sym])
    return w.getvalue()


def unpack(root: Node, packed: PackedStream) -> List[int]:
    """
    Walk the tree one bit at a time (1 = right, 0 = left) and stop after
    exactly packed.bit_length bits, so padding is never read as an edge.
    """
    r = BitReader(packed.data, packed.bit_length)
    out: List[int] = []
    node = root
    while r.remaining:
        if not isinstance(node, Internal):
            raise MalformedStream("code tree has no internal node to walk")
        node = node.right if r.read_bit() else node.left
        if isinstance(node, Leaf):
            out.append(node.symbol)
            node = root
    if node is not root:
        raise MalformedStream("packed stream ends in the middle of a code")
    return out
