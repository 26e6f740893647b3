from __future__ import annotations

import logging
from typing import Tuple

from hfm.core.alphabet import Text
from hfm.core.bitio import PackedStream
from hfm.core.errors import MalformedContainer
from hfm.core.tree import CodeTree


log = logging.getLogger(__name__)

LENGTH_WIDTH = 8       # bytes per length field
BYTE_ORDER = "little"  # fixed, independent of the host


def _u64(x: int) -> bytes:
    return int(x).to_bytes(LENGTH_WIDTH, BYTE_ORDER, signed=False)


def _u64_read(buf: bytes, off: int, what: str) -> Tuple[int, int]:
    if off + LENGTH_WIDTH > len(buf):
        raise MalformedContainer(f"container truncated while reading {what}")
    return int.from_bytes(buf[off:off + LENGTH_WIDTH], BYTE_ORDER, signed=False), off + LENGTH_WIDTH


def write_container(tree: CodeTree, packed: PackedStream) -> bytes:
    """
    .hfmtree layout:
      l1 (u64 LE)   byte length of the serialized tree
      tree          l1 bytes
      l2 (u64 LE)   BIT length of the packed code
      code          ceil(l2 / 8) bytes
    """
    tree_bytes = tree.serialize()
    log.debug("container: tree=%d bytes, code=%d bits", len(tree_bytes), packed.bit_length)
    return _u64(len(tree_bytes)) + tree_bytes + _u64(packed.bit_length) + packed.data


def read_container(blob: bytes) -> Tuple[CodeTree, PackedStream]:
    off = 0
    l1, off = _u64_read(blob, off, "tree length")
    if off + l1 > len(blob):
        raise MalformedContainer(f"tree needs {l1} bytes, only {len(blob) - off} left")
    tree = CodeTree.from_bytes(blob[off:off + l1])
    off += l1

    l2, off = _u64_read(blob, off, "code bit length")
    nbytes = (l2 + 7) >> 3
    if off + nbytes != len(blob):
        raise MalformedContainer(
            f"code of {l2} bits needs {nbytes} bytes, container has {len(blob) - off}"
        )
    return tree, PackedStream(blob[off:off + nbytes], l2)


def encode_container(text: Text) -> bytes:
    tree = CodeTree.from_text(text)
    return write_container(tree, tree.encode(text))


def decode_container(blob: bytes) -> str:
    tree, packed = read_container(blob)
    return tree.decode(packed)
