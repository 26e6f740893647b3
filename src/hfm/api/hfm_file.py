from __future__ import annotations

import logging
import os
from typing import Optional

from hfm.api.container import read_container, write_container
from hfm.core.alphabet import check_symbols, from_symbols, to_symbols
from hfm.core.bitio import PackedStream
from hfm.core.tree import CodeTree


log = logging.getLogger(__name__)

DEFAULT_OUTPUT = "a.hfmtree"
TEXT_EXT = ".txt"
CONTAINER_EXT = ".hfmtree"


def _read_bytes(path: str) -> bytes:
    with open(path, "rb") as f:
        return f.read()


def _write_bytes(path: str, data: bytes) -> None:
    os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
    with open(path, "wb") as f:
        f.write(data)


def load_text(path: str) -> str:
    """
    Read a 7-bit text file. Any byte >= 128 raises AlphabetViolation.
    Bytes are taken as-is (no newline translation).
    """
    return from_symbols(check_symbols(to_symbols(_read_bytes(path))))


def write_text(path: str, text: str) -> None:
    _write_bytes(path, bytes(check_symbols(to_symbols(text))))


class HfmDocument:
    """
    A text together with its code tree and packed code.

    Either built from plain text (tree derived from the text unless one is
    given) or loaded back from a .hfmtree container.
    """

    def __init__(
        self,
        text: str,
        tree: Optional[CodeTree] = None,
        packed: Optional[PackedStream] = None,
    ) -> None:
        self.text = text
        self.tree = tree if tree is not None else CodeTree.from_text(text)
        self.packed = packed if packed is not None else self.tree.encode(text)

    @classmethod
    def from_container(cls, blob: bytes) -> "HfmDocument":
        tree, packed = read_container(blob)
        return cls(tree.decode(packed), tree, packed)

    @classmethod
    def from_path(cls, path: str) -> "HfmDocument":
        ext = os.path.splitext(path)[1]
        if ext == CONTAINER_EXT:
            log.debug("loading container %s", path)
            return cls.from_container(_read_bytes(path))
        if ext == TEXT_EXT:
            log.debug("loading text %s", path)
            return cls(load_text(path))
        raise ValueError(f"cannot load {path!r}: expected {TEXT_EXT} or {CONTAINER_EXT}")

    def to_bytes(self) -> bytes:
        return write_container(self.tree, self.packed)

    def write(self, path: Optional[str] = None) -> str:
        path = path or DEFAULT_OUTPUT
        blob = self.to_bytes()
        _write_bytes(path, blob)
        log.debug("wrote %s (%d bytes)", path, len(blob))
        return path


def first_mismatch(a: str, b: str) -> Optional[int]:
    for i, (x, y) in enumerate(zip(a, b)):
        if x != y:
            return i
    if len(a) != len(b):
        return min(len(a), len(b))
    return None


def verify_roundtrip(text: str) -> Optional[int]:
    """
    Encode to a container, decode it again, and return the index of the
    first differing character (None when the round trip is exact).
    """
    decoded = HfmDocument.from_container(HfmDocument(text).to_bytes()).text
    return first_mismatch(text, decoded)
