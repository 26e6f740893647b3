import itertools
import random

import pytest

from hfm.core.bitio import BitReader, BitWriter, PackedStream, pack, unpack
from hfm.core.codetable import Code, generate_code_table
from hfm.core.errors import AlphabetViolation, MalformedStream
from hfm.core.node import Internal, Leaf
from hfm.core.tree import CodeTree


def _random_text(rng: random.Random) -> bytes:
    k = rng.randint(2, 128)
    alphabet = rng.sample(range(128), k)
    body = [rng.choice(alphabet) for _ in range(rng.randint(0, 400))]
    return bytes(alphabet[:2] + body)


def test_code_table_follows_paths():
    root = Internal(Leaf(1), Internal(Leaf(2), Leaf(3)))
    codes = generate_code_table(root)

    assert codes[1] == Code((0,))
    assert codes[2] == Code((1, 0))
    assert codes[3] == Code((1, 1))
    assert codes[4] is None
    assert 3 in codes and 4 not in codes
    assert [sym for sym, _ in codes.items()] == [1, 2, 3]
    assert codes.lengths() == {1: 1, 2: 2, 3: 2}


def test_code_keeps_leading_zeros():
    code = Code((0, 0, 1))
    assert len(code) == 3
    assert str(code) == "001"
    assert list(code) == [0, 0, 1]


def test_codes_are_prefix_free():
    rng = random.Random(5)
    for _ in range(30):
        tree = CodeTree.from_text(_random_text(rng))
        codes = [code for _, code in tree.codes.items()]
        for x, y in itertools.permutations(codes, 2):
            assert not x.is_prefix_of(y)


def test_bit_writer_msb_first_with_padding():
    w = BitWriter()
    w.write_bits([1, 0, 1])
    assert w.getvalue() == PackedStream(b"\xa0", 3)

    w = BitWriter()
    w.write_bits([1, 1, 1, 1, 0, 0, 0, 0, 1])
    packed = w.getvalue()
    assert packed.data == b"\xf0\x80"
    assert packed.bit_length == 9
    assert packed.padding_bits == 7


def test_bit_writer_byte_aligned_has_no_padding():
    w = BitWriter()
    w.write_bits([0] * 16)
    assert w.getvalue() == PackedStream(b"\x00\x00", 16)


def test_bit_reader_stops_at_bit_length():
    r = BitReader(b"\xa0", 3)
    assert [r.read_bit() for _ in range(3)] == [1, 0, 1]
    assert r.remaining == 0
    with pytest.raises(MalformedStream):
        r.read_bit()


def test_bit_reader_rejects_impossible_length():
    with pytest.raises(MalformedStream):
        BitReader(b"\x00", 9)


def test_abracadabra_packs_exactly():
    text = "abracadabra"
    tree = CodeTree.from_text(text)
    packed = tree.encode(text)

    # a=0 b=110 r=111 c=100 d=101
    assert packed.bit_length == 5 * 1 + 2 * 3 + 2 * 3 + 1 * 3 + 1 * 3 == 23
    assert packed.data == bytes.fromhex("6e 8a dc")
    assert tree.decode(packed) == text


def test_roundtrip_and_bit_count():
    rng = random.Random(1234)
    for _ in range(100):
        text = _random_text(rng)
        tree = CodeTree.from_text(text)
        packed = tree.encode(text)

        assert packed.bit_length == sum(len(tree.codes[s]) for s in text)
        assert len(packed.data) == (packed.bit_length + 7) // 8
        assert tree.decode(packed) == text.decode("ascii")


def test_padding_is_never_decoded():
    tree = CodeTree.from_text("ab")
    packed = tree.encode("aaa")

    # the 5 pad bits are zeros, i.e. five more 'a' edges if anyone read them
    assert packed == PackedStream(b"\x00", 3)
    assert tree.decode(packed) == "aaa"


def test_unpack_rejects_stream_ending_mid_code():
    tree = CodeTree.from_text("abracadabra")
    packed = tree.encode("abracadabra")
    with pytest.raises(MalformedStream):
        unpack(tree.root, PackedStream(packed.data, 21))


def test_empty_text_packs_to_nothing():
    tree = CodeTree.from_text("ab")
    assert tree.encode("") == PackedStream(b"", 0)
    assert tree.decode(PackedStream(b"", 0)) == ""


def test_tree_reused_on_other_text():
    tree = CodeTree.from_text("abracadabra")
    assert tree.decode(tree.encode("barcard")) == "barcard"


def test_pack_rejects_symbol_outside_tree():
    tree = CodeTree.from_text("ab")
    with pytest.raises(AlphabetViolation):
        tree.encode("abc")
    with pytest.raises(AlphabetViolation):
        pack([200], tree.codes)
    with pytest.raises(AlphabetViolation):
        tree.encode("aé")


def test_code_table_rejects_out_of_range_index():
    codes = CodeTree.from_text(bytes([0, 127])).codes
    assert str(codes[127]) == "1"
    with pytest.raises(AlphabetViolation):
        codes[-1]
    with pytest.raises(AlphabetViolation):
        codes[128]
    assert -1 not in codes
