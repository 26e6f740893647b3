import pytest

from hfm.core.errors import AlphabetViolation, DegenerateAlphabet, EmptyAlphabet, MalformedTreeEncoding
from hfm.core.frequency import FrequencyTable
from hfm.core.node import Internal, Leaf
from hfm.core.tree import CodeTree, build_tree


def _fib_counts(n):
    a, b = 1, 1
    out = {}
    for sym in range(n):
        out[sym] = a
        a, b = b, a + b
    return out


def test_frequency_table_counts_text():
    t = FrequencyTable.from_text("abracadabra")

    assert len(t) == 128
    assert t[ord("a")] == 5
    assert t[ord("b")] == 2
    assert t[ord("r")] == 2
    assert t[ord("c")] == 1
    assert t[ord("d")] == 1
    assert t[ord("z")] == 0
    assert t.total() == 11
    assert [sym for sym, _ in t.nonzero()] == sorted(map(ord, "abcdr"))


def test_frequency_table_from_bytes_and_counts():
    assert FrequencyTable.from_text(b"\x00\x00\x7f")[0] == 2
    t = FrequencyTable.from_counts({10: 3, 20: 0, 30: 7})
    assert list(t.nonzero()) == [(10, 3), (30, 7)]


def test_frequency_table_rejects_bad_entries():
    t = FrequencyTable()
    with pytest.raises(AlphabetViolation):
        t[128] = 1
    with pytest.raises(AlphabetViolation):
        FrequencyTable.from_text("café")
    with pytest.raises(ValueError):
        t[5] = -1


def test_empty_alphabet():
    with pytest.raises(EmptyAlphabet):
        build_tree(FrequencyTable())
    with pytest.raises(EmptyAlphabet):
        CodeTree.from_text("")


def test_degenerate_alphabet():
    with pytest.raises(DegenerateAlphabet):
        CodeTree.from_text("aaaa")
    with pytest.raises(DegenerateAlphabet):
        CodeTree.from_frequencies(FrequencyTable.from_counts({42: 9}))


def test_abracadabra_tree_shape():
    tree = CodeTree.from_text("abracadabra")
    a, b, c, d, r = (ord(ch) for ch in "abcdr")

    assert tree.symbols() == sorted([a, b, c, d, r])
    assert tree.root == Internal(
        Leaf(a),
        Internal(Internal(Leaf(c), Leaf(d)), Internal(Leaf(b), Leaf(r))),
    )

    lengths = tree.codes.lengths()
    assert lengths[a] == min(lengths.values())
    assert all(lengths[r] <= lengths[s] for s in (b, c, d))


def test_two_symbols_get_one_bit_each():
    tree = CodeTree.from_text("ab")
    assert str(tree.codes[ord("a")]) == "0"
    assert str(tree.codes[ord("b")]) == "1"


def test_merged_weights_sum_to_total():
    # duplicate weights: only the weighted code length is checked
    text = "aabbccddeeffgghh" * 3 + "xyz"
    tree = CodeTree.from_text(text)
    freqs = FrequencyTable.from_text(text)
    depths = tree.depths()

    assert sorted(depths) == [sym for sym, _ in freqs.nonzero()]
    assert all(depth >= 1 for depth in depths.values())
    weighted = sum(freqs[sym] * depth for sym, depth in depths.items())
    assert weighted == tree.encode(text).bit_length


def test_full_alphabet_equal_weights_is_balanced():
    tree = CodeTree.from_text(bytes(range(128)))
    assert set(tree.codes.lengths().values()) == {7}


def test_fibonacci_weights_make_a_spine():
    n = 30
    tree = CodeTree.from_frequencies(FrequencyTable.from_counts(_fib_counts(n)))
    depths = tree.depths()

    assert max(depths.values()) == n - 1
    assert sorted(depths.values()).count(n - 1) == 2


def test_build_is_deterministic():
    text = "the quick brown fox jumps over the lazy dog"
    assert CodeTree.from_text(text) == CodeTree.from_text(text)


def test_hand_built_tree_must_be_a_valid_code_tree():
    with pytest.raises(MalformedTreeEncoding):
        CodeTree(Internal(Leaf(97), Internal(Leaf(97), Leaf(98))))
    with pytest.raises(MalformedTreeEncoding):
        CodeTree(Internal(Leaf(97), Leaf(200)))
