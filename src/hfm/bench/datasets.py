import random


def toy_text() -> str:
    """
    Small English-ish text, plain ASCII.
    """
    return (
        "Huffman coding assigns short codes to frequent symbols.\n"
        "Rare symbols get longer codes, and no code is a prefix of another.\n"
        "The tree is stored in front of the packed bits.\n"
        "abracadabra abracadabra abracadabra\n"
    )


def toy_text_repeated(repeats: int = 30) -> str:
    base = toy_text()
    return "".join(f"--- block {i} ---\n{base}\n" for i in range(repeats))


def toy_text_varied(lines: int = 400, seed: int = 7) -> str:
    """
    Random words drawn with a skewed distribution, so the symbol
    frequencies are uneven but nothing repeats verbatim.
    """
    rng = random.Random(seed)
    words = [
        "the", "a", "tree", "leaf", "node", "bit", "byte", "code", "heap",
        "merge", "weight", "symbol", "prefix", "stream", "pack", "zero",
    ]
    weights = [len(words) - i for i in range(len(words))]
    out = []
    for i in range(lines):
        n = rng.randint(4, 12)
        line = " ".join(rng.choices(words, weights=weights, k=n))
        out.append(f"{i:04d} {line}.\n")
    return "".join(out)
