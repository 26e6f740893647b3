class HuffmanError(ValueError):
    """
    Base class for everything the codec refuses to do.
    None of these are transient, so callers should not retry.
    """
    pass


class EmptyAlphabet(HuffmanError):
    """Raised when every symbol has a zero count (the source text was empty)."""
    pass


class DegenerateAlphabet(HuffmanError):
    """
    Raised when exactly one symbol has a non-zero count.
    A single leaf has no branch to hang a code on.
    """
    pass


class MalformedTreeEncoding(HuffmanError):
    pass


class AlphabetViolation(HuffmanError):
    pass


class MalformedStream(HuffmanError):
    pass


class MalformedContainer(HuffmanError):
    pass
