"""Line tokenizer feeding the keyword index."""
import re
from typing import Iterator

# Maximal runs of printable ASCII letters; everything else separates tokens
_WORD_PATTERN = re.compile(r"[A-Za-z]+")


def tokenize(line: str) -> Iterator[str]:
    """
    Lazily yield the word tokens of a single line.

    Whitespace, punctuation, digits and non-ASCII characters end a token and
    are skipped. Case is preserved; callers lowercase.

    Args:
        line: Raw line of text (None is treated as empty)

    Yields:
        Word tokens in the order they appear
    """
    if not line:
        return
    for match in _WORD_PATTERN.finditer(line):
        yield match.group(0)
