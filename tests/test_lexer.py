"""Unit tests for the line tokenizer."""
import sys
from pathlib import Path

# Add backend to path
sys.path.insert(0, str(Path(__file__).parent.parent / "backend"))

import types
from services.lexer import tokenize


class TestTokenize:
    """Test suite for tokenize()."""

    def test_splits_on_whitespace(self):
        assert list(tokenize("cat sat on mat")) == ["cat", "sat", "on", "mat"]

    def test_preserves_case(self):
        assert list(tokenize("Hello World")) == ["Hello", "World"]

    def test_punctuation_ends_tokens(self):
        assert list(tokenize('"Stop!" (said) [she]; ok.')) == ["Stop", "said", "she", "ok"]

    def test_digits_and_symbols_split_words(self):
        assert list(tokenize("abc123def x-y don't")) == ["abc", "def", "x", "y", "don", "t"]

    def test_non_ascii_letters_are_skipped(self):
        assert list(tokenize("café naïve")) == ["caf", "na", "ve"]

    def test_empty_and_blank_lines(self):
        assert list(tokenize("")) == []
        assert list(tokenize("   \t ")) == []
        assert list(tokenize(None)) == []

    def test_is_lazy(self):
        tokens = tokenize("one two")
        assert isinstance(tokens, types.GeneratorType)
        assert next(tokens) == "one"
