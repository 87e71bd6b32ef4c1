"""Unit tests for KeywordTrie and KeywordIndex."""
import sys
from pathlib import Path

# Add backend to path
sys.path.insert(0, str(Path(__file__).parent.parent / "backend"))

import pytest
from services.keyword_index import KeywordTrie, KeywordIndex, levenshtein


class TestLevenshtein:
    """Test suite for the edit distance helper."""

    @pytest.mark.parametrize("a,b,expected", [
        ("cat", "cat", 0),
        ("cat", "cta", 2),
        ("cat", "cats", 1),
        ("kitten", "sitting", 3),
        ("", "abc", 3),
        ("zzz", "cat", 3),
    ])
    def test_distances(self, a, b, expected):
        assert levenshtein(a, b) == expected
        assert levenshtein(b, a) == expected


class TestKeywordTrie:
    """Test suite for KeywordTrie."""

    @pytest.fixture
    def trie(self):
        trie = KeywordTrie()
        trie.insert("cat", "a.txt", 1)
        trie.insert("cat", "a.txt", 1)
        trie.insert("cat", "b.txt", 4)
        trie.insert("dog", "a.txt", 2)
        return trie

    def test_exact_search_keeps_duplicates_in_order(self, trie):
        result = trie.search_documents("cat")
        assert result == {"a.txt": [1, 1], "b.txt": [4]}

    def test_search_is_case_insensitive(self, trie):
        assert trie.search_documents("CAT") == trie.search_documents("cat")

    def test_search_returns_copy(self, trie):
        result = trie.search_documents("dog")
        result["a.txt"].append(99)
        assert trie.search_documents("dog") == {"a.txt": [2]}

    def test_insert_skips_non_letters(self):
        trie = KeywordTrie()
        trie.insert("do-n't", "a.txt", 3)
        assert trie.vocabulary() == ["dont"]
        assert trie.search_documents("dont") == {"a.txt": [3]}

    def test_search_rejects_non_letters_without_fuzzy(self, trie):
        assert trie.search_documents("ca t") == {}
        assert trie.search_documents("cat1") == {}

    def test_word_without_letters_is_ignored(self):
        trie = KeywordTrie()
        trie.insert("123", "a.txt", 1)
        assert len(trie) == 0
        assert trie.search_documents("") == {}

    def test_fuzzy_match_within_distance(self, trie):
        assert trie.search_documents("cta") == {"a.txt": [1, 1], "b.txt": [4]}
        assert trie.search_documents("dogs") == {"a.txt": [2]}

    def test_prefix_falls_back_to_fuzzy(self):
        trie = KeywordTrie()
        trie.insert("catalog", "a.txt", 1)
        trie.insert("cat", "a.txt", 2)
        # "cata" is a path prefix but not a word; nearest word is "cat"
        assert trie.search_documents("cata") == {"a.txt": [2]}

    def test_fuzzy_miss_beyond_distance(self, trie):
        assert trie.search_documents("zzz") == {}

    def test_fuzzy_tie_prefers_lexicographic_first(self):
        trie = KeywordTrie()
        trie.insert("bat", "b.txt", 1)
        trie.insert("hat", "h.txt", 1)
        # "xat" is one edit from both
        assert trie.search_documents("xat") == {"b.txt": [1]}

    def test_fuzzy_on_empty_trie(self):
        assert KeywordTrie().search_documents("anything") == {}

    def test_vocabulary_is_preorder(self):
        trie = KeywordTrie()
        for word in ["dog", "cat", "ca", "cats", "a"]:
            trie.insert(word, "a.txt", 1)
        assert trie.vocabulary() == ["a", "ca", "cat", "cats", "dog"]

    def test_remove_document(self, trie):
        removed = trie.remove_document("a.txt")
        assert removed == 3
        assert trie.search_documents("cat") == {"b.txt": [4]}
        assert "dog" not in trie.vocabulary()

    def test_clear(self, trie):
        trie.clear()
        assert trie.vocabulary() == []
        assert trie.search_documents("cat") == {}


class TestKeywordIndex:
    """Test suite for KeywordIndex."""

    @pytest.fixture
    def index(self):
        index = KeywordIndex()
        index.index_document("a.txt", ["cat sat on mat", "dog ran fast"])
        return index

    def test_exact_keyword(self, index):
        assert index.search_keywords(["cat"]) == {"a.txt": {1}}

    def test_fuzzy_keyword(self, index):
        assert index.search_keywords(["cta"]) == {"a.txt": {1}}

    def test_unknown_keyword(self, index):
        assert index.search_keywords(["zzz"]) == {}

    def test_union_over_keywords(self, index):
        index.index_document("b.txt", ["The Dog barked"])
        assert index.search_keywords(["Cat", "dog"]) == {"a.txt": {1, 2}, "b.txt": {1}}

    def test_every_inserted_word_is_found(self, index):
        lines = ["Alpha beta, GAMMA!", "delta: epsilon"]
        index.index_document("greek.md", lines)
        for number, words in [(1, ["alpha", "beta", "gamma"]), (2, ["delta", "epsilon"])]:
            for word in words:
                assert number in index.trie.search_documents(word)["greek.md"]

    def test_document_contents(self, index):
        assert index.get_document("a.txt") == ["cat sat on mat", "dog ran fast"]
        assert index.get_document("missing.txt") == []
        contents = index.get_document_contents()
        contents["a.txt"].append("mutated")
        assert index.get_document("a.txt") == ["cat sat on mat", "dog ran fast"]

    def test_reindex_replaces_document(self, index):
        index.index_document("a.txt", ["bird flew"])
        assert index.get_document("a.txt") == ["bird flew"]
        assert index.search_keywords(["bird"]) == {"a.txt": {1}}
        assert index.search_keywords(["dog"]) == {}

    def test_none_inputs_are_ignored(self, index):
        index.index_document(None, ["x"])
        index.index_document("b.txt", None)
        assert index.document_names() == ["a.txt"]

    def test_clear(self, index):
        index.clear()
        assert index.document_names() == []
        assert index.search_keywords(["cat"]) == {}
