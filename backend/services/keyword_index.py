"""Keyword lookup over indexed documents using a prefix trie with fuzzy correction."""
import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Set

from services.lexer import tokenize
from config import FUZZY_MAX_DISTANCE

logger = logging.getLogger(__name__)

ALPHABET_SIZE = 26
_ROOT = 0


@dataclass
class _TrieNode:
    """Arena slot; children hold indexes into the owning trie's node table."""
    children: List[Optional[int]] = field(default_factory=lambda: [None] * ALPHABET_SIZE)
    is_end_of_word: bool = False
    postings: Dict[str, List[int]] = field(default_factory=dict)


def _letter_index(ch: str) -> int:
    if "a" <= ch <= "z":
        return ord(ch) - ord("a")
    return -1


def levenshtein(a: str, b: str) -> int:
    """Unit-cost edit distance between two strings."""
    if len(a) < len(b):
        a, b = b, a
    previous = list(range(len(b) + 1))
    for i, ca in enumerate(a, start=1):
        current = [i]
        for j, cb in enumerate(b, start=1):
            if ca == cb:
                current.append(previous[j - 1])
            else:
                current.append(1 + min(previous[j - 1], previous[j], current[j - 1]))
        previous = current
    return previous[-1]


class KeywordTrie:
    """
    Prefix trie mapping words to per-document line postings.

    Nodes live in a table owned by the trie and are addressed by index, so no
    node reference is handed out to callers.
    """

    def __init__(self, fuzzy_max_distance: int = FUZZY_MAX_DISTANCE):
        self.fuzzy_max_distance = fuzzy_max_distance
        self._nodes: List[_TrieNode] = [_TrieNode()]

    def __len__(self) -> int:
        """Number of distinct words currently stored."""
        return sum(1 for node in self._nodes if node.is_end_of_word)

    def insert(self, word: str, document: str, line_number: int) -> None:
        """
        Record that ``word`` occurs in ``document`` at ``line_number``.

        Characters outside a-z are skipped rather than rejected, so "don't"
        is stored as "dont". A word with no a-z character is ignored.
        """
        node_id = _ROOT
        for ch in word:
            index = _letter_index(ch)
            if index < 0:
                continue
            child = self._nodes[node_id].children[index]
            if child is None:
                child = len(self._nodes)
                self._nodes.append(_TrieNode())
                self._nodes[node_id].children[index] = child
            node_id = child

        if node_id == _ROOT:
            logger.debug(f"Ignoring word without letters: {word!r}")
            return

        node = self._nodes[node_id]
        node.is_end_of_word = True
        node.postings.setdefault(document, []).append(line_number)

    def search_documents(self, word: str) -> Dict[str, List[int]]:
        """
        Look up the documents and line numbers containing ``word``.

        The exact path is tried first. Any character outside a-z yields an
        empty result with no fuzzy attempt. When the path is missing or does
        not end a word, the nearest stored word within the fuzzy distance is
        used instead.

        Returns:
            Mapping of document name to line numbers (copy)
        """
        word = word.lower()
        if not word:
            return {}

        node_id: Optional[int] = _ROOT
        for ch in word:
            index = _letter_index(ch)
            if index < 0:
                return {}
            node_id = self._nodes[node_id].children[index]
            if node_id is None:
                return self._fuzzy_search(word)

        node = self._nodes[node_id]
        if node.is_end_of_word:
            return {doc: list(lines) for doc, lines in node.postings.items()}
        return self._fuzzy_search(word)

    def _fuzzy_search(self, word: str) -> Dict[str, List[int]]:
        closest: Optional[str] = None
        min_distance: Optional[int] = None
        for candidate in self.vocabulary():
            distance = levenshtein(word, candidate)
            if min_distance is None or distance < min_distance:
                min_distance = distance
                closest = candidate

        if closest is None or min_distance > self.fuzzy_max_distance:
            logger.debug(f"No fuzzy match for '{word}' (best distance: {min_distance})")
            return {}

        logger.debug(f"Fuzzy match '{word}' -> '{closest}' (distance {min_distance})")
        return self.search_documents(closest)

    def vocabulary(self) -> List[str]:
        """All stored words in lexicographic pre-order."""
        words: List[str] = []
        stack = [(_ROOT, "")]
        while stack:
            node_id, prefix = stack.pop()
            node = self._nodes[node_id]
            if node.is_end_of_word:
                words.append(prefix)
            for index in range(ALPHABET_SIZE - 1, -1, -1):
                child = node.children[index]
                if child is not None:
                    stack.append((child, prefix + chr(ord("a") + index)))
        return words

    def remove_document(self, document: str) -> int:
        """Retract every posting for ``document``. Returns the number removed."""
        removed = 0
        for node in self._nodes:
            lines = node.postings.pop(document, None)
            if lines is None:
                continue
            removed += len(lines)
            if not node.postings:
                node.is_end_of_word = False
        return removed

    def clear(self) -> None:
        self._nodes = [_TrieNode()]


class KeywordIndex:
    """Document store plus keyword trie, fed one document at a time."""

    def __init__(self, trie: Optional[KeywordTrie] = None):
        """
        Initialize an empty keyword index.

        Args:
            trie: Trie to populate (a fresh KeywordTrie by default)
        """
        self.trie = trie if trie is not None else KeywordTrie()
        self._documents: Dict[str, List[str]] = {}

    def index_document(self, document_name: str, lines: Optional[List[str]]) -> None:
        """
        Tokenize and index every line of a document.

        Re-indexing an existing name retracts its previous postings and
        replaces its stored lines.

        Args:
            document_name: Unique document name
            lines: Raw document lines (line numbers are 1-based)
        """
        if document_name is None or lines is None:
            return

        if document_name in self._documents:
            removed = self.trie.remove_document(document_name)
            logger.info(f"Re-indexing {document_name}: retracted {removed} postings")

        token_count = 0
        for line_number, line in enumerate(lines, start=1):
            for token in tokenize(line or ""):
                self.trie.insert(token.lower(), document_name, line_number)
                token_count += 1

        self._documents[document_name] = list(lines)
        logger.info(f"Indexed {document_name}: {len(lines)} lines, {token_count} tokens")

    def search_keywords(self, keywords: Iterable[str]) -> Dict[str, Set[int]]:
        """
        Union of trie hits for all keywords.

        Returns:
            Mapping of document name to the set of matching line numbers
        """
        results: Dict[str, Set[int]] = {}
        for keyword in keywords:
            for document, line_numbers in self.trie.search_documents(keyword.lower()).items():
                results.setdefault(document, set()).update(line_numbers)
        return results

    def get_document(self, document_name: str) -> List[str]:
        return self._documents.get(document_name, [])

    def get_document_contents(self) -> Dict[str, List[str]]:
        """Snapshot of every stored document's lines."""
        return {name: list(lines) for name, lines in self._documents.items()}

    def document_names(self) -> List[str]:
        return list(self._documents)

    def clear(self) -> None:
        self.trie.clear()
        self._documents.clear()
        logger.info("Cleared keyword index")
