"""Unit tests for DocumentLoader and DocumentIndexer."""
import sys
from pathlib import Path

# Add backend to path
sys.path.insert(0, str(Path(__file__).parent.parent / "backend"))

import pytest
from unittest.mock import Mock
from models.document import Document
from services.document_indexer import DocumentIndexer
from services.document_loader import DocumentLoader
from services.keyword_index import KeywordIndex
from services.vector_store import VectorStore


class TestDocumentLoader:
    """Test suite for DocumentLoader."""

    def test_loads_text_files_sorted(self, tmp_path):
        (tmp_path / "b.md").write_text("# Title\nbody\n", encoding="utf-8")
        (tmp_path / "a.txt").write_text("cat sat on mat\ndog ran fast", encoding="utf-8")
        (tmp_path / "image.png").write_bytes(b"\x89PNG")
        (tmp_path / "nested.txt").mkdir()

        documents = DocumentLoader(docs_directory=str(tmp_path)).load_documents()

        assert [d.name for d in documents] == ["a.txt", "b.md"]
        assert documents[0].lines == ["cat sat on mat", "dog ran fast"]
        assert documents[1].total_lines == 2

    def test_invalid_utf8_is_replaced(self, tmp_path):
        (tmp_path / "latin.txt").write_bytes(b"caf\xe9 menu\n")

        documents = DocumentLoader(docs_directory=str(tmp_path)).load_documents()

        assert documents[0].lines == ["caf� menu"]

    def test_missing_directory(self, tmp_path):
        assert DocumentLoader(docs_directory=str(tmp_path / "missing")).load_documents() == []

    def test_custom_extensions(self, tmp_path):
        (tmp_path / "notes.TXT").write_text("x", encoding="utf-8")
        (tmp_path / "app.log").write_text("y", encoding="utf-8")

        documents = DocumentLoader(str(tmp_path), extensions=[".log"]).load_documents()

        assert [d.name for d in documents] == ["app.log"]


class TestDocument:
    def test_line_is_one_based(self):
        document = Document(name="a.txt", lines=["first", "second"])
        assert document.line(1) == "first"
        assert document.line(2) == "second"
        with pytest.raises(IndexError):
            document.line(0)
        with pytest.raises(IndexError):
            document.line(3)


class TestDocumentIndexer:
    """Test suite for DocumentIndexer."""

    def test_indexes_both_stores_under_same_name(self):
        keyword_index = KeywordIndex()
        vector_store = Mock(spec=VectorStore)
        indexer = DocumentIndexer(keyword_index, vector_store)

        count = indexer.index_documents([Document("a.txt", ["cat sat on mat"])])

        assert count == 1
        assert keyword_index.search_keywords(["cat"]) == {"a.txt": {1}}
        vector_store.index_document.assert_called_once_with("a.txt", ["cat sat on mat"])

    def test_keyword_only(self):
        keyword_index = KeywordIndex()
        DocumentIndexer(keyword_index).index_document("a.txt", ["dog"])
        assert keyword_index.document_names() == ["a.txt"]

    def test_failures_are_skipped(self):
        keyword_index = KeywordIndex()
        vector_store = Mock(spec=VectorStore)
        vector_store.index_document.side_effect = [RuntimeError("boom"), 1]
        indexer = DocumentIndexer(keyword_index, vector_store)

        count = indexer.index_documents([Document("bad.txt", ["x"]), Document("good.txt", ["y"])])

        assert count == 1

    def test_emptied_document_leaves_both_stores(self):
        keyword_index = KeywordIndex()
        embedding_model = Mock()
        embedding_model.embed.return_value = [1.0, 0.0]
        vector_store = VectorStore(embedding_model)
        indexer = DocumentIndexer(keyword_index, vector_store)
        indexer.index_document("a.txt", [f"alpha beta gamma line {i}" for i in range(5)])
        assert vector_store.count() == 1

        indexer.index_document("a.txt", [])

        assert keyword_index.search_keywords(["alpha"]) == {}
        assert vector_store.count() == 0
        assert vector_store.search("alpha") == []

    def test_clear(self):
        keyword_index = KeywordIndex()
        vector_store = Mock(spec=VectorStore)
        indexer = DocumentIndexer(keyword_index, vector_store)
        indexer.index_document("a.txt", ["cat"])

        indexer.clear()

        assert keyword_index.document_names() == []
        vector_store.clear.assert_called_once()
