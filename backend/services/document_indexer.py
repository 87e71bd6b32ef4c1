"""Ingestion driver feeding documents to the keyword index and the vector store."""
import logging
from typing import Iterable, List, Optional

from models.document import Document
from services.keyword_index import KeywordIndex
from services.vector_store import VectorStore

logger = logging.getLogger(__name__)


class DocumentIndexer:
    """Index each document into both stores under the same name."""

    def __init__(self, keyword_index: KeywordIndex, vector_store: Optional[VectorStore] = None):
        """
        Args:
            keyword_index: Keyword trie and document store
            vector_store: Chunk store; None indexes keywords only
        """
        self.keyword_index = keyword_index
        self.vector_store = vector_store

    def index_document(self, document_name: str, lines: List[str]) -> None:
        self.keyword_index.index_document(document_name, lines)
        if self.vector_store is not None:
            self.vector_store.index_document(document_name, lines)

    def index_documents(self, documents: Iterable[Document]) -> int:
        """
        Index every document, skipping ones that fail.

        Returns:
            Number of documents indexed
        """
        indexed = 0
        for document in documents:
            try:
                self.index_document(document.name, document.lines)
            except Exception as e:
                logger.warning(f"Failed to index document {document.name}: {str(e)}")
                continue
            indexed += 1

        logger.info(f"Indexed {indexed} documents")
        return indexed

    def clear(self) -> None:
        self.keyword_index.clear()
        if self.vector_store is not None:
            self.vector_store.clear()
