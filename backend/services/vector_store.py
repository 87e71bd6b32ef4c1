"""In-memory vector store over embedded line-window chunks."""
import logging
import threading
from typing import List, Optional, Sequence, Tuple

import numpy as np

from models.chunk import Chunk, SearchResult, NOT_COMPARABLE
from services.chunking_engine import ChunkingEngine
from services.embedding_model import EmbeddingProvider

logger = logging.getLogger(__name__)


def _as_vector(values: Optional[Sequence[float]]) -> np.ndarray:
    if values is None:
        return np.zeros(0, dtype=np.float64)
    return np.asarray(values, dtype=np.float64).ravel()


def _score(va: np.ndarray, vb: np.ndarray) -> Tuple[bool, float]:
    if va.size == 0 or va.size != vb.size:
        return False, NOT_COMPARABLE

    norm_a = float(np.linalg.norm(va))
    norm_b = float(np.linalg.norm(vb))
    if norm_a == 0.0 or norm_b == 0.0:
        return False, NOT_COMPARABLE

    return True, float(np.dot(va, vb) / (norm_a * norm_b))


def cosine_similarity(a: Sequence[float], b: Sequence[float]) -> float:
    """
    Cosine similarity of two vectors.

    Returns NOT_COMPARABLE (-1.0) for empty vectors, mismatched lengths or a
    zero-magnitude vector.
    """
    return _score(_as_vector(a), _as_vector(b))[1]


class VectorStore:
    """Store chunk embeddings and enable brute-force cosine similarity search."""

    def __init__(
        self,
        embedding_model: EmbeddingProvider,
        chunking_engine: Optional[ChunkingEngine] = None
    ):
        """
        Initialize an empty vector store.

        Args:
            embedding_model: Provider used for chunk and query embeddings
            chunking_engine: Line-window chunker (default window settings if omitted)
        """
        self.embedding_model = embedding_model
        self.chunking_engine = chunking_engine or ChunkingEngine()
        self._chunks: List[Chunk] = []
        self._lock = threading.Lock()

        logger.info("Initialized VectorStore")

    def _embed(self, text: str) -> np.ndarray:
        try:
            return _as_vector(self.embedding_model.embed(text))
        except Exception as e:
            logger.warning(f"Embedding provider failed: {str(e)}")
            return _as_vector(None)

    def index_document(self, document_name: str, lines: Optional[List[str]]) -> int:
        """
        Chunk and embed a document, replacing any chunks stored under its name.

        Windows whose embedding comes back empty are dropped without retry.

        Args:
            document_name: Document name shared with the keyword index
            lines: Raw document lines

        Returns:
            Number of chunks stored for the document
        """
        if document_name is None or lines is None:
            return 0

        if not lines:
            removed = self.remove_document(document_name)
            logger.info(f"Indexed empty document {document_name} ({removed} old chunks removed)")
            return 0

        new_chunks = []
        windows = self.chunking_engine.chunk_lines(document_name, lines)
        for window in windows:
            vector = self._embed(window.text)
            if vector.size == 0:
                logger.warning(
                    f"Dropping chunk {document_name}:{window.start_line}-{window.end_line} "
                    f"(empty embedding)"
                )
                continue
            new_chunks.append(Chunk(
                document_name=document_name,
                start_line=window.start_line,
                end_line=window.end_line,
                text=window.text,
                embedding=vector
            ))

        with self._lock:
            self._chunks = [c for c in self._chunks if c.document_name != document_name]
            self._chunks.extend(new_chunks)

        logger.info(
            f"Indexed document {document_name} into {len(new_chunks)} chunks "
            f"({len(windows) - len(new_chunks)} dropped)"
        )
        return len(new_chunks)

    def search(self, query: str, top_k: int = 5) -> List[SearchResult]:
        """
        Find the chunks most similar to the query.

        Args:
            query: Query text to embed
            top_k: Maximum number of results (at least one is returned when
                any chunk exists)

        Returns:
            SearchResults sorted by descending score; empty when the query
            cannot be embedded
        """
        query_vector = self._embed((query or "").strip())
        if query_vector.size == 0:
            logger.info("Query embedding unavailable, returning no vector results")
            return []

        with self._lock:
            snapshot = list(self._chunks)

        scored = []
        for chunk in snapshot:
            comparable, score = _score(query_vector, chunk.embedding)
            scored.append((comparable, SearchResult(
                document_name=chunk.document_name,
                start_line=chunk.start_line,
                end_line=chunk.end_line,
                snippet=chunk.text,
                score=score
            )))

        # sorted() is stable, so equal scores keep insertion order
        scored = sorted(scored, key=lambda item: (item[0], item[1].score), reverse=True)
        results = [result for _, result in scored[:max(1, top_k)]]

        logger.debug(f"Found {len(results)} chunks for query (from {len(snapshot)} stored)")
        return results

    def remove_document(self, document_name: str) -> int:
        with self._lock:
            before = len(self._chunks)
            self._chunks = [c for c in self._chunks if c.document_name != document_name]
            return before - len(self._chunks)

    def clear(self) -> None:
        """Clear all chunks from the vector store."""
        with self._lock:
            self._chunks = []
        logger.info("Cleared all chunks from vector store")

    def count(self) -> int:
        """Get the total number of chunks in the vector store."""
        with self._lock:
            return len(self._chunks)
