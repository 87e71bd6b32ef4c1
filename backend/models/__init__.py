"""Data models for the hybrid document retrieval engine."""
from .document import Document
from .chunk import Chunk, SearchResult, NOT_COMPARABLE
from .rag import RagRequest, ChatResponse

__all__ = [
    "Document",
    "Chunk",
    "SearchResult",
    "NOT_COMPARABLE",
    "RagRequest",
    "ChatResponse",
]
