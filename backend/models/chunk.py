"""Chunk data models."""
from dataclasses import dataclass, field
import numpy as np

# Score reported when two vectors cannot be compared
NOT_COMPARABLE = -1.0


@dataclass(frozen=True)
class Chunk:
    """A line-range window of a document with its embedding vector."""
    document_name: str
    start_line: int  # 1-based, inclusive
    end_line: int  # 1-based, inclusive
    text: str  # annotated: "[line N] ..." per line
    embedding: np.ndarray = field(repr=False, compare=False)


@dataclass(frozen=True)
class SearchResult:
    """Chunk match returned by a vector search."""
    document_name: str
    start_line: int
    end_line: int
    snippet: str
    score: float  # -1.0 to 1.0, NOT_COMPARABLE when dimensions disagree
