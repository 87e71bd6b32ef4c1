"""Chunking engine splitting documents into overlapping line windows."""
import logging
from dataclasses import dataclass
from typing import List

from config import CHUNK_SIZE, CHUNK_OVERLAP, MIN_CHUNK_CHARS

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LineWindow:
    """A 1-based inclusive line range with its annotated text."""
    start_line: int
    end_line: int
    text: str


def annotate_lines(lines: List[str], line_numbers: List[int]) -> str:
    """
    Render the given 1-based line numbers as "[line N] text" rows.

    Line numbers outside the document are skipped.
    """
    rows = []
    for number in line_numbers:
        if 1 <= number <= len(lines):
            rows.append(f"[line {number}] {lines[number - 1]}\n")
    return "".join(rows)


class ChunkingEngine:
    """Segments documents into overlapping windows of lines."""

    def __init__(
        self,
        chunk_size: int = CHUNK_SIZE,
        chunk_overlap: int = CHUNK_OVERLAP,
        min_chunk_chars: int = MIN_CHUNK_CHARS
    ):
        """
        Initialize ChunkingEngine.

        Args:
            chunk_size: Lines per window
            chunk_overlap: Lines shared by consecutive windows
            min_chunk_chars: Windows with less stripped text are dropped

        Raises:
            ValueError: If the overlap does not leave a positive stride
        """
        if chunk_size <= 0:
            raise ValueError("chunk_size must be positive")
        if chunk_overlap < 0 or chunk_overlap >= chunk_size:
            raise ValueError("chunk_overlap must be in [0, chunk_size)")

        self.chunk_size = chunk_size
        self.chunk_overlap = chunk_overlap
        self.min_chunk_chars = min_chunk_chars

    @property
    def stride(self) -> int:
        return self.chunk_size - self.chunk_overlap

    def window_ranges(self, line_count: int) -> List[tuple]:
        """
        Compute (start, end) line ranges, 1-based and inclusive.

        The final window is clipped to the document end.
        """
        ranges = []
        offset = 0
        while offset < line_count:
            end = min(line_count, offset + self.chunk_size)
            ranges.append((offset + 1, end))
            if end == line_count:
                break
            offset += self.stride
        return ranges

    def chunk_lines(self, document_name: str, lines: List[str]) -> List[LineWindow]:
        """
        Chunk a document into annotated line windows.

        Args:
            document_name: Source document name (used for logging)
            lines: Raw document lines

        Returns:
            Retained windows, in document order
        """
        if not lines:
            return []

        windows = []
        dropped = 0
        for start, end in self.window_ranges(len(lines)):
            text = annotate_lines(lines, list(range(start, end + 1)))
            if len(text.strip()) < self.min_chunk_chars:
                dropped += 1
                continue
            windows.append(LineWindow(start_line=start, end_line=end, text=text))

        logger.debug(
            f"Chunked {document_name}: {len(windows)} windows kept, {dropped} below "
            f"{self.min_chunk_chars} chars"
        )
        return windows
