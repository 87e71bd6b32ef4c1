"""Document data models."""
from dataclasses import dataclass, field
from typing import List


@dataclass
class Document:
    """Represents a plain-text document as an ordered list of raw lines."""
    name: str
    lines: List[str] = field(default_factory=list)

    @property
    def total_lines(self) -> int:
        return len(self.lines)

    def line(self, number: int) -> str:
        """Return the line with the given 1-based number."""
        if number < 1 or number > len(self.lines):
            raise IndexError(f"{self.name} has no line {number}")
        return self.lines[number - 1]
