"""Document loading service for plain-text files."""
import logging
import os
from typing import Iterable, List

from models.document import Document

logger = logging.getLogger(__name__)

DEFAULT_EXTENSIONS = (".txt", ".md")


class DocumentLoader:
    """Loads text files from a directory as line-oriented documents."""

    def __init__(self, docs_directory: str = "docs", extensions: Iterable[str] = DEFAULT_EXTENSIONS):
        """
        Initialize DocumentLoader.

        Args:
            docs_directory: Path to directory containing text files
            extensions: File suffixes to load (case-insensitive)
        """
        self.docs_directory = docs_directory
        self.extensions = tuple(ext.lower() for ext in extensions)

    def load_documents(self) -> List[Document]:
        """
        Load all matching files from the documents directory.

        Returns:
            Documents sorted by file name; unreadable files are skipped
        """
        documents = []

        if not os.path.isdir(self.docs_directory):
            logger.error(f"Documents directory not found: {self.docs_directory}")
            return documents

        filenames = [
            f for f in os.listdir(self.docs_directory)
            if f.lower().endswith(self.extensions)
            and os.path.isfile(os.path.join(self.docs_directory, f))
        ]
        logger.info(f"Found {len(filenames)} text files in {self.docs_directory}")

        for filename in sorted(filenames):
            filepath = os.path.join(self.docs_directory, filename)
            try:
                document = self._load_text(filepath, filename)
            except OSError as e:
                logger.error(f"Error loading {filename}: {str(e)}", exc_info=True)
                continue
            documents.append(document)
            logger.info(f"Loaded {filename}: {document.total_lines} lines")

        logger.info(f"Successfully loaded {len(documents)} documents")
        return documents

    def _load_text(self, filepath: str, filename: str) -> Document:
        with open(filepath, "r", encoding="utf-8", errors="replace") as handle:
            lines = handle.read().splitlines()
        return Document(name=filename, lines=lines)
