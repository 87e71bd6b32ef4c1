"""Keyword extraction for retrieval queries using the LLM client."""
import logging
import re
from typing import Any, Dict, List, Optional, Protocol

from services.llm_client import LLMClient

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = (
    "You extract 3-8 concise search keywords from a user's request strictly as a "
    "single comma-separated line. No explanations."
)

_KEYWORD_PATTERN = re.compile(r"[a-z0-9][a-z0-9 -]{0,40}")
_SEPARATORS = re.compile(r",|\n")
MAX_WORDS_PER_KEYWORD = 3


class KeywordSource(Protocol):
    def extract_keywords(
        self,
        prompt: str,
        model: Optional[str] = None,
        options: Optional[Dict[str, Any]] = None
    ) -> List[str]:
        ...


def parse_keywords(content: Optional[str]) -> List[str]:
    """
    Turn a comma/newline separated model reply into clean keywords.

    Each keyword is lowercased, trimmed to its first three words and kept
    once, in reply order.
    """
    if not content:
        return []

    unique: List[str] = []
    for part in _SEPARATORS.split(content):
        keyword = part.strip().lower()
        if not keyword or not _KEYWORD_PATTERN.search(keyword):
            continue
        keyword = " ".join(keyword.split()[:MAX_WORDS_PER_KEYWORD])
        if keyword and keyword not in unique:
            unique.append(keyword)
    return unique


class KeywordExtractor:
    """Ask the LLM for search keywords describing a prompt."""

    def __init__(self, llm_client: LLMClient):
        self.llm_client = llm_client

    def extract_keywords(
        self,
        prompt: str,
        model: Optional[str] = None,
        options: Optional[Dict[str, Any]] = None
    ) -> List[str]:
        """
        Extract keywords for ``prompt``.

        Returns:
            Lowercase keywords of at most three words, or [] when the model
            call fails
        """
        user_prompt = f"User request: {prompt}\nReturn only keywords, comma-separated."
        try:
            response = self.llm_client.generate(
                prompt=user_prompt,
                model=model,
                system_prompt=SYSTEM_PROMPT,
                options=options
            )
        except Exception as e:
            logger.warning(f"Keyword extraction failed: {str(e)}")
            return []

        keywords = parse_keywords(response.text)
        logger.info(f"Extracted keywords: {keywords}")
        return keywords
