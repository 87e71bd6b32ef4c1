"""Per-document evidence summarization using the LLM client."""
import logging
from typing import Any, Dict, Optional, Protocol

from services.llm_client import LLMClient

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = (
    "You are a helpful assistant. Summarize only using the provided document lines. "
    "Cite line numbers inline when relevant. Be concise."
)


class EvidenceSummarizer(Protocol):
    def summarize(
        self,
        prompt: str,
        document: str,
        evidence: str,
        model: Optional[str] = None,
        options: Optional[Dict[str, Any]] = None
    ) -> str:
        ...


def build_summary_prompt(prompt: str, document: str, evidence: str) -> str:
    return (
        f"User request: {prompt}\n"
        f"Document: {document}\n"
        f"Relevant lines (do not hallucinate beyond these):\n"
        f"```\n{evidence}```\n"
        f"Provide a short summary that answers the user's request using only this content."
    )


class Summarizer:
    """Summarize one document's evidence against the user's request."""

    def __init__(self, llm_client: LLMClient):
        self.llm_client = llm_client

    def summarize(
        self,
        prompt: str,
        document: str,
        evidence: str,
        model: Optional[str] = None,
        options: Optional[Dict[str, Any]] = None
    ) -> str:
        """Return the summary text, or "" when the model call fails."""
        try:
            response = self.llm_client.generate(
                prompt=build_summary_prompt(prompt, document, evidence),
                model=model,
                system_prompt=SYSTEM_PROMPT,
                options=options
            )
        except Exception as e:
            logger.warning(f"Summarization failed for {document}: {str(e)}")
            return ""

        return (response.text or "").strip()
