"""Retrieval engine running semantic, keyword and naive-scan tiers in order."""
import logging
import re
import time
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Protocol

from config import (
    SEMANTIC_TOP_K,
    MAX_CHUNKS_PER_DOCUMENT,
    MAX_EVIDENCE_LINES,
    MIN_TOKEN_LENGTH,
    STOP_WORDS,
    NO_RELEVANT_INFORMATION,
)
from models.rag import RagRequest, ChatResponse
from models.chunk import SearchResult
from services.chunking_engine import annotate_lines
from services.keyword_index import KeywordIndex
from services.keyword_extractor import KeywordSource
from services.summarizer import EvidenceSummarizer
from services.vector_store import VectorStore

logger = logging.getLogger(__name__)

EMPTY_PROMPT = "Prompt is empty."
NO_SUMMARIES = "No relevant summaries could be generated from the documents."

_NON_ALNUM = re.compile(r"[^a-z0-9]+")


def fallback_tokens(prompt: Optional[str]) -> List[str]:
    """
    Derive search tokens straight from the prompt.

    Lowercases, splits on non-alphanumeric runs and drops short tokens and
    stop words; first occurrence order is kept.
    """
    if not prompt:
        return []
    tokens: List[str] = []
    for raw in _NON_ALNUM.split(prompt.lower()):
        if len(raw) < MIN_TOKEN_LENGTH or raw in STOP_WORDS or raw in tokens:
            continue
        tokens.append(raw)
    return tokens


@dataclass
class RetrievalQuery:
    """Prompt plus the keywords extracted for it."""
    prompt: str
    keywords: List[str] = field(default_factory=list)

    @property
    def search_tokens(self) -> List[str]:
        return list(self.keywords) if self.keywords else fallback_tokens(self.prompt)


class RetrievalStrategy(Protocol):
    name: str

    def try_retrieve(self, query: RetrievalQuery) -> Optional[Dict[str, str]]:
        """Return document -> evidence text, or None/empty when nothing matched."""
        ...


def build_line_evidence(
    hits: Dict[str, Iterable[int]],
    documents: Dict[str, List[str]],
    max_lines: int = MAX_EVIDENCE_LINES
) -> Dict[str, str]:
    """Annotated snippets of the lowest ``max_lines`` hit lines per document."""
    evidence: Dict[str, str] = {}
    for document, line_numbers in hits.items():
        lines = documents.get(document)
        if not lines:
            continue
        selected = sorted(set(line_numbers))[:max_lines]
        snippet = annotate_lines(lines, selected)
        if snippet:
            evidence[document] = snippet
    return evidence


class SemanticStrategy:
    """Tier 1: cosine similarity over embedded chunks."""

    name = "semantic"

    def __init__(
        self,
        vector_store: VectorStore,
        top_k: int = SEMANTIC_TOP_K,
        chunks_per_document: int = MAX_CHUNKS_PER_DOCUMENT
    ):
        self.vector_store = vector_store
        self.top_k = top_k
        self.chunks_per_document = chunks_per_document

    def try_retrieve(self, query: RetrievalQuery) -> Optional[Dict[str, str]]:
        text = ", ".join(query.keywords) if query.keywords else query.prompt
        results = self.vector_store.search(text, top_k=self.top_k)
        if not results:
            return None

        # Results arrive best-first, so the first entries per document are its top chunks
        by_document: Dict[str, List[SearchResult]] = {}
        for result in results:
            by_document.setdefault(result.document_name, []).append(result)

        return {
            document: "\n".join(r.snippet for r in ranked[:self.chunks_per_document])
            for document, ranked in by_document.items()
        }


class KeywordStrategy:
    """Tier 2: exact and fuzzy trie lookup."""

    name = "keyword"

    def __init__(self, keyword_index: KeywordIndex, max_lines: int = MAX_EVIDENCE_LINES):
        self.keyword_index = keyword_index
        self.max_lines = max_lines

    def try_retrieve(self, query: RetrievalQuery) -> Optional[Dict[str, str]]:
        tokens = query.search_tokens
        if not tokens:
            return None

        hits = self.keyword_index.search_keywords(tokens)
        if not hits:
            return None

        ordered = {document: hits[document] for document in sorted(hits)}
        return build_line_evidence(ordered, self.keyword_index.get_document_contents(), self.max_lines)


class NaiveScanStrategy:
    """Tier 3: case-insensitive substring scan of every stored line."""

    name = "naive_scan"

    def __init__(self, keyword_index: KeywordIndex, max_lines: int = MAX_EVIDENCE_LINES):
        self.keyword_index = keyword_index
        self.max_lines = max_lines

    def try_retrieve(self, query: RetrievalQuery) -> Optional[Dict[str, str]]:
        needles = [t.lower() for t in query.search_tokens if len(t) >= MIN_TOKEN_LENGTH]
        if not needles:
            return None

        documents = self.keyword_index.get_document_contents()
        hits: Dict[str, List[int]] = {}
        for document, lines in documents.items():
            for number, line in enumerate(lines, start=1):
                lowered = (line or "").lower()
                if any(needle in lowered for needle in needles):
                    matched = hits.setdefault(document, [])
                    if number not in matched:
                        matched.append(number)

        if not hits:
            return None
        return build_line_evidence(hits, documents, self.max_lines)


class RetrievalEngine:
    """Orchestrate keyword extraction, tiered retrieval and per-document summaries."""

    def __init__(
        self,
        keyword_index: KeywordIndex,
        vector_store: VectorStore,
        keyword_extractor: KeywordSource,
        summarizer: Optional[EvidenceSummarizer] = None,
        strategies: Optional[List[RetrievalStrategy]] = None
    ):
        """
        Initialize the retrieval engine.

        Args:
            keyword_index: Keyword trie and document store
            vector_store: Embedded chunk store
            keyword_extractor: Source of search keywords for a prompt
            summarizer: Summarizer used by answer() (optional for retrieve())
            strategies: Tier order override; semantic, keyword, naive scan by default
        """
        self.keyword_index = keyword_index
        self.vector_store = vector_store
        self.keyword_extractor = keyword_extractor
        self.summarizer = summarizer
        self.strategies: List[RetrievalStrategy] = strategies if strategies is not None else [
            SemanticStrategy(vector_store),
            KeywordStrategy(keyword_index),
            NaiveScanStrategy(keyword_index),
        ]
        logger.info(
            f"Initialized RetrievalEngine with tiers: {[s.name for s in self.strategies]}"
        )

    def retrieve(
        self,
        prompt: str,
        model: Optional[str] = None,
        options: Optional[Dict[str, Any]] = None
    ) -> Dict[str, str]:
        """
        Collect evidence for a prompt from the first tier that finds any.

        Args:
            prompt: User request
            model: Model used for keyword extraction
            options: Generation options for keyword extraction

        Returns:
            Mapping of document name to evidence text; empty when no tier
            produced evidence
        """
        prompt = (prompt or "").strip()
        if not prompt:
            logger.warning("Empty prompt provided, returning no evidence")
            return {}

        try:
            keywords = self.keyword_extractor.extract_keywords(prompt, model, options)
        except Exception as e:
            logger.warning(f"Keyword extractor failed, using prompt tokens: {str(e)}")
            keywords = []
        query = RetrievalQuery(prompt=prompt, keywords=list(keywords or []))

        for strategy in self.strategies:
            evidence = strategy.try_retrieve(query)
            if evidence:
                logger.info(
                    f"Tier '{strategy.name}' produced evidence for {len(evidence)} documents",
                    extra={"tier": strategy.name, "documents": list(evidence)}
                )
                return evidence
            logger.debug(f"Tier '{strategy.name}' produced no evidence")

        logger.info("No document hits for keywords, prompt tokens, or vectors")
        return {}

    def _summarize(
        self,
        prompt: str,
        document: str,
        evidence: str,
        model: Optional[str],
        options: Optional[Dict[str, Any]]
    ) -> str:
        try:
            return self.summarizer.summarize(prompt, document, evidence, model, options) or ""
        except Exception as e:
            logger.warning(f"Summarizer failed for {document}: {str(e)}")
            return ""

    def answer(self, request: RagRequest) -> ChatResponse:
        """
        Answer a request by summarizing each document's evidence.

        Raises:
            ValueError: If no summarizer was configured
        """
        start = time.time()
        model = request.model
        prompt = (request.prompt or "").strip()
        if not prompt:
            return ChatResponse(model=model, text=EMPTY_PROMPT)
        if self.summarizer is None:
            raise ValueError("A summarizer is required to answer requests")

        try:
            evidence = self.retrieve(prompt, model, request.options)
            if not evidence:
                return ChatResponse(model=model, text=NO_RELEVANT_INFORMATION)

            sections = []
            for document, text in evidence.items():
                summary = self._summarize(prompt, document, text, model, request.options)
                if summary and summary.strip():
                    sections.append(f"# {document}\n{summary.strip()}")

            final_text = "\n\n".join(sections) if sections else NO_SUMMARIES
            logger.info(f"Completed RAG in {int((time.time() - start) * 1000)} ms")
            return ChatResponse(model=model, text=final_text)

        except Exception as e:
            logger.error(
                f"RAG flow failed in {int((time.time() - start) * 1000)} ms: {str(e)}",
                exc_info=True
            )
            raise
