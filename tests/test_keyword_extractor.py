"""Unit tests for KeywordExtractor and Summarizer."""
import sys
from pathlib import Path

# Add backend to path
sys.path.insert(0, str(Path(__file__).parent.parent / "backend"))

import pytest
from unittest.mock import Mock
from services.keyword_extractor import KeywordExtractor, parse_keywords
from services.llm_client import LLMClient, LLMClientError, LLMError
from services.summarizer import Summarizer, build_summary_prompt


def llm_reply(text):
    return Mock(text=text)


def llm_failure():
    return LLMClientError(LLMError(code="TIMEOUT_ERROR", message="Request timed out.", details={}))


class TestParseKeywords:
    """Test suite for parse_keywords."""

    def test_comma_and_newline_separated(self):
        assert parse_keywords("Cat, Mat\nDog") == ["cat", "mat", "dog"]

    def test_caps_words_and_deduplicates(self):
        reply = "api key rotation policy, API key rotation, vault"
        assert parse_keywords(reply) == ["api key rotation", "vault"]

    def test_drops_entries_without_alphanumerics(self):
        assert parse_keywords("***, --, ok") == ["ok"]

    def test_empty(self):
        assert parse_keywords("") == []
        assert parse_keywords(None) == []


class TestKeywordExtractor:
    """Test suite for KeywordExtractor."""

    @pytest.fixture
    def llm_client(self):
        return Mock(spec=LLMClient)

    def test_extract_keywords(self, llm_client):
        llm_client.generate.return_value = llm_reply("rotation, api keys")
        extractor = KeywordExtractor(llm_client)

        keywords = extractor.extract_keywords("How do I rotate API keys?", "m", {"temperature": 0})

        assert keywords == ["rotation", "api keys"]
        kwargs = llm_client.generate.call_args.kwargs
        assert "How do I rotate API keys?" in kwargs["prompt"]
        assert kwargs["model"] == "m"
        assert kwargs["options"] == {"temperature": 0}
        assert "comma-separated" in kwargs["system_prompt"]

    def test_llm_failure_returns_empty(self, llm_client):
        llm_client.generate.side_effect = llm_failure()
        assert KeywordExtractor(llm_client).extract_keywords("anything") == []


class TestSummarizer:
    """Test suite for Summarizer."""

    @pytest.fixture
    def llm_client(self):
        return Mock(spec=LLMClient)

    def test_summarize(self, llm_client):
        llm_client.generate.return_value = llm_reply("  Cats sit on mats (line 1).  ")
        summary = Summarizer(llm_client).summarize("what do cats do", "a.txt", "[line 1] cat sat on mat\n")

        assert summary == "Cats sit on mats (line 1)."
        prompt = llm_client.generate.call_args.kwargs["prompt"]
        assert "Document: a.txt" in prompt
        assert "[line 1] cat sat on mat" in prompt

    def test_llm_failure_returns_empty(self, llm_client):
        llm_client.generate.side_effect = llm_failure()
        assert Summarizer(llm_client).summarize("q", "a.txt", "evidence") == ""

    def test_build_summary_prompt(self):
        prompt = build_summary_prompt("question", "doc.md", "[line 2] text\n")
        assert prompt.startswith("User request: question\nDocument: doc.md\n")
        assert "```\n[line 2] text\n```" in prompt
