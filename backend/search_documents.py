"""
Console front end for the hybrid document retrieval engine.

This script:
1. Loads every text file from a documents directory
2. Indexes each one into the keyword trie and (unless --keyword-only) the vector store
3. Either answers --prompt through the full retrieval + summarization flow,
   or runs an interactive keyword lookup loop

Usage:
    python search_documents.py --docs ../docs
    python search_documents.py --docs ../docs --prompt "How do I rotate the API keys?"
"""
import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

# Add backend to path
sys.path.insert(0, str(Path(__file__).parent))

from config import DOCS_DIRECTORY, EMBEDDING_PROVIDER, LOG_LEVEL
from logger import setup_logging
from models.rag import RagRequest
from services.document_indexer import DocumentIndexer
from services.document_loader import DocumentLoader
from services.embedding_model import create_embedding_model
from services.keyword_extractor import KeywordExtractor
from services.keyword_index import KeywordIndex
from services.llm_client import LLMClient
from services.retrieval_engine import RetrievalEngine
from services.summarizer import Summarizer
from services.vector_store import VectorStore

logger = logging.getLogger(__name__)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Search indexed text documents")
    parser.add_argument("--docs", default=DOCS_DIRECTORY, help="Directory of .txt/.md files")
    parser.add_argument("--prompt", help="Answer this prompt instead of the keyword console")
    parser.add_argument("--model", help="LLM model override")
    parser.add_argument("--keyword-only", action="store_true", help="Skip embedding the documents")
    parser.add_argument("--embedding-provider", default=EMBEDDING_PROVIDER)
    parser.add_argument("--json-logs", action="store_true", help="Emit structured JSON logs")
    return parser.parse_args(argv)


def format_hits(keyword_index: KeywordIndex, keywords: List[str]) -> List[str]:
    """Render keyword hits as "doc line N: text" rows."""
    results = keyword_index.search_keywords(keywords)
    if not results:
        return ["Documents containing keywords: NONE"]

    rows = ["Documents containing keywords:"]
    for document in sorted(results):
        lines = keyword_index.get_document(document)
        for line_number in sorted(results[document]):
            rows.append(f"  {document} line {line_number}: {lines[line_number - 1]}")
    return rows


def keyword_console(keyword_index: KeywordIndex) -> None:
    while True:
        try:
            raw = input("Enter keywords (comma separated, or 'exit' to quit): ").strip()
        except EOFError:
            break
        if raw.lower() == "exit":
            break
        if not raw:
            continue
        keywords = [k.strip() for k in raw.split(",") if k.strip()]
        for row in format_hits(keyword_index, keywords):
            print(row)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = parse_args(argv)
    if args.json_logs:
        setup_logging(LOG_LEVEL)

    try:
        keyword_index = KeywordIndex()
        vector_store = None
        if not args.keyword_only:
            vector_store = VectorStore(create_embedding_model(args.embedding_provider))

        documents = DocumentLoader(docs_directory=args.docs).load_documents()
        if not documents:
            logger.error(f"No documents found in {args.docs}")
            return 1

        indexed = DocumentIndexer(keyword_index, vector_store).index_documents(documents)
        print(f"Indexing complete. Found {indexed} documents.")

        if args.prompt is None:
            keyword_console(keyword_index)
            return 0

        if vector_store is None:
            logger.error("--prompt needs the vector store; drop --keyword-only")
            return 1

        llm_client = LLMClient()
        engine = RetrievalEngine(
            keyword_index=keyword_index,
            vector_store=vector_store,
            keyword_extractor=KeywordExtractor(llm_client),
            summarizer=Summarizer(llm_client)
        )
        response = engine.answer(RagRequest(prompt=args.prompt, model=args.model))
        print(response.text)
        return 0

    except KeyboardInterrupt:
        logger.warning("Interrupted by user")
        return 1
    except ValueError as e:
        logger.error(f"Configuration error: {str(e)}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
