"""Services for the hybrid document retrieval engine."""
from .lexer import tokenize
from .keyword_index import KeywordTrie, KeywordIndex, levenshtein
from .chunking_engine import ChunkingEngine, LineWindow
from .embedding_model import EmbeddingProvider, EmbeddingModel, OllamaEmbeddingModel, create_embedding_model
from .vector_store import VectorStore, cosine_similarity
from .llm_client import LLMClient, LLMResponse, LLMError, LLMClientError
from .keyword_extractor import KeywordExtractor
from .summarizer import Summarizer
from .retrieval_engine import (
    RetrievalEngine,
    RetrievalQuery,
    SemanticStrategy,
    KeywordStrategy,
    NaiveScanStrategy,
)
from .document_loader import DocumentLoader
from .document_indexer import DocumentIndexer

__all__ = [
    'tokenize', 'KeywordTrie', 'KeywordIndex', 'levenshtein', 'ChunkingEngine', 'LineWindow',
    'EmbeddingProvider', 'EmbeddingModel', 'OllamaEmbeddingModel', 'create_embedding_model',
    'VectorStore', 'cosine_similarity', 'LLMClient', 'LLMResponse', 'LLMError', 'LLMClientError',
    'KeywordExtractor', 'Summarizer', 'RetrievalEngine', 'RetrievalQuery', 'SemanticStrategy',
    'KeywordStrategy', 'NaiveScanStrategy', 'DocumentLoader', 'DocumentIndexer',
]
