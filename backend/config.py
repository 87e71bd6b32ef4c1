"""Configuration management for the hybrid document retrieval engine."""
import os
import logging
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

# API Keys
GROQ_API_KEY = os.getenv("GROQ_API_KEY")
HUGGINGFACE_API_KEY = os.getenv("HUGGINGFACE_API_KEY")

# Logging / documents
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
DOCS_DIRECTORY = os.getenv("DOCS_DIRECTORY", "docs")

# Embedding Provider Configuration
EMBEDDING_PROVIDER = os.getenv("EMBEDDING_PROVIDER", "huggingface")  # huggingface | ollama
EMBEDDING_MODEL = os.getenv("EMBEDDING_MODEL", "sentence-transformers/all-MiniLM-L6-v2")
HUGGINGFACE_API_URL = os.getenv(
    "HUGGINGFACE_API_URL",
    "https://api-inference.huggingface.co/pipeline/feature-extraction"
)
OLLAMA_BASE_URL = os.getenv("OLLAMA_BASE_URL", "http://localhost:11434")
OLLAMA_EMBEDDING_MODEL = os.getenv("OLLAMA_EMBEDDING_MODEL", "nomic-embed-text")
EMBEDDING_TIMEOUT = float(os.getenv("EMBEDDING_TIMEOUT", "30"))

# LLM Configuration
DEFAULT_MODEL = os.getenv("DEFAULT_MODEL", "llama-3.1-8b-instant")
LLM_TIMEOUT = float(os.getenv("LLM_TIMEOUT", "60"))

# Chunking Configuration
CHUNK_SIZE = 20  # lines per window
CHUNK_OVERLAP = 5  # lines shared by neighbouring windows
MIN_CHUNK_CHARS = 32  # windows with less stripped text are not embedded

# Retrieval Configuration
SEMANTIC_TOP_K = 8
MAX_CHUNKS_PER_DOCUMENT = 2
MAX_EVIDENCE_LINES = 60
FUZZY_MAX_DISTANCE = 2
MIN_TOKEN_LENGTH = 3

STOP_WORDS = frozenset({
    "the", "and", "or", "for", "with", "from", "that", "this", "into", "your",
    "you", "are", "was", "were", "will", "shall", "must", "should", "can",
    "could", "a", "an", "to", "of", "in", "on", "at", "by", "it", "as", "is",
    "be", "we", "our", "us",
})

NO_RELEVANT_INFORMATION = "No relevant information found in indexed documents for your query."

# Logging Configuration
logging.basicConfig(
    level=getattr(logging, LOG_LEVEL),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
