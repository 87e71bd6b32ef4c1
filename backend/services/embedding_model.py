"""Embedding providers backed by the Hugging Face inference API and Ollama."""
import time
import logging
from typing import Any, List, Optional, Protocol
import httpx
from config import (
    HUGGINGFACE_API_KEY,
    HUGGINGFACE_API_URL,
    EMBEDDING_MODEL,
    EMBEDDING_PROVIDER,
    EMBEDDING_TIMEOUT,
    OLLAMA_BASE_URL,
    OLLAMA_EMBEDDING_MODEL,
)

logger = logging.getLogger(__name__)


class EmbeddingProvider(Protocol):
    """Anything that turns text into a fixed-length float vector."""

    def embed(self, text: str) -> List[float]:
        """Return the embedding, or an empty list when it cannot be computed."""
        ...


def normalize_vector(payload: Any) -> List[float]:
    """
    Coerce an embedding API payload into a flat list of floats.

    Accepts a flat vector, a batch (first row is used) or a list of
    ``{"vector": [...]}`` objects. Unknown shapes, including per-token
    matrices, yield an empty list.
    """
    if not isinstance(payload, list) or not payload:
        return []

    first = payload[0]
    if isinstance(first, (int, float)):
        row = payload
    elif isinstance(first, list):
        row = first
    elif isinstance(first, dict) and isinstance(first.get("vector"), list):
        row = first["vector"]
    else:
        return []

    if any(isinstance(v, (list, dict)) for v in row):
        logger.warning("Embedding payload is nested deeper than one vector, ignoring it")
        return []

    return [float(v) if isinstance(v, (int, float)) else 0.0 for v in row]


class EmbeddingModel:
    """Wrapper for the Hugging Face feature-extraction inference API."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        model_name: str = EMBEDDING_MODEL,
        base_url: str = HUGGINGFACE_API_URL,
        max_retries: int = 3,
        initial_delay: float = 2.0,
        timeout: float = EMBEDDING_TIMEOUT
    ):
        """
        Initialize the embedding model client.

        Args:
            api_key: Hugging Face API key (defaults to HUGGINGFACE_API_KEY from environment)
            model_name: Model identifier (default: sentence-transformers/all-MiniLM-L6-v2)
            base_url: Feature-extraction endpoint; the model name is appended
            max_retries: Maximum attempts while the model is loading (503)
            initial_delay: Initial delay in seconds for exponential backoff
            timeout: Request timeout in seconds
        """
        self.api_key = api_key or HUGGINGFACE_API_KEY
        if not self.api_key:
            raise ValueError("HUGGINGFACE_API_KEY environment variable is required")

        self.model_name = model_name
        self.max_retries = max_retries
        self.initial_delay = initial_delay
        self.timeout = timeout
        self.api_url = f"{base_url.rstrip('/')}/{model_name}"

        logger.info(f"Initialized EmbeddingModel with model: {model_name}")

    def embed(self, text: str) -> List[float]:
        """
        Generate the embedding for one text.

        Failures are logged and reported as an empty list.

        Args:
            text: Text to embed

        Returns:
            Embedding vector, or [] if the text is blank or the API failed
        """
        if not text or not text.strip():
            return []

        try:
            return normalize_vector(self._post_with_retry(text))
        except (RuntimeError, ValueError, httpx.HTTPError) as e:
            logger.warning(f"Embedding call failed: {str(e)}")
            return []

    def _post_with_retry(self, text: str) -> Any:
        """
        Call the inference API, waiting out 503 responses while the model loads.

        Raises:
            RuntimeError: On non-retryable HTTP errors or when retries run out
        """
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json"
        }
        payload = {
            "inputs": text,
            "options": {"wait_for_model": True}
        }

        delay = self.initial_delay
        for attempt in range(self.max_retries):
            start_time = time.time()

            with httpx.Client(timeout=self.timeout) as client:
                response = client.post(self.api_url, headers=headers, json=payload)

            elapsed = time.time() - start_time

            # Model loading (503)
            if response.status_code == 503:
                logger.warning(
                    f"Model loading (503) on attempt {attempt + 1}/{self.max_retries}. "
                    f"Retrying in {delay}s..."
                )
                if attempt < self.max_retries - 1:
                    time.sleep(delay)
                    delay = min(delay * 2, 30.0)
                continue

            if response.status_code == 429:
                raise RuntimeError("Rate limit exceeded for Hugging Face API")

            if response.status_code == 401:
                raise RuntimeError("Invalid API key")

            if response.status_code != 200:
                raise RuntimeError(
                    f"API request failed with status {response.status_code}: {response.text}"
                )

            logger.debug(f"Generated embedding in {elapsed:.2f}s")
            return response.json()

        raise RuntimeError(f"Model failed to load after {self.max_retries} attempts")

    def warmup(self) -> bool:
        """
        Warm up the model with a dummy query to avoid cold start delays.

        Returns:
            True if warmup produced an embedding, False otherwise
        """
        logger.info("Warming up embedding model...")
        start_time = time.time()
        ok = bool(self.embed("warmup query"))
        elapsed = time.time() - start_time
        if ok:
            logger.info(f"Model warmup completed in {elapsed:.1f}s")
        else:
            logger.error(f"Model warmup failed after {elapsed:.1f}s")
        return ok


class OllamaEmbeddingModel:
    """Embedding provider calling a local Ollama server."""

    def __init__(
        self,
        base_url: str = OLLAMA_BASE_URL,
        model_name: str = OLLAMA_EMBEDDING_MODEL,
        timeout: float = EMBEDDING_TIMEOUT
    ):
        self.base_url = base_url.rstrip("/")
        self.model_name = model_name
        self.timeout = timeout
        logger.info(f"Initialized OllamaEmbeddingModel with model: {model_name}")

    def embed(self, text: str) -> List[float]:
        if not text or not text.strip():
            return []

        try:
            with httpx.Client(timeout=self.timeout) as client:
                response = client.post(
                    f"{self.base_url}/api/embeddings",
                    json={"model": self.model_name, "prompt": text}
                )
            response.raise_for_status()
            data = response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"Ollama embedding call failed: {str(e)}")
            return []

        if not isinstance(data, dict):
            return []
        return normalize_vector(data.get("embedding"))


def create_embedding_model(provider: str = EMBEDDING_PROVIDER) -> EmbeddingProvider:
    """
    Build the configured embedding provider.

    Raises:
        ValueError: If the provider name is unknown
    """
    provider = (provider or "").strip().lower()
    if provider == "huggingface":
        return EmbeddingModel()
    if provider == "ollama":
        return OllamaEmbeddingModel()
    raise ValueError(f"Unknown embedding provider: {provider}")
