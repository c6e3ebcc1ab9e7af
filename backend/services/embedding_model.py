"""Embedding model integration with Hugging Face Inference API."""
import time
import logging
from typing import List, Optional
import httpx
from config import HUGGINGFACE_API_KEY, EMBEDDING_MODEL
from services.errors import EmbeddingError

logger = logging.getLogger(__name__)


class EmbeddingModel:
    """Wrapper for Hugging Face Inference API embedding model."""

    def __init__(
        self,
        api_key: Optional[str] = HUGGINGFACE_API_KEY,
        model_name: str = EMBEDDING_MODEL,
        timeout: float = 120.0
    ):
        """
        Initialize the embedding model client.

        Args:
            api_key: Hugging Face API key
            model_name: Model identifier (default: sentence-transformers/all-mpnet-base-v2)
            timeout: Request timeout in seconds
        """
        if not api_key:
            raise ValueError("HUGGINGFACE_API_KEY environment variable is required")

        self.api_key = api_key
        self.model_name = model_name
        self.timeout = timeout
        self.api_url = f"https://api-inference.huggingface.co/models/{model_name}"

        logger.info(f"Initialized EmbeddingModel with model: {model_name}")

    def embed_text(self, text: str) -> List[float]:
        """
        Generate embedding for a single text string.

        Args:
            text: Text to embed

        Returns:
            Embedding vector as list of floats

        Raises:
            ValueError: If text is empty
            EmbeddingError: If the API request fails
        """
        if not text or not text.strip():
            raise ValueError("Text cannot be empty")

        return self._request([text])[0]

    def embed_batch(self, texts: List[str]) -> List[List[float]]:
        """
        Generate embeddings for multiple texts in a single API call.

        Args:
            texts: List of texts to embed

        Returns:
            List of embedding vectors, one per input text

        Raises:
            ValueError: If texts list is empty or contains empty strings
            EmbeddingError: If the API request fails
        """
        if not texts:
            raise ValueError("Texts list cannot be empty")

        if any(not t or not t.strip() for t in texts):
            raise ValueError("Texts in a batch cannot be empty")

        return self._request(texts)

    def _request(self, texts: List[str]) -> List[List[float]]:
        """
        Call the HF feature-extraction endpoint once.

        There is no retry loop: a failed round trip fails the caller.
        ``wait_for_model`` asks HF to hold the request while a sleeping
        free-tier model loads instead of answering 503.
        """
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json"
        }

        payload = {
            "inputs": texts,
            "options": {
                "wait_for_model": True
            }
        }

        start_time = time.time()

        try:
            with httpx.Client(timeout=self.timeout) as client:
                response = client.post(
                    self.api_url,
                    headers=headers,
                    json=payload
                )
        except httpx.TimeoutException as e:
            logger.error(f"Embedding request timed out after {self.timeout}s")
            raise EmbeddingError(f"Request timeout after {self.timeout}s", cause=e) from e
        except httpx.RequestError as e:
            logger.error(f"Embedding request network error: {e}")
            raise EmbeddingError(f"Network error: {str(e)}", cause=e) from e

        elapsed = time.time() - start_time

        if response.status_code == 429:
            logger.error("Rate limit exceeded for Hugging Face API")
            raise EmbeddingError("Rate limit exceeded. Please try again later.")

        if response.status_code == 401:
            logger.error("Authentication failed for Hugging Face API")
            raise EmbeddingError("Invalid API key")

        if response.status_code != 200:
            error_msg = f"API request failed with status {response.status_code}: {response.text}"
            logger.error(error_msg)
            raise EmbeddingError(error_msg)

        try:
            embeddings = response.json()
        except ValueError as e:
            logger.error(f"Embedding response was not valid JSON: {response.text[:200]!r}")
            raise EmbeddingError(f"Invalid JSON in embedding response: {e}", cause=e) from e

        if not isinstance(embeddings, list) or len(embeddings) != len(texts):
            raise EmbeddingError(
                f"Expected {len(texts)} embeddings, got {type(embeddings).__name__}"
            )

        logger.debug(f"Generated embeddings for {len(texts)} texts in {elapsed:.2f}s")
        return embeddings
