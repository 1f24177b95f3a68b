"""Google Gemini embedding adapter."""

import logging
import time
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from google import genai

from ....core.domain.exceptions import EmbeddingDimensionError, EmbeddingError, MissingAPIKeyError
from ....core.ports.embedding_port import EmbeddingPort
from ..llm.gemini_adapter import http_options_for

logger = logging.getLogger(__name__)

# Constants
MAX_EMBEDDING_RETRIES = 3
EMBEDDING_BATCH_LIMIT = 100  # embed_content accepts at most 100 contents per call


class GeminiEmbeddingFunction(EmbeddingPort):
    """Embeddings from the Gemini API via the google-genai SDK.

    Documents are embedded with the ``RETRIEVAL_DOCUMENT`` task type and
    queries with ``RETRIEVAL_QUERY`` so both land in the same space.
    """

    def __init__(
        self,
        api_key: str,
        model_name: str = "text-embedding-004",
        dimension: int = 768,
        request_timeout: float | None = None,
    ) -> None:
        self.api_key = api_key
        self.model_name = model_name
        self.dimension = dimension
        self.request_timeout = request_timeout
        self._client: "genai.Client | None" = None

    def _get_client(self) -> "genai.Client":
        """Get or create the genai client."""
        if self._client is None:
            if not self.api_key:
                raise MissingAPIKeyError(
                    "Google API key not set. Set GOOGLE_API_KEY in your .env file.",
                    context={"setting": "google_api_key"},
                )
            from google import genai

            self._client = genai.Client(
                api_key=self.api_key, http_options=http_options_for(self.request_timeout)
            )
        return self._client

    def embed_query(self, text: str) -> list[float]:
        """Generate embedding for a single query text."""
        return self._embed_texts([text], task_type="RETRIEVAL_QUERY")[0]

    def embed_documents(self, texts: list[str]) -> list[list[float]]:
        """Generate embeddings for multiple documents, in input order."""
        if not texts:
            return []

        all_embeddings: list[list[float]] = []
        for i in range(0, len(texts), EMBEDDING_BATCH_LIMIT):
            batch = texts[i : i + EMBEDDING_BATCH_LIMIT]
            all_embeddings.extend(self._embed_texts(batch, task_type="RETRIEVAL_DOCUMENT"))
        return all_embeddings

    def _embed_texts(self, texts: list[str], task_type: str) -> list[list[float]]:
        """Call the embedding endpoint with exponential backoff on failure."""
        client = self._get_client()

        for attempt in range(MAX_EMBEDDING_RETRIES):
            try:
                result = client.models.embed_content(
                    model=self.model_name,
                    contents=texts,
                    config={"task_type": task_type},
                )
                break
            except Exception as e:
                if attempt == MAX_EMBEDDING_RETRIES - 1:
                    raise EmbeddingError(
                        f"Failed to embed {len(texts)} texts after {attempt + 1} attempts",
                        cause=e,
                        context={"model": self.model_name, "task_type": task_type},
                    ) from e
                wait_time = 2**attempt
                logger.warning("Embedding call failed (%s), retrying in %ds", e, wait_time)
                time.sleep(wait_time)

        embeddings = [list(emb.values or []) for emb in (result.embeddings or [])]
        if len(embeddings) != len(texts):
            raise EmbeddingError(
                f"Expected {len(texts)} embeddings, got {len(embeddings)}",
                context={"model": self.model_name},
            )
        for vector in embeddings:
            if len(vector) != self.dimension:
                raise EmbeddingDimensionError(
                    f"Expected {self.dimension}-dimensional vectors, got {len(vector)}",
                    context={"model": self.model_name},
                )
        return embeddings
