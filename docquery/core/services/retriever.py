"""Similarity search over a request's indexed chunks."""

import logging

from ..domain import SearchMatch
from ..domain.exceptions import RetrievalError
from ..ports.embedding_port import EmbeddingPort
from ..ports.vector_store_port import VectorStorePort
from .concurrency import run_blocking

logger = logging.getLogger(__name__)


class Retriever:
    """Embeds a resolved query and returns the closest chunks."""

    def __init__(
        self,
        embedder: EmbeddingPort,
        vector_store: VectorStorePort,
        top_k: int = 5,
        call_timeout: float | None = None,
    ) -> None:
        self.embedder = embedder
        self.vector_store = vector_store
        self.top_k = top_k
        self.call_timeout = call_timeout

    async def embed(self, query: str) -> list[float]:
        return await run_blocking(self.embedder.embed_query, query, timeout=self.call_timeout)

    async def retrieve(
        self, query: str, namespace: str, top_k: int | None = None
    ) -> list[SearchMatch]:
        """Return matches for ``query`` ordered by descending score.

        Matches without stored text are dropped. An empty list is a valid
        result and leads to a "not mentioned" answer downstream.

        Raises:
            RetrievalError: If embedding the query or searching fails.
        """
        limit = top_k or self.top_k
        try:
            vector = await self.embed(query)
            matches = await run_blocking(
                self.vector_store.query, namespace, vector, limit, timeout=self.call_timeout
            )
        except Exception as e:
            raise RetrievalError(
                "Similarity search failed",
                cause=e,
                context={"stage": "retrieve", "question": query, "namespace": namespace},
            ) from e

        usable = [m for m in matches if isinstance(m.text, str) and m.text.strip()]
        if len(usable) < len(matches):
            logger.debug("Dropped %d matches without text", len(matches) - len(usable))

        usable.sort(key=lambda m: m.score, reverse=True)
        return usable[:limit]
