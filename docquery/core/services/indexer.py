"""Embeds document chunks and writes them to the vector index."""

import asyncio
import logging
import time
import uuid
from typing import Any

from ..domain import Chunk
from ..domain.exceptions import EmbeddingError, IndexingError
from ..domain.utils import normalize_text
from ..ports.embedding_port import EmbeddingPort
from ..ports.vector_store_port import VectorStorePort
from .concurrency import run_blocking

logger = logging.getLogger(__name__)

SETTLE_POLL_INTERVAL = 0.25


def chunk_point_id(namespace: str, sequence: int) -> str:
    """Deterministic point id so re-upserting a chunk overwrites it."""
    return str(uuid.uuid5(uuid.NAMESPACE_URL, f"{namespace}/{sequence}"))


class EmbeddingIndexer:
    """Builds the request-scoped vector index for a document.

    Chunks are embedded in batches, with at most ``max_concurrency`` batches
    in flight against the embedding service. After the last upsert the
    indexer waits until the store reports every written point as visible,
    or sleeps for ``settle_delay`` when the store cannot count points.
    """

    def __init__(
        self,
        embedder: EmbeddingPort,
        vector_store: VectorStorePort,
        batch_size: int = 20,
        max_concurrency: int = 5,
        settle_delay: float = 3.0,
        settle_timeout: float = 10.0,
        call_timeout: float | None = None,
    ) -> None:
        self.embedder = embedder
        self.vector_store = vector_store
        self.batch_size = max(1, batch_size)
        self.max_concurrency = max(1, max_concurrency)
        self.settle_delay = settle_delay
        self.settle_timeout = settle_timeout
        self.call_timeout = call_timeout

    async def index(self, chunks: list[Chunk], namespace: str) -> int:
        """Embed and upsert chunks, then wait for them to become visible.

        Whitespace-only chunks are not indexed; there is nothing in them to
        retrieve.

        Args:
            chunks: Ordered chunks of one document.
            namespace: Request-scoped namespace to write into.

        Returns:
            Number of chunks written.

        Raises:
            IndexingError: On the first embedding or store failure, or when
                the written points do not become visible in time.
        """
        indexable = [chunk for chunk in chunks if chunk.text.strip()]
        if not indexable:
            logger.warning("No indexable chunks for namespace %s", namespace)
            return 0

        batches = [
            indexable[i : i + self.batch_size] for i in range(0, len(indexable), self.batch_size)
        ]
        semaphore = asyncio.Semaphore(self.max_concurrency)
        indexed = 0

        async def index_batch(batch: list[Chunk]) -> None:
            nonlocal indexed
            async with semaphore:
                points = await self._embed_batch(batch, namespace)
                await run_blocking(
                    self.vector_store.upsert, namespace, points, timeout=self.call_timeout
                )
                indexed += len(points)

        started = time.perf_counter()
        tasks = [asyncio.create_task(index_batch(batch)) for batch in batches]
        try:
            await asyncio.gather(*tasks)
        except Exception as e:
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise IndexingError(
                f"Indexing failed after {indexed} of {len(indexable)} chunks",
                indexed_count=indexed,
                cause=e,
                context={"namespace": namespace, "total_chunks": len(indexable)},
            ) from e

        logger.info(
            "Indexed %d chunks into %s in %.2fs",
            indexed,
            namespace,
            time.perf_counter() - started,
        )
        await self.settle(namespace, indexed)
        return indexed

    async def _embed_batch(self, batch: list[Chunk], namespace: str) -> list[dict[str, Any]]:
        texts = [normalize_text(chunk.text) for chunk in batch]
        vectors = await run_blocking(
            self.embedder.embed_documents, texts, timeout=self.call_timeout
        )
        if len(vectors) != len(batch) or any(not vector for vector in vectors):
            raise EmbeddingError(
                "Embedding service returned an incomplete batch",
                context={"expected": len(batch), "received": len(vectors)},
            )
        return [
            {
                "id": chunk_point_id(namespace, chunk.sequence),
                "vector": vector,
                "payload": chunk.to_payload(namespace),
            }
            for chunk, vector in zip(batch, vectors, strict=True)
        ]

    async def settle(self, namespace: str, expected: int) -> None:
        """Wait until ``expected`` points are visible in ``namespace``.

        Raises:
            IndexingError: If the count does not reach ``expected`` within
                ``settle_timeout`` seconds, or the count call fails.
        """
        deadline = time.monotonic() + self.settle_timeout
        try:
            visible = await run_blocking(
                self.vector_store.count, namespace, timeout=self.call_timeout
            )
            if visible is None:
                # Degraded mode: the backend cannot confirm visibility
                logger.info("Waiting %.1fs for index writes to settle", self.settle_delay)
                await asyncio.sleep(self.settle_delay)
                return

            while visible < expected:
                if time.monotonic() >= deadline:
                    raise IndexingError(
                        f"Only {visible} of {expected} chunks visible after "
                        f"{self.settle_timeout:.1f}s",
                        indexed_count=expected,
                        context={"namespace": namespace, "visible": visible},
                    )
                await asyncio.sleep(SETTLE_POLL_INTERVAL)
                visible = await run_blocking(
                    self.vector_store.count, namespace, timeout=self.call_timeout
                )
        except IndexingError:
            raise
        except Exception as e:
            raise IndexingError(
                "Failed to confirm index visibility",
                indexed_count=expected,
                cause=e,
                context={"namespace": namespace},
            ) from e

        logger.debug("All %d chunks visible in %s", expected, namespace)
