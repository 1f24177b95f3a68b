"""Qdrant vector store adapter.

All requests share one collection; each request writes under its own
``namespace`` payload value and every read, count and delete is filtered on
it.
"""

import logging
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from qdrant_client import QdrantClient

from ....core.domain import SearchMatch
from ....core.domain.exceptions import (
    MissingAPIKeyError,
    QdrantConnectionError,
    QdrantQueryError,
    VectorStoreError,
)
from ....core.ports.vector_store_port import VectorStorePort

logger = logging.getLogger(__name__)

# Constants
UPSERT_BATCH_SIZE = 100
NAMESPACE_FIELD = "namespace"


class QdrantAdapter(VectorStorePort):
    """Namespaced Qdrant store for document chunks."""

    def __init__(
        self,
        url: str,
        api_key: str,
        collection_name: str = "document_chunks",
        dimension: int = 768,
        client: "QdrantClient | None" = None,
        timeout: int | None = None,
    ) -> None:
        """Initialize the Qdrant vector store.

        Args:
            url: Qdrant cluster URL.
            api_key: Qdrant API key.
            collection_name: Collection holding every namespace.
            dimension: Embedding vector size.
            client: Optional pre-built client (tests inject a mock).
            timeout: Seconds allowed per Qdrant request; None uses the client default.
        """
        self.url = url
        self.api_key = api_key
        self.collection_name = collection_name
        self.dimension = dimension
        self._client = client
        self.timeout = timeout
        self._collection_ready = False

    def _get_client(self) -> "QdrantClient":
        """Get or create Qdrant client connection."""
        if self._client is None:
            if not self.url:
                raise MissingAPIKeyError(
                    "Qdrant URL not set. Set QDRANT_URL in your .env file.",
                    context={"setting": "qdrant_url"},
                )
            try:
                from qdrant_client import QdrantClient

                self._client = QdrantClient(
                    url=self.url, api_key=self.api_key or None, timeout=self.timeout
                )
                logger.info("Connected to Qdrant at: %s", self.url)
            except Exception as e:
                raise QdrantConnectionError(
                    f"Failed to connect to Qdrant at {self.url}",
                    cause=e,
                    context={"url": self.url},
                ) from e

        if not self._collection_ready:
            self._ensure_collection(self._client)
        return self._client

    def _ensure_collection(self, client: "QdrantClient") -> None:
        """Create the collection and its namespace payload index if missing."""
        from qdrant_client.http import models

        try:
            existing = {c.name for c in client.get_collections().collections}
            if self.collection_name not in existing:
                logger.info("Creating collection %s", self.collection_name)
                client.create_collection(
                    collection_name=self.collection_name,
                    vectors_config=models.VectorParams(
                        size=self.dimension,
                        distance=models.Distance.COSINE,
                    ),
                )
            client.create_payload_index(
                collection_name=self.collection_name,
                field_name=NAMESPACE_FIELD,
                field_schema=models.PayloadSchemaType.KEYWORD,
            )
        except Exception as e:
            raise QdrantConnectionError(
                f"Failed to prepare collection {self.collection_name}",
                cause=e,
                context={"url": self.url, "collection": self.collection_name},
            ) from e
        self._collection_ready = True

    @staticmethod
    def _namespace_filter(namespace: str) -> Any:
        from qdrant_client.http import models

        return models.Filter(
            must=[
                models.FieldCondition(
                    key=NAMESPACE_FIELD, match=models.MatchValue(value=namespace)
                )
            ]
        )

    def upsert(self, namespace: str, points: list[dict[str, Any]]) -> int:
        """Upsert points under ``namespace``; existing ids are overwritten.

        Returns:
            Number of points written.
        """
        if not points:
            return 0

        from qdrant_client.http import models

        client = self._get_client()
        structs = [
            models.PointStruct(
                id=point["id"],
                vector=point["vector"],
                payload={**point.get("payload", {}), NAMESPACE_FIELD: namespace},
            )
            for point in points
        ]

        try:
            for i in range(0, len(structs), UPSERT_BATCH_SIZE):
                client.upsert(
                    collection_name=self.collection_name,
                    points=structs[i : i + UPSERT_BATCH_SIZE],
                    wait=True,
                )
        except Exception as e:
            raise VectorStoreError(
                f"Failed to upsert {len(structs)} points",
                cause=e,
                context={"collection": self.collection_name, "namespace": namespace},
            ) from e

        logger.debug("Upserted %d points into %s", len(structs), namespace)
        return len(structs)

    def query(self, namespace: str, vector: list[float], top_k: int = 5) -> list[SearchMatch]:
        """Search ``namespace`` for the points closest to ``vector``."""
        client = self._get_client()
        try:
            results = client.query_points(
                collection_name=self.collection_name,
                query=vector,
                limit=top_k,
                query_filter=self._namespace_filter(namespace),
                with_payload=True,
            )
        except Exception as e:
            raise QdrantQueryError(
                "Failed to query Qdrant",
                cause=e,
                context={"collection": self.collection_name, "namespace": namespace},
            ) from e

        # query_points returns QueryResponse with .points attribute
        hits = results.points if hasattr(results, "points") else results

        matches = []
        for hit in hits:
            payload = dict(hit.payload) if hit.payload else {}
            text = payload.pop("text", None)
            if not isinstance(text, str):
                continue
            matches.append(SearchMatch(text=text, score=float(hit.score), metadata=payload))
        return matches

    def count(self, namespace: str) -> int | None:
        """Exact number of points stored under ``namespace``."""
        client = self._get_client()
        result = client.count(
            collection_name=self.collection_name,
            count_filter=self._namespace_filter(namespace),
            exact=True,
        )
        return result.count

    def delete_namespace(self, namespace: str) -> None:
        """Delete every point stored under ``namespace``."""
        from qdrant_client.http import models

        client = self._get_client()
        client.delete(
            collection_name=self.collection_name,
            points_selector=models.FilterSelector(filter=self._namespace_filter(namespace)),
        )
        logger.debug("Deleted namespace %s", namespace)
