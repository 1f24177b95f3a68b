"""In-process vector store for local runs and tests."""

import threading
from typing import Any

import numpy as np

from ....core.domain import SearchMatch
from ....core.ports.vector_store_port import VectorStorePort


class InMemoryVectorStore(VectorStorePort):
    """Cosine-similarity store kept in a dict, keyed by namespace then point id.

    Writes are visible immediately. Safe to share between worker threads.
    """

    def __init__(self) -> None:
        self._namespaces: dict[str, dict[str, tuple[np.ndarray, dict[str, Any]]]] = {}
        self._lock = threading.Lock()

    def upsert(self, namespace: str, points: list[dict[str, Any]]) -> int:
        with self._lock:
            store = self._namespaces.setdefault(namespace, {})
            for point in points:
                vector = np.asarray(point["vector"], dtype=np.float32)
                store[str(point["id"])] = (vector, dict(point.get("payload", {})))
        return len(points)

    def query(self, namespace: str, vector: list[float], top_k: int = 5) -> list[SearchMatch]:
        with self._lock:
            entries = list(self._namespaces.get(namespace, {}).values())
        if not entries:
            return []

        query = np.asarray(vector, dtype=np.float32)
        matrix = np.stack([entry[0] for entry in entries])
        norms = np.linalg.norm(matrix, axis=1) * np.linalg.norm(query)
        scores = np.divide(matrix @ query, norms, out=np.zeros(len(entries)), where=norms > 0)

        matches = []
        for index in np.argsort(-scores)[:top_k]:
            payload = dict(entries[index][1])
            text = payload.pop("text", None)
            if not isinstance(text, str):
                continue
            matches.append(SearchMatch(text=text, score=float(scores[index]), metadata=payload))
        return matches

    def count(self, namespace: str) -> int | None:
        with self._lock:
            return len(self._namespaces.get(namespace, {}))

    def delete_namespace(self, namespace: str) -> None:
        with self._lock:
            self._namespaces.pop(namespace, None)

    @property
    def namespaces(self) -> list[str]:
        with self._lock:
            return list(self._namespaces)
