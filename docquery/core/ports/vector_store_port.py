"""Vector Store Port Interface."""

from abc import ABC, abstractmethod
from typing import Any

from ..domain import SearchMatch


class VectorStorePort(ABC):
    """Abstract interface for namespaced vector stores.

    Points are keyed by ``id``; upserting an existing id overwrites it.
    """

    @abstractmethod
    def upsert(self, namespace: str, points: list[dict[str, Any]]) -> int:
        """Store ``{"id", "vector", "payload"}`` points under ``namespace``."""
        ...

    @abstractmethod
    def query(self, namespace: str, vector: list[float], top_k: int = 5) -> list[SearchMatch]:
        """Return the ``top_k`` most similar points, highest score first."""
        ...

    @abstractmethod
    def count(self, namespace: str) -> int | None:
        """Number of visible points in ``namespace``; None if unsupported."""
        ...

    @abstractmethod
    def delete_namespace(self, namespace: str) -> None:
        """Remove every point stored under ``namespace``."""
        ...
