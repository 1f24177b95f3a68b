"""Port for turning text into vectors."""

from abc import ABC, abstractmethod


class EmbeddingPort(ABC):
    """Maps chunks and questions into one vector space of size ``dimension``.

    Implementations may embed queries and documents differently (asymmetric
    retrieval models), but vectors from both methods must be comparable.
    """

    dimension: int

    @abstractmethod
    def embed_query(self, text: str) -> list[float]:
        """Vector for a resolved question."""

    @abstractmethod
    def embed_documents(self, texts: list[str]) -> list[list[float]]:
        """Vectors for chunk texts, one per input and in input order."""
