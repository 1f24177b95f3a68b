"""Embedding exceptions."""

from .base import DocQAError


class EmbeddingError(DocQAError):
    """Failed to generate embeddings."""

    error_code = "DQ_EMB_001"


class EmbeddingDimensionError(EmbeddingError):
    """Embedding service returned a vector of unexpected size."""

    error_code = "DQ_EMB_002"
