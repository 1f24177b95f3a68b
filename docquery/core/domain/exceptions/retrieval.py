"""Retrieval exceptions."""

from .base import DocQAError


class RetrievalError(DocQAError):
    """Similarity search for a question failed."""

    error_code = "DQ_RET_001"
