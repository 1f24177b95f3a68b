"""Exception hierarchy for the document QA service.

Import from this package directly:

    from docquery.core.domain.exceptions import DocQAError, FetchError
"""

from .base import DocQAError, ExceptionContext
from .configuration import ConfigurationError, MissingAPIKeyError
from .embedding import EmbeddingDimensionError, EmbeddingError
from .ingestion import ExtractionError, FetchError, IndexingError, IngestionError
from .retrieval import RetrievalError
from .synthesis import SynthesisError
from .validation import ValidationError
from .vector_store import QdrantConnectionError, QdrantQueryError, VectorStoreError

__all__ = [
    # Base
    "DocQAError",
    "ExceptionContext",
    # Configuration
    "ConfigurationError",
    "MissingAPIKeyError",
    # Validation
    "ValidationError",
    # Ingestion
    "IngestionError",
    "FetchError",
    "ExtractionError",
    "IndexingError",
    # Embedding
    "EmbeddingError",
    "EmbeddingDimensionError",
    # Vector store
    "VectorStoreError",
    "QdrantConnectionError",
    "QdrantQueryError",
    # Retrieval
    "RetrievalError",
    # Synthesis
    "SynthesisError",
]
