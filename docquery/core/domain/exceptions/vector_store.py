"""Vector index exceptions."""

from .base import DocQAError


class VectorStoreError(DocQAError):
    """A write, count or delete against the vector index failed."""

    error_code = "DQ_VEC_001"


class QdrantConnectionError(VectorStoreError):
    """The Qdrant cluster or its chunk collection is unavailable.

    Raised while connecting, creating the collection or creating the
    ``namespace`` payload index.
    """

    error_code = "DQ_VEC_002"


class QdrantQueryError(VectorStoreError):
    """A similarity search inside a request namespace failed.

    Usually a vector whose size does not match the collection.
    """

    error_code = "DQ_VEC_003"
