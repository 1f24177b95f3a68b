"""Document ingestion exceptions: fetching, extraction and indexing."""

from typing import Any

from .base import DocQAError


class IngestionError(DocQAError):
    """Error while turning a document URL into a searchable index."""

    error_code = "DQ_ING_001"


class FetchError(IngestionError):
    """Failed to download the document.

    Common causes:
    - Non-success HTTP status from the document host
    - DNS or connection failures
    - Empty response body
    """

    error_code = "DQ_ING_002"

    def __init__(
        self,
        message: str,
        *,
        url: str,
        status: int | None = None,
        cause: Exception | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        merged = {"stage": "fetch", "url": url}
        if status is not None:
            merged["status"] = status
        merged.update(context or {})
        super().__init__(message, cause=cause, context=merged)
        self.url = url
        self.status = status


class ExtractionError(IngestionError):
    """Failed to extract text from the downloaded document.

    Common causes:
    - Corrupt or truncated PDF
    - Encrypted document
    - Scanned document with no text layer
    """

    error_code = "DQ_ING_003"


class IndexingError(IngestionError):
    """Failed to embed or store document chunks.

    ``indexed_count`` reports how many chunks were stored before the failure;
    the partial index is not rolled back.
    """

    error_code = "DQ_ING_004"

    def __init__(
        self,
        message: str,
        *,
        indexed_count: int = 0,
        cause: Exception | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        merged = {"stage": "index", "indexed_count": indexed_count}
        merged.update(context or {})
        super().__init__(message, cause=cause, context=merged)
        self.indexed_count = indexed_count
