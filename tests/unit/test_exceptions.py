"""Unit tests for exception handling system.

Covers the exception hierarchy, structured serialization and the handler
utilities that turn exceptions into log records and HTTP payloads.
"""

import json
from types import SimpleNamespace
from unittest.mock import MagicMock, patch

import pytest

from docquery.adapters.common.exception_handler import (
    format_client_error,
    format_exception_json,
    get_error_code,
    get_http_status_code,
    log_exception,
)
from docquery.core.domain.exceptions import (
    ConfigurationError,
    DocQAError,
    EmbeddingDimensionError,
    EmbeddingError,
    ExtractionError,
    FetchError,
    IndexingError,
    IngestionError,
    MissingAPIKeyError,
    QdrantConnectionError,
    QdrantQueryError,
    RetrievalError,
    SynthesisError,
    ValidationError,
    VectorStoreError,
)

# Apply @pytest.mark.unit to all tests in this module
pytestmark = pytest.mark.unit


class TestExceptionHierarchy:
    """Tests for the exception class hierarchy."""

    def test_docqa_error_is_base(self):
        """DocQAError should be the base for all custom exceptions."""
        for cls in (
            ConfigurationError,
            ValidationError,
            IngestionError,
            EmbeddingError,
            VectorStoreError,
            RetrievalError,
            SynthesisError,
        ):
            assert issubclass(cls, DocQAError)

    def test_ingestion_stages_share_a_parent(self):
        assert issubclass(FetchError, IngestionError)
        assert issubclass(ExtractionError, IngestionError)
        assert issubclass(IndexingError, IngestionError)

    def test_specialised_errors(self):
        assert issubclass(QdrantConnectionError, VectorStoreError)
        assert issubclass(QdrantQueryError, VectorStoreError)
        assert issubclass(EmbeddingDimensionError, EmbeddingError)
        assert issubclass(MissingAPIKeyError, ConfigurationError)


class TestExceptionCreation:
    """Tests for creating and using exceptions."""

    def test_basic_exception_creation(self):
        """Basic exception should have message and error code."""
        exc = DocQAError("Test error message")
        assert str(exc) == "Test error message"
        assert exc.message == "Test error message"
        assert exc.error_code == "DQ_ERR_001"

    def test_fetch_error_records_url_and_status(self):
        """FetchError should put the stage, URL and status into its context."""
        exc = FetchError("Failed to fetch document", url="https://x/doc.pdf", status=404)

        assert exc.url == "https://x/doc.pdf"
        assert exc.status == 404
        assert exc.extra_context == {"stage": "fetch", "url": "https://x/doc.pdf", "status": 404}

    def test_fetch_error_without_status(self):
        exc = FetchError("Network down", url="https://x/doc.pdf", cause=ConnectionError("dns"))
        assert "status" not in exc.extra_context
        assert isinstance(exc.cause, ConnectionError)

    def test_indexing_error_reports_progress(self):
        exc = IndexingError("Indexing failed", indexed_count=40, context={"namespace": "ns"})
        assert exc.indexed_count == 40
        assert exc.extra_context["indexed_count"] == 40
        assert exc.extra_context["namespace"] == "ns"

    def test_validation_error_defaults(self):
        """ValidationError should default to the client-facing message."""
        exc = ValidationError(errors=[{"field": "documents", "message": "Field required"}])
        assert exc.message == "Invalid request format"
        assert exc.errors[0]["field"] == "documents"

    def test_exception_captures_raise_site(self):
        """Location should point at the code raising the error, not at __init__."""

        def fetch_document():
            raise FetchError("boom", url="u")

        with pytest.raises(FetchError) as exc_info:
            fetch_document()

        location = exc_info.value.location
        assert location.method_name == "fetch_document"
        assert location.file_name == "test_exceptions.py"
        assert location.line_number > 0

    def test_each_exception_has_unique_error_code(self):
        """Each exception type should have a unique error code."""
        exceptions = [
            DocQAError("test"),
            ConfigurationError("test"),
            MissingAPIKeyError("test"),
            ValidationError("test"),
            IngestionError("test"),
            FetchError("test", url="u"),
            ExtractionError("test"),
            IndexingError("test"),
            EmbeddingError("test"),
            EmbeddingDimensionError("test"),
            VectorStoreError("test"),
            QdrantConnectionError("test"),
            QdrantQueryError("test"),
            RetrievalError("test"),
            SynthesisError("test"),
        ]
        codes = {exc.error_code for exc in exceptions}
        assert len(codes) == len(exceptions)


class TestExceptionToDict:
    """Tests for exception JSON serialization."""

    def test_to_dict_basic_structure(self):
        result = ExtractionError("Corrupt PDF").to_dict()

        assert result["error"] == {
            "type": "ExtractionError",
            "code": "DQ_ING_003",
            "message": "Corrupt PDF",
        }
        assert set(result["location"]) == {"class", "method", "file", "line", "timestamp"}

    def test_to_dict_includes_cause(self):
        exc = SynthesisError("Answer generation failed", cause=TimeoutError("slow"))
        result = exc.to_dict()

        assert result["cause"] == {"type": "TimeoutError", "message": "slow"}

    def test_validation_errors_are_serialized(self):
        exc = ValidationError(errors=[{"field": "questions", "message": "too short"}])
        assert exc.to_dict()["errors"] == [{"field": "questions", "message": "too short"}]

    def test_to_dict_excludes_trace_by_default(self):
        exc = ValidationError("Invalid input", cause=ValueError("Bad value"))
        assert "stack_trace" not in exc.to_dict()

    def test_to_dict_is_json_serializable(self):
        """to_dict output should be JSON serializable."""
        exc = FetchError("Failed", url="https://x/doc.pdf", status=503)
        assert isinstance(json.dumps(exc.to_dict()), str)


class TestExceptionHandler:
    """Tests for exception handler utilities."""

    def test_format_custom_exception(self):
        exc = QdrantConnectionError("Test error", context={"url": "test"})
        result = format_exception_json(exc)

        assert result["error"]["type"] == "QdrantConnectionError"
        assert result["error"]["code"] == "DQ_VEC_002"

    def test_format_standard_exception(self):
        """format_exception_json should handle standard Python exceptions."""
        try:
            raise ValueError("Standard error")
        except ValueError as e:
            result = format_exception_json(e)

        assert result["error"]["type"] == "ValueError"
        assert result["error"]["code"] == "PYTHON_ERR"
        assert result["location"]["method"] == "test_format_standard_exception"

    def test_format_adds_extra_context(self):
        exc = FetchError("Test", url="original")
        result = format_exception_json(exc, extra_context={"request_id": "abc123"})

        assert result["context"]["url"] == "original"
        assert result["context"]["request_id"] == "abc123"

    def test_get_error_code(self):
        assert get_error_code(FetchError("test", url="u")) == "DQ_ING_002"
        assert get_error_code(ValidationError()) == "DQ_VAL_001"
        assert get_error_code(RuntimeError("test")) == "PYTHON_ERR"

    @pytest.mark.parametrize("debug,has_trace", [(False, False), (True, True)])
    def test_logged_trace_follows_debug_setting(self, debug, has_trace):
        try:
            raise OSError("disk full")
        except OSError as e:
            exc = ExtractionError("Could not read the document", cause=e)
        log = MagicMock()

        with patch(
            "docquery.adapters.common.exception_handler.get_settings",
            return_value=SimpleNamespace(debug=debug),
        ):
            log_exception(exc, log=log)

        logged = json.loads(log.log.call_args.args[1])
        assert ("stack_trace" in logged) is has_trace
        assert logged["cause"]["message"] == "disk full"


class TestClientPayloads:
    """Tests for the payloads returned to API clients."""

    def test_validation_payload(self):
        exc = ValidationError(errors=[{"field": "documents", "message": "Field required"}])

        assert format_client_error(exc) == {
            "error": "Invalid request format",
            "detail": [{"field": "documents", "message": "Field required"}],
        }

    def test_server_error_payload_has_no_context(self):
        exc = FetchError("Failed to fetch document: HTTP 404", url="https://x/doc.pdf", status=404)
        payload = format_client_error(exc)

        assert payload == {
            "error": "Server error",
            "message": "Failed to fetch document: HTTP 404",
            "code": "DQ_ING_002",
        }

    def test_standard_exception_payload(self):
        payload = format_client_error(KeyError("oops"))
        assert payload["error"] == "Server error"
        assert payload["code"] == "PYTHON_ERR"


class TestHTTPStatusCodes:
    """Tests for HTTP status code mapping."""

    def test_validation_error_returns_400(self):
        assert get_http_status_code(ValidationError("Invalid input")) == 400

    @pytest.mark.parametrize(
        "exc",
        [
            FetchError("test", url="u", status=404),
            ExtractionError("test"),
            IndexingError("test"),
            SynthesisError("test"),
            QdrantConnectionError("test"),
            MissingAPIKeyError("test"),
            RetrievalError("test"),
            RuntimeError("test"),
            ValueError("test"),
        ],
    )
    def test_everything_else_returns_500(self, exc):
        """Processing failures are server errors, whatever their cause."""
        assert get_http_status_code(exc) == 500


class TestExceptionCatchPatterns:
    def test_catch_ingestion_errors_together(self):
        for exc in (FetchError("t", url="u"), ExtractionError("t"), IndexingError("t")):
            try:
                raise exc
            except IngestionError as caught:
                assert caught.error_code.startswith("DQ_ING")
