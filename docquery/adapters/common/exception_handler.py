"""Turns exceptions into log records, client payloads and HTTP statuses.

Logs get the full structured form (location, context, cause, optionally the
traceback). API clients only ever see a short payload without context values.
"""

import json
import logging
import traceback
from pathlib import Path
from typing import Any

from ...config.settings import get_settings
from ...core.domain.exceptions import DocQAError, ValidationError

logger = logging.getLogger(__name__)

INVALID_REQUEST_MESSAGE = "Invalid request format"
SERVER_ERROR_MESSAGE = "Server error"
UNCLASSIFIED_ERROR_CODE = "PYTHON_ERR"


def _describe_foreign(exc: BaseException, include_trace: bool) -> dict[str, Any]:
    """Structured form for exceptions outside the DocQAError tree."""
    frames = traceback.extract_tb(exc.__traceback__)
    origin = frames[-1] if frames else None
    data: dict[str, Any] = {
        "error": {
            "type": type(exc).__name__,
            "code": UNCLASSIFIED_ERROR_CODE,
            "message": str(exc),
        },
        "location": {
            "class": "<unknown>",
            "method": origin.name if origin else "<unknown>",
            "file": Path(origin.filename).name if origin else "<unknown>",
            "line": origin.lineno if origin else 0,
        },
    }
    if include_trace:
        data["stack_trace"] = "".join(traceback.format_exception(exc)).rstrip().splitlines()
    return data


def format_exception_json(
    exc: BaseException,
    include_trace: bool = False,
    extra_context: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """Structured, JSON-ready description of any exception.

    Args:
        exc: Exception to describe.
        include_trace: Add traceback lines.
        extra_context: Request details (path, method) merged into ``context``.
    """
    if isinstance(exc, DocQAError):
        data = exc.to_dict(include_trace=include_trace)
    else:
        data = _describe_foreign(exc, include_trace)

    if extra_context:
        data["context"] = {**data.get("context", {}), **extra_context}
    return data


def format_client_error(exc: BaseException) -> dict[str, Any]:
    """Payload returned to HTTP clients.

    ``{"error": "Invalid request format", "detail": [...]}`` for validation
    failures, ``{"error": "Server error", "message": ..., "code": ...}`` for
    everything else.
    """
    if isinstance(exc, ValidationError):
        return {"error": INVALID_REQUEST_MESSAGE, "detail": exc.errors}

    message = exc.message if isinstance(exc, DocQAError) else str(exc)
    return {"error": SERVER_ERROR_MESSAGE, "message": message, "code": get_error_code(exc)}


def log_exception(
    exc: BaseException,
    log: logging.Logger | None = None,
    level: int = logging.ERROR,
    extra_context: dict[str, Any] | None = None,
    include_trace: bool | None = None,
) -> None:
    """Write the structured description of ``exc`` to ``log`` as JSON.

    Traceback lines are included only when ``include_trace`` is set or, by
    default, when the ``debug`` setting is on.
    """
    if include_trace is None:
        include_trace = get_settings().debug
    described = format_exception_json(exc, include_trace=include_trace, extra_context=extra_context)
    (log or logger).log(level, json.dumps(described, indent=2, default=str))


def get_error_code(exc: BaseException) -> str:
    if isinstance(exc, DocQAError):
        return exc.error_code
    return UNCLASSIFIED_ERROR_CODE


def get_http_status_code(exc: BaseException) -> int:
    """400 for malformed requests, 500 for every processing failure."""
    return 400 if isinstance(exc, ValidationError) else 500
