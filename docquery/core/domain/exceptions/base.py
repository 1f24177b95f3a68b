"""Root of the document QA exception hierarchy.

Every pipeline error records an error code, the raise site, the underlying
cause and a context dict (stage, document URL, question, namespace). Context
values end up in logs, so they must never contain credentials.
"""

import sys
import traceback
from dataclasses import dataclass, field
from datetime import UTC, datetime
from pathlib import Path
from types import FrameType
from typing import Any


@dataclass
class ExceptionContext:
    """Where an exception was raised."""

    class_name: str
    method_name: str
    file_name: str
    line_number: int
    timestamp: str = field(default_factory=lambda: datetime.now(UTC).isoformat())

    @classmethod
    def from_frame(cls, frame: FrameType | None) -> "ExceptionContext":
        if frame is None:
            return cls("<unknown>", "<unknown>", "<unknown>", 0)
        owner = frame.f_locals.get("self")
        return cls(
            class_name=type(owner).__name__ if owner is not None else "<module>",
            method_name=frame.f_code.co_name,
            file_name=Path(frame.f_code.co_filename).name,
            line_number=frame.f_lineno,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "class": self.class_name,
            "method": self.method_name,
            "file": self.file_name,
            "line": self.line_number,
            "timestamp": self.timestamp,
        }


def _raise_site() -> FrameType | None:
    """First frame outside the constructors of the exception being built."""
    frame = sys._getframe(2)
    while frame is not None and frame.f_code.co_name == "__init__" and isinstance(
        frame.f_locals.get("self"), DocQAError
    ):
        frame = frame.f_back
    return frame


class DocQAError(Exception):
    """Base exception for all document QA errors.

    Example:
        try:
            response = session.get(url, timeout=30)
        except requests.RequestException as e:
            raise FetchError(f"Failed to fetch document: {e}", url=url, cause=e) from e
    """

    error_code: str = "DQ_ERR_001"

    def __init__(
        self,
        message: str,
        *,
        cause: Exception | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        """Create the error and record where it was raised.

        Args:
            message: Human-readable description, safe to return to API clients.
            cause: Exception this error wraps.
            context: Diagnostic key-value pairs for logs.
        """
        super().__init__(message)
        self.message = message
        self.cause = cause
        self.extra_context: dict[str, Any] = dict(context) if context else {}
        self.location = ExceptionContext.from_frame(_raise_site())
        self.stack_trace = (
            "".join(traceback.format_exception(cause)) if cause is not None else None
        )

    def to_dict(self, include_trace: bool = False) -> dict[str, Any]:
        """Structured form used by the log formatter and the CLI debug panel.

        Args:
            include_trace: Add the cause's traceback lines (debug mode).
        """
        data: dict[str, Any] = {
            "error": {
                "type": type(self).__name__,
                "code": self.error_code,
                "message": self.message,
            },
            "location": self.location.to_dict(),
        }
        if self.extra_context:
            data["context"] = self.extra_context
        if self.cause is not None:
            data["cause"] = {"type": type(self.cause).__name__, "message": str(self.cause)}
        if include_trace and self.stack_trace:
            data["stack_trace"] = self.stack_trace.rstrip().splitlines()
        return data
