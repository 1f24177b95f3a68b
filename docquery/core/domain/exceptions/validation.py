"""Validation exceptions."""

from typing import Any

from .base import DocQAError


class ValidationError(DocQAError):
    """Request payload failed validation.

    ``errors`` holds field-level diagnostics, one dict per problem with the
    offending ``field`` path and a ``message``.
    """

    error_code = "DQ_VAL_001"

    def __init__(
        self,
        message: str = "Invalid request format",
        *,
        errors: list[dict[str, Any]] | None = None,
        cause: Exception | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, cause=cause, context=context)
        self.errors = errors or []

    def to_dict(self, include_trace: bool = False) -> dict[str, Any]:
        result = super().to_dict(include_trace=include_trace)
        if self.errors:
            result["errors"] = self.errors
        return result
