"""Pydantic models for API responses.

The request body schema is :class:`docquery.core.domain.BatchRequest`, shared
with the orchestrator so both validate the same contract.
"""

from pydantic import BaseModel, Field


class RunResponse(BaseModel):
    """Answers in the same order as the submitted questions."""

    answers: list[str] = Field(..., description="One answer per question, in input order")


class HealthResponse(BaseModel):
    """Response model for health check."""

    status: str = Field(..., description="Health status")
    version: str = Field(..., description="API version")


class FieldDiagnostic(BaseModel):
    """One problem found while validating the request body."""

    field: str = Field(..., description="Dotted path of the offending field")
    message: str = Field(..., description="What is wrong with it")


class ValidationErrorResponse(BaseModel):
    """Returned with status 400 for malformed requests."""

    error: str = Field(..., description='Always "Invalid request format"')
    detail: list[FieldDiagnostic] = Field(default_factory=list)


class ServerErrorResponse(BaseModel):
    """Returned with status 500 when the pipeline fails.

    Example:
        {"error": "Server error", "message": "Failed to fetch document: HTTP 404",
         "code": "DQ_ING_002"}
    """

    error: str = Field(..., description='Always "Server error"')
    message: str = Field(..., description="Human-readable failure description")
    code: str = Field(..., description="Error code (e.g., DQ_ING_002)")
