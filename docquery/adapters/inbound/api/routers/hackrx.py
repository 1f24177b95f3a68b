"""Batch question-answering endpoint."""

import logging

from fastapi import APIRouter, Depends

from .....core.domain import BatchRequest
from .....core.services import BatchOrchestrator
from ..deps import orchestrator_dependency
from ..models import RunResponse, ServerErrorResponse, ValidationErrorResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/hackrx", tags=["hackrx"])


@router.post(
    "/run",
    response_model=RunResponse,
    responses={
        400: {"model": ValidationErrorResponse, "description": "Invalid request"},
        500: {"model": ServerErrorResponse, "description": "Internal server error"},
    },
)
async def run_batch(
    request: BatchRequest,
    orchestrator: BatchOrchestrator = Depends(orchestrator_dependency),
) -> RunResponse:
    """Answer every question about the referenced document.

    Failures propagate to the application exception handlers, which map
    them to 400/500 payloads.
    """
    logger.info("Received batch of %d questions", len(request.questions))
    result = await orchestrator.run_request(request)
    return RunResponse(answers=result.answers)
