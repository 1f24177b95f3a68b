"""Liveness endpoints."""

from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

from ..... import __version__
from ..models import HealthResponse

router = APIRouter(tags=["health"])


@router.get("/ping", response_class=PlainTextResponse)
async def ping() -> str:
    """Liveness check."""
    return "PONG"


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Basic health check endpoint."""
    return HealthResponse(status="healthy", version=__version__)
