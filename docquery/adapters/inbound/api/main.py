"""FastAPI application for the document QA service."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .... import __version__
from ....config.logging import setup_logging
from ....config.settings import get_settings
from ....core.domain.exceptions import DocQAError, ValidationError
from ....core.services.orchestrator import validation_diagnostics
from ...common.exception_handler import format_client_error, get_http_status_code, log_exception
from .routers import hackrx, health

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Configure logging on startup."""
    settings = get_settings()
    setup_logging(settings.log_level, json_format=settings.log_json)
    logger.info("Document QA API starting up...")
    logger.info("Debug mode: %s", "ENABLED" if settings.debug else "DISABLED")
    yield
    logger.info("Document QA API shutting down...")


app = FastAPI(
    title="Document QA API",
    description=(
        "Answers batches of questions about a single policy document using "
        "retrieval-augmented generation."
    ),
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(hackrx.router)


# =============================================================================
# Global Exception Handlers
# =============================================================================


def _request_context(request: Request) -> dict[str, str]:
    return {"path": str(request.url.path), "method": request.method}


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Convert FastAPI body validation failures into a single 400 payload."""
    error = ValidationError(errors=validation_diagnostics(exc.errors()))
    log_exception(error, level=logging.WARNING, extra_context=_request_context(request))
    return JSONResponse(status_code=400, content=format_client_error(error))


@app.exception_handler(DocQAError)
async def docqa_error_handler(request: Request, exc: DocQAError) -> JSONResponse:
    """Handle all DocQAError exceptions with a client-safe JSON response."""
    log_exception(exc, extra_context=_request_context(request))
    return JSONResponse(status_code=get_http_status_code(exc), content=format_client_error(exc))


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle all unhandled exceptions with a client-safe JSON response."""
    log_exception(exc, extra_context=_request_context(request))
    return JSONResponse(status_code=500, content=format_client_error(exc))


# Export for uvicorn
__all__ = ["app"]
