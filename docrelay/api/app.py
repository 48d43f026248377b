"""FastAPI application factory and configuration.

Main application entry point with lifespan management, middleware,
error rendering and router registration.
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, Response, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from docrelay.api.routes import router as relay_router
from docrelay.backend.client import (
    BackendStatusError,
    BackendUnavailableError,
    RelayRequestError,
)
from docrelay.config import get_config
from docrelay.models.schemas import ErrorEnvelope

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Log relay startup and shutdown.

    Args:
        app: The FastAPI application instance.

    Yields:
        Control to the application while it runs.
    """
    config = get_config()
    logger.info(f"Starting document relay, forwarding to {config.backend_url}")
    yield
    logger.info("Shutting down document relay...")


async def backend_status_handler(request: Request, exc: BackendStatusError) -> Response:
    """Mirror the backend's error status and body byte for byte."""
    return Response(
        content=exc.content,
        status_code=exc.status_code,
        media_type=exc.content_type,
    )


async def backend_unavailable_handler(
    request: Request, exc: BackendUnavailableError
) -> JSONResponse:
    envelope = ErrorEnvelope(
        message="Service Unavailable: backend is not responding or is unreachable.",
        details=exc.details,
    )
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content=envelope.model_dump(),
    )


async def relay_request_handler(request: Request, exc: RelayRequestError) -> JSONResponse:
    envelope = ErrorEnvelope(
        message=f"Relay internal error: {exc.details}",
        details="An unexpected error occurred in the relay while preparing the request.",
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=envelope.model_dump(),
    )


def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application instance.
    """
    application = FastAPI(
        title="Document Q&A Relay",
        description=(
            "Relay between the document Q&A interface and the question-answering "
            "backend. Forwards document uploads and questions, maps backend "
            "failures to HTTP errors, and recovers JSON answers embedded in "
            "text replies."
        ),
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    application.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["*"],
    )

    application.add_exception_handler(BackendStatusError, backend_status_handler)
    application.add_exception_handler(BackendUnavailableError, backend_unavailable_handler)
    application.add_exception_handler(RelayRequestError, relay_request_handler)

    application.include_router(relay_router)

    @application.get("/health")
    async def health_check() -> dict[str, str]:
        """Check service health status."""
        return {"status": "healthy", "service": "doc-query-relay"}

    return application


app = create_app()
