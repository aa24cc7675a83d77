"""
PrivacyWatch FastAPI Application
LGPD compliance assessment, remediation and security monitoring API
"""

import logging
import time
from contextlib import asynccontextmanager
from typing import AsyncGenerator

import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from .config import get_settings
from .exceptions import DependencyError, TaskNotFoundError, ValidationError
from .routes import router as api_router
from .utils.logging_security import configure_logging, sanitize_for_log

settings = get_settings()
configure_logging(settings.log_level, settings.log_format)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan management."""
    logger.info("Starting %s %s (%s)", settings.app_name, settings.app_version, settings.environment)
    yield
    logger.info("Shutting down %s application...", settings.app_name)


# Create FastAPI application
app = FastAPI(
    title="PrivacyWatch - LGPD Compliance Engine",
    description="Compliance assessment, remediation tasks and security audit for LGPD",
    version=settings.app_version,
    docs_url="/docs" if settings.debug else None,
    redoc_url="/redoc" if settings.debug else None,
    lifespan=lifespan,
)


# Health Check Endpoint
@app.get("/health")
async def health_check() -> JSONResponse:
    """Health check endpoint for container orchestration."""
    return JSONResponse(
        status_code=status.HTTP_200_OK,
        content={"status": "healthy", "timestamp": time.time(), "version": settings.app_version},
    )


app.include_router(api_router, prefix="/api")


# =============================================================================
# Exception Handlers
# =============================================================================


@app.exception_handler(ValidationError)
async def validation_error_handler(request: Request, exc: ValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": exc.message, "errors": exc.errors},
    )


@app.exception_handler(TaskNotFoundError)
async def task_not_found_handler(request: Request, exc: TaskNotFoundError) -> JSONResponse:
    return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"detail": str(exc)})


@app.exception_handler(DependencyError)
async def dependency_error_handler(request: Request, exc: DependencyError) -> JSONResponse:
    """Store failures are logged with detail but reported generically."""
    logger.error("Dependency failure on %s: %s", sanitize_for_log(request.url.path), exc)
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"detail": "Service temporarily unavailable", "operation": exc.operation},
    )


if __name__ == "__main__":
    # Development server configuration
    uvicorn.run(
        "privacywatch.main:app",
        host="0.0.0.0",  # nosec B104 - Intentional for Docker container binding
        port=8000,
        log_level=settings.log_level.lower(),
        reload=settings.debug,
    )
