"""
FastAPI application factory.

Creates and configures the FastAPI application instance.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.api.v1.router import api_router
from app.core.config import settings
from app.core.exceptions import (
    AccessError,
    AppError,
    ConflictError,
    NotFoundError,
    PersistenceError,
    ValidationError,
)
from app.core.logging import LoggingMiddleware, configure_logging

configure_logging(settings.LOG_LEVEL)
logger = logging.getLogger(__name__)

app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.VERSION,
    description="Medication adherence tracking: medications, daily dose logs and progress.",
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json")

app.add_middleware(LoggingMiddleware)

# Include API router
app.include_router(api_router, prefix="/api/v1")


_ERROR_STATUS: dict[type[AppError], int] = {
    ValidationError: status.HTTP_422_UNPROCESSABLE_ENTITY,
    NotFoundError: status.HTTP_404_NOT_FOUND,
    ConflictError: status.HTTP_409_CONFLICT,
    PersistenceError: status.HTTP_503_SERVICE_UNAVAILABLE,
    AccessError: status.HTTP_401_UNAUTHORIZED,
}


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    """Map application errors to HTTP responses."""
    status_code = _ERROR_STATUS.get(type(exc), status.HTTP_500_INTERNAL_SERVER_ERROR)
    content = {"error": exc.kind, "detail": exc.message}
    if isinstance(exc, ValidationError):
        content["errors"] = exc.errors

    headers = None
    if isinstance(exc, AccessError):
        headers = {"WWW-Authenticate": "Bearer"}
    if status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)

    return JSONResponse(status_code=status_code, content=content, headers=headers)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report malformed request data in the same shape as ``ValidationError``."""
    return await app_error_handler(request, ValidationError.from_errors("Invalid request", exc.errors()))


@app.get("/")
async def root():
    """Root endpoint - health check."""
    return {
        "message": "Meds Buddy API",
        "version": settings.VERSION,
        "status": "healthy"
    }


@app.get("/health")
async def health_check():
    """Health check endpoint for monitoring."""
    return {
        "status": "healthy",
        "service": "meds-buddy-api",
        "version": settings.VERSION
    }


@app.get("/info")
async def info():
    return {
        "project name": settings.PROJECT_NAME,
        "version": settings.VERSION,
        "authors": settings.AUTHORS,
        "project url": settings.PROJECT_URL
    }
