# src/resort_catalog/main.py
"""Main entry point for the resort catalog application."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from resort_catalog.api.v1 import account_router, moderation_router, public_router
from resort_catalog.core.exceptions import (
    ModerationError,
    NotFoundError,
    UnsupportedFieldError,
    ValidationError,
)
from resort_catalog.core.logging import setup_logging
from resort_catalog.core.settings import settings

logger = logging.getLogger(__name__)

# Initialize FastAPI app
app = FastAPI(
    title=settings.app_name,
    description="Sanatorium directory with field-level moderation of owner edits",
    version=settings.app_version,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=settings.cors_allow_methods,
    allow_headers=settings.cors_allow_headers,
)

# Add GZip middleware for compression
app.add_middleware(GZipMiddleware)

# Include API routers
app.include_router(account_router, prefix="/api/v1")
app.include_router(moderation_router, prefix="/api/v1")
app.include_router(public_router, prefix="/api/v1")


@app.exception_handler(ValidationError)
async def validation_error_handler(request: Request, exc: ValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": str(exc), "field": exc.field},
    )


@app.exception_handler(UnsupportedFieldError)
async def unsupported_field_handler(request: Request, exc: UnsupportedFieldError) -> JSONResponse:
    # Distinct from 400: the backend has no moderation rule for this field.
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={"detail": str(exc), "field": exc.field},
    )


@app.exception_handler(NotFoundError)
async def not_found_handler(request: Request, exc: NotFoundError) -> JSONResponse:
    return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"detail": str(exc)})


@app.exception_handler(ModerationError)
async def moderation_error_handler(request: Request, exc: ModerationError) -> JSONResponse:
    logger.error("Unhandled moderation error on %s: %s", request.url.path, exc)
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"detail": str(exc)})


@app.on_event("startup")
async def on_startup() -> None:
    setup_logging(settings.log_level)
    logger.info("%s %s started", settings.app_name, settings.app_version)


@app.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint to verify the service is running."""
    return {"status": "ok"}


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint with basic information about the API."""
    return {
        "name": settings.app_name,
        "version": settings.app_version,
        "description": "Sanatorium directory with field-level moderation of owner edits",
        "docs": "/docs",
        "redoc": "/redoc",
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("resort_catalog.main:app", host="0.0.0.0", port=8000, reload=settings.debug)
