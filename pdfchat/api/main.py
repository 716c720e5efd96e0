"""
FastAPI application with assembled routers.

Initializes the FastAPI app, registers routers and middleware, and wires the
process-wide services into the lifespan.

Dependencies: fastapi, pdfchat.api.routers, uvicorn
System role: API entry point with router assembly and server launch
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from pdfchat.api.deps.dependencies import get_service_cache
from pdfchat.boundary.db import create_all_tables, dispose_engine
from pdfchat.configs import get_settings
from pdfchat.observability.logger import configure_logging
from pdfchat.observability.middleware import CorrelationMiddleware, RequestLoggingMiddleware

from .routers import (
    chat_router,
    documents_router,
    health_router,
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan context manager.

    Startup creates tables and pre-warms the service cache; shutdown drops
    indexes and cached answers and disposes the database engine.
    """
    settings = get_settings()
    configure_logging(settings.log_level)
    logger.info("Application startup: logging configured")

    await create_all_tables()

    logger.info("Pre-warming service cache...")
    cache = get_service_cache()
    # Trigger property access to load instances
    _ = cache.file_store
    _ = cache.document_pipeline
    _ = cache.orchestrator
    logger.info("Service cache pre-warmed")

    yield

    cache.clear()
    await dispose_engine()
    logger.info("Service cache cleared")


def create_app() -> FastAPI:
    """
    Create and configure FastAPI application with routers.

    Returns:
        FastAPI: Configured application instance with all routers registered
    """
    app = FastAPI(
        title="PDF Chat RAG API",
        description="Upload PDFs and ask questions answered from their content",
        version="0.1.0",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Add observability middleware (last added runs first)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(CorrelationMiddleware)

    # Register all routers with /api/v1 prefix for versioning
    app.include_router(health_router, prefix="/api/v1")
    app.include_router(documents_router, prefix="/api/v1")
    app.include_router(chat_router, prefix="/api/v1")

    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run(
        "pdfchat.api.main:app",
        host="0.0.0.0",
        port=8000,
    )
