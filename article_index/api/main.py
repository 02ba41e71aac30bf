"""
FastAPI application with assembled routers.

Initializes FastAPI app with all API routers and configures uvicorn server.

Dependencies: fastapi, article_index.api.routers, uvicorn
System role: API entry point with router assembly and server launch
"""

from contextlib import asynccontextmanager

import uvicorn
from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from article_index import __version__
from article_index.api.deps.dependencies import get_service_cache
from article_index.application.embedding_service import validate_environment
from article_index.configs import get_settings
from article_index.observability import configure_logging, get_logger
from article_index.observability.middleware import CorrelationMiddleware, RequestLoggingMiddleware

from .routers import articles_router, embeddings_router, health_router, search_router

load_dotenv()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan context manager.

    Handles startup and shutdown events.
    """
    logger = get_logger("uvicorn")
    configure_logging(get_settings().effective_log_level)

    # Startup
    environment = validate_environment()
    if not environment["is_valid"]:
        logger.warning(f"Missing configuration: {', '.join(environment['missing_vars'])}")

    logger.info("Pre-warming service cache...")
    cache = get_service_cache()
    _ = cache.embedding_service
    logger.info("Service cache pre-warmed")

    yield

    # Shutdown
    cache.clear()
    logger.info("Service cache cleared")


def create_app() -> FastAPI:
    """
    Create and configure FastAPI application with routers.

    Returns:
        FastAPI: Configured application instance with all routers registered
    """
    settings = get_settings()
    app = FastAPI(
        title="Article Index API",
        description="Article chunking, embedding and semantic search",
        version=__version__,
        lifespan=lifespan,
        docs_url=None if settings.is_production else "/docs",
        redoc_url=None if settings.is_production else "/redoc",
    )

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Add observability middleware
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(CorrelationMiddleware)

    # Register all routers with /api/v1 prefix for versioning
    app.include_router(health_router, prefix="/api/v1")
    app.include_router(articles_router, prefix="/api/v1")
    app.include_router(search_router, prefix="/api/v1")
    app.include_router(embeddings_router, prefix="/api/v1")

    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run(
        "article_index.api.main:app",
        host="0.0.0.0",
        port=8000,
    )
