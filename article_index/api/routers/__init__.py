"""API routers."""

from .articles import router as articles_router
from .embeddings import router as embeddings_router
from .health import router as health_router
from .search import router as search_router

__all__ = [
    "articles_router",
    "embeddings_router",
    "health_router",
    "search_router",
]
