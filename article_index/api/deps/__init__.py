"""Dependency injection for FastAPI routes."""

from article_index.api.deps.dependencies import (
    ServiceCache,
    get_embedding_service,
    get_service_cache,
)

__all__ = [
    "ServiceCache",
    "get_embedding_service",
    "get_service_cache",
]
