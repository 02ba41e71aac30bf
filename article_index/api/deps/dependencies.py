"""
Dependency injection container.

Factory functions for FastAPI dependencies. Clients are built once per
process and shared by reference.

Dependencies: article_index.configs, article_index.application, article_index.boundary
System role: DI container for service injection
"""

import logging
from article_index.application.embedder import ArticleEmbedder
from article_index.application.embedding_service import EmbeddingService
from article_index.application.vector_store import VectorStore
from article_index.boundary.collection import InMemoryCollection, SQLCollection
from article_index.configs import Settings, get_settings
from article_index.core.pacing import create_pacer

logger = logging.getLogger(__name__)


class ServiceCache:
    """Container for cached service instances."""

    def __init__(self, settings: Settings | None = None):
        self._settings = settings
        self._provider = None
        self._embedder = None
        self._collection = None
        self._vector_store = None
        self._embedding_service = None

    @property
    def settings(self) -> Settings:
        """Get settings used to build services."""
        if self._settings is None:
            self._settings = get_settings()
        return self._settings

    @property
    def provider(self):
        """Get cached embeddings provider."""
        if self._provider is None:
            from article_index.boundary.embeddings import create_embeddings_provider

            self._provider = create_embeddings_provider(self.settings.embedding)
        return self._provider

    @property
    def embedder(self) -> ArticleEmbedder:
        """Get cached embedder."""
        if self._embedder is None:
            embedding = self.settings.embedding
            self._embedder = ArticleEmbedder(
                provider=self.provider,
                batch_size=embedding.batch_size,
                pacer=create_pacer(
                    embedding.pacing,
                    delay_seconds=embedding.batch_delay_seconds,
                    rate_per_second=embedding.tokens_per_second,
                    capacity=embedding.bucket_capacity,
                ),
                retry_attempts=embedding.retry_attempts,
                expected_dimension=embedding.dimension,
            )
        return self._embedder

    @property
    def collection(self):
        """Get cached document collection selected via VECTOR_STORE_BACKEND."""
        if self._collection is None:
            store_settings = self.settings.vector_store
            backend = store_settings.backend.lower()
            if backend == "memory":
                self._collection = InMemoryCollection(name=store_settings.collection_name)
            elif backend == "sql":
                from article_index.boundary.db import get_engine

                self._collection = SQLCollection(
                    engine=get_engine(self.settings.database),
                    name=store_settings.collection_name,
                )
            else:
                raise ValueError(
                    f"Invalid VECTOR_STORE_BACKEND: {store_settings.backend}. "
                    f"Must be 'memory' or 'sql'."
                )
            logger.info(f"{__name__}:collection - Using {backend} document collection")
        return self._collection

    @property
    def vector_store(self) -> VectorStore:
        """Get cached vector store."""
        if self._vector_store is None:
            self._vector_store = VectorStore(
                collection=self.collection,
                embedder=self.embedder,
            )
        return self._vector_store

    @property
    def embedding_service(self) -> EmbeddingService:
        """Get cached embedding service."""
        if self._embedding_service is None:
            self._embedding_service = EmbeddingService.from_settings(
                self.settings,
                embedder=self.embedder,
                vector_store=self.vector_store,
            )
        return self._embedding_service

    def clear(self) -> None:
        """Clear all cached instances."""
        self._provider = None
        self._embedder = None
        self._collection = None
        self._vector_store = None
        self._embedding_service = None


# Global service cache
_service_cache = ServiceCache()


def get_service_cache() -> ServiceCache:
    """Get service cache singleton."""
    return _service_cache


def get_embedding_service() -> EmbeddingService:
    """
    Get embedding service instance.

    Returns:
        EmbeddingService: Shared service built from the service cache
    """
    return get_service_cache().embedding_service
