"""
Article embedding service orchestrator.

Coordinates ingestion (chunk -> embed -> store) and retrieval
(embed query -> search), plus statistics, management and cleanup helpers.

Ingestion is not atomic end to end: store batches committed before a
failure stay persisted. Re-running with replace_existing is the recovery
path.

Dependencies: article_index.application, article_index.core, article_index.configs
System role: Ingestion and retrieval orchestration
"""

import logging
import os
import time
from typing import Any

from article_index.application.embedder import ArticleEmbedder
from article_index.application.vector_store import VectorStore
from article_index.configs.settings import Settings, get_settings
from article_index.core.chunker import ArticleChunker
from article_index.core.exceptions import ArticleIndexError, IngestionError, ValidationError
from article_index.models.article import (
    DeleteResult,
    EmbeddingStats,
    IngestRequest,
    IngestResult,
    SearchRequest,
    SearchResponse,
)
from article_index.models.chunk import ArticleMetadata
from article_index.models.vector_record import (
    SearchOptions,
    VectorRecord,
    filters_from_mapping,
)
from article_index.observability.log_utils import log_exception_with_context, log_with_context

logger = logging.getLogger(__name__)


def _elapsed_ms(start_time: float) -> float:
    return (time.perf_counter() - start_time) * 1000


class EmbeddingService:
    """
    Article embedding orchestrator.

    Owns no state beyond its collaborators; every dependency is passed in
    so a single set of clients can be shared for the process lifetime.
    """

    def __init__(
        self,
        chunker: ArticleChunker,
        embedder: ArticleEmbedder,
        vector_store: VectorStore,
        min_content_length: int = 100,
        write_batch_size: int = 500,
        default_limit: int = 10,
        default_threshold: float = 0.7,
    ) -> None:
        """
        Initialize embedding service.

        Args:
            chunker: Article chunker
            embedder: Embedding generator
            vector_store: Vector record store
            min_content_length: Minimum article length accepted for ingestion
            write_batch_size: Records per store transaction during ingestion
            default_limit: Search limit when a request omits it
            default_threshold: Search threshold when a request omits it
        """
        self.chunker = chunker
        self.embedder = embedder
        self.vector_store = vector_store
        self._min_content_length = min_content_length
        self._write_batch_size = write_batch_size
        self._default_limit = default_limit
        self._default_threshold = default_threshold

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        embedder: ArticleEmbedder,
        vector_store: VectorStore,
    ) -> "EmbeddingService":
        """Build a service whose chunker and defaults come from settings."""
        chunking = settings.chunking
        return cls(
            chunker=ArticleChunker(
                chunk_size=chunking.chunk_size,
                chunk_overlap=chunking.chunk_overlap,
                boundary_ratio=chunking.boundary_ratio,
                id_strategy=chunking.id_strategy,
            ),
            embedder=embedder,
            vector_store=vector_store,
            min_content_length=chunking.min_content_length,
            write_batch_size=settings.vector_store.write_batch_size,
            default_limit=settings.vector_store.default_limit,
            default_threshold=settings.vector_store.default_threshold,
        )

    def ingest_article(self, request: IngestRequest) -> IngestResult:
        """
        Chunk, embed and store an article.

        Steps:
        1. Validate content length and title
        2. Delete existing records for the title if replace_existing
        3. Split into chunks
        4. Generate embeddings in provider batches
        5. Upsert records in store batches

        Args:
            request: Article content and metadata

        Returns:
            IngestResult: Record count, title and elapsed time

        Raises:
            ValidationError: Content too short or title missing
            IngestionError: Any later stage failed (carries processing_time_ms)
        """
        start_time = time.perf_counter()
        self._validate_ingest(request)

        stage = "replace"
        try:
            if request.replace_existing:
                removed = self.vector_store.delete_by_title(request.title, missing_ok=True)
                logger.info(
                    f"{__name__}:ingest_article - Replaced {removed} existing embeddings",
                    extra={"title": request.title},
                )

            stage = "chunk"
            chunks = self.chunker.split(
                request.content,
                ArticleMetadata(
                    title=request.title,
                    author=request.author,
                    url=request.url,
                    published_date=request.published_date,
                ),
            )

            stage = "embed"
            records = self.embedder.generate_embeddings(chunks)

            stage = "store"
            self._store_in_batches(records)

        except Exception as e:
            elapsed = _elapsed_ms(start_time)
            log_exception_with_context(
                logger,
                "Article ingestion failed",
                e,
                title=request.title,
                stage=stage,
                processing_time_ms=round(elapsed, 2),
            )
            if isinstance(e, ArticleIndexError):
                cause, details = e.message, {**e.details, "title": request.title}
            else:
                cause, details = str(e), {"title": request.title, "error_type": type(e).__name__}
            raise IngestionError(
                f"Failed to process article: {cause}",
                stage=stage,
                processing_time_ms=elapsed,
                details=details,
            ) from e

        elapsed = _elapsed_ms(start_time)
        log_with_context(
            logger,
            logging.INFO,
            f"{__name__}:ingest_article - Processed article with {len(records)} chunks",
            title=request.title,
            processing_time_ms=round(elapsed, 2),
        )
        return IngestResult(
            embeddings_count=len(records),
            article_title=request.title,
            processing_time_ms=elapsed,
        )

    def search(self, request: SearchRequest) -> SearchResponse:
        """
        Embed a text query and rank stored records against it.

        Failures past validation are returned as success=False with an
        empty result list rather than raised.

        Raises:
            ValidationError: When the query is blank
        """
        if not request.query or not request.query.strip():
            raise ValidationError("Query is required", field="query")

        start_time = time.perf_counter()
        options = SearchOptions(
            limit=request.limit or self._default_limit,
            threshold=(
                request.threshold if request.threshold is not None else self._default_threshold
            ),
            filters=request.filters,
        )

        try:
            results = self.vector_store.search_by_text(request.query, options)
        except Exception as e:
            log_exception_with_context(logger, "Search failed", e, query=request.query)
            return SearchResponse(
                success=False,
                query=request.query,
                search_time_ms=_elapsed_ms(start_time),
                error=str(e),
            )

        return SearchResponse(
            results=results,
            query=request.query,
            total_results=len(results),
            search_time_ms=_elapsed_ms(start_time),
        )

    def stats(self) -> EmbeddingStats:
        """Aggregate counts over all stored records."""
        return self.vector_store.stats()

    def get_article(self, title: str) -> list[VectorRecord]:
        """Records of one article ordered by chunk index."""
        return self.vector_store.get_by_title(title)

    def delete_by_title(self, title: str) -> DeleteResult:
        """
        Delete every record of an article.

        Raises:
            NotFoundError: When the title has no records
        """
        deleted = self.vector_store.delete_by_title(title)
        return DeleteResult(deleted_count=deleted, article_title=title)

    def delete_by_id(self, record_id: str) -> DeleteResult:
        """
        Delete one record.

        Raises:
            NotFoundError: When the id does not exist
        """
        self.vector_store.delete_by_id(record_id)
        return DeleteResult(deleted_count=1, embedding_id=record_id)

    def process_article_from_source(
        self,
        source: str,
        title: str,
        author: str | None = None,
        url: str | None = None,
        published_date: str | None = None,
    ) -> dict[str, Any]:
        """
        Ingest text and report the outcome instead of raising.

        Returns:
            dict: success, embeddings_count, processing_time_ms and error when failed
        """
        start_time = time.perf_counter()
        try:
            result = self.ingest_article(
                IngestRequest(
                    content=source,
                    title=title,
                    author=author,
                    url=url,
                    published_date=published_date,
                )
            )
        except IngestionError as e:
            return {
                "success": False,
                "embeddings_count": 0,
                "processing_time_ms": e.processing_time_ms,
                "error": e.message,
            }
        except ArticleIndexError as e:
            return {
                "success": False,
                "embeddings_count": 0,
                "processing_time_ms": _elapsed_ms(start_time),
                "error": e.message,
            }

        return {
            "success": True,
            "embeddings_count": result.embeddings_count,
            "processing_time_ms": result.processing_time_ms,
        }

    def search_similar_content(
        self,
        query: str,
        limit: int = 5,
        threshold: float = 0.7,
        filters: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """
        Search and flatten results to title/content/similarity entries.

        Returns:
            dict: success, results and error when failed
        """
        try:
            response = self.search(
                SearchRequest(
                    query=query,
                    limit=limit,
                    threshold=threshold,
                    filters=filters_from_mapping(filters),
                )
            )
        except ValidationError as e:
            return {"success": False, "results": [], "error": e.message}

        return {
            "success": response.success,
            "results": [
                {
                    "title": result.metadata.title,
                    "content": result.content,
                    "similarity": result.similarity,
                    "metadata": result.metadata.model_dump(),
                }
                for result in response.results
            ],
            **({"error": response.error} if response.error else {}),
        }

    def get_embedding_summary(self) -> dict[str, Any]:
        """Statistics wrapped in a success/error result."""
        try:
            return {"success": True, "stats": self.stats().model_dump()}
        except ArticleIndexError as e:
            log_exception_with_context(logger, "Failed to get embedding stats", e)
            return {"success": False, "error": e.message}

    def cleanup_embeddings(self, title: str | None = None) -> dict[str, Any]:
        """
        Remove an article's records and report how many were deleted.

        Without a title nothing is removed.
        """
        if not title:
            return {"success": True, "deleted_count": 0}
        try:
            deleted = self.vector_store.delete_by_title(title, missing_ok=True)
        except ArticleIndexError as e:
            log_exception_with_context(logger, "Cleanup failed", e, title=title)
            return {"success": False, "error": e.message}
        return {"success": True, "deleted_count": deleted}

    def _validate_ingest(self, request: IngestRequest) -> None:
        content = (request.content or "").strip()
        if not content or not request.title or not request.title.strip():
            raise ValidationError(
                "Missing required fields: content and title are required",
                field="content" if not content else "title",
            )
        if len(content) < self._min_content_length:
            raise ValidationError(
                f"Content must be at least {self._min_content_length} characters long",
                field="content",
                details={"length": len(content)},
            )

    def _store_in_batches(self, records: list[VectorRecord]) -> None:
        for start in range(0, len(records), self._write_batch_size):
            self.vector_store.upsert_many(records[start : start + self._write_batch_size])


def validate_environment(settings: Settings | None = None) -> dict[str, Any]:
    """
    Report configuration required by the selected provider and backend.

    Args:
        settings: Settings to check (application settings if None)

    Returns:
        dict: is_valid and the list of missing setting names
    """
    settings = settings or get_settings()
    missing: list[str] = []
    embedding = settings.embedding
    if embedding.provider.lower() == "google":
        if not (embedding.google_api_key or os.getenv("GOOGLE_API_KEY")):
            missing.append("EMBEDDING_GOOGLE_API_KEY")
    elif embedding.provider.lower() == "bedrock":
        if not embedding.aws_region:
            missing.append("EMBEDDING_AWS_REGION")
    else:
        missing.append("EMBEDDING_PROVIDER")

    backend = settings.vector_store.backend.lower()
    if backend == "sql":
        database = settings.database
        # host always has a localhost default; only an explicit one counts
        if not database.url and "host" not in database.model_fields_set:
            missing.append("DATABASE_URL")
    elif backend != "memory":
        missing.append("VECTOR_STORE_BACKEND")

    return {"is_valid": not missing, "missing_vars": missing}
