"""
Article ingestion API endpoints.

Routes:
- POST /articles - Chunk, embed and store an article
- GET /articles/stats - Aggregate embedding counts

Dependencies: article_index.application, article_index.models
System role: Ingestion HTTP API
"""

import logging

from fastapi import APIRouter, Depends

from article_index.api.deps import get_embedding_service
from article_index.application.embedding_service import EmbeddingService
from article_index.core.exceptions import ArticleIndexError
from article_index.models.article import (
    ApiResponse,
    EmbeddingStats,
    IngestRequest,
    IngestResult,
)

from .router_utils import error_response

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/articles", tags=["articles"])


@router.post("", response_model=ApiResponse[IngestResult])
def ingest_article(
    request: IngestRequest,
    service: EmbeddingService = Depends(get_embedding_service),
):
    """
    Process an article into stored embeddings.

    Args:
        request: Article content and metadata
        service: Injected EmbeddingService

    Returns:
        ApiResponse[IngestResult]: Record count, title and processing time

    Raises:
        400: Content shorter than the minimum or title missing
        500: Chunking, embedding or storage failed (processing_time_ms in data)
    """
    logger.info(
        "Article ingestion request",
        extra={"title": request.title, "content_length": len(request.content)},
    )
    try:
        result = service.ingest_article(request)
    except ArticleIndexError as e:
        return error_response(e, "Failed to process article")

    return ApiResponse[IngestResult](
        message=f"Successfully processed article into {result.embeddings_count} embeddings",
        data=result,
    )


@router.get("/stats", response_model=ApiResponse[EmbeddingStats])
def get_article_stats(service: EmbeddingService = Depends(get_embedding_service)):
    """Aggregate counts over stored embeddings."""
    try:
        stats = service.stats()
    except ArticleIndexError as e:
        return error_response(e, "Failed to get embedding statistics")
    return ApiResponse[EmbeddingStats](message="Embedding statistics retrieved", data=stats)
