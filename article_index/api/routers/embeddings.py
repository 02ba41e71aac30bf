"""
Embedding management API endpoints.

Routes:
- GET /embeddings/stats - Aggregate counts
- GET /embeddings/articles/{title} - Records of one article
- DELETE /embeddings/articles/{title} - Delete one article's records
- DELETE /embeddings/{embedding_id} - Delete one record

Dependencies: article_index.application, article_index.models
System role: Embedding management HTTP API
"""

import logging
from typing import Any

from fastapi import APIRouter, Depends

from article_index.api.deps import get_embedding_service
from article_index.application.embedding_service import EmbeddingService
from article_index.core.exceptions import ArticleIndexError
from article_index.models.article import ApiResponse, DeleteResult, EmbeddingStats

from .router_utils import error_response

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/embeddings", tags=["embeddings"])


@router.get("/stats", response_model=ApiResponse[EmbeddingStats])
def get_stats(service: EmbeddingService = Depends(get_embedding_service)):
    """Aggregate counts over stored embeddings."""
    try:
        stats = service.stats()
    except ArticleIndexError as e:
        return error_response(e, "Failed to get embedding statistics")
    return ApiResponse[EmbeddingStats](message="Embedding statistics retrieved", data=stats)


@router.get("/articles/{title:path}", response_model=ApiResponse[dict[str, Any]])
def get_article_embeddings(
    title: str,
    service: EmbeddingService = Depends(get_embedding_service),
):
    """
    List an article's records in chunk order.

    Vectors are left out of the response. An unknown title yields an
    empty list.
    """
    try:
        records = service.get_article(title)
    except ArticleIndexError as e:
        return error_response(e, "Failed to get article embeddings")

    return ApiResponse[dict[str, Any]](
        message=f"Found {len(records)} embeddings",
        data={
            "article_title": title,
            "count": len(records),
            "embeddings": [
                record.model_dump(mode="json", exclude={"vector"}) for record in records
            ],
        },
    )


@router.delete("/articles/{title:path}", response_model=ApiResponse[DeleteResult])
def delete_article_embeddings(
    title: str,
    service: EmbeddingService = Depends(get_embedding_service),
):
    """
    Delete every record of an article.

    Raises:
        404: No records stored under the title
    """
    logger.info("Article deletion request", extra={"title": title})
    try:
        result = service.delete_by_title(title)
    except ArticleIndexError as e:
        return error_response(e, "Failed to delete article embeddings")
    return ApiResponse[DeleteResult](
        message=f"Deleted {result.deleted_count} embeddings for article: {title}",
        data=result,
    )


@router.delete("/{embedding_id}", response_model=ApiResponse[DeleteResult])
def delete_embedding(
    embedding_id: str,
    service: EmbeddingService = Depends(get_embedding_service),
):
    """
    Delete a single record.

    Raises:
        404: No record with this id
    """
    try:
        result = service.delete_by_id(embedding_id)
    except ArticleIndexError as e:
        return error_response(e, "Failed to delete embedding")
    return ApiResponse[DeleteResult](message=f"Deleted embedding {embedding_id}", data=result)
