"""
Similarity search API endpoints.

Routes:
- POST /search - Search with a JSON body
- GET /search - Search with query parameters (q, limit, threshold, title, author)

Search failures after validation are reported with success=False and a
200 status.

Dependencies: article_index.application, article_index.models
System role: Retrieval HTTP API
"""

from fastapi import APIRouter, Depends, Query

from article_index.api.deps import get_embedding_service
from article_index.application.embedding_service import EmbeddingService
from article_index.core.exceptions import ArticleIndexError
from article_index.models.article import ApiResponse, SearchRequest, SearchResponse
from article_index.models.vector_record import filters_from_mapping

from .router_utils import error_response

router = APIRouter(prefix="/search", tags=["search"])


def _run_search(service: EmbeddingService, request: SearchRequest):
    try:
        response = service.search(request)
    except ArticleIndexError as e:
        return error_response(e, "Search failed")

    if not response.success:
        return ApiResponse[SearchResponse](
            success=False,
            message="Search failed",
            data=response,
            error=response.error,
        )
    return ApiResponse[SearchResponse](
        message=f"Found {response.total_results} results",
        data=response,
    )


@router.post("", response_model=ApiResponse[SearchResponse])
def search(
    request: SearchRequest,
    service: EmbeddingService = Depends(get_embedding_service),
):
    """
    Search stored embeddings by query text.

    Args:
        request: Query, limit, threshold and metadata filters
        service: Injected EmbeddingService

    Returns:
        ApiResponse[SearchResponse]: Ranked results, best first

    Raises:
        400: Query missing or blank
    """
    return _run_search(service, request)


@router.get("", response_model=ApiResponse[SearchResponse])
def search_by_query(
    q: str = Query(default="", description="Query text"),
    limit: int | None = Query(default=None, ge=1),
    threshold: float | None = Query(default=None),
    title: str | None = Query(default=None, description="Restrict to one article"),
    author: str | None = Query(default=None, description="Restrict to one author"),
    service: EmbeddingService = Depends(get_embedding_service),
):
    """Search stored embeddings with query parameters."""
    filters = {
        key: value
        for key, value in (("title", title), ("author", author))
        if value is not None
    }
    request = SearchRequest(
        query=q,
        limit=limit,
        threshold=threshold,
        filters=filters_from_mapping(filters),
    )
    return _run_search(service, request)
