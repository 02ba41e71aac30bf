"""
Article ingestion, search and management schemas.

Request/response contracts for the orchestration service and HTTP API.

Dependencies: pydantic
System role: Article index API contracts
"""

from typing import Any, Generic, TypeVar

from pydantic import BaseModel, Field

from article_index.models.vector_record import MetadataFilter, SearchResult

T = TypeVar("T")


class IngestRequest(BaseModel):
    """Request schema for ingesting an article."""

    content: str = Field(description="Full article text")
    title: str = Field(description="Article title")
    author: str | None = None
    url: str | None = None
    published_date: str | None = None
    replace_existing: bool = Field(
        default=False,
        description="Delete records already stored under this title first",
    )


class IngestResult(BaseModel):
    """Outcome of a successful ingestion."""

    embeddings_count: int
    article_title: str
    processing_time_ms: float


class SearchRequest(BaseModel):
    """Request schema for a text similarity search."""

    query: str = Field(description="Query text")
    limit: int | None = Field(default=None, ge=1)
    threshold: float | None = None
    filters: list[MetadataFilter] = Field(default_factory=list)


class SearchResponse(BaseModel):
    """Search outcome; failures are reported through success/error."""

    success: bool = True
    results: list[SearchResult] = Field(default_factory=list)
    query: str
    total_results: int = 0
    search_time_ms: float = 0.0
    error: str | None = None


class EmbeddingStats(BaseModel):
    """Aggregate counts over the stored records."""

    total_embeddings: int
    unique_articles: int
    average_chunks_per_article: float


class DeleteResult(BaseModel):
    """Outcome of a delete operation."""

    deleted_count: int
    article_title: str | None = None
    embedding_id: str | None = None


class ApiResponse(BaseModel, Generic[T]):
    """Envelope returned by every endpoint."""

    success: bool = True
    message: str
    data: T | None = None
    error: str | None = None


class ErrorData(BaseModel):
    """Extra context attached to a failed request."""

    details: dict[str, Any] = Field(default_factory=dict)
    processing_time_ms: float | None = None
