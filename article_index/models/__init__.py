"""Domain models and API schemas."""

from article_index.models.article import (
    ApiResponse,
    DeleteResult,
    EmbeddingStats,
    ErrorData,
    IngestRequest,
    IngestResult,
    SearchRequest,
    SearchResponse,
)
from article_index.models.chunk import ArticleMetadata, Chunk, ChunkMetadata
from article_index.models.vector_record import (
    FilterOperator,
    MetadataFilter,
    SearchOptions,
    SearchResult,
    VectorRecord,
    filters_from_mapping,
)

__all__ = [
    "ApiResponse",
    "ArticleMetadata",
    "Chunk",
    "ChunkMetadata",
    "DeleteResult",
    "EmbeddingStats",
    "ErrorData",
    "FilterOperator",
    "IngestRequest",
    "IngestResult",
    "MetadataFilter",
    "SearchOptions",
    "SearchRequest",
    "SearchResponse",
    "SearchResult",
    "VectorRecord",
    "filters_from_mapping",
]
