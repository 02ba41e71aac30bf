"""
Core business logic module.

Contains the exception hierarchy, the article chunker, similarity
scoring and batch pacing. Nothing here talks to external services.
"""

from article_index.core.exceptions import (
    ArticleIndexError,
    DimensionMismatchError,
    ExternalServiceError,
    IngestionError,
    NotFoundError,
    ValidationError,
)
from article_index.core.chunker import ArticleChunker, ChunkIdStrategy
from article_index.core.pacing import (
    BatchPacer,
    FixedDelayPacer,
    NoPacer,
    TokenBucketPacer,
    create_pacer,
)
from article_index.core.similarity import (
    BruteForceSimilarity,
    SimilarityStrategy,
    cosine_similarity,
)

__all__ = [
    # Exceptions
    "ArticleIndexError",
    "DimensionMismatchError",
    "ExternalServiceError",
    "IngestionError",
    "NotFoundError",
    "ValidationError",
    # Chunking
    "ArticleChunker",
    "ChunkIdStrategy",
    # Pacing
    "BatchPacer",
    "FixedDelayPacer",
    "NoPacer",
    "TokenBucketPacer",
    "create_pacer",
    # Similarity
    "BruteForceSimilarity",
    "SimilarityStrategy",
    "cosine_similarity",
]
