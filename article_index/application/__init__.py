"""
Application layer.

Embedding generation, vector storage and the orchestration service that
ties chunking, embedding and storage together.
"""

from article_index.application.embedder import ArticleEmbedder
from article_index.application.embedding_service import EmbeddingService, validate_environment
from article_index.application.vector_store import VectorStore

__all__ = [
    "ArticleEmbedder",
    "EmbeddingService",
    "VectorStore",
    "validate_environment",
]
