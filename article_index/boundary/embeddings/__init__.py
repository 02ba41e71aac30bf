"""
Embedding provider boundary layer.

- PinnedDimensionEmbeddings: Gemini client pinned to one output dimension
- create_embeddings_provider: provider selection from settings

Dependencies: langchain_google_genai, langchain_aws
System role: Embedding model provider adapter
"""

from article_index.boundary.embeddings.provider_factory import (
    PinnedDimensionEmbeddings,
    create_embeddings_provider,
)

__all__ = ["PinnedDimensionEmbeddings", "create_embeddings_provider"]
