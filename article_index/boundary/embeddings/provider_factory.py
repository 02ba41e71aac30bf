"""
Embedding provider factory.

Selects between Google Gemini and Amazon Bedrock embeddings based on
EMBEDDING_PROVIDER. The provider is built once at startup and handed to
the embedder by reference.

Gemini models return their native width unless output_dimensionality is
sent on every call, so the Gemini client is wrapped to pin it to
EMBEDDING_DIMENSION. Vector lengths are then checked by the embedder and
the vector store against the same setting.

Dependencies: langchain_core, langchain_google_genai, langchain_aws, article_index.configs
System role: Embedding provider instantiation and selection
"""

import logging
import os

from langchain_core.embeddings import Embeddings

from article_index.configs.embedding import EmbeddingSettings

logger = logging.getLogger(__name__)


class PinnedDimensionEmbeddings(Embeddings):
    """Gemini embeddings client that always requests one output dimension."""

    def __init__(self, client: Embeddings, dimension: int) -> None:
        self._client = client
        self.dimension = dimension

    def embed_documents(self, texts: list[str]) -> list[list[float]]:
        return self._client.embed_documents(texts, output_dimensionality=self.dimension)

    def embed_query(self, text: str) -> list[float]:
        return self._client.embed_query(text, output_dimensionality=self.dimension)


def create_embeddings_provider(settings: EmbeddingSettings) -> Embeddings:
    """
    Build the embedding provider named in settings.

    Args:
        settings: Embedding configuration

    Returns:
        Embeddings: LangChain embeddings client

    Raises:
        ValueError: If EMBEDDING_PROVIDER is invalid
    """
    provider = settings.provider.lower()

    if provider == "google":
        from langchain_google_genai import GoogleGenerativeAIEmbeddings

        logger.info(
            f"{__name__}:create_embeddings_provider - Creating Gemini embeddings "
            f"(model={settings.model}, dimension={settings.dimension})"
        )
        api_key = settings.google_api_key or os.getenv("GOOGLE_API_KEY")
        kwargs = {"google_api_key": api_key} if api_key else {}
        client = GoogleGenerativeAIEmbeddings(model=settings.model, **kwargs)
        return PinnedDimensionEmbeddings(client, settings.dimension)

    elif provider == "bedrock":
        from langchain_aws import BedrockEmbeddings

        logger.info(
            f"{__name__}:create_embeddings_provider - Creating Bedrock embeddings "
            f"(model={settings.model}, region={settings.aws_region})"
        )
        return BedrockEmbeddings(
            model_id=settings.model,
            region_name=settings.aws_region,
        )

    else:
        raise ValueError(
            f"Invalid EMBEDDING_PROVIDER: {settings.provider}. "
            f"Must be 'google' or 'bedrock'."
        )
