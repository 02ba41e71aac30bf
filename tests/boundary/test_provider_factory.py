"""
Test suite for embedding provider selection.

Provider classes are patched so no credentials or network are needed.

System role: Verification of provider factory
"""

from unittest.mock import MagicMock, patch

import pytest

from article_index.boundary.embeddings.provider_factory import (
    PinnedDimensionEmbeddings,
    create_embeddings_provider,
)
from article_index.configs.embedding import EmbeddingSettings


class TestCreateEmbeddingsProvider:
    """Test suite for create_embeddings_provider."""

    def test_google_should_build_pinned_dimension_embeddings(self) -> None:
        """Test the Gemini client receives model and key and is pinned to the dimension."""
        # Arrange
        settings = EmbeddingSettings(provider="google", dimension=768, google_api_key="key-123")

        # Act
        with patch("langchain_google_genai.GoogleGenerativeAIEmbeddings") as mock_embeddings:
            provider = create_embeddings_provider(settings)

        # Assert
        mock_embeddings.assert_called_once_with(
            model="models/gemini-embedding-001",
            google_api_key="key-123",
        )
        assert isinstance(provider, PinnedDimensionEmbeddings)
        assert provider.dimension == 768

    def test_pinned_embeddings_should_request_dimension_on_every_call(self) -> None:
        """Test documents and queries both send output_dimensionality."""
        # Arrange
        client = MagicMock()
        client.embed_documents.return_value = [[0.1, 0.2]]
        client.embed_query.return_value = [0.3, 0.4]
        provider = PinnedDimensionEmbeddings(client, dimension=2)

        # Act
        documents = provider.embed_documents(["solar"])
        query = provider.embed_query("wind")

        # Assert
        client.embed_documents.assert_called_once_with(["solar"], output_dimensionality=2)
        client.embed_query.assert_called_once_with("wind", output_dimensionality=2)
        assert documents == [[0.1, 0.2]]
        assert query == [0.3, 0.4]

    def test_bedrock_should_build_bedrock_embeddings(self) -> None:
        """Test Bedrock embeddings receive model id and region."""
        # Arrange
        settings = EmbeddingSettings(
            provider="Bedrock", model="amazon.titan-embed-text-v2:0", aws_region="eu-west-1"
        )

        # Act
        with patch("langchain_aws.BedrockEmbeddings") as mock_embeddings:
            provider = create_embeddings_provider(settings)

        # Assert
        mock_embeddings.assert_called_once_with(
            model_id="amazon.titan-embed-text-v2:0",
            region_name="eu-west-1",
        )
        assert provider is mock_embeddings.return_value

    def test_unknown_provider_should_raise(self) -> None:
        """Test unknown provider names are rejected."""
        with pytest.raises(ValueError, match="EMBEDDING_PROVIDER"):
            create_embeddings_provider(EmbeddingSettings(provider="openai"))
