"""
Test suite for EmbeddingService.

Tests ingestion validation and replacement, failure reporting, search
degradation and the convenience helpers.

System role: Verification of ingestion and retrieval orchestration
"""

from unittest.mock import MagicMock

import pytest

from article_index.application.embedder import ArticleEmbedder
from article_index.application.embedding_service import EmbeddingService, validate_environment
from article_index.application.vector_store import VectorStore
from article_index.configs.chunking import ChunkingSettings
from article_index.configs.database import DatabaseSettings
from article_index.configs.embedding import EmbeddingSettings
from article_index.configs.settings import Settings
from article_index.configs.vector_store import VectorStoreSettings
from article_index.core.chunker import ArticleChunker
from article_index.core.exceptions import (
    ExternalServiceError,
    IngestionError,
    NotFoundError,
    ValidationError,
)
from article_index.core.pacing import NoPacer
from article_index.models.article import IngestRequest, SearchRequest


class TestIngestArticle:
    """Test suite for EmbeddingService.ingest_article."""

    def test_ingest_should_store_one_record_per_chunk(
        self, embedding_service: EmbeddingService, sample_article: str
    ) -> None:
        """Test ingestion reports the stored record count."""
        # Act
        result = embedding_service.ingest_article(
            IngestRequest(content=sample_article, title="Energy", author="Sam")
        )

        # Assert
        stored = embedding_service.get_article("Energy")
        assert result.embeddings_count == len(stored)
        assert 3 <= result.embeddings_count <= 4
        assert result.article_title == "Energy"
        assert result.processing_time_ms >= 0
        assert all(r.metadata.author == "Sam" for r in stored)

    def test_short_content_should_raise_validation_error(
        self, embedding_service: EmbeddingService
    ) -> None:
        """Test content under 100 characters is rejected."""
        with pytest.raises(ValidationError) as exc_info:
            embedding_service.ingest_article(IngestRequest(content="too short", title="T"))
        assert exc_info.value.details["field"] == "content"

    def test_missing_title_should_raise_validation_error(
        self, embedding_service: EmbeddingService, sample_article: str
    ) -> None:
        """Test a blank title is rejected."""
        with pytest.raises(ValidationError):
            embedding_service.ingest_article(IngestRequest(content=sample_article, title="  "))

    def test_whitespace_content_should_raise_validation_error(
        self, embedding_service: EmbeddingService
    ) -> None:
        """Test content that is only whitespace is rejected before chunking."""
        with pytest.raises(ValidationError) as exc_info:
            embedding_service.ingest_article(IngestRequest(content=" " * 150, title="T"))
        assert exc_info.value.details["field"] == "content"

    def test_padded_short_content_should_raise_validation_error(
        self, embedding_service: EmbeddingService
    ) -> None:
        """Test surrounding whitespace does not count toward the minimum length."""
        with pytest.raises(ValidationError) as exc_info:
            embedding_service.ingest_article(
                IngestRequest(content="  short text  " + "\n" * 120, title="T")
            )
        assert exc_info.value.details["length"] == len("short text")

    def test_reingest_with_replace_should_drop_stale_chunks(
        self, embedding_service: EmbeddingService, sample_article: str
    ) -> None:
        """Test replace_existing removes chunks the new version no longer has."""
        # Arrange
        embedding_service.ingest_article(IngestRequest(content=sample_article, title="Energy"))

        # Act
        result = embedding_service.ingest_article(
            IngestRequest(content="renewables " * 20, title="Energy", replace_existing=True)
        )

        # Assert
        stored = embedding_service.get_article("Energy")
        assert result.embeddings_count == 1
        assert len(stored) == 1
        assert stored[0].metadata.total_chunks == 1

    def test_embedding_failure_should_raise_ingestion_error_with_time(
        self, vector_store: VectorStore, sample_article: str
    ) -> None:
        """Test provider failures surface as IngestionError with elapsed time."""
        # Arrange
        provider = MagicMock()
        provider.embed_documents.side_effect = RuntimeError("provider down")
        service = EmbeddingService(
            chunker=ArticleChunker(),
            embedder=ArticleEmbedder(provider=provider, pacer=NoPacer()),
            vector_store=vector_store,
        )

        # Act
        with pytest.raises(IngestionError) as exc_info:
            service.ingest_article(IngestRequest(content=sample_article, title="Energy"))

        # Assert
        error = exc_info.value
        assert error.stage == "embed"
        assert error.processing_time_ms >= 0
        assert "provider down" in error.message
        assert isinstance(error.__cause__, ExternalServiceError)
        assert vector_store.get_by_title("Energy") == []

    def test_unexpected_store_failure_should_raise_ingestion_error(
        self, embedder: ArticleEmbedder, sample_article: str
    ) -> None:
        """Test errors outside the domain hierarchy still carry stage and time."""
        # Arrange
        store = MagicMock()
        store.upsert_many.side_effect = RuntimeError("connection reset")
        service = EmbeddingService(chunker=ArticleChunker(), embedder=embedder, vector_store=store)

        # Act
        with pytest.raises(IngestionError) as exc_info:
            service.ingest_article(IngestRequest(content=sample_article, title="Energy"))

        # Assert
        error = exc_info.value
        assert error.stage == "store"
        assert error.processing_time_ms >= 0
        assert "connection reset" in error.message
        assert error.details["error_type"] == "RuntimeError"
        assert isinstance(error.__cause__, RuntimeError)

    def test_store_batches_should_respect_write_batch_size(
        self, embedder: ArticleEmbedder, sample_article: str
    ) -> None:
        """Test records are written in groups of write_batch_size."""
        # Arrange
        store = MagicMock()
        store.upsert_many.side_effect = lambda records: len(records)
        service = EmbeddingService(
            chunker=ArticleChunker(),
            embedder=embedder,
            vector_store=store,
            write_batch_size=2,
        )

        # Act
        result = service.ingest_article(IngestRequest(content=sample_article, title="Energy"))

        # Assert
        sizes = [len(call.args[0]) for call in store.upsert_many.call_args_list]
        assert sum(sizes) == result.embeddings_count
        assert all(size <= 2 for size in sizes)


class TestSearch:
    """Test suite for EmbeddingService.search."""

    def test_search_should_find_ingested_article(
        self, embedding_service: EmbeddingService, sample_article: str
    ) -> None:
        """Test a query sharing words with the article finds it."""
        # Arrange
        embedding_service.ingest_article(IngestRequest(content=sample_article, title="Energy"))

        # Act
        response = embedding_service.search(
            SearchRequest(query="solar power photovoltaic panels", threshold=0.0)
        )

        # Assert
        assert response.success is True
        assert response.total_results == len(response.results) > 0
        assert response.results[0].metadata.title == "Energy"

    def test_high_threshold_should_return_no_results(
        self, embedding_service: EmbeddingService, sample_article: str
    ) -> None:
        """Test an unrelated query at 0.99 returns nothing."""
        # Arrange
        embedding_service.ingest_article(IngestRequest(content=sample_article, title="Energy"))

        # Act
        response = embedding_service.search(
            SearchRequest(query="medieval castle architecture", threshold=0.99)
        )

        # Assert
        assert response.success is True
        assert response.results == []
        assert response.total_results == 0

    def test_blank_query_should_raise_validation_error(
        self, embedding_service: EmbeddingService
    ) -> None:
        """Test blank queries are rejected before embedding."""
        with pytest.raises(ValidationError):
            embedding_service.search(SearchRequest(query="   "))

    def test_failure_should_degrade_to_unsuccessful_response(
        self, vector_store: VectorStore
    ) -> None:
        """Test a failing query embedding returns success=False."""
        # Arrange
        provider = MagicMock()
        provider.embed_query.side_effect = RuntimeError("timeout")
        embedder = ArticleEmbedder(provider=provider, pacer=NoPacer())
        service = EmbeddingService(
            chunker=ArticleChunker(),
            embedder=embedder,
            vector_store=VectorStore(collection=vector_store.collection, embedder=embedder),
        )

        # Act
        response = service.search(SearchRequest(query="anything"))

        # Assert
        assert response.success is False
        assert response.results == []
        assert "timeout" in response.error

    def test_malformed_stored_document_should_degrade(
        self,
        embedding_service: EmbeddingService,
        memory_collection,
        sample_article: str,
    ) -> None:
        """Test a foreign document in the collection yields success=False."""
        # Arrange
        embedding_service.ingest_article(IngestRequest(content=sample_article, title="Energy"))
        memory_collection.set("foreign", {"id": "foreign", "content": "x"})

        # Act
        response = embedding_service.search(SearchRequest(query="solar power", threshold=-1))

        # Assert
        assert response.success is False
        assert response.results == []
        assert "foreign" in response.error

    def test_unexpected_error_should_degrade(self, embedder: ArticleEmbedder) -> None:
        """Test non-domain failures are also reported instead of raised."""
        # Arrange
        store = MagicMock()
        store.search_by_text.side_effect = KeyError("vector")
        service = EmbeddingService(chunker=ArticleChunker(), embedder=embedder, vector_store=store)

        # Act
        response = service.search(SearchRequest(query="anything"))

        # Assert
        assert response.success is False
        assert response.total_results == 0
        assert "vector" in response.error

    def test_defaults_should_apply_when_request_omits_them(
        self, embedder: ArticleEmbedder
    ) -> None:
        """Test the default limit applies and an explicit zero threshold is kept."""
        # Arrange
        store = MagicMock()
        store.search_by_text.return_value = []
        service = EmbeddingService(
            chunker=ArticleChunker(),
            embedder=embedder,
            vector_store=store,
            default_limit=7,
            default_threshold=0.42,
        )

        # Act
        service.search(SearchRequest(query="q", threshold=0))

        # Assert
        options = store.search_by_text.call_args.args[1]
        assert options.limit == 7
        assert options.threshold == 0


class TestManagement:
    """Test suite for management operations and helpers."""

    def test_delete_by_title_should_report_count(
        self, embedding_service: EmbeddingService, sample_article: str
    ) -> None:
        """Test deleting an article reports the removed records."""
        # Arrange
        ingested = embedding_service.ingest_article(
            IngestRequest(content=sample_article, title="Energy")
        )

        # Act
        result = embedding_service.delete_by_title("Energy")

        # Assert
        assert result.deleted_count == ingested.embeddings_count
        assert embedding_service.get_article("Energy") == []

    def test_delete_by_id_missing_should_raise(self, embedding_service: EmbeddingService) -> None:
        """Test deleting an unknown id raises NotFoundError."""
        with pytest.raises(NotFoundError):
            embedding_service.delete_by_id("missing-chunk-0")

    def test_process_article_from_source_should_report_failure(
        self, embedding_service: EmbeddingService
    ) -> None:
        """Test the helper returns an error instead of raising."""
        # Act
        outcome = embedding_service.process_article_from_source("tiny", title="T")

        # Assert
        assert outcome["success"] is False
        assert outcome["embeddings_count"] == 0
        assert "100 characters" in outcome["error"]

    def test_search_similar_content_should_flatten_results(
        self, embedding_service: EmbeddingService, sample_article: str
    ) -> None:
        """Test results are reduced to title, content and similarity."""
        # Arrange
        embedding_service.process_article_from_source(sample_article, title="Energy")

        # Act
        outcome = embedding_service.search_similar_content(
            "wind turbines", threshold=0.0, filters={"title": "Energy"}
        )

        # Assert
        assert outcome["success"] is True
        assert outcome["results"]
        assert set(outcome["results"][0]) == {"title", "content", "similarity", "metadata"}

    def test_get_embedding_summary_should_wrap_stats(
        self, embedding_service: EmbeddingService
    ) -> None:
        """Test summary carries the statistics."""
        summary = embedding_service.get_embedding_summary()
        assert summary == {
            "success": True,
            "stats": {
                "total_embeddings": 0,
                "unique_articles": 0,
                "average_chunks_per_article": 0,
            },
        }

    def test_cleanup_without_title_should_delete_nothing(
        self, embedding_service: EmbeddingService
    ) -> None:
        """Test cleanup needs a title to act."""
        assert embedding_service.cleanup_embeddings() == {"success": True, "deleted_count": 0}


class TestValidateEnvironment:
    """Test suite for validate_environment."""

    def test_missing_google_key_should_be_reported(self, monkeypatch) -> None:
        """Test the Gemini provider needs an API key."""
        # Arrange
        monkeypatch.delenv("GOOGLE_API_KEY", raising=False)
        settings = Settings(
            chunking=ChunkingSettings(),
            embedding=EmbeddingSettings(provider="google", google_api_key=None),
            vector_store=VectorStoreSettings(backend="memory"),
            database=DatabaseSettings(),
        )

        # Act
        outcome = validate_environment(settings)

        # Assert
        assert outcome == {"is_valid": False, "missing_vars": ["EMBEDDING_GOOGLE_API_KEY"]}

    def test_bedrock_with_memory_backend_should_be_valid(self) -> None:
        """Test Bedrock needs only a region."""
        settings = Settings(
            embedding=EmbeddingSettings(provider="bedrock", aws_region="eu-west-1"),
            vector_store=VectorStoreSettings(backend="memory"),
        )
        assert validate_environment(settings) == {"is_valid": True, "missing_vars": []}

    def test_sql_backend_without_database_location_should_be_reported(self, monkeypatch) -> None:
        """Test the default localhost host does not count as configured."""
        # Arrange
        monkeypatch.delenv("DATABASE_URL", raising=False)
        monkeypatch.delenv("DATABASE_HOST", raising=False)
        settings = Settings(
            embedding=EmbeddingSettings(provider="bedrock", aws_region="eu-west-1"),
            vector_store=VectorStoreSettings(backend="sql"),
            database=DatabaseSettings(),
        )

        # Act
        outcome = validate_environment(settings)

        # Assert
        assert outcome == {"is_valid": False, "missing_vars": ["DATABASE_URL"]}

    def test_sql_backend_with_host_from_env_should_be_valid(self, monkeypatch) -> None:
        """Test an explicitly configured host satisfies the SQL backend."""
        # Arrange
        monkeypatch.delenv("DATABASE_URL", raising=False)
        monkeypatch.setenv("DATABASE_HOST", "db.internal")
        settings = Settings(
            embedding=EmbeddingSettings(provider="bedrock", aws_region="eu-west-1"),
            vector_store=VectorStoreSettings(backend="sql"),
            database=DatabaseSettings(),
        )

        # Act / Assert
        assert validate_environment(settings) == {"is_valid": True, "missing_vars": []}
