"""
Shared test fixtures and configuration for entire test suite.

Provides: deterministic fake embeddings, in-memory and SQLite collections,
embedder/store/service wiring, sample articles
Dependencies: pytest, sqlalchemy, langchain_core
System role: Test infrastructure and fixture management
"""

import hashlib
import re

import pytest
from langchain_core.embeddings import Embeddings

from article_index.application.embedder import ArticleEmbedder
from article_index.application.embedding_service import EmbeddingService
from article_index.application.vector_store import VectorStore
from article_index.boundary.collection.memory_collection import InMemoryCollection
from article_index.core.chunker import ArticleChunker
from article_index.core.pacing import NoPacer
from article_index.models.chunk import ChunkMetadata
from article_index.models.vector_record import VectorRecord

DIMENSION = 16


class KeywordEmbeddings(Embeddings):
    """
    Deterministic bag-of-words embeddings.

    Each word is hashed into one of `dimension` buckets, so texts sharing
    words point in similar directions and identical texts are identical.
    """

    def __init__(self, dimension: int = DIMENSION):
        self.dimension = dimension
        self.document_calls: list[list[str]] = []
        self.query_calls: list[str] = []

    def _vector(self, text: str) -> list[float]:
        vector = [0.0] * self.dimension
        for word in re.findall(r"\w+", text.lower()):
            bucket = int(hashlib.md5(word.encode()).hexdigest(), 16) % self.dimension
            vector[bucket] += 1.0
        return vector

    def embed_documents(self, texts: list[str]) -> list[list[float]]:
        self.document_calls.append(list(texts))
        return [self._vector(text) for text in texts]

    def embed_query(self, text: str) -> list[float]:
        self.query_calls.append(text)
        return self._vector(text)


def make_record(
    record_id: str,
    vector: list[float],
    title: str = "Article",
    chunk_index: int = 0,
    total_chunks: int = 1,
    author: str | None = None,
    content: str = "content",
) -> VectorRecord:
    """Build a vector record with chunk metadata."""
    return VectorRecord(
        id=record_id,
        vector=vector,
        content=content,
        metadata=ChunkMetadata(
            title=title,
            author=author,
            chunk_index=chunk_index,
            total_chunks=total_chunks,
        ),
    )


@pytest.fixture
def fake_provider() -> KeywordEmbeddings:
    """Provide deterministic fake embeddings provider."""
    return KeywordEmbeddings()


@pytest.fixture
def memory_collection() -> InMemoryCollection:
    """Provide empty in-memory document collection."""
    return InMemoryCollection(name="test_embeddings")


@pytest.fixture
def sqlite_engine():
    """
    Create in-memory SQLite engine shared across connections.

    Yields:
        Engine: SQLite engine using StaticPool
    """
    from sqlalchemy import create_engine
    from sqlalchemy.pool import StaticPool

    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    yield engine
    engine.dispose()


@pytest.fixture
def embedder(fake_provider: KeywordEmbeddings) -> ArticleEmbedder:
    """Provide embedder without pacing delays."""
    return ArticleEmbedder(
        provider=fake_provider,
        batch_size=10,
        pacer=NoPacer(),
        expected_dimension=DIMENSION,
    )


@pytest.fixture
def vector_store(memory_collection: InMemoryCollection, embedder: ArticleEmbedder) -> VectorStore:
    """Provide vector store over the in-memory collection."""
    return VectorStore(collection=memory_collection, embedder=embedder)


@pytest.fixture
def embedding_service(embedder: ArticleEmbedder, vector_store: VectorStore) -> EmbeddingService:
    """Provide embedding service with default chunking."""
    return EmbeddingService(
        chunker=ArticleChunker(),
        embedder=embedder,
        vector_store=vector_store,
    )


@pytest.fixture
def sample_article() -> str:
    """Provide a multi-paragraph article of roughly 2300 characters."""
    paragraphs = [
        "Solar power converts sunlight into electricity using photovoltaic panels. " * 6,
        "Wind turbines capture kinetic energy from moving air in open landscapes. " * 6,
        "Battery storage smooths the supply when the sun sets and the wind drops. " * 6,
        "Grid operators balance demand across regions with long distance lines. " * 6,
        "Policy incentives shape how quickly households adopt rooftop systems. " * 6,
    ]
    return "\n\n".join(paragraph.strip() for paragraph in paragraphs)


@pytest.fixture
def record_factory():
    """Provide the vector record builder."""
    return make_record
