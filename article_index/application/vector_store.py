"""
Vector store over a document collection.

Persists, retrieves and deletes vector records and answers similarity
queries by ranking every stored record against a query vector.

Writes use field-level merge: optional metadata left unset on an incoming
record keeps the value already stored, and created_at is written only
when a record is first created. Each upsert_many / delete_by_title
call is one collection transaction.

Dependencies: article_index.boundary.collection, article_index.core
System role: Vector persistence and similarity search
"""

import logging
from datetime import datetime, timezone
from typing import Any, Callable, Mapping, Sequence, TypeVar

from pydantic import ValidationError as SchemaError

from article_index.application.embedder import ArticleEmbedder
from article_index.boundary.collection.base import DocumentCollection, DocumentNotFound
from article_index.core.exceptions import (
    ArticleIndexError,
    DimensionMismatchError,
    ExternalServiceError,
    NotFoundError,
)
from article_index.core.similarity import BruteForceSimilarity, SimilarityStrategy
from article_index.models.article import EmbeddingStats
from article_index.models.vector_record import SearchOptions, SearchResult, VectorRecord

logger = logging.getLogger(__name__)

STORE = "document_store"
IMMUTABLE_FIELDS = ("created_at",)
TITLE_PATH = "metadata.title"
CHUNK_INDEX_PATH = "metadata.chunk_index"

T = TypeVar("T")


class VectorStore:
    """
    Vector record storage with brute-force similarity search.

    The ranking strategy is pluggable; the default scans every record.
    """

    def __init__(
        self,
        collection: DocumentCollection,
        embedder: ArticleEmbedder | None = None,
        strategy: SimilarityStrategy | None = None,
        expected_dimension: int | None = None,
    ) -> None:
        """
        Initialize vector store.

        Args:
            collection: Document collection holding the records
            embedder: Embedder used by search_by_text
            strategy: Ranking strategy (BruteForceSimilarity if None)
            expected_dimension: Required vector length for writes, unchecked if None
        """
        self._collection = collection
        self._embedder = embedder
        self._strategy = strategy or BruteForceSimilarity()
        self._expected_dimension = expected_dimension or (
            embedder.expected_dimension if embedder else None
        )

    @property
    def collection(self) -> DocumentCollection:
        """Underlying document collection."""
        return self._collection

    def upsert_many(self, records: Sequence[VectorRecord]) -> int:
        """
        Write records in one batched transaction.

        Args:
            records: Records to create or merge into existing ones

        Returns:
            int: Number of records written

        Raises:
            DimensionMismatchError: When a vector has the wrong length
            ExternalServiceError: When the collection write fails
        """
        if not records:
            return 0

        for record in records:
            self._check_dimension(record)

        documents = [(record.id, self._to_document(record)) for record in records]
        written = self._call(
            "upsert",
            lambda: self._collection.batch_set(documents, merge=True, preserve=IMMUTABLE_FIELDS),
        )
        logger.info(f"{__name__}:upsert_many - Upserted {written} embeddings")
        return written

    def upsert_one(self, record: VectorRecord) -> None:
        """
        Write a single record with merge semantics.

        Raises:
            DimensionMismatchError: When the vector has the wrong length
            ExternalServiceError: When the collection write fails
        """
        self._check_dimension(record)
        self._call(
            "upsert",
            lambda: self._collection.set(
                record.id, self._to_document(record), preserve=IMMUTABLE_FIELDS
            ),
        )
        logger.info(f"{__name__}:upsert_one - Upserted embedding {record.id}")

    def update(self, record: VectorRecord) -> None:
        """
        Merge a record into an existing one.

        Raises:
            NotFoundError: When no record has this id
            ExternalServiceError: When the collection write fails
        """
        self._check_dimension(record)
        document = self._to_document(record)
        for field in IMMUTABLE_FIELDS:
            document.pop(field, None)
        try:
            self._call("update", lambda: self._collection.update(record.id, document))
        except DocumentNotFound as e:
            raise NotFoundError("embedding", record.id) from e
        logger.info(f"{__name__}:update - Updated embedding {record.id}")

    def get(self, record_id: str) -> VectorRecord | None:
        """Return a record by id, or None."""
        document = self._call("get", lambda: self._collection.get(record_id))
        return self._parse(document) if document is not None else None

    def get_by_title(self, title: str) -> list[VectorRecord]:
        """
        Return every record of an article, ascending by chunk index.

        Returns an empty list when the title is unknown.
        """
        documents = self._call(
            "query",
            lambda: self._collection.where(TITLE_PATH, title, order_by=CHUNK_INDEX_PATH),
        )
        return [self._parse(doc) for doc in documents]

    def delete_by_title(self, title: str, missing_ok: bool = False) -> int:
        """
        Delete every record whose metadata title equals title, in one transaction.

        Args:
            title: Article title
            missing_ok: Return 0 instead of raising when nothing matches

        Returns:
            int: Number of records deleted

        Raises:
            NotFoundError: When no record matches and missing_ok is False
        """
        documents = self._call("query", lambda: self._collection.where(TITLE_PATH, title))
        if not documents:
            if missing_ok:
                return 0
            raise NotFoundError("article", title)

        ids = [doc["id"] for doc in documents]
        deleted = self._call("delete", lambda: self._collection.batch_delete(ids))
        logger.info(f"{__name__}:delete_by_title - Deleted {deleted} embeddings for article: {title}")
        return deleted

    def delete_by_id(self, record_id: str) -> None:
        """
        Delete a single record.

        Raises:
            NotFoundError: When no record has this id (store unchanged)
        """
        deleted = self._call("delete", lambda: self._collection.delete(record_id))
        if not deleted:
            raise NotFoundError("embedding", record_id)
        logger.info(f"{__name__}:delete_by_id - Deleted embedding {record_id}")

    def stats(self) -> EmbeddingStats:
        """Aggregate counts from a full scan."""
        documents = self._call("query", self._collection.stream)

        titles = {doc.get("metadata", {}).get("title") for doc in documents}
        total = len(documents)
        unique = len(titles)
        return EmbeddingStats(
            total_embeddings=total,
            unique_articles=unique,
            average_chunks_per_article=total / unique if unique else 0,
        )

    def search(
        self,
        query_vector: Sequence[float],
        options: SearchOptions | None = None,
    ) -> list[SearchResult]:
        """
        Rank stored records against a query vector.

        Args:
            query_vector: Query embedding
            options: Limit, threshold and metadata filters (defaults if None)

        Returns:
            list[SearchResult]: At most options.limit results, best first

        Raises:
            DimensionMismatchError: When stored vectors differ in length from the query
            ExternalServiceError: When the collection scan fails or a stored
                document is not a valid record
        """
        options = options or SearchOptions()
        documents = self._call("query", self._collection.stream)
        if not documents:
            return []

        records = [self._parse(doc) for doc in documents]
        results = self._strategy.rank(query_vector, records, options)

        logger.info(
            f"{__name__}:search - Found {len(results)} results",
            extra={"scanned": len(documents), "threshold": options.threshold},
        )
        return results

    def search_by_text(self, text: str, options: SearchOptions | None = None) -> list[SearchResult]:
        """
        Embed text with the embedder, then search.

        Raises:
            RuntimeError: When the store was built without an embedder
        """
        if self._embedder is None:
            raise RuntimeError("search_by_text requires an embedder")
        return self.search(self._embedder.embed_query(text), options)

    def _to_document(self, record: VectorRecord) -> dict[str, Any]:
        document = record.to_document()
        document["updated_at"] = datetime.now(timezone.utc).isoformat()
        return document

    def _parse(self, document: Mapping[str, Any]) -> VectorRecord:
        try:
            return VectorRecord.from_document(document)
        except SchemaError as e:
            doc_id = document.get("id")
            logger.error(f"{__name__}:_parse - Malformed stored record {doc_id}: {e.error_count()} errors")
            raise ExternalServiceError(
                f"Malformed stored record: {doc_id}",
                service=STORE,
                operation="read",
                details={"id": doc_id},
            ) from e

    def _check_dimension(self, record: VectorRecord) -> None:
        if self._expected_dimension is not None and len(record.vector) != self._expected_dimension:
            raise DimensionMismatchError(
                expected=self._expected_dimension,
                actual=len(record.vector),
                details={"id": record.id},
            )

    def _call(self, operation: str, func: Callable[[], T]) -> T:
        """Run a collection call, wrapping backend failures."""
        try:
            return func()
        except (ArticleIndexError, DocumentNotFound):
            raise
        except Exception as e:
            logger.error(f"{__name__}:{operation} - {type(e).__name__}: {e}")
            raise ExternalServiceError(
                f"Failed to {operation} embeddings: {e}",
                service=STORE,
                operation=operation,
            ) from e
