"""
Batched embedding generator.

Converts article chunks into vector records by submitting them to the
embedding provider in fixed-size batches, one batch at a time, with a
pacing policy between batches.

Dependencies: langchain_core, tenacity, article_index.core
System role: Embedding generation adapter
"""

import logging
import math
from datetime import datetime, timezone
from typing import Sequence

from langchain_core.embeddings import Embeddings
from tenacity import (
    Retrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential_jitter,
)
from tenacity.wait import wait_base

from article_index.core.exceptions import DimensionMismatchError, ExternalServiceError
from article_index.core.pacing import BatchPacer, FixedDelayPacer
from article_index.core.similarity import cosine_similarity
from article_index.models.chunk import Chunk
from article_index.models.vector_record import VectorRecord
from article_index.observability.log_utils import log_exception_with_context

logger = logging.getLogger(__name__)

PROVIDER = "embedding_provider"


class ArticleEmbedder:
    """Embedding generator over a LangChain embeddings provider."""

    cosine_similarity = staticmethod(cosine_similarity)

    def __init__(
        self,
        provider: Embeddings,
        batch_size: int = 10,
        pacer: BatchPacer | None = None,
        retry_attempts: int = 1,
        expected_dimension: int | None = None,
        retry_wait: wait_base | None = None,
    ) -> None:
        """
        Initialize embedder.

        Args:
            provider: Embeddings client, constructed once and shared
            batch_size: Chunks per provider call
            pacer: Policy applied between batches (100 ms fixed delay if None)
            retry_attempts: Attempts per batch before giving up
            expected_dimension: Required vector length, unchecked if None
            retry_wait: Tenacity wait between attempts (exponential with jitter if None)
        """
        if batch_size < 1:
            raise ValueError("batch_size must be at least 1")
        if retry_attempts < 1:
            raise ValueError("retry_attempts must be at least 1")

        self._provider = provider
        self._batch_size = batch_size
        self._pacer = pacer or FixedDelayPacer(delay_seconds=0.1)
        self._retry_attempts = retry_attempts
        self._expected_dimension = expected_dimension
        self._retry_wait = retry_wait or wait_exponential_jitter(initial=1, max=30, jitter=1)

    @property
    def expected_dimension(self) -> int | None:
        """Vector length every generated embedding must have."""
        return self._expected_dimension

    def generate_embeddings(self, chunks: Sequence[Chunk]) -> list[VectorRecord]:
        """
        Generate vector records for chunks without persisting them.

        Batches are submitted sequentially. A failing batch aborts the
        remaining chunks; nothing has been persisted at that point, and the
        error details report how many records earlier batches completed.

        Args:
            chunks: Chunks in document order

        Returns:
            list[VectorRecord]: One record per chunk, same order

        Raises:
            ExternalServiceError: When the provider fails or returns malformed output
            DimensionMismatchError: When a vector has an unexpected length
        """
        records: list[VectorRecord] = []

        for start in range(0, len(chunks), self._batch_size):
            if start > 0:
                self._pacer.wait()

            batch = chunks[start : start + self._batch_size]
            end = start + len(batch)
            vectors = self._embed_batch([chunk.content for chunk in batch], start, end)

            created_at = datetime.now(timezone.utc)
            records.extend(
                VectorRecord(
                    id=chunk.id,
                    vector=vector,
                    content=chunk.content,
                    metadata=chunk.metadata,
                    created_at=created_at,
                )
                for chunk, vector in zip(batch, vectors)
            )

        logger.info(
            f"{__name__}:generate_embeddings - Generated {len(records)} embeddings",
            extra={"batches": math.ceil(len(chunks) / self._batch_size)},
        )
        return records

    def embed_query(self, text: str) -> list[float]:
        """
        Generate embedding for query text.

        Args:
            text: Query text

        Returns:
            list[float]: Query embedding vector

        Raises:
            ExternalServiceError: When the provider call fails
            DimensionMismatchError: When the vector has an unexpected length
        """
        try:
            vector = self._call_with_retry(self._provider.embed_query, text)
        except Exception as e:
            log_exception_with_context(logger, "Query embedding failed", e)
            raise ExternalServiceError(
                f"Failed to embed query: {e}",
                service=PROVIDER,
                operation="embed_query",
            ) from e

        vector = list(vector)
        self._check_dimension(vector)
        return vector

    def _embed_batch(self, texts: list[str], start: int, end: int) -> list[list[float]]:
        try:
            vectors = self._call_with_retry(self._provider.embed_documents, texts)
        except Exception as e:
            log_exception_with_context(
                logger,
                "Embedding batch failed",
                e,
                batch_start=start,
                batch_end=end,
            )
            raise ExternalServiceError(
                f"Failed to generate embeddings: {e}",
                service=PROVIDER,
                operation="embed_documents",
                details={"batch_start": start, "batch_end": end, "completed_records": start},
            ) from e

        if len(vectors) != len(texts):
            raise ExternalServiceError(
                f"Provider returned {len(vectors)} vectors for {len(texts)} inputs",
                service=PROVIDER,
                operation="embed_documents",
                details={"batch_start": start, "batch_end": end},
            )

        vectors = [list(vector) for vector in vectors]
        for vector in vectors:
            self._check_dimension(vector, reference=len(vectors[0]))
        return vectors

    def _call_with_retry(self, func, *args):
        """Invoke a provider call, retrying transient failures with backoff."""
        if self._retry_attempts == 1:
            return func(*args)

        retrying = Retrying(
            retry=retry_if_exception_type(Exception),
            stop=stop_after_attempt(self._retry_attempts),
            wait=self._retry_wait,
            before_sleep=lambda retry_state: logger.warning(
                f"{__name__}:_call_with_retry - Retry "
                f"{retry_state.attempt_number}/{self._retry_attempts} after provider error"
            ),
            reraise=True,
        )
        return retrying(func, *args)

    def _check_dimension(self, vector: list[float], reference: int | None = None) -> None:
        expected = self._expected_dimension or reference
        if expected is not None and len(vector) != expected:
            raise DimensionMismatchError(expected=expected, actual=len(vector))

