"""
Cosine similarity and ranking strategies.

Provides the cosine similarity primitive and the strategy used by the
vector store to rank records against a query vector.

Dependencies: numpy, article_index.models
System role: Similarity scoring and result ranking
"""

from typing import Iterable, Protocol, Sequence

import numpy as np

from article_index.core.exceptions import DimensionMismatchError
from article_index.models.vector_record import SearchOptions, SearchResult, VectorRecord


def cosine_similarity(a: Sequence[float], b: Sequence[float]) -> float:
    """
    Compute cosine similarity between two vectors.

    Args:
        a: First vector
        b: Second vector

    Returns:
        float: dot(a, b) / (|a| * |b|), or 0.0 when either vector has zero norm

    Raises:
        DimensionMismatchError: When the vectors differ in length
    """
    if len(a) != len(b):
        raise DimensionMismatchError(expected=len(a), actual=len(b))

    vec_a = np.asarray(a, dtype=float)
    vec_b = np.asarray(b, dtype=float)
    denominator = np.linalg.norm(vec_a) * np.linalg.norm(vec_b)
    if denominator == 0:
        return 0.0
    return float(np.dot(vec_a, vec_b) / denominator)


class SimilarityStrategy(Protocol):
    """Ranks stored records against a query vector."""

    def rank(
        self,
        query_vector: Sequence[float],
        records: Iterable[VectorRecord],
        options: SearchOptions,
    ) -> list[SearchResult]:
        """Return at most options.limit results, best first."""
        ...


class BruteForceSimilarity:
    """
    Exhaustive scan scoring every record.

    O(N) per query with no secondary index; suited to corpora in the low
    thousands of records.
    """

    def rank(
        self,
        query_vector: Sequence[float],
        records: Iterable[VectorRecord],
        options: SearchOptions,
    ) -> list[SearchResult]:
        """
        Filter, score and order records.

        Args:
            query_vector: Query embedding
            records: Candidate records (typically a full collection scan)
            options: Limit, threshold and metadata filters

        Returns:
            list[SearchResult]: Results with similarity >= threshold, descending

        Raises:
            DimensionMismatchError: When a record's vector length differs from the query
        """
        results: list[SearchResult] = []

        for record in records:
            if options.filters:
                metadata = record.metadata.model_dump()
                if not all(predicate.matches(metadata) for predicate in options.filters):
                    continue

            similarity = cosine_similarity(query_vector, record.vector)
            if similarity >= options.threshold:
                results.append(
                    SearchResult(
                        id=record.id,
                        content=record.content,
                        metadata=record.metadata,
                        similarity=similarity,
                        distance=1 - similarity,
                    )
                )

        results.sort(key=lambda result: result.similarity, reverse=True)
        return results[: options.limit]
