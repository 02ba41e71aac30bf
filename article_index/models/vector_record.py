"""
Vector record and search schemas.

Pydantic models for persisted embeddings, search options, metadata
filters and ranked search results.

Dependencies: pydantic
System role: Type definitions for vector operations
"""

import enum
from datetime import datetime, timezone
from typing import Any, Mapping

from pydantic import BaseModel, Field

from article_index.models.chunk import ChunkMetadata


class VectorRecord(BaseModel):
    """
    Persisted embedding with its originating text and provenance.

    The id equals the id of the chunk the vector was generated from.
    """

    id: str = Field(description="Chunk identifier")
    vector: list[float] = Field(description="Embedding vector")
    content: str = Field(description="Chunk text content")
    metadata: ChunkMetadata = Field(description="Chunk metadata")
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Creation timestamp (UTC)",
    )
    updated_at: datetime | None = Field(default=None, description="Last write timestamp (UTC)")

    def to_document(self) -> dict[str, Any]:
        """
        Serialize for the document collection.

        Unset optional fields are omitted so a merge write keeps the values
        already stored for them.
        """
        return self.model_dump(mode="json", exclude_none=True)

    @classmethod
    def from_document(cls, document: Mapping[str, Any]) -> "VectorRecord":
        """Rebuild a record from a stored document."""
        return cls.model_validate(dict(document))


class FilterOperator(str, enum.Enum):
    """Comparison applied by a metadata filter."""

    EQ = "eq"


class MetadataFilter(BaseModel):
    """Single predicate over one metadata field."""

    field: str = Field(description="Metadata field name (e.g. title, author)")
    value: Any = Field(description="Value the field is compared against")
    operator: FilterOperator = Field(default=FilterOperator.EQ)

    @property
    def key(self) -> str:
        """Metadata key, accepting an optional 'metadata.' path prefix."""
        return self.field.removeprefix("metadata.")

    def matches(self, metadata: Mapping[str, Any]) -> bool:
        """Check the predicate against a record's metadata."""
        if self.operator is FilterOperator.EQ:
            return metadata.get(self.key) == self.value
        raise ValueError(f"Unsupported filter operator: {self.operator}")


def filters_from_mapping(filters: Mapping[str, Any] | None) -> list[MetadataFilter]:
    """Build equality predicates from a plain field -> value mapping."""
    if not filters:
        return []
    return [MetadataFilter(field=key, value=value) for key, value in filters.items()]


class SearchOptions(BaseModel):
    """Parameters for a similarity search."""

    limit: int = Field(default=10, description="Maximum number of results", ge=1)
    threshold: float = Field(
        default=0.7,
        description="Minimum cosine similarity; values outside [-1, 1] are allowed",
    )
    filters: list[MetadataFilter] = Field(
        default_factory=list,
        description="Metadata predicates combined with logical AND",
    )


class SearchResult(BaseModel):
    """Single result from a similarity search."""

    id: str = Field(description="Record identifier")
    content: str = Field(description="Chunk text content")
    metadata: ChunkMetadata = Field(description="Chunk metadata")
    similarity: float = Field(description="Cosine similarity to the query vector")
    distance: float | None = Field(default=None, description="1 - similarity")
