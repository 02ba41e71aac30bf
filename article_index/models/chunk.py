"""
Chunk domain model.

Represents one overlapping fragment of an article with its position
among sibling fragments and the article's provenance metadata.

Dependencies: pydantic
System role: Article chunk data structure
"""

from typing import Self

from pydantic import BaseModel, Field, model_validator


class ArticleMetadata(BaseModel):
    """Provenance metadata supplied with an article."""

    title: str = Field(description="Article title")
    author: str | None = Field(default=None, description="Article author")
    url: str | None = Field(default=None, description="Source URL")
    published_date: str | None = Field(default=None, description="Publication date as given")


class ChunkMetadata(ArticleMetadata):
    """Article metadata plus the chunk's position within the article."""

    chunk_index: int = Field(description="Zero-based position of the chunk", ge=0)
    total_chunks: int = Field(description="Number of chunks produced for the article", ge=1)

    @model_validator(mode="after")
    def _index_within_total(self) -> Self:
        if self.chunk_index >= self.total_chunks:
            raise ValueError(
                f"chunk_index {self.chunk_index} must be below total_chunks {self.total_chunks}"
            )
        return self


class Chunk(BaseModel):
    """Article chunk model."""

    id: str = Field(description="Deterministic chunk identifier")
    content: str = Field(description="Chunk text content")
    metadata: ChunkMetadata = Field(description="Provenance and position metadata")
