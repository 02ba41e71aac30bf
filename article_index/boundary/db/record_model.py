"""
Vector record ORM model.

Stores each collection document as JSON, with the article title and chunk
index copied into indexed columns for equality lookups and ordering.

Dependencies: sqlalchemy, article_index.boundary.db.base
System role: Persistent row layout for the SQL document collection
"""

from sqlalchemy import Index, Integer, JSON, String
from sqlalchemy.orm import Mapped, mapped_column

from article_index.boundary.db.base import Base, TimestampMixin


class VectorRecordModel(Base, TimestampMixin):
    """
    One document of a named collection.

    Attributes:
        collection: Collection name (several collections may share the table)
        id: Document id, unique within its collection
        title: Copy of document["metadata"]["title"] for indexed lookups
        chunk_index: Copy of document["metadata"]["chunk_index"] for ordering
        document: Full document body (vector, content, metadata, timestamps)
        created_at: Row creation timestamp (UTC)
        updated_at: Last modification timestamp (UTC)
    """

    __tablename__ = "vector_records"
    __table_args__ = (Index("ix_vector_records_collection_title", "collection", "title"),)

    collection: Mapped[str] = mapped_column(String(128), primary_key=True)
    id: Mapped[str] = mapped_column(String(512), primary_key=True)

    title: Mapped[str | None] = mapped_column(
        String(1024),
        nullable=True,
        doc="Article title copied from metadata",
    )
    chunk_index: Mapped[int | None] = mapped_column(
        Integer,
        nullable=True,
        doc="Chunk position copied from metadata",
    )
    document: Mapped[dict] = mapped_column(
        JSON,
        nullable=False,
        default=dict,
        doc="Document body",
    )
