"""
Document collection boundary layer.

Storage backends for vector records:
- InMemoryCollection: development and test collection
- SQLCollection: SQLAlchemy-backed persistent collection

Dependencies: sqlalchemy
System role: Document store adapter for the vector store
"""

from article_index.boundary.collection.base import (
    DocumentCollection,
    DocumentNotFound,
    merge_documents,
)
from article_index.boundary.collection.memory_collection import InMemoryCollection
from article_index.boundary.collection.sql_collection import SQLCollection

__all__ = [
    "DocumentCollection",
    "DocumentNotFound",
    "InMemoryCollection",
    "SQLCollection",
    "merge_documents",
]
