"""
Database boundary layer: ORM model and connection management.

Exports:
  - Base, TimestampMixin: Model building blocks
  - VectorRecordModel: Row layout for collection documents
  - get_engine(), get_session_factory(), create_tables(): Connection management

Dependencies: sqlalchemy, article_index.configs
System role: Database adapter backing the SQL document collection
"""

from article_index.boundary.db.base import Base, TimestampMixin
from article_index.boundary.db.connection import create_tables, get_engine, get_session_factory
from article_index.boundary.db.record_model import VectorRecordModel

__all__ = [
    "Base",
    "TimestampMixin",
    "VectorRecordModel",
    "create_tables",
    "get_engine",
    "get_session_factory",
]
