"""
SQL document collection.

Persists collection documents through SQLAlchemy. Each batch write or
delete runs in a single transaction; merges are computed inside that
transaction. Equality lookups on metadata.title and ordering on
metadata.chunk_index use indexed columns; other field paths fall back to
filtering the collection scan.

Dependencies: sqlalchemy, article_index.boundary.db
System role: Persistent document store for vector records
"""

import logging
from typing import Any, Iterable

from sqlalchemy import Engine, delete, select

from article_index.boundary.collection.base import (
    Document,
    DocumentNotFound,
    get_path,
    merge_documents,
    sort_by_path,
)
from article_index.boundary.db import VectorRecordModel, create_tables, get_session_factory

logger = logging.getLogger(__name__)

TITLE_PATH = "metadata.title"
CHUNK_INDEX_PATH = "metadata.chunk_index"


class SQLCollection:
    """Document collection stored in the vector_records table."""

    def __init__(
        self,
        engine: Engine,
        name: str = "article_embeddings",
        create_schema: bool = True,
    ) -> None:
        """
        Initialize SQL collection.

        Args:
            engine: SQLAlchemy engine
            name: Collection name stored on every row
            create_schema: Create the table if it does not exist
        """
        self.name = name
        self._engine = engine
        self._session_factory = get_session_factory(engine)
        if create_schema:
            create_tables(engine)

    def batch_set(
        self,
        documents: Iterable[tuple[str, Document]],
        merge: bool = True,
        preserve: Iterable[str] = (),
    ) -> int:
        staged = list(documents)
        if not staged:
            return 0
        preserve = tuple(preserve)

        with self._session_factory.begin() as session:
            for doc_id, document in staged:
                row = session.get(VectorRecordModel, (self.name, doc_id))
                if row is None:
                    session.add(self._new_row(doc_id, document))
                else:
                    body = (
                        merge_documents(row.document, document, preserve)
                        if merge
                        else dict(document)
                    )
                    self._apply(row, body)

        logger.debug(f"{__name__}:batch_set - Wrote {len(staged)} documents to {self.name}")
        return len(staged)

    def set(
        self,
        doc_id: str,
        document: Document,
        merge: bool = True,
        preserve: Iterable[str] = (),
    ) -> None:
        self.batch_set([(doc_id, document)], merge=merge, preserve=preserve)

    def update(self, doc_id: str, document: Document) -> None:
        with self._session_factory.begin() as session:
            row = session.get(VectorRecordModel, (self.name, doc_id))
            if row is None:
                raise DocumentNotFound(doc_id)
            self._apply(row, merge_documents(row.document, document))

    def get(self, doc_id: str) -> Document | None:
        with self._session_factory() as session:
            row = session.get(VectorRecordModel, (self.name, doc_id))
            return dict(row.document) if row is not None else None

    def stream(self) -> list[Document]:
        with self._session_factory() as session:
            rows = session.scalars(
                select(VectorRecordModel).where(VectorRecordModel.collection == self.name)
            )
            return [dict(row.document) for row in rows]

    def where(
        self,
        field_path: str,
        value: Any,
        order_by: str | None = None,
    ) -> list[Document]:
        if field_path != TITLE_PATH:
            matches = [doc for doc in self.stream() if get_path(doc, field_path) == value]
            return sort_by_path(matches, order_by) if order_by else matches

        stmt = select(VectorRecordModel).where(
            VectorRecordModel.collection == self.name,
            VectorRecordModel.title == value,
        )
        if order_by == CHUNK_INDEX_PATH:
            stmt = stmt.order_by(VectorRecordModel.chunk_index.asc())

        with self._session_factory() as session:
            documents = [dict(row.document) for row in session.scalars(stmt)]

        if order_by and order_by != CHUNK_INDEX_PATH:
            documents = sort_by_path(documents, order_by)
        return documents

    def batch_delete(self, doc_ids: Iterable[str]) -> int:
        ids = list(doc_ids)
        if not ids:
            return 0
        with self._session_factory.begin() as session:
            result = session.execute(
                delete(VectorRecordModel).where(
                    VectorRecordModel.collection == self.name,
                    VectorRecordModel.id.in_(ids),
                )
            )
            return result.rowcount

    def delete(self, doc_id: str) -> bool:
        return self.batch_delete([doc_id]) == 1

    def _new_row(self, doc_id: str, document: Document) -> VectorRecordModel:
        row = VectorRecordModel(collection=self.name, id=doc_id)
        self._apply(row, dict(document))
        return row

    @staticmethod
    def _apply(row: VectorRecordModel, body: Document) -> None:
        # Reassign rather than mutate so the JSON column is flagged dirty
        row.document = body
        row.title = get_path(body, TITLE_PATH)
        row.chunk_index = get_path(body, CHUNK_INDEX_PATH)
