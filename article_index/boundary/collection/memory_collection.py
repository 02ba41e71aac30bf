"""
In-memory document collection.

Dictionary-backed collection for development and tests. A lock makes
every batch atomic with respect to other callers.

Dependencies: threading, copy
System role: Development document store (no persistence)
"""

import copy
import threading
from typing import Any, Iterable

from article_index.boundary.collection.base import (
    Document,
    DocumentNotFound,
    get_path,
    merge_documents,
    sort_by_path,
)


class InMemoryCollection:
    """Thread-safe in-process document collection."""

    def __init__(self, name: str = "article_embeddings") -> None:
        self.name = name
        self._documents: dict[str, Document] = {}
        self._lock = threading.RLock()

    def batch_set(
        self,
        documents: Iterable[tuple[str, Document]],
        merge: bool = True,
        preserve: Iterable[str] = (),
    ) -> int:
        staged = list(documents)
        preserve = tuple(preserve)
        with self._lock:
            updated = dict(self._documents)
            for doc_id, document in staged:
                existing = updated.get(doc_id)
                if merge and existing is not None:
                    updated[doc_id] = merge_documents(existing, document, preserve)
                else:
                    updated[doc_id] = copy.deepcopy(document)
            self._documents = updated
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
        with self._lock:
            existing = self._documents.get(doc_id)
            if existing is None:
                raise DocumentNotFound(doc_id)
            self._documents[doc_id] = merge_documents(existing, document)

    def get(self, doc_id: str) -> Document | None:
        with self._lock:
            document = self._documents.get(doc_id)
            return copy.deepcopy(document) if document is not None else None

    def stream(self) -> list[Document]:
        with self._lock:
            return [copy.deepcopy(doc) for doc in self._documents.values()]

    def where(
        self,
        field_path: str,
        value: Any,
        order_by: str | None = None,
    ) -> list[Document]:
        with self._lock:
            matches = [
                copy.deepcopy(doc)
                for doc in self._documents.values()
                if get_path(doc, field_path) == value
            ]
        if order_by:
            matches = sort_by_path(matches, order_by)
        return matches

    def batch_delete(self, doc_ids: Iterable[str]) -> int:
        ids = list(doc_ids)
        with self._lock:
            deleted = 0
            for doc_id in ids:
                if self._documents.pop(doc_id, None) is not None:
                    deleted += 1
        return deleted

    def delete(self, doc_id: str) -> bool:
        return self.batch_delete([doc_id]) == 1

    def __len__(self) -> int:
        with self._lock:
            return len(self._documents)
