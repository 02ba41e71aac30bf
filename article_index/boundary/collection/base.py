"""
Document collection interface.

Defines the operations the vector store needs from a persistent document
database: batched transactional writes with field-level merge, equality
queries on a field path, ascending ordering and full scans.

Dependencies: copy
System role: Contract between the vector store and its storage backend
"""

import copy
from typing import Any, Iterable, Mapping, Protocol

Document = dict[str, Any]


class DocumentNotFound(KeyError):
    """Raised by update() when the target document does not exist."""


class DocumentCollection(Protocol):
    """A named collection of JSON-like documents keyed by id."""

    name: str

    def batch_set(
        self,
        documents: Iterable[tuple[str, Document]],
        merge: bool = True,
        preserve: Iterable[str] = (),
    ) -> int:
        """
        Write all documents in one transaction; return the number written.

        Top-level keys named in preserve keep their stored value when merging
        into an existing document.
        """
        ...

    def set(
        self,
        doc_id: str,
        document: Document,
        merge: bool = True,
        preserve: Iterable[str] = (),
    ) -> None:
        """Write a single document."""
        ...

    def update(self, doc_id: str, document: Document) -> None:
        """Merge into an existing document; raise DocumentNotFound if absent."""
        ...

    def get(self, doc_id: str) -> Document | None:
        """Return a copy of the document, or None."""
        ...

    def stream(self) -> list[Document]:
        """Return every document in the collection."""
        ...

    def where(
        self,
        field_path: str,
        value: Any,
        order_by: str | None = None,
    ) -> list[Document]:
        """Return documents whose field equals value, optionally ascending by order_by."""
        ...

    def batch_delete(self, doc_ids: Iterable[str]) -> int:
        """Delete documents in one transaction; return the number deleted."""
        ...

    def delete(self, doc_id: str) -> bool:
        """Delete one document; return False if it did not exist."""
        ...


def merge_documents(
    existing: Mapping[str, Any],
    incoming: Mapping[str, Any],
    preserve: Iterable[str] = (),
) -> Document:
    """
    Field-level merge of incoming into existing.

    Nested mappings merge recursively; other values in incoming replace
    existing ones; keys absent from incoming keep their stored values.
    Top-level keys in preserve that existing already holds are never
    overwritten.
    """
    kept = {key for key in preserve if key in existing}
    merged = copy.deepcopy(dict(existing))
    for key, value in incoming.items():
        if key in kept:
            continue
        current = merged.get(key)
        if isinstance(value, Mapping) and isinstance(current, Mapping):
            merged[key] = merge_documents(current, value)
        else:
            merged[key] = copy.deepcopy(value)
    return merged


def get_path(document: Mapping[str, Any], field_path: str) -> Any:
    """Resolve a dotted field path, returning None when any segment is missing."""
    value: Any = document
    for segment in field_path.split("."):
        if not isinstance(value, Mapping):
            return None
        value = value.get(segment)
    return value


def sort_by_path(documents: list[Document], field_path: str) -> list[Document]:
    """Sort ascending by a field path; documents missing the field go last."""
    present = [doc for doc in documents if get_path(doc, field_path) is not None]
    missing = [doc for doc in documents if get_path(doc, field_path) is None]
    return sorted(present, key=lambda doc: get_path(doc, field_path)) + missing
