"""Document store protocol and the in-process reference implementation."""

from __future__ import annotations

import copy
import logging
from collections.abc import Sequence
from typing import Any, Literal, Protocol

from pydantic import BaseModel, ConfigDict

from docweave_core.documents.encoding import same_value
from docweave_core.documents.identifiers import CollectionName, DocumentId
from docweave_core.exceptions import DuplicateDocumentError

logger = logging.getLogger(__name__)

ID_FIELD = "id"

Operator = Literal["eq", "ne", "in"]


class Condition(BaseModel):
    """One already-encoded criterion on a document field (or on ``id``)."""

    model_config = ConfigDict(frozen=True)

    field: str
    op: Operator = "eq"
    value: Any = None


class SortKey(BaseModel):
    """Ordering on one field."""

    model_config = ConfigDict(frozen=True)

    field: str
    descending: bool = False


class DocumentStore(Protocol):
    """Persistence operations the document layer relies on.

    Bodies are plain JSON-compatible dicts; ids are kept outside the body.
    """

    def insert(self, collection: CollectionName, document_id: DocumentId, body: dict[str, Any]) -> None: ...

    def replace(self, collection: CollectionName, document_id: DocumentId, body: dict[str, Any]) -> bool: ...

    def get(self, collection: CollectionName, document_id: DocumentId) -> dict[str, Any] | None: ...

    def find(
        self,
        collection: CollectionName,
        conditions: Sequence[Condition],
        *,
        order: Sequence[SortKey] = (),
        limit: int | None = None,
    ) -> list[tuple[DocumentId, dict[str, Any]]]: ...

    def count(self, collection: CollectionName, conditions: Sequence[Condition]) -> int: ...

    def update_fields(
        self, collection: CollectionName, conditions: Sequence[Condition], values: dict[str, Any]
    ) -> int: ...

    def delete(self, collection: CollectionName, conditions: Sequence[Condition]) -> int: ...


_MISSING = object()


def _field_value(document_id: DocumentId, body: dict[str, Any], field: str) -> Any:
    if field == ID_FIELD:
        return document_id
    return body.get(field, _MISSING)


def _equals(actual: Any, expected: Any) -> bool:
    # A null criterion also matches a field that was never written.
    if actual is _MISSING:
        return expected is None
    return same_value(actual, expected)


def matches(document_id: DocumentId, body: dict[str, Any], condition: Condition) -> bool:
    """Evaluate one condition against a stored document."""
    actual = _field_value(document_id, body, condition.field)
    if condition.op == "eq":
        return _equals(actual, condition.value)
    if condition.op == "ne":
        return not _equals(actual, condition.value)
    return any(_equals(actual, candidate) for candidate in condition.value)


def _sort_key(value: Any) -> tuple[bool, str, Any]:
    if value is _MISSING or value is None:
        return (False, "", 0)
    return (True, type(value).__name__, value)


class InMemoryDocumentStore:
    """Dict-backed store. Bodies are deep-copied on the way in and out."""

    def __init__(self) -> None:
        self._collections: dict[str, dict[DocumentId, dict[str, Any]]] = {}

    def _collection(self, collection: CollectionName) -> dict[DocumentId, dict[str, Any]]:
        return self._collections.setdefault(collection, {})

    def insert(self, collection: CollectionName, document_id: DocumentId, body: dict[str, Any]) -> None:
        documents = self._collection(collection)
        if document_id in documents:
            raise DuplicateDocumentError(collection, document_id)
        documents[document_id] = copy.deepcopy(body)
        logger.debug("Inserted %s/%s", collection, document_id)

    def replace(self, collection: CollectionName, document_id: DocumentId, body: dict[str, Any]) -> bool:
        documents = self._collection(collection)
        if document_id not in documents:
            return False
        documents[document_id] = copy.deepcopy(body)
        logger.debug("Replaced %s/%s", collection, document_id)
        return True

    def get(self, collection: CollectionName, document_id: DocumentId) -> dict[str, Any] | None:
        body = self._collection(collection).get(document_id)
        return copy.deepcopy(body) if body is not None else None

    def _select(
        self, collection: CollectionName, conditions: Sequence[Condition]
    ) -> list[tuple[DocumentId, dict[str, Any]]]:
        return [
            (document_id, body)
            for document_id, body in self._collection(collection).items()
            if all(matches(document_id, body, condition) for condition in conditions)
        ]

    def find(
        self,
        collection: CollectionName,
        conditions: Sequence[Condition],
        *,
        order: Sequence[SortKey] = (),
        limit: int | None = None,
    ) -> list[tuple[DocumentId, dict[str, Any]]]:
        selected = self._select(collection, conditions)
        # Stable sorts applied from the least significant key up.
        for key in reversed(order):
            selected.sort(
                key=lambda item, field=key.field: _sort_key(_field_value(item[0], item[1], field)),
                reverse=key.descending,
            )
        if limit is not None:
            selected = selected[:limit]
        return [(document_id, copy.deepcopy(body)) for document_id, body in selected]

    def count(self, collection: CollectionName, conditions: Sequence[Condition]) -> int:
        return len(self._select(collection, conditions))

    def update_fields(
        self, collection: CollectionName, conditions: Sequence[Condition], values: dict[str, Any]
    ) -> int:
        selected = self._select(collection, conditions)
        for _, body in selected:
            body.update(copy.deepcopy(values))
        logger.debug("Updated %d document(s) in %s", len(selected), collection)
        return len(selected)

    def delete(self, collection: CollectionName, conditions: Sequence[Condition]) -> int:
        documents = self._collection(collection)
        selected = [document_id for document_id, _ in self._select(collection, conditions)]
        for document_id in selected:
            del documents[document_id]
        logger.debug("Deleted %d document(s) from %s", len(selected), collection)
        return len(selected)
