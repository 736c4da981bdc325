"""Tests for the in-memory document store."""

import pytest

from docweave_core.documents.identifiers import CollectionName, DocumentId
from docweave_core.documents.store import Condition, InMemoryDocumentStore, SortKey, matches
from docweave_core.exceptions import DuplicateDocumentError

BOOKS = CollectionName("books")


@pytest.fixture
def memory() -> InMemoryDocumentStore:
    store = InMemoryDocumentStore()
    store.insert(BOOKS, DocumentId("a"), {"name": "Alpha", "read_status": 2, "flag": True})
    store.insert(BOOKS, DocumentId("b"), {"name": "Beta", "read_status": 3, "flag": 1})
    store.insert(BOOKS, DocumentId("c"), {"name": "Gamma", "read_status": None})
    return store


class TestMatches:
    def test_id_condition(self) -> None:
        assert matches(DocumentId("a"), {}, Condition(field="id", value="a"))
        assert not matches(DocumentId("a"), {}, Condition(field="id", value="b"))

    def test_null_matches_missing_field(self) -> None:
        assert matches(DocumentId("a"), {}, Condition(field="status", value=None))
        assert not matches(DocumentId("a"), {}, Condition(field="status", value="x"))

    def test_ne_with_missing_field(self) -> None:
        assert matches(DocumentId("a"), {}, Condition(field="status", op="ne", value="x"))
        assert not matches(DocumentId("a"), {}, Condition(field="status", op="ne", value=None))

    def test_in(self) -> None:
        condition = Condition(field="n", op="in", value=[1, 2])
        assert matches(DocumentId("a"), {"n": 2}, condition)
        assert not matches(DocumentId("a"), {"n": 3}, condition)
        assert not matches(DocumentId("a"), {"n": True}, condition)


class TestInMemoryDocumentStore:
    def test_get(self, memory: InMemoryDocumentStore) -> None:
        assert memory.get(BOOKS, DocumentId("a")) == {"name": "Alpha", "read_status": 2, "flag": True}
        assert memory.get(BOOKS, DocumentId("missing")) is None
        assert memory.get(CollectionName("other"), DocumentId("a")) is None

    def test_get_returns_a_copy(self, memory: InMemoryDocumentStore) -> None:
        body = memory.get(BOOKS, DocumentId("a"))
        assert body is not None
        body["name"] = "Changed"
        assert memory.get(BOOKS, DocumentId("a"))["name"] == "Alpha"  # type: ignore[index]

    def test_insert_copies_body(self) -> None:
        store = InMemoryDocumentStore()
        body = {"tags": ["a"]}
        store.insert(BOOKS, DocumentId("x"), body)
        body["tags"].append("b")
        assert store.get(BOOKS, DocumentId("x")) == {"tags": ["a"]}

    def test_duplicate_insert(self, memory: InMemoryDocumentStore) -> None:
        with pytest.raises(DuplicateDocumentError):
            memory.insert(BOOKS, DocumentId("a"), {})

    def test_replace(self, memory: InMemoryDocumentStore) -> None:
        assert memory.replace(BOOKS, DocumentId("a"), {"name": "Omega"})
        assert memory.get(BOOKS, DocumentId("a")) == {"name": "Omega"}
        assert not memory.replace(BOOKS, DocumentId("zzz"), {})

    def test_find_keeps_insertion_order(self, memory: InMemoryDocumentStore) -> None:
        found = memory.find(BOOKS, [])
        assert [document_id for document_id, _ in found] == ["a", "b", "c"]

    def test_find_with_conditions(self, memory: InMemoryDocumentStore) -> None:
        found = memory.find(BOOKS, [Condition(field="read_status", op="in", value=[2, 3])])
        assert [document_id for document_id, _ in found] == ["a", "b"]

    def test_find_booleans_exactly(self, memory: InMemoryDocumentStore) -> None:
        found = memory.find(BOOKS, [Condition(field="flag", value=True)])
        assert [document_id for document_id, _ in found] == ["a"]

    def test_find_ordered_and_limited(self, memory: InMemoryDocumentStore) -> None:
        found = memory.find(BOOKS, [], order=[SortKey(field="name", descending=True)], limit=2)
        assert [body["name"] for _, body in found] == ["Gamma", "Beta"]

    def test_count(self, memory: InMemoryDocumentStore) -> None:
        assert memory.count(BOOKS, []) == 3
        assert memory.count(BOOKS, [Condition(field="read_status", value=None)]) == 1

    def test_update_fields(self, memory: InMemoryDocumentStore) -> None:
        updated = memory.update_fields(
            BOOKS, [Condition(field="read_status", op="ne", value=None)], {"read_status": 0}
        )
        assert updated == 2
        assert memory.get(BOOKS, DocumentId("a"))["read_status"] == 0  # type: ignore[index]
        assert memory.get(BOOKS, DocumentId("c"))["read_status"] is None  # type: ignore[index]

    def test_delete(self, memory: InMemoryDocumentStore) -> None:
        assert memory.delete(BOOKS, [Condition(field="id", value="b")]) == 1
        assert memory.count(BOOKS, []) == 2
        assert memory.delete(BOOKS, []) == 2
        assert memory.count(BOOKS, []) == 0
