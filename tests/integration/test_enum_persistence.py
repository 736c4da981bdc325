"""Enum fields round-tripping through the PostgreSQL store."""

from typing import Any

import pytest

from docweave_core.documents import Document, Field
from docweave_core.enumfield import EnumField, InvalidValue
from docweave_core.exceptions import UnsafeSerializationError
from docweave_storage.repositories.document import DocumentRepository

pytestmark = pytest.mark.integration


class Part(Document):
    name = Field()
    status = EnumField(["proposed", "written", "published"])
    read_status = EnumField({"unread": 0, "reading": 2, "finished": 3})
    quality_control = EnumField({"pending": None, "passed": True, "failed": False}, prefix="qc")


@pytest.fixture
def part(bound_store: DocumentRepository) -> Any:
    return Part.create(name="gear", status="published", read_status="finished")


class TestEnumPersistence:
    def test_labels_read_back(self, part: Any) -> None:
        loaded = Part.find(part.id)
        assert loaded.status == "published"
        assert loaded.read_status == "finished"
        assert loaded["read_status"] == 3
        assert loaded.is_qc_pending()

    def test_scopes_query_stored_values(self, part: Any) -> None:
        assert Part.published().first() == part
        assert Part.where(read_status__in=["finished", "reading"]).count() == 1
        assert Part.qc_pending().first() == part
        assert Part.qc_failed().first() is None

    def test_boolean_values_are_exact(self, part: Any) -> None:
        part.set_qc_failed_and_save()
        assert Part.qc_failed().first() == part
        assert Part.qc_passed().first() is None
        assert Part.qc_pending().first() is None

    def test_mutator_persists(self, part: Any) -> None:
        part.set_reading_and_save()
        assert Part.find(part.id).is_reading()

    def test_atomic_set(self, part: Any) -> None:
        part.set(read_status="reading")
        assert Part.find(part.id)["read_status"] == 2

    def test_invalid_value_from_database(self, part: Any) -> None:
        Part.where(id=part.id).set(read_status=10)
        loaded = Part.find(part.id)
        assert loaded.read_status == InvalidValue(10)
        assert not loaded.is_valid()

    def test_invalid_key_never_written(self, part: Any) -> None:
        part.status = "bogus"
        with pytest.raises(UnsafeSerializationError):
            part.save(validate=False)
        assert Part.find(part.id).status == "published"
