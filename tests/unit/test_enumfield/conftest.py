"""Fixtures for enum field tests — a Book model exercising every option."""

from typing import Any

import pytest

from docweave_core.documents import Document, Field
from docweave_core.enumfield import EnumField


def define_book() -> type[Any]:
    class Book(Document):
        author_id = Field()
        format = Field()
        name = Field()

        status = EnumField(["proposed", "written", "published"])
        read_status = EnumField({"unread": 0, "reading": 2, "finished": 3})
        nullable_status = EnumField(["single", "married"])
        language = EnumField(["english", "spanish", "french"], prefix="in")
        author_visibility = EnumField(["visible", "invisible"], prefix=True)
        illustrator_visibility = EnumField(["visible", "invisible"], prefix=True)
        font_size = EnumField(
            {"small": 8, "medium": 10, "large": 12}, prefix="with", suffix=True, default="medium"
        )
        quality_control = EnumField({"pending": None, "passed": True, "failed": False}, prefix="qc")

        def set_published_and_save(self) -> str:
            self.generated.set_published_and_save()
            return "do publish work..."

    return Book


@pytest.fixture
def book_class() -> type[Any]:
    return define_book()


@pytest.fixture
def book(book_class: type[Any]) -> Any:
    return book_class.create(
        format="paperback",
        status="published",
        read_status="finished",
        language="english",
        author_visibility="visible",
        illustrator_visibility="visible",
        font_size="medium",
    )
