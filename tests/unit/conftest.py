"""Shared fixtures for unit tests."""

from collections.abc import Iterator

import pytest

from docweave_core.documents import Document, InMemoryDocumentStore


@pytest.fixture(autouse=True)
def store() -> Iterator[InMemoryDocumentStore]:
    """Bind a fresh in-memory store to every model for the duration of a test."""
    memory_store = InMemoryDocumentStore()
    Document.use_store(memory_store)
    yield memory_store
    Document.use_store(None)
