"""Repository layer for docweave-storage."""

from docweave_storage.repositories.document import DocumentRepository

__all__ = ["DocumentRepository"]
