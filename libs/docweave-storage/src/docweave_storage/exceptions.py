"""Storage error hierarchy for docweave-storage."""

from docweave_core.exceptions import DuplicateDocumentError as CoreDuplicateDocumentError


class StorageError(Exception):
    """Base exception for all storage-related errors."""


class StorageConnectionError(StorageError):
    """Failed to establish or maintain a database connection."""


class DuplicateDocumentError(StorageError, CoreDuplicateDocumentError):
    """A document with the same collection + id already exists."""


class IntegrityError(StorageError):
    """A database integrity constraint was violated."""
