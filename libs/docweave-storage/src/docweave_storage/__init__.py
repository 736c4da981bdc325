"""docweave-storage — PostgreSQL document store for docweave models."""

__version__ = "0.1.0"

from docweave_storage.config import DatabaseConfig
from docweave_storage.exceptions import (
    DuplicateDocumentError,
    IntegrityError,
    StorageConnectionError,
    StorageError,
)
from docweave_storage.pool import ConnectionPool
from docweave_storage.repositories.document import DocumentRepository

__all__ = [
    "ConnectionPool",
    "DatabaseConfig",
    "DocumentRepository",
    "DuplicateDocumentError",
    "IntegrityError",
    "StorageConnectionError",
    "StorageError",
]
