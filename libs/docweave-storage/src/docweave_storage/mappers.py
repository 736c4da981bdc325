"""Mapping between stored document bodies and database rows."""

from __future__ import annotations

from typing import Any

from psycopg.types.json import Jsonb

from docweave_core.documents.identifiers import CollectionName, DocumentId


class DocumentRowMapper:
    """Maps between ``(collection, id, body)`` and rows of the documents table."""

    @staticmethod
    def to_row(collection: CollectionName, document_id: DocumentId, body: dict[str, Any]) -> dict[str, Any]:
        """Convert a document body to a dict suitable for INSERT/UPDATE."""
        return {
            "collection": str(collection),
            "id": str(document_id),
            "body": Jsonb(body),
        }

    @staticmethod
    def from_row(row: dict[str, Any]) -> tuple[DocumentId, dict[str, Any]]:
        """Reconstruct ``(id, body)`` from a database row."""
        body: dict[str, Any] = row["body"] or {}
        return DocumentId(row["id"]), dict(body)
