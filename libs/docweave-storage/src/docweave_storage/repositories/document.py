"""Document repository — a DocumentStore backed by a PostgreSQL JSONB table."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING, Any

from psycopg import errors as pg_errors
from psycopg.sql import SQL
from psycopg.types.json import Jsonb

from docweave_storage.exceptions import DuplicateDocumentError, IntegrityError
from docweave_storage.mappers import DocumentRowMapper
from docweave_storage.repositories.conditions import compile_order, compile_where

if TYPE_CHECKING:
    from docweave_core.documents.identifiers import CollectionName, DocumentId
    from docweave_core.documents.store import Condition, SortKey
    from docweave_storage.pool import ConnectionPool

logger = logging.getLogger(__name__)


class DocumentRepository:
    """Stores every collection's documents in the ``documents`` table.

    Implements the DocumentStore protocol, so a model can be bound to it with
    ``Model.use_store(DocumentRepository(pool))``.
    """

    def __init__(self, pool: ConnectionPool) -> None:
        self._pool = pool

    def insert(self, collection: CollectionName, document_id: DocumentId, body: dict[str, Any]) -> None:
        """Insert a new document. Raises DuplicateDocumentError on conflict."""
        row = DocumentRowMapper.to_row(collection, document_id, body)
        try:
            with self._pool.connection() as conn, conn.cursor() as cur:
                cur.execute(
                    SQL("""
                        INSERT INTO documents (collection, id, body)
                        VALUES (%(collection)s, %(id)s, %(body)s)
                    """),
                    row,
                )
        except pg_errors.UniqueViolation:
            raise DuplicateDocumentError(str(collection), str(document_id)) from None
        except pg_errors.IntegrityError as exc:
            raise IntegrityError(str(exc)) from exc
        logger.debug("Inserted %s/%s", collection, document_id)

    def replace(self, collection: CollectionName, document_id: DocumentId, body: dict[str, Any]) -> bool:
        """Overwrite a document body. Returns False if the document is missing."""
        row = DocumentRowMapper.to_row(collection, document_id, body)
        with self._pool.connection() as conn, conn.cursor() as cur:
            cur.execute(
                SQL("""
                    UPDATE documents SET body = %(body)s, updated_at = now()
                    WHERE collection = %(collection)s AND id = %(id)s
                """),
                row,
            )
            return cur.rowcount > 0

    def get(self, collection: CollectionName, document_id: DocumentId) -> dict[str, Any] | None:
        with self._pool.connection() as conn, conn.cursor() as cur:
            cur.execute(
                SQL("SELECT id, body FROM documents WHERE collection = %(collection)s AND id = %(id)s"),
                {"collection": str(collection), "id": str(document_id)},
            )
            row = cur.fetchone()
        if row is None:
            return None
        return DocumentRowMapper.from_row(dict(row))[1]

    def find(
        self,
        collection: CollectionName,
        conditions: Sequence[Condition],
        *,
        order: Sequence[SortKey] = (),
        limit: int | None = None,
    ) -> list[tuple[DocumentId, dict[str, Any]]]:
        where, params = compile_where(str(collection), conditions)
        query = SQL("SELECT id, body FROM documents ") + where + SQL(" ") + compile_order(order)
        if limit is not None:
            query += SQL(" LIMIT %s")
            params.append(limit)
        with self._pool.connection() as conn, conn.cursor() as cur:
            cur.execute(query, params)
            rows = cur.fetchall()
        return [DocumentRowMapper.from_row(dict(r)) for r in rows]

    def count(self, collection: CollectionName, conditions: Sequence[Condition]) -> int:
        where, params = compile_where(str(collection), conditions)
        with self._pool.connection() as conn, conn.cursor() as cur:
            cur.execute(SQL("SELECT count(*) AS cnt FROM documents ") + where, params)
            row = cur.fetchone()
        return int(row["cnt"]) if row else 0

    def update_fields(
        self, collection: CollectionName, conditions: Sequence[Condition], values: dict[str, Any]
    ) -> int:
        """Merge ``values`` into the body of every matching document."""
        where, params = compile_where(str(collection), conditions)
        query = SQL("UPDATE documents SET body = body || %s, updated_at = now() ") + where
        with self._pool.connection() as conn, conn.cursor() as cur:
            cur.execute(query, [Jsonb(values), *params])
            updated = cur.rowcount
        logger.debug("Updated %d document(s) in %s", updated, collection)
        return updated

    def delete(self, collection: CollectionName, conditions: Sequence[Condition]) -> int:
        where, params = compile_where(str(collection), conditions)
        with self._pool.connection() as conn, conn.cursor() as cur:
            cur.execute(SQL("DELETE FROM documents ") + where, params)
            deleted = cur.rowcount
        logger.debug("Deleted %d document(s) from %s", deleted, collection)
        return deleted
