"""Connection pool wrapper for psycopg 3."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import TYPE_CHECKING, Self

from psycopg import Connection
from psycopg import errors as pg_errors
from psycopg.rows import dict_row
from psycopg_pool import ConnectionPool as PsycopgPool
from psycopg_pool import PoolTimeout

from docweave_storage.exceptions import StorageConnectionError

if TYPE_CHECKING:
    from collections.abc import Iterator

    from docweave_storage.config import DatabaseConfig

logger = logging.getLogger(__name__)


class ConnectionPool:
    """Manages a psycopg connection pool returning dict rows."""

    def __init__(self, config: DatabaseConfig) -> None:
        self._config = config
        self._pool: PsycopgPool[Connection[dict[str, object]]] | None = None

    def open(self) -> None:
        """Create and open the connection pool."""
        self._pool = PsycopgPool[Connection[dict[str, object]]](
            conninfo=self._config.dsn,
            min_size=self._config.min_pool_size,
            max_size=self._config.max_pool_size,
            timeout=self._config.pool_timeout,
            open=False,
            kwargs={"row_factory": dict_row},
        )
        try:
            self._pool.open(wait=True, timeout=self._config.pool_timeout)
        except PoolTimeout as exc:
            self._pool = None
            msg = f"Could not connect to {self._config.host}:{self._config.port}"
            raise StorageConnectionError(msg) from exc
        logger.info(
            "Opened connection pool to %s:%s/%s",
            self._config.host,
            self._config.port,
            self._config.name,
        )

    def close(self) -> None:
        """Close the connection pool."""
        if self._pool is not None:
            self._pool.close()
            self._pool = None
            logger.info("Closed connection pool")

    @contextmanager
    def connection(self) -> Iterator[Connection[dict[str, object]]]:
        """Yield a connection from the pool; the transaction commits on exit."""
        if self._pool is None:
            msg = "Connection pool is not open. Call open() first."
            raise RuntimeError(msg)
        try:
            with self._pool.connection() as conn:
                yield conn
        except pg_errors.OperationalError as exc:
            raise StorageConnectionError(str(exc)) from exc

    def __enter__(self) -> Self:
        self.open()
        return self

    def __exit__(self, *_: object) -> None:
        self.close()
