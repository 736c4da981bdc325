"""Integration test fixtures — PostgreSQL via testcontainers."""

from collections.abc import Iterator
from pathlib import Path
from typing import Any

import pytest
from psycopg import Connection
from psycopg.rows import dict_row
from testcontainers.postgres import PostgresContainer  # type: ignore[import-untyped]

import docweave_storage
from docweave_core.documents import Document
from docweave_storage.config import DatabaseConfig
from docweave_storage.pool import ConnectionPool
from docweave_storage.repositories.document import DocumentRepository

POSTGRES_IMAGE = "postgres:16"
MIGRATIONS = Path(docweave_storage.__file__).parent / "migrations"


@pytest.fixture(scope="session")
def postgres_container() -> Any:
    """Start a PostgreSQL container for the test session."""
    with PostgresContainer(
        image=POSTGRES_IMAGE,
        username="test",
        password="test",
        dbname="test_docweave",
    ) as container:
        yield container


@pytest.fixture(scope="session")
def db_config(postgres_container: Any) -> DatabaseConfig:
    """Build a DatabaseConfig pointing at the test container."""
    host = postgres_container.get_container_host_ip()
    port = int(postgres_container.get_exposed_port(5432))
    return DatabaseConfig(
        host=host,
        port=port,
        user="test",
        password="test",
        name="test_docweave",
    )


@pytest.fixture(scope="session")
def _run_migrations(db_config: DatabaseConfig) -> None:
    """Run Alembic migrations against the test database."""
    from alembic import command
    from alembic.config import Config

    alembic_cfg = Config()
    alembic_cfg.set_main_option("script_location", str(MIGRATIONS))
    alembic_cfg.set_main_option("sqlalchemy.url", db_config.sqlalchemy_url)
    command.upgrade(alembic_cfg, "head")


@pytest.fixture
def pool(db_config: DatabaseConfig, _run_migrations: None) -> Iterator[ConnectionPool]:
    """Provide an open ConnectionPool for each test."""
    with ConnectionPool(db_config) as p:
        yield p


@pytest.fixture
def repository(pool: ConnectionPool) -> Iterator[DocumentRepository]:
    """Provide a DocumentRepository and empty the table after each test."""
    yield DocumentRepository(pool)
    with pool.connection() as connection, connection.cursor() as cur:
        cur.execute("TRUNCATE documents")


@pytest.fixture
def bound_store(repository: DocumentRepository) -> Iterator[DocumentRepository]:
    """Bind every model to the PostgreSQL repository for the duration of a test."""
    Document.use_store(repository)
    yield repository
    Document.use_store(None)


@pytest.fixture
def raw_conn(db_config: DatabaseConfig, _run_migrations: None) -> Iterator[Connection[dict[str, Any]]]:
    """Provide a raw psycopg connection (without pool) for verification queries."""
    conn = Connection.connect(db_config.dsn, row_factory=dict_row)
    try:
        yield conn
    finally:
        conn.close()
