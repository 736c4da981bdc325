"""Alembic environment for the docweave documents table.

The database URL comes from ``sqlalchemy.url`` when the caller sets it (as
the integration tests do) and otherwise from ``DOCWEAVE_DB_*`` via
DatabaseConfig.
"""

import logging

from alembic import context

from docweave_storage.config import DatabaseConfig

logger = logging.getLogger("docweave_storage.migrations")

config = context.config


def database_url() -> str:
    url = config.get_main_option("sqlalchemy.url")
    if url:
        return url
    return DatabaseConfig().sqlalchemy_url


def run_migrations_offline() -> None:
    """Emit the migration SQL without connecting."""
    context.configure(url=database_url(), target_metadata=None, literal_binds=True)
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    """Apply migrations over a live connection."""
    from sqlalchemy import create_engine

    connectable = create_engine(database_url())
    with connectable.connect() as connection:
        context.configure(connection=connection, target_metadata=None)
        with context.begin_transaction():
            context.run_migrations()
    logger.info("Applied documents migrations")


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
