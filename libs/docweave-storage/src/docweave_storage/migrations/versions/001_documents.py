"""Documents table — one JSONB body per (collection, id).

Revision ID: 001
Revises: None
Create Date: 2026-10-19
"""

from collections.abc import Sequence

from alembic import op

revision: str = "001"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    op.execute("""
        CREATE TABLE documents (
            collection  VARCHAR(255) NOT NULL,
            id          VARCHAR(64)  NOT NULL,
            body        JSONB        NOT NULL DEFAULT '{}',
            created_at  TIMESTAMPTZ  NOT NULL DEFAULT now(),
            updated_at  TIMESTAMPTZ  NOT NULL DEFAULT now(),

            PRIMARY KEY (collection, id)
        )
    """)

    op.execute("CREATE INDEX idx_documents_created_at ON documents (collection, created_at)")
    op.execute("CREATE INDEX idx_documents_body ON documents USING gin (body jsonb_path_ops)")


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS documents")
