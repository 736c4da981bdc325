"""Database configuration via environment variables."""

from pydantic_settings import BaseSettings


class DatabaseConfig(BaseSettings):
    """PostgreSQL connection settings, loaded from DOCWEAVE_DB_* env vars.

    Defaults match a local development database.
    """

    model_config = {"env_prefix": "DOCWEAVE_DB_"}

    host: str = "localhost"
    port: int = 5432
    user: str = "docweave"
    password: str = "docweave_dev"  # noqa: S105
    name: str = "docweave"

    min_pool_size: int = 1
    max_pool_size: int = 10
    pool_timeout: float = 30.0

    @property
    def dsn(self) -> str:
        """PostgreSQL connection string."""
        return f"postgresql://{self.user}:{self.password}@{self.host}:{self.port}/{self.name}"

    @property
    def sqlalchemy_url(self) -> str:
        """Connection URL for Alembic, using the psycopg 3 driver."""
        return f"postgresql+psycopg://{self.user}:{self.password}@{self.host}:{self.port}/{self.name}"
