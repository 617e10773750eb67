"""Application settings and configuration.

Settings are loaded from environment variables (and an optional ``.env``
file) with defaults matching a local PostgreSQL sandbox. Command-line flags of
the service entry points are applied on top of these values.
"""

from urllib.parse import quote

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Configuration shared by the counter and greeting services."""

    # Database connection parts
    db_host: str = Field(default="localhost", alias="DB_HOST")
    db_port: int = Field(default=5432, alias="DB_PORT")
    db_user: str = Field(default="postgres", alias="DB_USER")
    db_password: str = Field(default="postgres", alias="DB_PASSWORD")
    db_name: str = Field(default="sandbox", alias="DB_NAME")
    db_sslmode: str = Field(default="disable", alias="DB_SSLMODE")

    # Full URL; takes precedence over the parts above when set
    database_url: str | None = Field(default=None, alias="DATABASE_URL")

    # Connection pool
    db_pool_size: int = Field(default=5, alias="DB_POOL_SIZE")
    db_max_overflow: int = Field(default=10, alias="DB_MAX_OVERFLOW")
    db_pool_timeout: float = Field(default=30.0, alias="DB_POOL_TIMEOUT")
    db_statement_timeout_ms: int = Field(default=0, alias="DB_STATEMENT_TIMEOUT_MS")
    sql_debug: bool = Field(default=False, alias="SQL_DEBUG")

    # Listen addresses, HOST:PORT
    counter_address: str = Field(default="127.0.0.1:8081", alias="COUNTER_ADDRESS")
    greeting_address: str = Field(default="0.0.0.0:8080", alias="GREETING_ADDRESS")

    greeting_template: str = Field(default="Hello, {name}!", alias="GREETING_TEMPLATE")

    # Logging
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    log_json: bool = Field(default=False, alias="LOG_JSON")

    model_config = SettingsConfigDict(
        env_file=".env",
        validate_assignment=True,
        populate_by_name=True,
        extra="ignore",
    )

    @property
    def effective_database_url(self) -> str:
        """Return the SQLAlchemy URL for the configured database.

        Returns:
            ``DATABASE_URL`` when set, otherwise a ``postgresql+psycopg`` URL
            assembled from the individual connection settings.
        """
        if self.database_url:
            return self.database_url
        user = quote(self.db_user, safe="")
        password = quote(self.db_password, safe="")
        return (
            f"postgresql+psycopg://{user}:{password}@{self.db_host}:{self.db_port}"
            f"/{self.db_name}?sslmode={self.db_sslmode}"
        )


def split_address(address: str) -> tuple[str, int]:
    """Split a ``HOST:PORT`` listen address.

    An empty host (``":8080"``) binds all interfaces.

    Raises:
        ValueError: If the port is missing or not an integer.
    """
    host, sep, port = address.rpartition(":")
    if not sep or not port.isdigit():
        raise ValueError(f"Invalid listen address {address!r}, expected HOST:PORT")
    return host or "0.0.0.0", int(port)


settings = Settings()
