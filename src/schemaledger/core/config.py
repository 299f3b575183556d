"""Configuration management for schemaledger."""

import os
from dataclasses import dataclass, field
from pathlib import Path
from urllib.parse import quote

from .exceptions import ConfigError

_TRUTHY = {"1", "true", "yes", "on"}

# SQLAlchemy driver for Postgres URLs that do not name one
POSTGRES_SCHEME = "postgresql+psycopg"
_BARE_POSTGRES_SCHEMES = ("postgres://", "postgresql://")


def _default_database_url() -> str:
    """Get default sqlite database URL."""
    data_dir = Path(os.environ.get("XDG_DATA_HOME", Path.home() / ".local" / "share"))
    return f"sqlite:///{data_dir / 'schemaledger' / 'schema.db'}"


def _env_int(name: str, default: int) -> int:
    value = os.environ.get(name)
    if value is None or value == "":
        return default
    try:
        return int(value)
    except ValueError as e:
        raise ConfigError(f"{name} must be an integer, got {value!r}") from e


def _env_float(name: str, default: float) -> float:
    value = os.environ.get(name)
    if value is None or value == "":
        return default
    try:
        return float(value)
    except ValueError as e:
        raise ConfigError(f"{name} must be a number, got {value!r}") from e


def normalize_database_url(url: str) -> str:
    """Rewrite bare postgres:// and postgresql:// URLs to the psycopg driver.

    URLs that already name a driver, and non-Postgres URLs, are returned
    unchanged.
    """
    for scheme in _BARE_POSTGRES_SCHEMES:
        if url.startswith(scheme):
            return f"{POSTGRES_SCHEME}://{url[len(scheme):]}"
    return url


def _build_postgres_url() -> str | None:
    """Build a Postgres URL from POSTGRES_* variables, if a password is set."""
    password = os.environ.get("POSTGRES_PASSWORD")
    if not password:
        return None

    user = os.environ.get("POSTGRES_USER", "postgres")
    host = os.environ.get("POSTGRES_HOST", "localhost")
    port = os.environ.get("POSTGRES_PORT", "5432")
    db = os.environ.get("POSTGRES_DB", "postgres")
    return f"{POSTGRES_SCHEME}://{quote(user)}:{quote(password)}@{host}:{port}/{db}"


@dataclass
class DatabaseConfig:
    """Database connection configuration."""

    url: str = field(default_factory=_default_database_url)
    connection_timeout: float = 10.0  # seconds
    retry_attempts: int = 5
    retry_delay: float = 5.0  # seconds, doubled after each failed attempt

    @property
    def is_sqlite(self) -> bool:
        return self.url.startswith("sqlite")

    @property
    def sqlite_path(self) -> Path:
        """Filesystem path of a sqlite:/// URL."""
        if not self.is_sqlite:
            raise ConfigError(f"Not a sqlite URL: {self.url}")
        path = self.url.split("///", 1)[1] if "///" in self.url else ""
        return Path(path or ":memory:")


@dataclass
class MigrationsConfig:
    """Migration source and ledger configuration."""

    directory: Path = field(default_factory=lambda: Path("migrations"))
    table: str = "schema_migrations"
    suffix: str = ".sql"
    strict_ledger: bool = False


@dataclass
class Config:
    """Main application configuration."""

    database: DatabaseConfig = field(default_factory=DatabaseConfig)
    migrations: MigrationsConfig = field(default_factory=MigrationsConfig)
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Config":
        """Load configuration from environment variables."""
        config = cls()

        # Database
        if url := os.environ.get("DATABASE_URL"):
            config.database.url = normalize_database_url(url)
        elif url := _build_postgres_url():
            config.database.url = url

        config.database.connection_timeout = _env_float(
            "DB_CONNECTION_TIMEOUT", config.database.connection_timeout
        )
        config.database.retry_attempts = _env_int(
            "DB_RETRY_ATTEMPTS", config.database.retry_attempts
        )
        config.database.retry_delay = _env_float(
            "DB_RETRY_DELAY", config.database.retry_delay
        )

        # Migrations
        if directory := os.environ.get("MIGRATIONS_DIR"):
            config.migrations.directory = Path(directory)
        if table := os.environ.get("MIGRATIONS_TABLE"):
            config.migrations.table = table
        if suffix := os.environ.get("MIGRATIONS_SUFFIX"):
            config.migrations.suffix = suffix
        if strict := os.environ.get("MIGRATIONS_STRICT_LEDGER"):
            config.migrations.strict_ledger = strict.strip().lower() in _TRUTHY

        if level := os.environ.get("LOG_LEVEL"):
            config.log_level = level.upper()

        if config.database.retry_attempts < 1:
            raise ConfigError("DB_RETRY_ATTEMPTS must be at least 1")

        return config
