"""Core types, configuration and errors for schemaledger."""

from .config import Config, DatabaseConfig, MigrationsConfig
from .exceptions import (
    ConfigError,
    DatabaseError,
    LedgerUnavailableError,
    SchemaLedgerError,
    SourceError,
    UsageError,
)
from .types import (
    ApplyOutcome,
    LedgerEntry,
    MigrationDefinition,
    MigrationState,
    MigrationStatus,
    RunResult,
    StatusReport,
)

__all__ = [
    # Config
    "Config",
    "DatabaseConfig",
    "MigrationsConfig",
    # Exceptions
    "SchemaLedgerError",
    "ConfigError",
    "UsageError",
    "DatabaseError",
    "LedgerUnavailableError",
    "SourceError",
    # Types
    "MigrationDefinition",
    "LedgerEntry",
    "ApplyOutcome",
    "RunResult",
    "MigrationState",
    "MigrationStatus",
    "StatusReport",
]
