"""Custom exceptions for schemaledger."""


class SchemaLedgerError(Exception):
    """Base exception for all schemaledger errors."""

    pass


class ConfigError(SchemaLedgerError):
    """Configuration value is missing or invalid."""

    pass


class UsageError(SchemaLedgerError):
    """Operator supplied an invalid or incomplete command."""

    pass


class DatabaseError(SchemaLedgerError):
    """Database operation failed."""

    pass


class LedgerUnavailableError(DatabaseError):
    """Ledger table could not be created or read."""

    pass


class SourceError(SchemaLedgerError):
    """Migration definitions could not be listed, read or written."""

    pass

