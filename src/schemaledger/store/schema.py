"""Ledger table definitions for schemaledger."""

import re

from ..core.exceptions import ConfigError

DEFAULT_TABLE = "schema_migrations"

# Optionally schema-qualified: "schema_migrations" or "ops.schema_migrations"
_TABLE_NAME = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*(\.[A-Za-z_][A-Za-z0-9_]*)?$")

LEDGER_SQL = {
    "sqlite": """\
CREATE TABLE IF NOT EXISTS {table} (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    filename VARCHAR(255) NOT NULL UNIQUE,
    applied_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
)
""",
    "postgresql": """\
CREATE TABLE IF NOT EXISTS {table} (
    id SERIAL PRIMARY KEY,
    filename VARCHAR(255) NOT NULL UNIQUE,
    applied_at TIMESTAMPTZ DEFAULT NOW()
)
""",
    "mysql": """\
CREATE TABLE IF NOT EXISTS {table} (
    id INTEGER AUTO_INCREMENT PRIMARY KEY,
    filename VARCHAR(255) NOT NULL UNIQUE,
    applied_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
)
""",
}

# MariaDB reports its own dialect name through SQLAlchemy
LEDGER_SQL["mariadb"] = LEDGER_SQL["mysql"]


def validate_table_name(table: str) -> str:
    """Check that a ledger table name is a plain SQL identifier.

    The name is interpolated into DDL, so anything beyond identifier
    characters is rejected.

    Raises:
        ConfigError: If the name is not a valid identifier.
    """
    if not _TABLE_NAME.match(table):
        raise ConfigError(f"Invalid ledger table name: {table!r}")
    return table


def get_ledger_schema(dialect: str, table: str = DEFAULT_TABLE) -> str:
    """Get CREATE TABLE statement for the ledger in the given dialect.

    Args:
        dialect: SQL dialect name reported by the storage client.
        table: Ledger table name.

    Raises:
        ConfigError: If the dialect has no ledger definition.
    """
    try:
        template = LEDGER_SQL[dialect]
    except KeyError:
        supported = ", ".join(sorted(LEDGER_SQL))
        raise ConfigError(
            f"Unsupported dialect {dialect!r} (supported: {supported})"
        ) from None
    return template.format(table=validate_table_name(table))


def select_applied_sql(table: str = DEFAULT_TABLE) -> str:
    return f"SELECT id, filename, applied_at FROM {validate_table_name(table)} ORDER BY id"


def insert_entry_sql(table: str = DEFAULT_TABLE) -> str:
    return f"INSERT INTO {validate_table_name(table)} (filename) VALUES (:filename)"
