"""Data access layer for schemaledger.

This package provides the persistence layer:
- Database: sqlite3 storage client with explicit transactions
- EngineDatabase: SQLAlchemy storage client for server databases
- Ledger: the table recording applied migrations

Example:
    from schemaledger.store import Ledger, create_storage, connect_with_retry

    storage = connect_with_retry(create_storage(config.database))
    ledger = Ledger(storage)
    print(list(ledger.list_applied()))
"""

from .database import Database, split_statements
from .engine import EngineDatabase
from .factory import connect_with_retry, create_storage
from .ledger import Ledger
from .schema import DEFAULT_TABLE, get_ledger_schema, validate_table_name

__all__ = [
    # Storage clients
    "Database",
    "EngineDatabase",
    "create_storage",
    "connect_with_retry",
    "split_statements",
    # Ledger
    "Ledger",
    "DEFAULT_TABLE",
    "get_ledger_schema",
    "validate_table_name",
]
