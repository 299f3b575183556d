"""Ledger of applied migrations.

The ledger table is the single record of which migration identifiers have
been applied. Rows are only ever inserted, and only inside the transaction
that applied the migration.
"""

from __future__ import annotations

from loguru import logger

from ..app.protocols import StorageClient
from ..core.exceptions import DatabaseError, LedgerUnavailableError
from ..core.types import LedgerEntry
from .schema import (
    DEFAULT_TABLE,
    get_ledger_schema,
    insert_entry_sql,
    select_applied_sql,
    validate_table_name,
)


class Ledger:
    """Reads and writes the migration ledger table.

    Example:
        ledger = Ledger(storage)
        applied = ledger.list_applied()
        if "20240101_init.sql" not in applied:
            ...
    """

    def __init__(
        self,
        storage: StorageClient,
        table: str = DEFAULT_TABLE,
        strict: bool = False,
    ):
        """Initialize with a storage client.

        Args:
            storage: Connected storage client.
            table: Ledger table name.
            strict: Raise instead of returning an empty set when the
                ledger cannot be read.
        """
        self._storage = storage
        self.table = validate_table_name(table)
        self.strict = strict

    def ensure(self) -> None:
        """Create the ledger table if it does not exist.

        Raises:
            LedgerUnavailableError: If the table cannot be created.
        """
        try:
            self._storage.execute(get_ledger_schema(self._storage.dialect, self.table))
        except DatabaseError as e:
            raise LedgerUnavailableError(
                f"Could not create ledger table {self.table}: {e}"
            ) from e

    def entries(self) -> list[LedgerEntry]:
        """Get all ledger rows in application order.

        Raises:
            LedgerUnavailableError: If the ledger cannot be created or read.
        """
        self.ensure()
        try:
            rows = self._storage.execute(select_applied_sql(self.table))
        except DatabaseError as e:
            raise LedgerUnavailableError(
                f"Could not read ledger table {self.table}: {e}"
            ) from e

        return [
            LedgerEntry(
                id=row["id"],
                identifier=row["filename"],
                applied_at=row["applied_at"],
            )
            for row in rows
        ]

    def list_applied(self) -> dict[str, None]:
        """Get identifiers of applied migrations.

        Returns an insertion-ordered mapping used as a set, ordered by
        application (id ascending). If the ledger cannot be read, the error
        is logged and an empty set is returned unless ``strict`` is set.

        Raises:
            LedgerUnavailableError: In strict mode, if the ledger cannot be read.
        """
        try:
            return dict.fromkeys(entry.identifier for entry in self.entries())
        except LedgerUnavailableError as e:
            if self.strict:
                raise
            logger.error(f"Error getting applied migrations, assuming none: {e}")
            return {}

    def record(self, identifier: str) -> None:
        """Insert a ledger row for an applied migration.

        Must be called inside the transaction that ran the migration body.

        Raises:
            DatabaseError: If the insert fails, including when the
                identifier is already recorded.
        """
        self._storage.execute(insert_entry_sql(self.table), {"filename": identifier})
