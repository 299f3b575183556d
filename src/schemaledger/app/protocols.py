"""Protocol definitions for schemaledger.

This module defines Protocol types for the two injectable capabilities the
migration engine depends on, so the orchestrator can be built against
interfaces rather than concrete implementations.

Protocol types enable:
- Explicit dependency injection in the orchestrator constructor
- Testing with in-memory fakes instead of a real database or directory

Example:
    class MyRunner:
        def __init__(
            self,
            storage: StorageClient,
            source: MigrationSource,
        ):
            self._storage = storage
            self._source = source
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Mapping, Protocol, runtime_checkable

if TYPE_CHECKING:
    from ..core.types import MigrationDefinition


# =============================================================================
# Storage
# =============================================================================


@runtime_checkable
class StorageClient(Protocol):
    """Connection to the database being migrated.

    Statements use named ``:param`` placeholders. Transactions are driven
    explicitly with begin/commit/rollback; the client never commits on its
    own while a transaction is open.
    """

    @property
    def dialect(self) -> str:
        """SQL dialect name ("sqlite", "postgresql", "mysql", ...)."""
        ...

    def connect(self) -> None:
        """Open the underlying connection."""
        ...

    def close(self) -> None:
        """Close the underlying connection."""
        ...

    def execute(
        self, sql: str, params: Mapping[str, Any] | None = None
    ) -> list[Mapping[str, Any]]:
        """Execute one statement and return its rows (empty for DDL/DML)."""
        ...

    def execute_script(self, sql: str) -> None:
        """Execute a multi-statement script inside the current transaction."""
        ...

    def begin(self) -> None:
        """Open a transaction."""
        ...

    def commit(self) -> None:
        """Commit the open transaction."""
        ...

    def rollback(self) -> None:
        """Roll back the open transaction."""
        ...

    def health_check(self) -> dict[str, Any]:
        """Run a trivial query; return ``healthy`` plus ``latency_ms`` or ``error``."""
        ...


# =============================================================================
# Migration Sources
# =============================================================================


@runtime_checkable
class MigrationSource(Protocol):
    """Supplier of migration definitions in application order."""

    def list_definitions(self) -> list["MigrationDefinition"]:
        """Return all definitions sorted lexically by identifier."""
        ...

    def list_identifiers(self) -> list[str]:
        """Return all identifiers sorted lexically, without reading bodies."""
        ...

    def read_definition(self, identifier: str) -> "MigrationDefinition":
        """Return the definition for one identifier, reading its body."""
        ...
