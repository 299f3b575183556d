"""Migration orchestrator.

Computes the pending set (known definitions minus the ledger) on every
call and applies it in identifier order, one migration per transaction.
"""

from __future__ import annotations

from loguru import logger

from ..app.protocols import MigrationSource, StorageClient
from ..core.types import (
    MigrationDefinition,
    MigrationState,
    MigrationStatus,
    RunResult,
    StatusReport,
)
from ..store.ledger import Ledger
from ..store.schema import DEFAULT_TABLE
from .applier import Applier


class MigrationOrchestrator:
    """Applies pending migrations and reports schema status.

    A failed migration does not stop the run: later pending migrations
    are still attempted, and the failure is counted in the result. The
    failed migration stays pending and is retried on the next run.

    Example:
        orchestrator = MigrationOrchestrator(storage, DirectorySource(path))
        result = orchestrator.run()
        print(f"Applied {result.applied}, failed {result.failed}")
    """

    def __init__(
        self,
        storage: StorageClient,
        source: MigrationSource,
        table: str = DEFAULT_TABLE,
        strict_ledger: bool = False,
    ):
        """Initialize with injected storage and source.

        Args:
            storage: Connected storage client.
            source: Supplier of migration definitions.
            table: Ledger table name.
            strict_ledger: Fail instead of assuming an empty ledger when
                the ledger cannot be read.
        """
        self._storage = storage
        self._source = source
        self.ledger = Ledger(storage, table=table, strict=strict_ledger)
        self.applier = Applier(storage, self.ledger)

    def get_pending(self) -> list[MigrationDefinition]:
        """Get definitions not yet recorded in the ledger, in source order.

        Only pending bodies are read; applied migrations are never opened.
        """
        applied = self.ledger.list_applied()
        return [
            self._source.read_definition(identifier)
            for identifier in self._source.list_identifiers()
            if identifier not in applied
        ]

    def run(self) -> RunResult:
        """Apply all pending migrations sequentially.

        Returns:
            RunResult with applied and failed counts.

        Raises:
            LedgerUnavailableError: In strict mode, if the ledger cannot be read.
            SourceError: If definitions cannot be listed.
        """
        logger.info("Checking for pending migrations...")
        pending = self.get_pending()
        result = RunResult()

        if not pending:
            logger.info("No pending migrations")
            return result

        logger.info(f"Found {len(pending)} pending migration(s)")

        for definition in pending:
            result.record(self.applier.apply(definition))

        logger.info(f"Complete: {result.applied} applied, {result.failed} failed")
        return result

    def status(self) -> StatusReport:
        """Summarize applied and pending migrations without applying any.

        Raises:
            LedgerUnavailableError: In strict mode, if the ledger cannot be read.
        """
        applied = self.ledger.list_applied()
        identifiers = self._source.list_identifiers()

        migrations = [
            MigrationStatus(
                identifier=identifier,
                state=(
                    MigrationState.APPLIED
                    if identifier in applied
                    else MigrationState.PENDING
                ),
            )
            for identifier in identifiers
        ]

        return StatusReport(
            total=len(identifiers),
            applied=len(applied),
            pending=[
                m.identifier for m in migrations if m.state is MigrationState.PENDING
            ],
            migrations=migrations,
        )
