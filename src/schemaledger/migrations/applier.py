"""Transactional application of a single migration."""

from __future__ import annotations

from loguru import logger

from ..app.protocols import StorageClient
from ..core.types import ApplyOutcome, MigrationDefinition, MigrationState
from ..store.ledger import Ledger


class Applier:
    """Runs one migration body and records it in the ledger atomically.

    The body and the ledger insert share a transaction: either both are
    committed or both are rolled back. Failures are returned as
    :class:`ApplyOutcome` rather than raised, so a caller can move on to
    the next migration.
    """

    def __init__(self, storage: StorageClient, ledger: Ledger):
        """Initialize Applier.

        Args:
            storage: Connected storage client.
            ledger: Ledger sharing the same storage client.
        """
        self._storage = storage
        self._ledger = ledger

    def apply(self, definition: MigrationDefinition) -> ApplyOutcome:
        """Apply a migration inside its own transaction.

        Args:
            definition: Migration to apply.

        Returns:
            ApplyOutcome with success flag and, on failure, the error message.
        """
        identifier = definition.identifier
        log = logger.bind(migration=identifier)
        log.bind(state=MigrationState.APPLYING.value).info(f"Applying: {identifier}")

        try:
            self._storage.begin()
            self._storage.execute_script(definition.body)
            self._ledger.record(identifier)
            self._storage.commit()
        except Exception as e:
            self._rollback(identifier)
            outcome = ApplyOutcome(identifier=identifier, success=False, error=str(e))
            log.bind(state=outcome.state.value).error(f"Failed: {identifier}: {e}")
            return outcome

        outcome = ApplyOutcome(identifier=identifier, success=True)
        log.bind(state=outcome.state.value).info(f"Applied: {identifier}")
        return outcome

    def _rollback(self, identifier: str) -> None:
        try:
            self._storage.rollback()
        except Exception as e:
            # Report the migration error, not the rollback error
            logger.error(f"Rollback after failed {identifier} also failed: {e}")
