"""Shared setup for commands that touch the database."""

from contextlib import contextmanager
from typing import Iterator

from ...core.config import Config
from ...migrations import MigrationOrchestrator
from ...sources import DirectorySource
from ...store import connect_with_retry, create_storage


@contextmanager
def open_orchestrator(config: Config) -> Iterator[MigrationOrchestrator]:
    """Connect to the configured database and yield an orchestrator.

    Args:
        config: Application configuration.

    Yields:
        Orchestrator over the configured migrations directory.
    """
    storage = connect_with_retry(
        create_storage(config.database),
        attempts=config.database.retry_attempts,
        delay=config.database.retry_delay,
    )

    try:
        source = DirectorySource(
            config.migrations.directory, suffix=config.migrations.suffix
        )
        yield MigrationOrchestrator(
            storage,
            source,
            table=config.migrations.table,
            strict_ledger=config.migrations.strict_ledger,
        )
    finally:
        storage.close()
