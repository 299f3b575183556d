"""Test fakes for testing without real infrastructure.

This module provides in-memory implementations of:
- StorageClient (ledger statements plus recorded migration bodies)
- MigrationSource (definitions held in a list)

Example:
    from tests.fakes import InMemorySource, InMemoryStorage

    orchestrator = MigrationOrchestrator(
        storage=InMemoryStorage(),
        source=InMemorySource(),
    )
"""

from .storage import InMemorySource, InMemoryStorage, make_definitions

__all__ = [
    "InMemoryStorage",
    "InMemorySource",
    "make_definitions",
]
