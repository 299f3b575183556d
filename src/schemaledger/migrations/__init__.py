"""Migration engine for schemaledger.

Example:
    from schemaledger.migrations import MigrationOrchestrator
    from schemaledger.sources import DirectorySource

    orchestrator = MigrationOrchestrator(storage, DirectorySource(path))
    result = orchestrator.run()
"""

from .applier import Applier
from .orchestrator import MigrationOrchestrator

__all__ = [
    "Applier",
    "MigrationOrchestrator",
]
