"""Application-level interfaces for schemaledger."""

from .protocols import MigrationSource, StorageClient

__all__ = [
    "MigrationSource",
    "StorageClient",
]
