"""Storage client construction and connection retry."""

from __future__ import annotations

import time
from typing import Callable

from loguru import logger

from ..app.protocols import StorageClient
from ..core.config import DatabaseConfig
from ..core.exceptions import DatabaseError
from .database import Database
from .engine import EngineDatabase


def create_storage(config: DatabaseConfig) -> Database | EngineDatabase:
    """Create an unconnected storage client for the configured URL.

    ``sqlite:///`` URLs use the sqlite3 client; everything else goes
    through SQLAlchemy.
    """
    if config.is_sqlite:
        return Database(config.sqlite_path, timeout=config.connection_timeout)
    return EngineDatabase(config.url, connect_timeout=config.connection_timeout)


def connect_with_retry(
    storage: StorageClient,
    attempts: int = 5,
    delay: float = 5.0,
    sleep: Callable[[float], None] = time.sleep,
) -> StorageClient:
    """Connect and health-check the database, backing off exponentially.

    Args:
        storage: Storage client to connect.
        attempts: Maximum number of connection attempts.
        delay: Seconds before the second attempt; doubled after each failure.
        sleep: Sleep function (injectable for tests).

    Returns:
        The connected storage client.

    Raises:
        DatabaseError: If every attempt fails.
    """
    for attempt in range(1, attempts + 1):
        try:
            storage.connect()
            health = storage.health_check()
            if not health["healthy"]:
                raise DatabaseError(f"Health check failed: {health['error']}")
            logger.info(
                f"Connected to database (attempt {attempt}/{attempts}, "
                f"{health['latency_ms']:.1f}ms)"
            )
            return storage
        except DatabaseError as e:
            storage.close()
            if attempt == attempts:
                logger.error(f"Giving up after {attempts} connection attempts: {e}")
                raise

            next_delay = delay * 2 ** (attempt - 1)
            logger.warning(
                f"Connection attempt {attempt}/{attempts} failed: {e}; "
                f"retrying in {next_delay:.1f}s"
            )
            sleep(next_delay)

    raise DatabaseError("No connection attempts were made")
