"""SQLite database connection manager for schemaledger."""

import sqlite3
import time
from pathlib import Path
from typing import Any, Mapping

from ..core.exceptions import DatabaseError


def split_statements(script: str) -> list[str]:
    """Split a SQL script into complete statements.

    Semicolons inside string literals, comments and trigger bodies do not
    end a statement; sqlite's own tokenizer decides via
    ``sqlite3.complete_statement``. Comment-only fragments are dropped.

    Args:
        script: SQL text with one or more statements.

    Returns:
        Statements in script order.
    """
    statements: list[str] = []
    pieces = script.split(";")
    buffer = ""

    for index, piece in enumerate(pieces):
        buffer += piece
        if index == len(pieces) - 1:
            break
        buffer += ";"
        if sqlite3.complete_statement(buffer):
            if _has_sql(buffer):
                statements.append(buffer.strip())
            buffer = ""

    if _has_sql(buffer):
        statements.append(buffer.strip())

    return statements


def _has_sql(fragment: str) -> bool:
    lines = [
        line.strip()
        for line in fragment.splitlines()
        if not line.strip().startswith("--")
    ]
    return bool("".join(lines).strip(" \t;"))


class Database:
    """SQLite storage client.

    The connection runs with ``isolation_level=None`` so the sqlite3 module
    never opens or commits transactions implicitly; transaction boundaries
    come only from :meth:`begin`, :meth:`commit` and :meth:`rollback`.
    """

    dialect = "sqlite"

    def __init__(self, path: Path, timeout: float = 10.0):
        """Initialize database with path.

        Args:
            path: Path to the SQLite database file, or ``:memory:``.
            timeout: Seconds to wait on a locked database.
        """
        self.path = Path(path)
        self.timeout = timeout
        self._connection: sqlite3.Connection | None = None

    @property
    def is_connected(self) -> bool:
        return self._connection is not None

    def connect(self) -> None:
        """Open the database connection."""
        if self._connection is not None:
            return
        try:
            if str(self.path) != ":memory:":
                self.path.parent.mkdir(parents=True, exist_ok=True)
            self._connection = sqlite3.connect(
                str(self.path),
                timeout=self.timeout,
                isolation_level=None,
            )
            self._connection.row_factory = sqlite3.Row
            self._connection.execute("PRAGMA foreign_keys = ON")
        except Exception as e:
            self._connection = None
            raise DatabaseError(f"Failed to connect to database: {e}") from e

    def close(self) -> None:
        """Close database connection."""
        if self._connection:
            try:
                self._connection.close()
            except Exception as e:
                raise DatabaseError(f"Failed to close database: {e}") from e
            finally:
                self._connection = None

    def _require_connection(self) -> sqlite3.Connection:
        if not self._connection:
            raise DatabaseError("Database not connected")
        return self._connection

    @property
    def in_transaction(self) -> bool:
        return bool(self._connection and self._connection.in_transaction)

    def execute(
        self, sql: str, params: Mapping[str, Any] | None = None
    ) -> list[dict[str, Any]]:
        """Execute a SQL statement.

        Args:
            sql: SQL statement with named ``:param`` placeholders.
            params: Parameters for the SQL statement.

        Returns:
            Result rows as dictionaries.

        Raises:
            DatabaseError: If connection is not available or query fails.
        """
        conn = self._require_connection()

        try:
            cursor = conn.execute(sql, dict(params or {}))
            return [dict(row) for row in cursor.fetchall()]
        except Exception as e:
            raise DatabaseError(f"Query execution failed: {e}") from e

    def execute_script(self, sql: str) -> None:
        """Execute multiple SQL statements inside the current transaction.

        ``sqlite3.Connection.executescript`` commits any open transaction
        before running, so statements are executed one at a time instead.

        Args:
            sql: SQL script with multiple statements.

        Raises:
            DatabaseError: If connection is not available or a statement fails.
        """
        conn = self._require_connection()

        for statement in split_statements(sql):
            try:
                conn.execute(statement)
            except Exception as e:
                raise DatabaseError(f"Script execution failed: {e}") from e

    def begin(self) -> None:
        """Open a transaction."""
        conn = self._require_connection()
        try:
            conn.execute("BEGIN")
        except Exception as e:
            raise DatabaseError(f"Failed to begin transaction: {e}") from e

    def commit(self) -> None:
        """Commit the open transaction."""
        conn = self._require_connection()
        try:
            conn.execute("COMMIT")
        except Exception as e:
            raise DatabaseError(f"Failed to commit transaction: {e}") from e

    def rollback(self) -> None:
        """Roll back the open transaction, if any."""
        conn = self._require_connection()
        if not conn.in_transaction:
            return
        try:
            conn.execute("ROLLBACK")
        except Exception as e:
            raise DatabaseError(f"Failed to roll back transaction: {e}") from e

    def health_check(self) -> dict[str, Any]:
        """Run a trivial query and report latency."""
        try:
            start = time.perf_counter()
            self.execute("SELECT 1")
            latency_ms = (time.perf_counter() - start) * 1000
            return {"healthy": True, "latency_ms": latency_ms}
        except DatabaseError as e:
            return {"healthy": False, "error": str(e)}
