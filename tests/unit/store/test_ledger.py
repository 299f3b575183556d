"""Tests for the migration ledger."""

import pytest

from schemaledger.core.exceptions import (
    ConfigError,
    DatabaseError,
    LedgerUnavailableError,
)
from schemaledger.store.database import Database
from schemaledger.store.ledger import Ledger
from schemaledger.store.schema import get_ledger_schema, validate_table_name
from tests.fakes import InMemoryStorage


class TestLedgerSchema:
    """Tests for ledger DDL helpers."""

    @pytest.mark.parametrize("dialect", ["sqlite", "postgresql", "mysql"])
    def test_schema_is_idempotent_ddl(self, dialect: str):
        """Every dialect should use CREATE TABLE IF NOT EXISTS."""
        sql = get_ledger_schema(dialect, "schema_migrations")

        assert sql.startswith("CREATE TABLE IF NOT EXISTS schema_migrations")
        assert "filename VARCHAR(255) NOT NULL UNIQUE" in sql

    def test_unknown_dialect_rejected(self):
        """An unsupported dialect should raise ConfigError."""
        with pytest.raises(ConfigError, match="Unsupported dialect"):
            get_ledger_schema("oracle")

    @pytest.mark.parametrize("name", ["schema_migrations", "ops.ledger", "_t1"])
    def test_valid_table_names(self, name: str):
        """Plain and schema-qualified identifiers should be accepted."""
        assert validate_table_name(name) == name

    @pytest.mark.parametrize(
        "name", ["", "1table", "t; DROP TABLE users", "a.b.c", "name-with-dash"]
    )
    def test_invalid_table_names(self, name: str):
        """Names that are not plain identifiers should be rejected."""
        with pytest.raises(ConfigError):
            validate_table_name(name)


class TestLedgerWithSqlite:
    """Tests for Ledger against a real sqlite database."""

    def test_ensure_creates_table(self, db: Database):
        """ensure() should create the ledger table."""
        Ledger(db).ensure()

        rows = db.execute(
            "SELECT name FROM sqlite_master WHERE type='table' AND name='schema_migrations'"
        )
        assert len(rows) == 1

    def test_ensure_is_idempotent(self, db: Database):
        """ensure() should be safe to call repeatedly."""
        ledger = Ledger(db)
        ledger.ensure()
        ledger.record("001.sql")
        ledger.ensure()

        assert list(ledger.list_applied()) == ["001.sql"]

    def test_empty_ledger(self, db: Database):
        """A fresh ledger should have no applied migrations."""
        assert Ledger(db).list_applied() == {}

    def test_list_applied_in_application_order(self, db: Database):
        """list_applied() should follow insertion (id) order, not name order."""
        ledger = Ledger(db)
        ledger.ensure()
        ledger.record("b.sql")
        ledger.record("a.sql")

        assert list(ledger.list_applied()) == ["b.sql", "a.sql"]

    def test_entries_have_timestamps(self, db: Database):
        """entries() should return ids and applied timestamps."""
        ledger = Ledger(db)
        ledger.ensure()
        ledger.record("001.sql")

        (entry,) = ledger.entries()
        assert entry.id == 1
        assert entry.identifier == "001.sql"
        assert entry.applied_at is not None

    def test_record_rejects_duplicates(self, db: Database):
        """The unique constraint should reject a second row for an identifier."""
        ledger = Ledger(db)
        ledger.ensure()
        ledger.record("001.sql")

        with pytest.raises(DatabaseError, match="UNIQUE"):
            ledger.record("001.sql")

        assert list(ledger.list_applied()) == ["001.sql"]

    def test_custom_table_name(self, db: Database):
        """A configured table name should be used for all statements."""
        ledger = Ledger(db, table="applied_changes")
        ledger.ensure()
        ledger.record("001.sql")

        rows = db.execute("SELECT filename FROM applied_changes")
        assert rows == [{"filename": "001.sql"}]

    def test_invalid_table_name_rejected_on_init(self, db: Database):
        """Ledger should refuse to interpolate an invalid table name."""
        with pytest.raises(ConfigError):
            Ledger(db, table="x; DROP TABLE y")


class TestLedgerUnavailable:
    """Tests for degraded and strict handling of ledger failures."""

    def test_ensure_failure_raises(self):
        """ensure() should raise LedgerUnavailableError when DDL fails."""
        ledger = Ledger(InMemoryStorage(fail_create=True))

        with pytest.raises(LedgerUnavailableError, match="Could not create"):
            ledger.ensure()

    def test_list_applied_degrades_on_create_failure(self):
        """list_applied() should return an empty set if the table cannot be created."""
        ledger = Ledger(InMemoryStorage(fail_create=True))

        assert ledger.list_applied() == {}

    def test_list_applied_degrades_on_read_failure(self):
        """list_applied() should return an empty set if the read fails."""
        storage = InMemoryStorage(fail_select=True)
        ledger = Ledger(storage)

        assert ledger.list_applied() == {}

    def test_list_applied_logs_error(self):
        """A degraded read should log an error."""
        from loguru import logger

        messages: list[str] = []
        handler_id = logger.add(messages.append, level="ERROR", format="{message}")
        try:
            Ledger(InMemoryStorage(fail_select=True)).list_applied()
        finally:
            logger.remove(handler_id)

        assert any("Error getting applied migrations" in m for m in messages)

    def test_strict_mode_raises(self):
        """In strict mode a failed read should raise."""
        ledger = Ledger(InMemoryStorage(fail_select=True), strict=True)

        with pytest.raises(LedgerUnavailableError, match="Could not read"):
            ledger.list_applied()
