"""Pytest configuration and fixtures."""

from pathlib import Path
from typing import Callable

import pytest

from schemaledger.core.config import Config
from schemaledger.sources import DirectorySource
from schemaledger.store.database import Database
from tests.fakes import InMemorySource, InMemoryStorage


@pytest.fixture
def test_db_path(tmp_path: Path) -> Path:
    """Provide a temporary database path for tests."""
    return tmp_path / "test.db"


@pytest.fixture
def migrations_dir(tmp_path: Path) -> Path:
    """Provide an empty migrations directory."""
    path = tmp_path / "migrations"
    path.mkdir()
    return path


@pytest.fixture
def write_migration(migrations_dir: Path) -> Callable[[str, str], Path]:
    """Provide a helper that writes a migration file."""

    def _write(name: str, body: str) -> Path:
        path = migrations_dir / name
        path.write_text(body, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def db(test_db_path: Path) -> Database:
    """Provide a connected database instance."""
    database = Database(test_db_path)
    database.connect()
    yield database
    database.close()


@pytest.fixture
def source(migrations_dir: Path) -> DirectorySource:
    """Provide a DirectorySource over the temporary migrations directory."""
    return DirectorySource(migrations_dir)


@pytest.fixture
def storage() -> InMemoryStorage:
    """Provide an in-memory storage fake."""
    return InMemoryStorage()


@pytest.fixture
def memory_source() -> InMemorySource:
    """Provide an empty in-memory source."""
    return InMemorySource()


@pytest.fixture
def config(test_db_path: Path, migrations_dir: Path) -> Config:
    """Provide a Config pointing at temporary paths."""
    cfg = Config()
    cfg.database.url = f"sqlite:///{test_db_path}"
    cfg.database.retry_attempts = 1
    cfg.database.retry_delay = 0.0
    cfg.migrations.directory = migrations_dir
    return cfg
