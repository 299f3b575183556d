"""Directory migration source.

Migration definitions are plain SQL files in one directory. The file name
is the migration identifier, and plain lexical ordering of file names is
the application order, so names start with a UTC timestamp
(``20240226170000_add_soft_deletes.sql``).
"""

from __future__ import annotations

import re
from datetime import datetime, timezone
from pathlib import Path

from loguru import logger

from ..core.exceptions import SourceError, UsageError
from ..core.types import MigrationDefinition

DEFAULT_SUFFIX = ".sql"

TEMPLATE = """\
-- Migration: {name}
-- Created: {created}

-- Add your SQL here

"""


class DirectorySource:
    """Lists migration definitions from a directory.

    Example:
        source = DirectorySource(Path("migrations"))
        for definition in source.list_definitions():
            print(definition.identifier)
    """

    def __init__(
        self,
        directory: Path,
        suffix: str = DEFAULT_SUFFIX,
        encoding: str = "utf-8",
    ) -> None:
        """Initialize directory source.

        Args:
            directory: Directory holding migration files.
            suffix: File name suffix that marks a migration file.
            encoding: Text encoding of migration files.
        """
        self.directory = Path(directory)
        self.suffix = suffix
        self.encoding = encoding

    def _paths(self) -> list[Path]:
        if not self.directory.is_dir():
            logger.debug(f"Migrations directory {self.directory} does not exist")
            return []

        paths = [
            path
            for path in self.directory.iterdir()
            if path.name.endswith(self.suffix) and path.is_file()
        ]
        return sorted(paths, key=lambda p: p.name)

    def list_identifiers(self) -> list[str]:
        """Get migration identifiers sorted lexically.

        Returns:
            File names, or an empty list if the directory does not exist.
        """
        return [path.name for path in self._paths()]

    def list_definitions(self) -> list[MigrationDefinition]:
        """Get migration definitions sorted lexically by identifier.

        Returns:
            Definitions with their SQL bodies, or an empty list if the
            directory does not exist.

        Raises:
            SourceError: If a migration file cannot be read.
        """
        return [self.read_definition(path.name) for path in self._paths()]

    def read_definition(self, identifier: str) -> MigrationDefinition:
        """Read the body of a single migration.

        Raises:
            SourceError: If the migration file cannot be read.
        """
        path = self.directory / identifier
        try:
            body = path.read_text(encoding=self.encoding)
        except (OSError, UnicodeDecodeError) as e:
            raise SourceError(f"Cannot read migration {path}: {e}") from e
        return MigrationDefinition(identifier=identifier, body=body)


def normalize_name(name: str) -> str:
    """Turn a free-form migration name into an identifier fragment.

    Whitespace runs become underscores and the result is lowercased.
    """
    return re.sub(r"\s+", "_", name.strip()).lower()


def create_definition(
    directory: Path,
    name: str | None,
    suffix: str = DEFAULT_SUFFIX,
    now: datetime | None = None,
) -> Path:
    """Create an empty migration file.

    The identifier is ``<UTC YYYYMMDDHHMMSS>_<normalized name><suffix>`` so
    new files sort after existing ones.

    Args:
        directory: Migrations directory (created if missing).
        name: Human-readable migration name.
        suffix: File name suffix.
        now: Creation time (default: current UTC time).

    Returns:
        Path to the created file.

    Raises:
        UsageError: If the name is missing or blank.
        SourceError: If the file exists or cannot be written.
    """
    if not name or not name.strip():
        raise UsageError("A migration name is required")

    created = now or datetime.now(timezone.utc)
    if created.tzinfo is not None:
        created = created.astimezone(timezone.utc)

    filename = f"{created.strftime('%Y%m%d%H%M%S')}_{normalize_name(name)}{suffix}"
    directory = Path(directory)
    filepath = directory / filename

    try:
        directory.mkdir(parents=True, exist_ok=True)
        with filepath.open("x", encoding="utf-8") as f:
            f.write(TEMPLATE.format(name=name.strip(), created=created.isoformat()))
    except FileExistsError as e:
        raise SourceError(f"Migration already exists: {filepath}") from e
    except OSError as e:
        raise SourceError(f"Cannot create migration {filepath}: {e}") from e

    logger.info(f"Created migration {filepath}")
    return filepath
