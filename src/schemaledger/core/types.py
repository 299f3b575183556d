"""Type definitions for schemaledger."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional, Union


class MigrationState(Enum):
    """Lifecycle state of a migration identifier."""

    PENDING = "pending"
    APPLYING = "applying"
    APPLIED = "applied"
    FAILED = "failed"


@dataclass(frozen=True)
class MigrationDefinition:
    """One named unit of schema-changing SQL.

    The identifier encodes application order in its string form, so it is
    conventionally prefixed with a UTC timestamp.
    """

    identifier: str
    body: str

    def __repr__(self) -> str:
        return f"MigrationDefinition({self.identifier!r})"


@dataclass
class LedgerEntry:
    """A row of the ledger table."""

    id: int
    identifier: str
    applied_at: Union[str, datetime, None]


@dataclass
class ApplyOutcome:
    """Result of applying a single migration."""

    identifier: str
    success: bool
    error: Optional[str] = None

    @property
    def state(self) -> MigrationState:
        return MigrationState.APPLIED if self.success else MigrationState.FAILED


@dataclass
class RunResult:
    """Counts from one orchestration pass."""

    applied: int = 0
    failed: int = 0
    failures: list[ApplyOutcome] = field(default_factory=list)

    def record(self, outcome: ApplyOutcome) -> None:
        """Add an outcome to the tally."""
        if outcome.success:
            self.applied += 1
        else:
            self.failed += 1
            self.failures.append(outcome)


@dataclass
class MigrationStatus:
    """Applied/pending tag for one known migration."""

    identifier: str
    state: MigrationState


@dataclass
class StatusReport:
    """Read-only summary of the schema state.

    Attributes:
        total: Number of definitions known to the source.
        applied: Number of identifiers recorded in the ledger.
        pending: Identifiers known to the source but absent from the ledger.
        migrations: Per-identifier applied/pending tags, in source order.
    """

    total: int
    applied: int
    pending: list[str] = field(default_factory=list)
    migrations: list[MigrationStatus] = field(default_factory=list)

    @property
    def is_up_to_date(self) -> bool:
        return not self.pending
