"""Status command for schemaledger CLI."""

from ...core.config import Config
from ...core.types import StatusReport
from .session import open_orchestrator


def handle_status(args, config: Config) -> None:
    """Handle status command.

    Args:
        args: Parsed command arguments.
        config: Application configuration.
    """
    with open_orchestrator(config) as orchestrator:
        report = orchestrator.status()
    _print_status(report)


def _print_status(report: StatusReport) -> None:
    """Print status information.

    Args:
        report: StatusReport object to display.
    """
    print()
    print("Migration Status:")
    print("=================")
    print(f"Total: {report.total}")
    print(f"Applied: {report.applied}")
    print(f"Pending: {len(report.pending)}")

    if report.pending:
        print()
        print("Pending migrations:")
        for identifier in report.pending:
            print(f"  - {identifier}")
