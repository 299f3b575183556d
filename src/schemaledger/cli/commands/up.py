"""Up command: apply pending migrations."""

from ...core.config import Config
from ...core.types import RunResult
from .session import open_orchestrator


def handle_up(args, config: Config) -> None:
    """Handle up command.

    Failed migrations are reported but do not change the exit status.

    Args:
        args: Parsed command arguments.
        config: Application configuration.
    """
    with open_orchestrator(config) as orchestrator:
        result = orchestrator.run()
    _print_result(result)


def _print_result(result: RunResult) -> None:
    print(f"Applied: {result.applied}")
    print(f"Failed: {result.failed}")

    if result.failures:
        print()
        print("Failed migrations:")
        for outcome in result.failures:
            print(f"  - {outcome.identifier}: {outcome.error}")
