"""Create command: write a new empty migration file."""

from ...core.config import Config
from ...sources import create_definition


def handle_create(args, config: Config) -> None:
    """Handle create command.

    Args:
        args: Parsed command arguments.
        config: Application configuration.

    Raises:
        UsageError: If no name was given.
    """
    path = create_definition(
        config.migrations.directory,
        args.name,
        suffix=config.migrations.suffix,
    )
    print(f"Created: {path}")
