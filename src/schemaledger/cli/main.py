"""CLI entry point for schemaledger."""

import argparse
import sys
from pathlib import Path
from typing import NoReturn, Sequence

from ..core.config import Config, normalize_database_url
from ..core.exceptions import UsageError
from ..core.logging import configure_logging
from . import commands


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="schemaledger",
        description="Apply versioned SQL migrations and track them in a ledger table",
    )
    parser.add_argument("-v", "--version", action="version", version="%(prog)s 1.0.0")
    parser.add_argument(
        "--database-url",
        help="Database URL (default: $DATABASE_URL or a local sqlite file)",
    )
    parser.add_argument(
        "--migrations-dir",
        type=Path,
        help="Directory of migration files (default: $MIGRATIONS_DIR or ./migrations)",
    )
    parser.add_argument(
        "--table",
        help="Ledger table name (default: schema_migrations)",
    )
    parser.add_argument(
        "--log-level",
        help="Log level (default: $LOG_LEVEL or INFO)",
    )
    parser.add_argument(
        "--strict-ledger",
        action="store_true",
        default=None,
        help="Fail instead of assuming no migrations when the ledger cannot be read",
    )

    subparsers = parser.add_subparsers(dest="command", required=False)

    subparsers.add_parser("up", help="Apply pending migrations")
    subparsers.add_parser("status", help="Show applied and pending migrations")

    create_cmd = subparsers.add_parser("create", help="Create an empty migration")
    create_cmd.add_argument("name", nargs="?", help="Migration name")

    return parser


def _apply_overrides(args: argparse.Namespace, config: Config) -> Config:
    """Apply command-line options on top of environment configuration."""
    if args.database_url:
        config.database.url = normalize_database_url(args.database_url)
    if args.migrations_dir:
        config.migrations.directory = args.migrations_dir
    if args.table:
        config.migrations.table = args.table
    if args.log_level:
        config.log_level = args.log_level.upper()
    if args.strict_ledger is not None:
        config.migrations.strict_ledger = args.strict_ledger
    return config


def main(argv: Sequence[str] | None = None) -> NoReturn:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    try:
        config = _apply_overrides(args, Config.from_env())
        configure_logging(config.log_level)

        if args.command == "up":
            commands.handle_up(args, config)
        elif args.command == "status":
            commands.handle_status(args, config)
        elif args.command == "create":
            commands.handle_create(args, config)
        else:
            parser.print_help()

        sys.exit(0)
    except UsageError as e:
        print(f"Usage: {parser.prog} create <migration_name>", file=sys.stderr)
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
