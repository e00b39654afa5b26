"""Command line and interactive shell for running storage analyses.

Usage:
    python -m api.cli --db mydata.duckdb tables
    python -m api.cli --db mydata.duckdb column main.orders amount
    python -m api.cli --db mydata.duckdb shell
"""

import argparse
import logging
import shlex
import sys
from dataclasses import replace
from typing import List, Optional

import duckdb

from shared.config import InspectorConfig, load_config, parse_attach_spec
from shared.exceptions import InvalidInputError
from shared.result import Err, Result
from storage import DatabaseHelper

from ..cursor import RowCursor
from ..formatters import ResponseFormatter
from ..use_cases import (
    InspectColumnUseCase,
    ListAttachedStorageUseCase,
    ListTablesUseCase,
    StorageBreakdownUseCase,
)
from ..validators import RequestValidator, ValidationError

EXIT_OK = 0
EXIT_INVALID_INPUT = 2


def print_help() -> None:
    print(
        "\nCommands:\n"
        "  :help                      Show this help\n"
        "  :quit / :q / exit          Quit\n"
        "  :show                      Show current settings\n"
        "  :json <on|off>             Toggle JSON output\n"
        "  :db <name|none>            Set the database to inspect\n"
        "  tables                     List tables with persisted data size\n"
        "  column <table> <column>    Per-segment storage of a column\n"
        "  storage                    File and WAL sizes of attached databases\n"
        "  breakdown                  Storage breakdown by category\n"
    )


def parse_toggle(value: str) -> bool:
    return value.lower() in ("1", "true", "yes", "y", "on")


def show_settings(database, as_json, batch_size) -> None:
    print("Current settings:")
    print(f"  database:    {database or '<current>'}")
    print(f"  json:        {'on' if as_json else 'off'}")
    print(f"  batch size:  {batch_size}")


def render(result: Result[RowCursor], as_json: bool) -> int:
    if isinstance(result, Err):
        print(ResponseFormatter.format_error(result))
        return EXIT_INVALID_INPUT
    if as_json:
        print(ResponseFormatter.format_json(result.value))
    else:
        print(ResponseFormatter.format_text(result.value))
    return EXIT_OK


def run_analysis(
    conn: duckdb.DuckDBPyConnection,
    command: str,
    args: List[str],
    database: Optional[str],
    batch_size: int,
) -> Result[RowCursor]:
    """Dispatch one analysis by command name.

    Raises:
        ValidationError: On an unknown command or wrong argument count.
    """
    if command == "tables":
        return ListTablesUseCase(conn, batch_size).execute(database)
    if command == "column":
        if len(args) != 2:
            raise ValidationError("usage: column <table> <column>")
        RequestValidator.validate_table_name(args[0])
        RequestValidator.validate_name(args[1], "column")
        return InspectColumnUseCase(conn, batch_size).execute(args[0], args[1], database)
    if command == "storage":
        return ListAttachedStorageUseCase(conn, batch_size).execute()
    if command == "breakdown":
        return StorageBreakdownUseCase(conn, batch_size).execute(database)
    raise ValidationError(f"unknown command '{command}'")


def run_repl(conn: duckdb.DuckDBPyConnection, config: InspectorConfig, database: Optional[str]) -> int:
    as_json = config.output_format == "json"

    print("Block Inspector")
    print("Type :help for commands.")

    while True:
        try:
            line = input("> ").strip()
        except (EOFError, KeyboardInterrupt):
            print()
            break

        if not line:
            continue

        try:
            cmd = shlex.split(line)
        except ValueError as exc:
            print(f"[error] {exc}")
            continue
        head = cmd[0].lower()

        if head in (":quit", ":q", "exit"):
            break
        if head == ":help":
            print_help()
            continue
        if head == ":show":
            show_settings(database, as_json, config.batch_size)
            continue
        if head == ":json":
            if len(cmd) < 2:
                print("[error] usage: :json <on|off>")
                continue
            as_json = parse_toggle(cmd[1])
            print(f"[ok] json {'on' if as_json else 'off'}")
            continue
        if head == ":db":
            if len(cmd) < 2:
                print("[error] usage: :db <name|none>")
                continue
            database = None if cmd[1].lower() == "none" else cmd[1]
            print(f"[ok] database set to {database or '<current>'}")
            continue

        try:
            result = run_analysis(conn, head, cmd[1:], database, config.batch_size)
        except ValidationError as exc:
            print(f"[error] {exc}")
            continue
        render(result, as_json)

    return EXIT_OK


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="block-inspector",
        description="Inspect how a DuckDB database file uses its storage blocks",
    )
    parser.add_argument("--db", help="Database file to open (defaults to INSPECTOR_DATABASE)")
    parser.add_argument(
        "--attach",
        action="append",
        default=[],
        metavar="ALIAS=PATH",
        help="Attach another database file (repeatable)",
    )
    parser.add_argument("--json", action="store_true", help="Output JSON")
    parser.add_argument("--batch-size", type=int, help="Rows pulled per batch")
    parser.add_argument(
        "--read-write",
        action="store_true",
        help="Open databases read-write instead of read-only",
    )

    sub = parser.add_subparsers(dest="command", required=True)
    tables = sub.add_parser("tables", help="List tables with persisted data size")
    tables.add_argument("--database", help="Attached database name (defaults to current)")

    column = sub.add_parser("column", help="Per-segment storage of a column")
    column.add_argument("table", help="Table name, optionally schema-qualified")
    column.add_argument("column", help="Column name")
    column.add_argument("--database", help="Attached database name (defaults to current)")

    sub.add_parser("storage", help="File and WAL sizes of attached databases")

    breakdown = sub.add_parser("breakdown", help="Storage breakdown by category")
    breakdown.add_argument("--database", help="Attached database name (defaults to current)")

    shell = sub.add_parser("shell", help="Interactive shell")
    shell.add_argument("--database", help="Attached database name (defaults to current)")
    return parser


def build_config(args: argparse.Namespace) -> InspectorConfig:
    """Overlay command line flags on the environment configuration."""
    config = load_config()
    attach = dict(config.attach)
    for spec in args.attach:
        attach.update(parse_attach_spec(spec))
    return replace(
        config,
        database_path=args.db if args.db else config.database_path,
        read_only=config.read_only and not args.read_write,
        attach=attach,
        batch_size=args.batch_size if args.batch_size is not None else config.batch_size,
        output_format="json" if args.json else config.output_format,
    )


def run_cli(args: argparse.Namespace) -> int:
    config = build_config(args)
    logging.basicConfig(
        level=getattr(logging, config.log_level, logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        RequestValidator.validate_batch_size(config.batch_size)
    except ValidationError as exc:
        print(f"[error] {exc}")
        return EXIT_INVALID_INPUT

    database = getattr(args, "database", None)
    try:
        with DatabaseHelper(config).connect() as conn:
            if args.command == "shell":
                return run_repl(conn, config, database)
            args_list = [args.table, args.column] if args.command == "column" else []
            result = run_analysis(conn, args.command, args_list, database, config.batch_size)
            return render(result, config.output_format == "json")
    except InvalidInputError as exc:
        print(f"[error] {exc}")
        return EXIT_INVALID_INPUT


def main(argv: Optional[List[str]] = None) -> int:
    parser = create_parser()
    return run_cli(parser.parse_args(argv))


if __name__ == "__main__":
    sys.exit(main())


__all__ = ["run_repl", "run_cli", "run_analysis", "create_parser", "main"]
