"""
tasknote CLI - Command-line interface for the task-note store.

Usage:
    tasknote create NOTE
    tasknote get TASK_ID
    tasknote list [--page N] [--per-page N]
    tasknote update TASK_ID NOTE
    tasknote delete TASK_ID
    tasknote count
    tasknote schema
    tasknote mcp
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from tasknote.cli.commands.helpers import print_json, uint_arg
from tasknote.cli.commands.todos import (
    cmd_count,
    cmd_create,
    cmd_delete,
    cmd_get,
    cmd_list,
    cmd_update,
)
from tasknote.config import get_settings
from tasknote.logging_config import setup_tasknote_logging
from tasknote.protocols import IdentifierExhaustedError, StorageError
from tasknote.service import TodoService, set_service
from tasknote.types import FIRST_PAGE, MAX_PER_PAGE

logger = logging.getLogger(__name__)

COMMANDS = {
    "create": cmd_create,
    "get": cmd_get,
    "list": cmd_list,
    "update": cmd_update,
    "delete": cmd_delete,
    "count": cmd_count,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tasknote",
        description="Persistent task-note store",
    )
    parser.add_argument("--data-dir", "-d", help="Data directory (default: ~/.tasknote)")
    parser.add_argument("--json", "-j", action="store_true", help="Print JSON output")
    parser.add_argument("--log-level", help="Log level (default: from TASKNOTE_LOG_LEVEL)")

    subparsers = parser.add_subparsers(dest="command", required=True)

    # create
    p_create = subparsers.add_parser("create", help="Create a task note")
    p_create.add_argument("note", help="Note text")

    # get
    p_get = subparsers.add_parser("get", help="Show one task")
    p_get.add_argument("task_id", help="Task id")

    # list
    p_list = subparsers.add_parser("list", help="List one page of tasks")
    p_list.add_argument("--page", "-p", type=uint_arg, default=FIRST_PAGE,
                        help="Page number, starting at 1")
    p_list.add_argument("--per-page", "-n", type=uint_arg, default=MAX_PER_PAGE,
                        help=f"Tasks per page (1-{MAX_PER_PAGE})")

    # update
    p_update = subparsers.add_parser("update", help="Replace the note of a task")
    p_update.add_argument("task_id", help="Task id")
    p_update.add_argument("note", help="New note text")

    # delete
    p_delete = subparsers.add_parser("delete", help="Delete a task")
    p_delete.add_argument("task_id", help="Task id")

    subparsers.add_parser("count", help="Show number of tasks")
    subparsers.add_parser("schema", help="Print the tool interface as JSON")
    subparsers.add_parser("mcp", help="Start MCP server (stdio transport)")

    return parser


def main(argv: Optional[List[str]] = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command == "schema":
        from tasknote.mcp.tool_definitions import export_schema

        print_json(export_schema())
        return

    settings = get_settings()
    if args.data_dir:
        settings = settings.model_copy(update={"data_dir": Path(args.data_dir).expanduser()})

    try:
        setup_tasknote_logging(args.log_level or settings.log_level, settings.data_dir)
        service = TodoService.from_settings(settings)
    except (StorageError, OSError, ValueError) as e:
        logger.error(f"Failed to initialize tasknote: {e}")
        print(f"✗ {e}", file=sys.stderr)
        sys.exit(1)

    if args.command == "mcp":
        from tasknote.mcp.server import main as mcp_main

        set_service(service)
        mcp_main()
        return

    try:
        status = COMMANDS[args.command](args, service)
    except (IdentifierExhaustedError, ValueError) as e:
        logger.error(f"{args.command} failed: {e}")
        print(f"✗ {e}", file=sys.stderr)
        sys.exit(1)

    if status:
        sys.exit(status)


if __name__ == "__main__":
    main()
