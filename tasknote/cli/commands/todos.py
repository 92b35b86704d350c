"""Todo commands for the tasknote CLI."""

import logging
from typing import TYPE_CHECKING

from tasknote.cli.commands.helpers import emit_result, print_json

if TYPE_CHECKING:
    from tasknote.service import TodoService

logger = logging.getLogger(__name__)


def cmd_create(args, service: "TodoService") -> int:
    """Store a new note and print its id."""
    task_id = service.create_todo(args.note)
    if args.json:
        print_json({"id": task_id})
    else:
        print(task_id)
    return 0


def cmd_get(args, service: "TodoService") -> int:
    return emit_result(service.get_todo_by_id(args.task_id), args.json)


def cmd_list(args, service: "TodoService") -> int:
    """Print one page of tasks."""
    page = service.get_todos_by_page(args.page, args.per_page)
    if args.json:
        print_json(page)
        return 0

    if not page:
        print("No tasks on this page.")
        return 0
    for task_id in sorted(page):
        print(f"{task_id}  {page[task_id]}")
    return 0


def cmd_update(args, service: "TodoService") -> int:
    return emit_result(service.update_todo_by_id(args.task_id, args.note), args.json)


def cmd_delete(args, service: "TodoService") -> int:
    return emit_result(service.delete_todo_by_id(args.task_id), args.json)


def cmd_count(args, service: "TodoService") -> int:
    total = service.count()
    if args.json:
        print_json({"count": total})
    else:
        print(total)
    return 0
