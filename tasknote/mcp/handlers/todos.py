"""Handlers for the todo tools: create, get, page, update, delete."""

import json
from typing import Any, Dict

from tasknote.mcp.sanitize import validate_text, validate_uint
from tasknote.service import TodoService
from tasknote.types import FIRST_PAGE, MAX_PER_PAGE

# ---------------------------------------------------------------------------
# Validators
# ---------------------------------------------------------------------------


def _task_id(arguments: Dict[str, Any]) -> str:
    return validate_text(arguments.get("task_id"), "task_id")


def validate_create_todo(arguments: Dict[str, Any]) -> Dict[str, Any]:
    return {"note": validate_text(arguments.get("note"), "note")}


def validate_get_todo_by_id(arguments: Dict[str, Any]) -> Dict[str, Any]:
    return {"task_id": _task_id(arguments)}


def validate_get_todos_by_page(arguments: Dict[str, Any]) -> Dict[str, Any]:
    sanitized: Dict[str, Any] = {}
    sanitized["page_number"] = validate_uint(arguments.get("page_number"), "page_number", FIRST_PAGE)
    sanitized["per_page"] = validate_uint(arguments.get("per_page"), "per_page", MAX_PER_PAGE)
    return sanitized


def validate_update_todo_by_id(arguments: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "task_id": _task_id(arguments),
        "note": validate_text(arguments.get("note"), "note"),
    }


def validate_delete_todo_by_id(arguments: Dict[str, Any]) -> Dict[str, Any]:
    return {"task_id": _task_id(arguments)}


# ---------------------------------------------------------------------------
# Handlers
# ---------------------------------------------------------------------------


def handle_create_todo(args: Dict[str, Any], service: TodoService) -> str:
    return json.dumps({"id": service.create_todo(args["note"])})


def handle_get_todo_by_id(args: Dict[str, Any], service: TodoService) -> str:
    return json.dumps(service.get_todo_by_id(args["task_id"]).to_dict())


def handle_get_todos_by_page(args: Dict[str, Any], service: TodoService) -> str:
    page = service.get_todos_by_page(args["page_number"], args["per_page"])
    return json.dumps(page, indent=2)


def handle_update_todo_by_id(args: Dict[str, Any], service: TodoService) -> str:
    return json.dumps(service.update_todo_by_id(args["task_id"], args["note"]).to_dict())


def handle_delete_todo_by_id(args: Dict[str, Any], service: TodoService) -> str:
    return json.dumps(service.delete_todo_by_id(args["task_id"]).to_dict())


HANDLERS = {
    "create_todo": handle_create_todo,
    "get_todo_by_id": handle_get_todo_by_id,
    "get_todos_by_page": handle_get_todos_by_page,
    "update_todo_by_id": handle_update_todo_by_id,
    "delete_todo_by_id": handle_delete_todo_by_id,
}

VALIDATORS = {
    "create_todo": validate_create_todo,
    "get_todo_by_id": validate_get_todo_by_id,
    "get_todos_by_page": validate_get_todos_by_page,
    "update_todo_by_id": validate_update_todo_by_id,
    "delete_todo_by_id": validate_delete_todo_by_id,
}
