"""MCP tool schema definitions for tasknote operations.

Each Tool() defines the name, description, and JSON Schema for one
operation. Together they are the exported interface of the service.
Validators and handlers live in tasknote.mcp.handlers.
"""

from mcp.types import Tool

from tasknote.mcp.sanitize import UINT32_MAX
from tasknote.types import MAX_PER_PAGE

_TASK_ID = {
    "type": "string",
    "description": "Task id returned by create_todo",
}

TOOLS = [
    Tool(
        name="create_todo",
        description="Store a new task note and return its generated id.",
        inputSchema={
            "type": "object",
            "properties": {
                "note": {
                    "type": "string",
                    "description": "Note text (any text, no length limit)",
                },
            },
            "required": ["note"],
        },
    ),
    Tool(
        name="get_todo_by_id",
        description='Fetch the note of one task. Returns {"Ok": note} or {"Err": message}.',
        inputSchema={
            "type": "object",
            "properties": {"task_id": _TASK_ID},
            "required": ["task_id"],
        },
    ),
    Tool(
        name="get_todos_by_page",
        description=f"List one page of tasks in id order as an id -> note object. Pages start at 1 (0 is read as 1); at most {MAX_PER_PAGE} tasks per page.",
        inputSchema={
            "type": "object",
            "properties": {
                "page_number": {
                    "type": "integer",
                    "description": "Page number, 1-indexed (default: 1)",
                    "default": 1,
                    "minimum": 0,
                    "maximum": UINT32_MAX,
                },
                "per_page": {
                    "type": "integer",
                    "description": f"Tasks per page, clamped to 1-{MAX_PER_PAGE} (default: {MAX_PER_PAGE})",
                    "default": MAX_PER_PAGE,
                    "minimum": 0,
                    "maximum": UINT32_MAX,
                },
            },
        },
    ),
    Tool(
        name="update_todo_by_id",
        description='Replace the note of an existing task. Returns {"Ok": message} or {"Err": message}.',
        inputSchema={
            "type": "object",
            "properties": {
                "task_id": _TASK_ID,
                "note": {
                    "type": "string",
                    "description": "New note text",
                },
            },
            "required": ["task_id", "note"],
        },
    ),
    Tool(
        name="delete_todo_by_id",
        description='Delete a task. Returns {"Ok": message} or {"Err": message}.',
        inputSchema={
            "type": "object",
            "properties": {"task_id": _TASK_ID},
            "required": ["task_id"],
        },
    ),
]


def export_schema() -> list:
    """Tool definitions as plain JSON-ready dicts."""
    return [tool.model_dump(mode="json", by_alias=True, exclude_none=True) for tool in TOOLS]
