"""Handler registry for MCP tools."""

from typing import Callable, Dict

from tasknote.mcp.handlers.todos import HANDLERS as _TODOS_H
from tasknote.mcp.handlers.todos import VALIDATORS as _TODOS_V

HANDLERS: Dict[str, Callable] = {
    **_TODOS_H,
}

VALIDATORS: Dict[str, Callable] = {
    **_TODOS_V,
}
