"""
Shared types for tasknote.

The result type returned by the request handlers and the message and
pagination constants shared by the service and its transports.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict

# === Pagination ===

# Pages are 1-indexed; page 0 is read as page 1
FIRST_PAGE = 1

# Inclusive bounds for the page size
MIN_PER_PAGE = 1
MAX_PER_PAGE = 10

# === Messages ===

NOT_FOUND_MESSAGE = "No task found with id: {task_id}"
UPDATED_MESSAGE = "Successfully updated task id: {task_id}"
DELETED_MESSAGE = "Successfully deleted task id: {task_id}"


def normalize_page(page_number: int, per_page: int) -> tuple:
    """Normalize pagination inputs.

    Page 0 becomes 1; per_page is clamped to [MIN_PER_PAGE, MAX_PER_PAGE].

    Returns:
        (page_number, per_page) tuple of normalized values
    """
    page_number = max(page_number, FIRST_PAGE)
    per_page = min(max(per_page, MIN_PER_PAGE), MAX_PER_PAGE)
    return page_number, per_page


# === Results ===


class ResultKind(str, Enum):
    """Tag of a handler result."""

    OK = "Ok"
    ERR = "Err"


@dataclass(frozen=True)
class TodoResult:
    """Tagged Ok/Err result carrying a single string payload."""

    kind: ResultKind
    value: str

    @classmethod
    def ok(cls, value: str) -> "TodoResult":
        return cls(ResultKind.OK, value)

    @classmethod
    def err(cls, message: str) -> "TodoResult":
        return cls(ResultKind.ERR, message)

    @classmethod
    def not_found(cls, task_id: str) -> "TodoResult":
        return cls.err(NOT_FOUND_MESSAGE.format(task_id=task_id))

    @property
    def is_ok(self) -> bool:
        return self.kind is ResultKind.OK

    def to_dict(self) -> Dict[str, str]:
        """Variant form used on the wire, e.g. {"Ok": "first"}."""
        return {self.kind.value: self.value}
