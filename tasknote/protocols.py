"""
tasknote Protocol Definitions
=============================

The interface contracts between the task-note core and its host.

Components and their roles:
- Store:      A durable ordered map of task id -> note text.
- Generator:  Produces fresh task ids from the clock and caller identity.
- Service:    The five request handlers composing the two.
- Host:       Supplies time and caller identity. Not part of the core.

Error handling philosophy:
- An absent task id raises TodoNotFoundError inside the store; the service
  turns it into an Err result. It never reaches callers as an exception.
- Invalid arguments at the transport boundary raise ValueError
- Storage failures raise StorageError
- Exhausting the id retry bound raises IdentifierExhaustedError
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

# =============================================================================
# ERRORS
# =============================================================================


class TasknoteError(Exception):
    """Base for all tasknote errors."""

    pass


class TodoNotFoundError(TasknoteError):
    """Raised by the store when a task id is absent."""

    def __init__(self, task_id: str):
        super().__init__(f"No task found with id: {task_id}")
        self.task_id = task_id


class StorageError(TasknoteError):
    """Raised on durable storage failures."""

    pass


class IdentifierExhaustedError(TasknoteError):
    """Raised when the id generator runs out of collision retries."""

    def __init__(self, attempts: int):
        super().__init__(f"Could not allocate a unique task id after {attempts} attempts")
        self.attempts = attempts


# =============================================================================
# HOST CONTRACTS
# =============================================================================


@runtime_checkable
class Clock(Protocol):
    """Time source. Integer nanoseconds since the Unix epoch, never decreasing."""

    def now(self) -> int: ...


@runtime_checkable
class CallerIdentity(Protocol):
    """Caller identity source.

    Must return at least 6 bytes, stable per caller within a session.
    """

    def identity(self) -> bytes: ...


@runtime_checkable
class KeyLookup(Protocol):
    """The slice of the store the id generator needs."""

    def contains(self, task_id: str) -> bool: ...
