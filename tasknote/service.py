"""TodoService: the five request handlers over one store.

Every handler runs under a single service lock. ``create_todo`` additionally
holds one exclusive store transaction around generate -> check -> insert, so
no other writer (thread or process) can claim the id in between.
"""

import logging
import threading
from typing import Dict, Optional

from tasknote.config import Settings, get_settings
from tasknote.host import build_host
from tasknote.ids import DEFAULT_MAX_RETRIES, IdGenerator
from tasknote.logging_config import log_create, log_delete, log_update
from tasknote.protocols import CallerIdentity, Clock, TodoNotFoundError
from tasknote.storage import SQLiteStore
from tasknote.types import DELETED_MESSAGE, UPDATED_MESSAGE, TodoResult

logger = logging.getLogger(__name__)


class TodoService:
    """Request handlers for the task-note store.

    Examples:
        service = TodoService(SQLiteStore(path), clock, caller)
        task_id = service.create_todo("first")
        service.get_todo_by_id(task_id)  # TodoResult.ok("first")
    """

    def __init__(
        self,
        store: SQLiteStore,
        clock: Clock,
        caller: CallerIdentity,
        max_retries: Optional[int] = DEFAULT_MAX_RETRIES,
        event_log: bool = False,
    ):
        """Initialize the service.

        Args:
            store: Persistent store, kept for the lifetime of the service.
            clock: Host time source for id generation.
            caller: Host caller identity for id generation.
            max_retries: Id collision retry bound (None for unbounded).
            event_log: If True, append each mutation to the todo-events log.
        """
        self.store = store
        self.ids = IdGenerator(clock, caller, max_retries=max_retries)
        self.event_log = event_log
        self._data_dir = store.db_path.parent
        self._lock = threading.RLock()

    @classmethod
    def from_settings(cls, settings: Settings) -> "TodoService":
        clock, caller = build_host(settings)
        return cls(
            SQLiteStore(settings.db_path),
            clock,
            caller,
            max_retries=settings.max_retries,
            event_log=True,
        )

    def _record_event(self, log_fn, *args) -> None:
        """Append to the event log. The store change is already committed."""
        if not self.event_log:
            return
        try:
            log_fn(*args, data_dir=self._data_dir)
        except OSError as e:
            logger.warning(f"Could not write todo event log: {e}")

    def create_todo(self, note: str) -> str:
        """Store ``note`` under a fresh id and return the id.

        Raises:
            IdentifierExhaustedError: If no free id was found within the
                retry bound.
        """
        with self._lock, self.store.transaction() as txn:
            task_id = self.ids.generate(txn)
            txn.insert(task_id, note)
        logger.info(f"Created task {task_id}")
        self._record_event(log_create, task_id, len(note))
        return task_id

    def get_todo_by_id(self, task_id: str) -> TodoResult:
        with self._lock:
            try:
                return TodoResult.ok(self.store.get(task_id))
            except TodoNotFoundError as e:
                logger.debug(str(e))
                return TodoResult.not_found(e.task_id)

    def get_todos_by_page(self, page_number: int, per_page: int) -> Dict[str, str]:
        """Return one page (1-indexed, at most 10 records) as id -> note."""
        with self._lock:
            return self.store.paginated_list(page_number, per_page)

    def update_todo_by_id(self, task_id: str, note: str) -> TodoResult:
        """Replace the note of an existing task. The id never changes."""
        with self._lock:
            try:
                with self.store.transaction() as txn:
                    if not txn.contains(task_id):
                        raise TodoNotFoundError(task_id)
                    txn.insert(task_id, note)
            except TodoNotFoundError as e:
                logger.debug(str(e))
                return TodoResult.not_found(e.task_id)
        logger.info(f"Updated task {task_id}")
        self._record_event(log_update, task_id, len(note))
        return TodoResult.ok(UPDATED_MESSAGE.format(task_id=task_id))

    def delete_todo_by_id(self, task_id: str) -> TodoResult:
        with self._lock:
            try:
                self.store.remove(task_id)
            except TodoNotFoundError as e:
                logger.debug(str(e))
                return TodoResult.not_found(e.task_id)
        logger.info(f"Deleted task {task_id}")
        self._record_event(log_delete, task_id)
        return TodoResult.ok(DELETED_MESSAGE.format(task_id=task_id))

    def count(self) -> int:
        with self._lock:
            return self.store.count()


# Process-wide service used by the transports
_service: Optional[TodoService] = None
_service_lock = threading.Lock()


def get_service() -> TodoService:
    """Get or create the process-wide service from settings."""
    global _service
    with _service_lock:
        if _service is None:
            _service = TodoService.from_settings(get_settings())
        return _service


def set_service(service: Optional[TodoService]) -> None:
    """Replace the process-wide service. None resets it."""
    global _service
    with _service_lock:
        _service = service
