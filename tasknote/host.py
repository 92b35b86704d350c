"""Host collaborators: time source and caller identity.

The live host reads the system clock and identifies the caller as
``user@hostname``. The offline host pins both, so ids are reproducible in
local runs and tests.
"""

import getpass
import logging
import socket
import threading
import time
from typing import Optional, Tuple, Union

from tasknote.config import Settings
from tasknote.protocols import CallerIdentity, Clock

logger = logging.getLogger(__name__)

# Offline host constants
OFFLINE_TIME = 1699707661583
OFFLINE_NODE = bytes([1, 2, 3, 4, 5, 6])


class SystemClock:
    """Wall clock in nanoseconds, never going backwards."""

    def __init__(self):
        self._last = 0
        self._lock = threading.Lock()

    def now(self) -> int:
        with self._lock:
            self._last = max(self._last, time.time_ns())
            return self._last


class FixedClock:
    """Clock that always reports the same instant."""

    def __init__(self, timestamp: int = OFFLINE_TIME):
        self.timestamp = timestamp

    def now(self) -> int:
        return self.timestamp


class StaticCaller:
    """Caller identity fixed at construction."""

    def __init__(self, identity: Union[str, bytes]):
        self._identity = identity.encode("utf-8") if isinstance(identity, str) else identity

    def identity(self) -> bytes:
        return self._identity


def default_caller_text() -> str:
    """Identity of the local caller: ``user@hostname``."""
    try:
        user = getpass.getuser()
    except (KeyError, OSError) as e:
        logger.debug(f"Could not resolve user name: {e}")
        user = "anonymous"
    return f"{user}@{socket.gethostname()}"


def build_host(settings: Settings) -> Tuple[Clock, CallerIdentity]:
    """Pick the clock and caller identity described by settings."""
    caller: Optional[CallerIdentity] = None
    if settings.caller_id:
        caller = StaticCaller(settings.caller_id)

    if settings.offline_host:
        logger.info("Using offline host (fixed clock and node)")
        return FixedClock(), caller or StaticCaller(OFFLINE_NODE)

    return SystemClock(), caller or StaticCaller(default_caller_text())
