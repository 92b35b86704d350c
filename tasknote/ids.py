"""Task id generation.

Ids are version 1 (time-based) UUIDs:
- timestamp: 100 ns intervals since 1582-10-15, from the host clock
- clock sequence: 14-bit counter with a random start, advanced for every
  candidate so a stalled clock still yields new ids, and drawn again at
  random after a collision
- node: the first 6 bytes of the caller identity

A candidate already present in the store is discarded; the clock is sampled
again under a fresh random clock sequence. The generator never writes to the
store; the caller inserts the returned id in the same transaction that
checked it.
"""

import logging
import secrets
import threading
import uuid
from typing import Optional

from tasknote.protocols import CallerIdentity, Clock, IdentifierExhaustedError, KeyLookup

logger = logging.getLogger(__name__)

# 100 ns intervals between the Gregorian epoch (1582-10-15) and the Unix epoch
GREGORIAN_OFFSET = 0x01B21DD213814000

NODE_WIDTH = 6

_TIMESTAMP_MASK = (1 << 60) - 1
_SEQUENCE_BITS = 14
_SEQUENCE_MASK = (1 << _SEQUENCE_BITS) - 1

DEFAULT_MAX_RETRIES = 1000


def random_sequence() -> int:
    """Random 14-bit clock sequence (RFC 4122 section 4.1.5)."""
    return secrets.randbits(_SEQUENCE_BITS)


def node_from_identity(identity: bytes) -> int:
    """Reduce a caller identity to the 48-bit UUID node.

    Raises:
        ValueError: If the identity is shorter than NODE_WIDTH bytes.
    """
    if len(identity) < NODE_WIDTH:
        raise ValueError(
            f"Caller identity must be at least {NODE_WIDTH} bytes, got {len(identity)}"
        )
    return int.from_bytes(identity[:NODE_WIDTH], "big")


def uuid_v1_from_parts(timestamp_ns: int, clock_seq: int, node: int) -> uuid.UUID:
    """Build a version 1 UUID from a Unix timestamp in nanoseconds."""
    ticks = (GREGORIAN_OFFSET + timestamp_ns // 100) & _TIMESTAMP_MASK
    time_low = ticks & 0xFFFFFFFF
    time_mid = (ticks >> 32) & 0xFFFF
    time_hi = (ticks >> 48) & 0x0FFF
    clock_seq &= _SEQUENCE_MASK
    return uuid.UUID(
        fields=(time_low, time_mid, time_hi, clock_seq >> 8, clock_seq & 0xFF, node),
        version=1,
    )


class IdGenerator:
    """Produces store-unique task ids.

    Args:
        clock: Host time source.
        caller: Host caller identity source.
        max_retries: Collision retries allowed after the first candidate.
            None keeps retrying until a free id is found.
    """

    def __init__(
        self,
        clock: Clock,
        caller: CallerIdentity,
        max_retries: Optional[int] = DEFAULT_MAX_RETRIES,
    ):
        if max_retries is not None and max_retries < 0:
            raise ValueError(f"max_retries must be >= 0, got {max_retries}")
        self.clock = clock
        self.caller = caller
        self.max_retries = max_retries
        self._sequence: Optional[int] = None
        self._lock = threading.Lock()

    def _next_sequence(self, reseed: bool = False) -> int:
        with self._lock:
            if self._sequence is None or reseed:
                self._sequence = random_sequence() & _SEQUENCE_MASK
            else:
                self._sequence = (self._sequence + 1) & _SEQUENCE_MASK
            return self._sequence

    def candidate(self, node: int, reseed: bool = False) -> str:
        """Sample the clock once and build a candidate id.

        With ``reseed`` the clock sequence is drawn at random instead of
        advanced.
        """
        timestamp = self.clock.now()
        return str(uuid_v1_from_parts(timestamp, self._next_sequence(reseed), node))

    def generate(self, store: KeyLookup) -> str:
        """Return an id not present in ``store`` at the time of the check.

        Raises:
            ValueError: If the caller identity is too short.
            IdentifierExhaustedError: If every allowed attempt collided.
        """
        node = node_from_identity(self.caller.identity())
        task_id = self.candidate(node)
        retries = 0
        while store.contains(task_id):
            if self.max_retries is not None and retries >= self.max_retries:
                logger.error(f"Id generation gave up after {retries + 1} attempts")
                raise IdentifierExhaustedError(retries + 1)
            retries += 1
            logger.debug(f"Task id collision on {task_id}, retry {retries}")
            task_id = self.candidate(node, reseed=True)
        return task_id
