"""Tests for task id generation (tasknote.ids)."""

import uuid

import pytest

from tasknote import ids
from tasknote.host import OFFLINE_NODE, OFFLINE_TIME, FixedClock, StaticCaller
from tasknote.ids import (
    GREGORIAN_OFFSET,
    IdGenerator,
    node_from_identity,
    uuid_v1_from_parts,
)
from tasknote.protocols import IdentifierExhaustedError, KeyLookup


class SetLookup:
    """KeyLookup over a plain set."""

    def __init__(self, keys=()):
        self.keys = set(keys)
        self.checked = []

    def contains(self, task_id: str) -> bool:
        self.checked.append(task_id)
        return task_id in self.keys


class CollidingLookup:
    """Reports a collision for the first ``collisions`` checks."""

    def __init__(self, collisions: int):
        self.remaining = collisions
        self.calls = 0

    def contains(self, task_id: str) -> bool:
        self.calls += 1
        if self.remaining > 0:
            self.remaining -= 1
            return True
        return False


class TestUuidParts:
    def test_version_and_variant(self):
        u = uuid_v1_from_parts(1_700_000_000_123_456_789, 42, 0x010203040506)
        assert u.version == 1
        assert u.variant == uuid.RFC_4122

    def test_timestamp_round_trips(self):
        ts = 1_700_000_000_123_456_789
        u = uuid_v1_from_parts(ts, 0, 1)
        assert u.time == GREGORIAN_OFFSET + ts // 100

    def test_clock_seq_and_node(self):
        u = uuid_v1_from_parts(OFFLINE_TIME, 0x1234, 0x010203040506)
        assert u.clock_seq == 0x1234
        assert u.node == 0x010203040506

    def test_clock_seq_is_14_bits(self):
        u = uuid_v1_from_parts(OFFLINE_TIME, 0x4001, 1)
        assert u.clock_seq == 0x0001


class TestNodeFromIdentity:
    def test_uses_first_six_bytes(self):
        assert node_from_identity(b"\x01\x02\x03\x04\x05\x06\x07\x08") == 0x010203040506

    def test_text_identity(self):
        assert node_from_identity(b"abcdef-principal") == int.from_bytes(b"abcdef", "big")

    def test_short_identity_is_rejected(self):
        with pytest.raises(ValueError, match="at least 6 bytes"):
            node_from_identity(b"\x01\x02\x03")


class TestIdGenerator:
    def test_set_lookup_satisfies_protocol(self):
        assert isinstance(SetLookup(), KeyLookup)

    def test_generates_printable_uuid(self):
        gen = IdGenerator(FixedClock(), StaticCaller(OFFLINE_NODE))
        task_id = gen.generate(SetLookup())
        parsed = uuid.UUID(task_id)
        assert str(parsed) == task_id
        assert parsed.version == 1
        assert parsed.node == 0x010203040506

    def test_sequence_starts_at_random_seed_and_advances(self, monkeypatch):
        monkeypatch.setattr(ids, "random_sequence", lambda: 0x3FFE)
        gen = IdGenerator(FixedClock(OFFLINE_TIME), StaticCaller(OFFLINE_NODE))
        lookup = SetLookup()
        seqs = [uuid.UUID(gen.generate(lookup)).clock_seq for _ in range(3)]
        assert seqs == [0x3FFE, 0x3FFF, 0x0000]

    def test_random_sequence_is_14_bits(self):
        assert all(0 <= ids.random_sequence() <= 0x3FFF for _ in range(200))

    def test_stalled_clock_still_yields_distinct_ids(self):
        gen = IdGenerator(FixedClock(), StaticCaller(OFFLINE_NODE))
        lookup = SetLookup()
        task_ids = [gen.generate(lookup) for _ in range(100)]
        assert len(set(task_ids)) == 100

    def test_does_not_insert(self):
        gen = IdGenerator(FixedClock(), StaticCaller(OFFLINE_NODE))
        lookup = SetLookup()
        gen.generate(lookup)
        assert lookup.keys == set()

    def test_collision_resamples_clock(self, step_clock):
        gen = IdGenerator(step_clock, StaticCaller(OFFLINE_NODE))
        lookup = CollidingLookup(collisions=3)
        task_id = gen.generate(lookup)
        assert lookup.calls == 4
        assert len(step_clock.readings) == 4
        assert uuid.UUID(task_id).time == GREGORIAN_OFFSET + step_clock.readings[-1] // 100

    def test_collision_draws_fresh_sequence(self, monkeypatch):
        seeds = iter([7, 7, 900])
        monkeypatch.setattr(ids, "random_sequence", lambda: next(seeds))
        clock = FixedClock()
        first = IdGenerator(clock, StaticCaller(OFFLINE_NODE)).generate(SetLookup())
        # Same clock, node and seed as the first generator
        gen = IdGenerator(clock, StaticCaller(OFFLINE_NODE))
        lookup = SetLookup({first})
        second = gen.generate(lookup)
        assert lookup.checked == [first, second]
        assert uuid.UUID(second).clock_seq == 900

    def test_collision_does_not_walk_from_old_seed(self, monkeypatch):
        # Sequences 10..15 are taken; stepping on from the seed hits each of them
        seeds = iter([10, 3000])
        monkeypatch.setattr(ids, "random_sequence", lambda: next(seeds))
        node = node_from_identity(OFFLINE_NODE)
        taken = {str(uuid_v1_from_parts(OFFLINE_TIME, seq, node)) for seq in range(10, 16)}
        gen = IdGenerator(FixedClock(), StaticCaller(OFFLINE_NODE))
        lookup = SetLookup(taken)
        task_id = gen.generate(lookup)
        assert len(lookup.checked) == 2
        assert uuid.UUID(task_id).clock_seq == 3000

    def test_retry_bound_raises(self):
        gen = IdGenerator(FixedClock(), StaticCaller(OFFLINE_NODE), max_retries=3)
        lookup = CollidingLookup(collisions=10)
        with pytest.raises(IdentifierExhaustedError) as exc_info:
            gen.generate(lookup)
        assert exc_info.value.attempts == 4
        assert lookup.calls == 4

    def test_zero_retries_allows_single_attempt(self):
        gen = IdGenerator(FixedClock(), StaticCaller(OFFLINE_NODE), max_retries=0)
        assert gen.generate(CollidingLookup(collisions=0))
        with pytest.raises(IdentifierExhaustedError):
            gen.generate(CollidingLookup(collisions=1))

    def test_unbounded_retries(self):
        gen = IdGenerator(FixedClock(), StaticCaller(OFFLINE_NODE), max_retries=None)
        lookup = CollidingLookup(collisions=2000)
        assert gen.generate(lookup)
        assert lookup.calls == 2001

    def test_negative_retry_bound_rejected(self):
        with pytest.raises(ValueError):
            IdGenerator(FixedClock(), StaticCaller(OFFLINE_NODE), max_retries=-1)

    def test_short_caller_identity_raises(self):
        gen = IdGenerator(FixedClock(), StaticCaller(b"abc"))
        with pytest.raises(ValueError):
            gen.generate(SetLookup())
