"""Tests for the in-memory TTL response store."""

import threading

from code_mentor.protocols import ResponseStore
from code_mentor.repositories import MemoryResponseStore

from .conftest import ManualClock


def make_store(clock: ManualClock, ttl: float = 60) -> MemoryResponseStore:
    return MemoryResponseStore.create(ttl=ttl, clock=clock)


def test_satisfies_protocol():
    assert isinstance(MemoryResponseStore(ttl=60), ResponseStore)


def test_get_missing_key_is_none(clock):
    assert make_store(clock).get("nope") is None


def test_value_is_fresh_before_ttl_and_gone_after(clock):
    store = make_store(clock)
    store.set("k", "v")

    clock.advance(59)
    assert store.get("k") == "v"

    clock.advance(2)
    assert store.get("k") is None


def test_entry_expires_exactly_at_ttl(clock):
    store = make_store(clock)
    store.set("k", "v")
    clock.advance(60)
    assert store.get("k") is None


def test_reads_do_not_extend_lifetime(clock):
    store = make_store(clock)
    store.set("k", "v")
    for _ in range(5):
        clock.advance(11)
        store.get("k")
    assert store.get("k") == "v"

    clock.advance(6)
    assert store.get("k") is None


def test_set_overwrites_with_fresh_timestamp(clock):
    store = make_store(clock)
    store.set("k", "old")
    clock.advance(50)
    store.set("k", "new")
    clock.advance(50)
    assert store.get("k") == "new"


def test_expired_entry_is_evicted_on_read(clock):
    store = make_store(clock)
    store.set("k", "v")
    clock.advance(61)
    assert len(store) == 1
    store.get("k")
    assert len(store) == 0


def test_purge_expired_removes_only_stale_entries(clock):
    store = make_store(clock)
    store.set("stale", "1")
    clock.advance(30)
    store.set("fresh", "2")
    clock.advance(31)

    assert store.purge_expired() == 1
    assert store.get("fresh") == "2"
    assert len(store) == 1


def test_clear(clock):
    store = make_store(clock)
    store.set("a", "1")
    store.set("b", "2")
    assert store.clear() == 2
    assert len(store) == 0


def test_concurrent_writers_do_not_lose_entries():
    store = MemoryResponseStore(ttl=60)

    def writer(prefix: str) -> None:
        for i in range(500):
            store.set(f"{prefix}-{i}", str(i))
            store.get(f"{prefix}-{i}")

    threads = [threading.Thread(target=writer, args=(f"t{n}",)) for n in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert len(store) == 8 * 500


def test_explicit_zero_ttl_is_not_replaced_by_default(clock):
    store = make_store(clock, ttl=0)
    store.set("k", "v")
    assert store.get("k") is None
