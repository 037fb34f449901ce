"""
Unit Tests for Session Store

Tests get-or-create, the rolling window cap, sweeping and
thread safety.
"""

import threading
from datetime import datetime, timedelta, timezone

import pytest

from mindease.domain.models.conversation import Message, MessageSender, SessionKey
from mindease.services.session.session_store import SessionStore


NOW = datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc)
TTL = timedelta(hours=1)


def _message(content: str, timestamp: datetime = NOW) -> Message:
    return Message(content=content, sender=MessageSender.USER, timestamp=timestamp)


class _ContendedLock:
    """RLock wrapper that signals when a thread other than the owner enters it."""

    def __init__(self, inner, owner: int) -> None:
        self._inner = inner
        self._owner = owner
        self.contended = threading.Event()

    def __enter__(self):
        if threading.get_ident() != self._owner:
            self.contended.set()
        return self._inner.__enter__()

    def __exit__(self, *exc_info):
        return self._inner.__exit__(*exc_info)


class TestGetOrCreate:
    """Tests for context creation and lookup."""

    def test_creates_empty_context(self, store: SessionStore) -> None:
        context = store.get_or_create("user-1", "session-1")

        assert context.user_id == "user-1"
        assert context.session_id == "session-1"
        assert context.recent_messages == []
        assert len(store) == 1

    def test_idempotent(self, store: SessionStore) -> None:
        first = store.get_or_create("user-1", "session-1")
        second = store.get_or_create("user-1", "session-1")

        assert first is second
        assert len(store) == 1

    def test_keys_are_composite(self, store: SessionStore) -> None:
        a = store.get_or_create("user-1", "session-1")
        b = store.get_or_create("user-1", "session-2")
        c = store.get_or_create("user-2", "session-1")

        assert a is not b and a is not c and b is not c
        assert SessionKey("user-2", "session-1") in store

    def test_get_does_not_create(self, store: SessionStore) -> None:
        assert store.get("user-1", "session-1") is None
        assert len(store) == 0

    def test_invalid_cap_rejected(self) -> None:
        with pytest.raises(ValueError):
            SessionStore(max_messages=0)

    def test_concurrent_first_access_creates_one_context(self, store: SessionStore) -> None:
        barrier = threading.Barrier(16)
        results = []

        def worker() -> None:
            barrier.wait()
            results.append(store.get_or_create("user-1", "session-1"))

        threads = [threading.Thread(target=worker) for _ in range(16)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(store) == 1
        assert all(r is results[0] for r in results)


class TestAppend:
    """Tests for the rolling message window."""

    def test_append_preserves_order(self, store: SessionStore) -> None:
        context = store.get_or_create("user-1", "session-1")
        store.append(context, _message("one"))
        store.append(context, _message("two"))

        assert [m.content for m in context.recent_messages] == ["one", "two"]

    def test_cap_drops_oldest(self, store: SessionStore) -> None:
        context = store.get_or_create("user-1", "session-1")
        for i in range(11):
            store.append(context, _message(f"message {i}"))

        assert len(context.recent_messages) == 10
        assert [m.content for m in context.recent_messages] == [
            f"message {i}" for i in range(1, 11)
        ]

    def test_cap_never_exceeded(self) -> None:
        store = SessionStore(max_messages=3)
        context = store.get_or_create("user-1", "session-1")
        for i in range(50):
            store.append(context, _message(str(i)))
            assert len(context.recent_messages) <= 3

        assert [m.content for m in context.recent_messages] == ["47", "48", "49"]

    def test_concurrent_appends_not_lost(self) -> None:
        store = SessionStore(max_messages=1000)
        context = store.get_or_create("user-1", "session-1")

        def worker(n: int) -> None:
            for i in range(50):
                with store.session("user-1", "session-1") as ctx:
                    store.append(ctx, _message(f"{n}-{i}"))

        threads = [threading.Thread(target=worker, args=(n,)) for n in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(context.recent_messages) == 400

    def test_append_after_eviction_reattaches_context(self, store: SessionStore) -> None:
        context = store.get_or_create("user-1", "session-1")
        store.append(context, _message("old", NOW - timedelta(hours=2)))
        assert store.sweep(NOW, TTL) == 1

        target = store.append(context, _message("new", NOW))

        assert target is context
        assert store.get("user-1", "session-1") is context
        assert [m.content for m in context.recent_messages] == ["old", "new"]
        assert store.sweep(NOW, TTL) == 0

    def test_append_after_eviction_goes_to_newer_context(self, store: SessionStore) -> None:
        old = store.get_or_create("user-1", "session-1")
        store.append(old, _message("old", NOW - timedelta(hours=2)))
        assert store.sweep(NOW, TTL) == 1
        newer = store.get_or_create("user-1", "session-1")

        target = store.append(old, _message("late", NOW))

        assert target is newer
        assert store.get("user-1", "session-1") is newer
        assert [m.content for m in newer.recent_messages] == ["late"]


class TestSessionContextManager:
    """Tests for locked session access."""

    def test_yields_stored_context(self, store: SessionStore) -> None:
        with store.session("user-1", "session-1") as context:
            store.append(context, _message("hi"))

        assert store.get("user-1", "session-1") is context

    def test_evicted_entry_replaced(self, store: SessionStore) -> None:
        old = store.get_or_create("user-1", "session-1")
        store.append(old, _message("stale", NOW - timedelta(hours=2)))
        assert store.sweep(NOW, TTL) == 1

        with store.session("user-1", "session-1") as context:
            store.append(context, _message("fresh"))

        assert context is not old
        assert store.get("user-1", "session-1") is context
        assert [m.content for m in context.recent_messages] == ["fresh"]

    def test_sweep_waits_for_in_flight_session(self, store: SessionStore) -> None:
        """A sweep blocked on an active session sees its new message and keeps it."""
        stale = store.get_or_create("user-1", "session-1")
        store.append(stale, _message("old", NOW - timedelta(hours=2)))

        evicted = []

        def sweeper() -> None:
            evicted.append(store.sweep(NOW, TTL))

        with store.session("user-1", "session-1") as context:
            entry = store._entries[context.key]
            lock = _ContendedLock(entry.lock, threading.get_ident())
            entry.lock = lock

            thread = threading.Thread(target=sweeper)
            thread.start()
            assert lock.contended.wait(timeout=5)

            store.append(context, _message("new", NOW))

        thread.join(timeout=5)

        assert not thread.is_alive()
        assert evicted == [0]
        assert store.get("user-1", "session-1") is context
        assert context is stale

    def test_sweep_evicts_after_session_without_activity(self, store: SessionStore) -> None:
        """A sweep blocked on a session that adds nothing evicts once released."""
        stale = store.get_or_create("user-1", "session-1")
        store.append(stale, _message("old", NOW - timedelta(hours=2)))

        evicted = []

        def sweeper() -> None:
            evicted.append(store.sweep(NOW, TTL))

        with store.session("user-1", "session-1") as context:
            entry = store._entries[context.key]
            lock = _ContendedLock(entry.lock, threading.get_ident())
            entry.lock = lock

            thread = threading.Thread(target=sweeper)
            thread.start()
            assert lock.contended.wait(timeout=5)

        thread.join(timeout=5)

        assert evicted == [1]
        assert store.get("user-1", "session-1") is None


class TestSweep:
    """Tests for idle eviction."""

    def test_evicts_61_minute_old_keeps_59(self, store: SessionStore) -> None:
        old = store.get_or_create("user-1", "old")
        store.append(old, _message("x", NOW - timedelta(minutes=61)))
        recent = store.get_or_create("user-1", "recent")
        store.append(recent, _message("x", NOW - timedelta(minutes=59)))

        assert store.sweep(NOW, TTL) == 1
        assert store.get("user-1", "old") is None
        assert store.get("user-1", "recent") is recent

    def test_exact_ttl_boundary_kept(self, store: SessionStore) -> None:
        """Only strictly older contexts are evicted."""
        context = store.get_or_create("user-1", "session-1")
        store.append(context, _message("x", NOW - TTL))

        assert store.sweep(NOW, TTL) == 0
        assert len(store) == 1

    def test_uses_last_message(self, store: SessionStore) -> None:
        context = store.get_or_create("user-1", "session-1")
        store.append(context, _message("old", NOW - timedelta(hours=3)))
        store.append(context, _message("new", NOW - timedelta(minutes=5)))

        assert store.sweep(NOW, TTL) == 0

    def test_empty_context_skipped(self, store: SessionStore) -> None:
        store.get_or_create("user-1", "session-1")
        assert store.sweep(NOW, TTL) == 0
        assert len(store) == 1

    def test_empty_store(self, store: SessionStore) -> None:
        assert store.sweep(NOW, TTL) == 0

    def test_evicts_all_stale(self, store: SessionStore) -> None:
        for i in range(5):
            context = store.get_or_create(f"user-{i}", "session")
            store.append(context, _message("x", NOW - timedelta(hours=2)))

        assert store.sweep(NOW, TTL) == 5
        assert len(store) == 0
