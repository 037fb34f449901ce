"""
Unit Tests for Session Reaper

Drives sweeps with a fake clock and fake sleep instead of real time.
"""

import asyncio
from datetime import datetime, timedelta

import pytest

from mindease.domain.models.conversation import Message, MessageSender
from mindease.services.session.session_reaper import SessionReaper
from mindease.services.session.session_store import SessionStore


def _touch(store: SessionStore, session_id: str, timestamp: datetime) -> None:
    context = store.get_or_create("user-1", session_id)
    store.append(context, Message(content="x", sender=MessageSender.USER, timestamp=timestamp))


class TestSweep:
    """Tests for single sweeps."""

    def test_sweep_uses_clock(self, store: SessionStore, clock) -> None:
        reaper = SessionReaper(store, clock=clock)
        _touch(store, "old", clock() - timedelta(minutes=61))
        _touch(store, "recent", clock() - timedelta(minutes=59))

        assert reaper.sweep() == 1
        assert store.get("user-1", "old") is None
        assert store.get("user-1", "recent") is not None

    def test_sweep_explicit_now(self, store: SessionStore, clock) -> None:
        reaper = SessionReaper(store, clock=clock)
        _touch(store, "session", clock())

        assert reaper.sweep(clock() + timedelta(minutes=59)) == 0
        assert reaper.sweep(clock() + timedelta(minutes=61)) == 1

    def test_configurable_ttl(self, store: SessionStore, clock) -> None:
        reaper = SessionReaper(store, ttl=timedelta(minutes=5), clock=clock)
        _touch(store, "session", clock() - timedelta(minutes=6))

        assert reaper.sweep() == 1


class _FailingOnceStore(SessionStore):
    def __init__(self) -> None:
        super().__init__()
        self.calls = 0

    def sweep(self, now, ttl) -> int:
        self.calls += 1
        if self.calls == 1:
            raise RuntimeError("boom")
        return super().sweep(now, ttl)


class TestRunLoop:
    """Tests for the periodic loop."""

    @pytest.mark.asyncio
    async def test_run_sweeps_each_interval(self, store: SessionStore, clock) -> None:
        sleeps: list[float] = []

        async def fake_sleep(seconds: float) -> None:
            sleeps.append(seconds)
            if len(sleeps) > 2:
                raise asyncio.CancelledError
            clock.advance(timedelta(seconds=seconds))

        reaper = SessionReaper(
            store,
            interval=timedelta(minutes=30),
            clock=clock,
            sleep=fake_sleep,
        )
        _touch(store, "session", clock())

        with pytest.raises(asyncio.CancelledError):
            await reaper.run()

        assert sleeps == [1800.0, 1800.0, 1800.0]
        # 60 minutes idle is not strictly older than the TTL
        assert len(store) == 1

    @pytest.mark.asyncio
    async def test_run_survives_sweep_failure(self, clock) -> None:
        store = _FailingOnceStore()
        calls = 0

        async def fake_sleep(seconds: float) -> None:
            nonlocal calls
            calls += 1
            if calls > 2:
                raise asyncio.CancelledError

        reaper = SessionReaper(store, clock=clock, sleep=fake_sleep)

        with pytest.raises(asyncio.CancelledError):
            await reaper.run()

        assert store.calls == 2

    @pytest.mark.asyncio
    async def test_start_and_stop(self, store: SessionStore, clock) -> None:
        never = asyncio.Event()

        async def blocking_sleep(seconds: float) -> None:
            await never.wait()

        reaper = SessionReaper(store, clock=clock, sleep=blocking_sleep)
        assert not reaper.is_running

        reaper.start()
        reaper.start()
        await asyncio.sleep(0)
        assert reaper.is_running

        await reaper.stop()
        assert not reaper.is_running

    @pytest.mark.asyncio
    async def test_stop_without_start(self, store: SessionStore) -> None:
        await SessionReaper(store).stop()
