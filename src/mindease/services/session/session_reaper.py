"""
Session Reaper

Periodically evicts idle conversation contexts from the SessionStore.

ARCHITECTURE: The reaper is an explicit service with an injected
clock and sleep function. Nothing starts at import time; the
application lifespan calls start() and stop(). Tests drive sweep()
directly or run the loop with a fake sleep.
"""

import asyncio
from datetime import datetime, timedelta
from typing import Awaitable, Callable, Optional

from mindease.config.logging_config import get_logger
from mindease.domain.models.conversation import utc_now
from mindease.infrastructure.metrics import track_sweep
from mindease.services.session.session_store import SessionStore

logger = get_logger(__name__)

Clock = Callable[[], datetime]
Sleep = Callable[[float], Awaitable[None]]

DEFAULT_TTL = timedelta(hours=1)
DEFAULT_INTERVAL = timedelta(hours=1)


class SessionReaper:
    """
    Periodic sweep of stale sessions.

    Usage:
        reaper = SessionReaper(store)
        reaper.start()
        ...
        await reaper.stop()
    """

    def __init__(
        self,
        store: SessionStore,
        ttl: timedelta = DEFAULT_TTL,
        interval: timedelta = DEFAULT_INTERVAL,
        clock: Clock = utc_now,
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        """
        Initialize session reaper.

        Args:
            store: Store to sweep
            ttl: Idle time after which a context is evicted
            interval: Time between sweeps
            clock: Source of the sweep reference time
            sleep: Awaitable sleep used between sweeps
        """
        self._store = store
        self._ttl = ttl
        self._interval = interval
        self._clock = clock
        self._sleep = sleep
        self._task: Optional[asyncio.Task] = None

    @property
    def store(self) -> SessionStore:
        return self._store

    @property
    def ttl(self) -> timedelta:
        return self._ttl

    @property
    def interval(self) -> timedelta:
        return self._interval

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    def sweep(self, now: Optional[datetime] = None) -> int:
        """
        Run one sweep.

        Args:
            now: Reference time; defaults to the injected clock

        Returns:
            Number of contexts evicted
        """
        reference = now if now is not None else self._clock()
        evicted = self._store.sweep(reference, self._ttl)
        remaining = len(self._store)
        track_sweep(evicted, remaining)

        if evicted:
            logger.info("Stale sessions evicted", evicted=evicted, remaining=remaining)
        else:
            logger.debug("Session sweep found nothing to evict", remaining=remaining)

        return evicted

    async def run(self) -> None:
        """Sweep every interval until cancelled."""
        while True:
            await self._sleep(self._interval.total_seconds())
            try:
                self.sweep()
            except Exception:
                logger.exception("Session sweep failed")

    def start(self) -> None:
        """Schedule the sweep loop on the running event loop."""
        if self.is_running:
            return
        self._task = asyncio.get_running_loop().create_task(self.run())
        logger.info(
            "Session reaper started",
            ttl_seconds=self._ttl.total_seconds(),
            interval_seconds=self._interval.total_seconds(),
        )

    async def stop(self) -> None:
        """Cancel the sweep loop and wait for it to finish."""
        if self._task is None:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None
        logger.info("Session reaper stopped")
