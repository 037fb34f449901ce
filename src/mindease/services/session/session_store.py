"""
Session Store

In-memory map from (user_id, session_id) to ConversationContext.

CONCURRENCY: Request handlers run on a thread pool while the reaper
sweeps from the event loop. A map lock makes get-or-create atomic;
a per-entry re-entrant lock serializes appends with eviction of the
same key. Sweeps iterate a snapshot of entries, so sessions created
mid-sweep are not touched.

PRIVACY: Contexts are never persisted. Eviction drops the only
reference the system holds.
"""

import threading
from contextlib import contextmanager
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Iterator, Optional

from mindease.config.logging_config import get_logger
from mindease.domain.models.conversation import (
    ConversationContext,
    Message,
    SessionKey,
)

logger = get_logger(__name__)


@dataclass
class _SessionEntry:
    """A stored context plus the lock that guards it."""

    context: ConversationContext
    lock: threading.RLock = field(default_factory=threading.RLock)
    evicted: bool = False


class SessionStore:
    """
    Keyed, mutable collection of conversation contexts.

    All operations are total.

    Usage:
        store = SessionStore(max_messages=10)
        with store.session("user-1", "session-1") as context:
            store.append(context, message)
    """

    def __init__(self, max_messages: int = 10) -> None:
        """
        Initialize session store.

        Args:
            max_messages: Rolling window size per context
        """
        if max_messages < 1:
            raise ValueError("max_messages must be at least 1")
        self._max_messages = max_messages
        self._entries: dict[SessionKey, _SessionEntry] = {}
        self._lock = threading.Lock()

    @property
    def max_messages(self) -> int:
        return self._max_messages

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._entries

    def _get_or_create_entry(self, key: SessionKey) -> _SessionEntry:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                entry = _SessionEntry(
                    context=ConversationContext(
                        user_id=key.user_id,
                        session_id=key.session_id,
                    )
                )
                self._entries[key] = entry
                logger.debug("Session created", active_sessions=len(self._entries))
            return entry

    def get_or_create(self, user_id: str, session_id: str) -> ConversationContext:
        """
        Return the context for a key, creating an empty one if absent.

        Repeated calls for the same key return the same object until
        the context is evicted.
        """
        return self._get_or_create_entry(SessionKey(user_id, session_id)).context

    def get(self, user_id: str, session_id: str) -> Optional[ConversationContext]:
        """Return the context for a key without creating it."""
        with self._lock:
            entry = self._entries.get(SessionKey(user_id, session_id))
        return entry.context if entry else None

    @contextmanager
    def session(self, user_id: str, session_id: str) -> Iterator[ConversationContext]:
        """
        Yield the live context for a key with its lock held.

        If the entry is evicted between lookup and lock acquisition,
        a fresh entry is created and locked instead, so work done
        inside the block always lands on a stored context.
        """
        key = SessionKey(user_id, session_id)
        while True:
            entry = self._get_or_create_entry(key)
            with entry.lock:
                if entry.evicted:
                    continue
                yield entry.context
                return

    def append(self, context: ConversationContext, message: Message) -> ConversationContext:
        """
        Append a message to a context, trimming the oldest beyond the cap.

        If the context was evicted after it was obtained, it is stored
        again under its key before the message is added. If its key has
        meanwhile been taken by a newer context, the message lands on
        that newer context instead.

        Args:
            context: Context obtained from this store
            message: Message to append

        Returns:
            The stored context that received the message
        """
        key = context.key
        while True:
            with self._lock:
                entry = self._entries.get(key)
                if entry is None:
                    entry = _SessionEntry(context=context)
                    self._entries[key] = entry
                    logger.info("Evicted session reattached on append")
            with entry.lock:
                if entry.evicted:
                    continue
                if entry.context is not context:
                    logger.info("Append redirected to newer session context")
                entry.context.add_message(message, self._max_messages)
                return entry.context

    def sweep(self, now: datetime, ttl: timedelta) -> int:
        """
        Evict contexts idle longer than ttl.

        A context is evicted when its last message is strictly older
        than now - ttl. Contexts with no messages are left alone.

        Args:
            now: Sweep reference time
            ttl: Maximum idle time

        Returns:
            Number of contexts evicted
        """
        cutoff = now - ttl
        with self._lock:
            snapshot = list(self._entries.items())

        evicted = 0
        for key, entry in snapshot:
            with entry.lock:
                last_activity = entry.context.last_activity
                if entry.evicted or last_activity is None or last_activity >= cutoff:
                    continue
                with self._lock:
                    if self._entries.get(key) is entry:
                        del self._entries[key]
                entry.evicted = True
                evicted += 1

        return evicted
