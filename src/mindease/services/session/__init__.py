"""Conversation session management."""

from mindease.services.session.session_store import SessionStore
from mindease.services.session.session_reaper import SessionReaper

__all__ = ["SessionStore", "SessionReaper"]
