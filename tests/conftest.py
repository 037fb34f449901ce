"""Tests configuration and fixtures."""

from datetime import datetime, timedelta, timezone

import pytest

from mindease.config import ConversationSettings, Settings
from mindease.services.orchestration.conversation_orchestrator import (
    ConversationOrchestrator,
    create_orchestrator,
)
from mindease.services.session.session_store import SessionStore


class FakeClock:
    """Manually advanced clock for deterministic timestamps."""

    def __init__(self, start: datetime) -> None:
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, delta: timedelta) -> None:
        self.now = self.now + delta


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc))


@pytest.fixture
def test_settings() -> Settings:
    """Create test settings with the reaper disabled."""
    return Settings(
        env="development",
        debug=True,
        conversation=ConversationSettings(reaper_enabled=False),
    )


@pytest.fixture
def store() -> SessionStore:
    return SessionStore(max_messages=10)


@pytest.fixture
def orchestrator(test_settings: Settings, clock: FakeClock) -> ConversationOrchestrator:
    """Orchestrator wired from settings with a fake clock."""
    return create_orchestrator(test_settings, clock=clock)
