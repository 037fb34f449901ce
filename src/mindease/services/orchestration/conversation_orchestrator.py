"""
Conversation Orchestrator

Composes the conversation core for each incoming message:
Session → Crisis Detection → Response Selection → Session → Emotion Analysis

All user messages flow through this orchestrator. It never raises
to its caller; any failure becomes a safe fallback response.
"""

import time
from datetime import datetime, timedelta
from typing import Callable, Optional

from mindease.config import Settings
from mindease.config.logging_config import get_logger
from mindease.domain.models.conversation import (
    ConversationResponse,
    Message,
    MessageSender,
    utc_now,
)
from mindease.infrastructure.metrics import (
    track_message,
    track_pipeline_failure,
    update_active_sessions,
)
from mindease.services.analysis.emotion_analyzer import EmotionAnalyzer
from mindease.services.decision.response_selector import ResponseSelector
from mindease.services.safety.crisis_detector import CrisisDetector
from mindease.services.session.session_reaper import SessionReaper
from mindease.services.session.session_store import SessionStore

logger = get_logger(__name__)


CRISIS_SUGGESTED_ACTION: str = "Contact 988 Suicide & Crisis Lifeline"

FALLBACK_RESPONSE: str = (
    "I'm sorry, I'm having trouble processing your message right now. "
    "If you need immediate support, please contact 988 Suicide & Crisis Lifeline."
)

VOICE_FALLBACK_RESPONSE: str = (
    "I'm sorry, I couldn't process your voice message. "
    "Please try typing your message instead."
)

# Voice is not transcribed yet; every clip is routed as this text
VOICE_PLACEHOLDER_TRANSCRIPT: str = "I received your voice message"


class ConversationOrchestrator:
    """
    Main orchestrator for the conversation pipeline.

    1. Session: Resolve the context and record the user message
    2. Crisis: Scan the message for crisis language
    3. Response: Select a reply (crisis-aware)
    4. Session: Record the assistant reply
    5. Emotion: Analyze the input message
    6. Return: Assemble the ConversationResponse

    SAFETY: The crisis flag always takes precedence over keyword
    replies, and failures fall back to a reply pointing at 988.
    """

    def __init__(
        self,
        store: Optional[SessionStore] = None,
        crisis_detector: Optional[CrisisDetector] = None,
        emotion_analyzer: Optional[EmotionAnalyzer] = None,
        response_selector: Optional[ResponseSelector] = None,
        reaper: Optional[SessionReaper] = None,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        """
        Initialize orchestrator with services.

        Args:
            store: Session store
            crisis_detector: Crisis classifier
            emotion_analyzer: Emotion classifier
            response_selector: Reply selector
            reaper: Session reaper sweeping the same store
            clock: Source of message timestamps
        """
        self._store = store if store is not None else SessionStore()
        self._crisis = crisis_detector if crisis_detector is not None else CrisisDetector()
        self._emotion = emotion_analyzer if emotion_analyzer is not None else EmotionAnalyzer()
        self._selector = response_selector if response_selector is not None else ResponseSelector()
        self._clock = clock
        self._reaper = reaper if reaper is not None else SessionReaper(self._store, clock=clock)
        if self._reaper.store is not self._store:
            raise ValueError("reaper must sweep the orchestrator's session store")

    @property
    def store(self) -> SessionStore:
        return self._store

    @property
    def reaper(self) -> SessionReaper:
        return self._reaper

    @property
    def crisis_detector(self) -> CrisisDetector:
        return self._crisis

    @property
    def active_session_count(self) -> int:
        return len(self._store)

    def process_message(
        self,
        user_id: str,
        session_id: str,
        text: str,
    ) -> ConversationResponse:
        """
        Process a user message through the full pipeline.

        Args:
            user_id: User identifier
            session_id: Session identifier
            text: Raw user message

        Returns:
            ConversationResponse; a fallback response on any failure
        """
        return self._process(user_id, session_id, text, channel="text")

    def process_voice_input(
        self,
        user_id: str,
        session_id: str,
        audio: bytes,
    ) -> ConversationResponse:
        """
        Process a voice message.

        Audio is not transcribed; a placeholder transcript is routed
        through the text pipeline.

        Args:
            user_id: User identifier
            session_id: Session identifier
            audio: Raw audio bytes

        Returns:
            ConversationResponse; a voice fallback response on failure
        """
        try:
            transcript = self._transcribe(audio)
            return self._process(user_id, session_id, transcript, channel="voice")
        except Exception:
            logger.exception("Voice input processing failed", audio_bytes=len(audio))
            track_pipeline_failure("voice")
            return ConversationResponse(response=VOICE_FALLBACK_RESPONSE)

    def sweep(self, now: Optional[datetime] = None) -> int:
        """
        Evict idle sessions.

        Args:
            now: Reference time; defaults to the clock

        Returns:
            Number of sessions evicted
        """
        return self._reaper.sweep(now)

    def _transcribe(self, audio: bytes) -> str:
        return VOICE_PLACEHOLDER_TRANSCRIPT

    def _process(
        self,
        user_id: str,
        session_id: str,
        text: str,
        channel: str,
    ) -> ConversationResponse:
        started = time.perf_counter()
        try:
            with self._store.session(user_id, session_id) as context:
                self._store.append(
                    context,
                    Message(content=text, sender=MessageSender.USER, timestamp=self._clock()),
                )

                crisis_detected = self._crisis.scan(text)
                if crisis_detected:
                    logger.warning(
                        "Crisis language detected",
                        channel=channel,
                        matched_keywords=self._crisis.matched_keywords(text),
                    )

                reply = self._selector.select(text, crisis_detected)

                self._store.append(
                    context,
                    Message(content=reply, sender=MessageSender.ASSISTANT, timestamp=self._clock()),
                )

            analysis = self._emotion.analyze(text)

            track_message(channel, crisis_detected, time.perf_counter() - started)
            update_active_sessions(len(self._store))

        except Exception:
            logger.exception(
                "Conversation pipeline failed",
                channel=channel,
                message_length=len(text) if isinstance(text, str) else None,
            )
            track_pipeline_failure(channel)
            return ConversationResponse(response=FALLBACK_RESPONSE)

        return ConversationResponse(
            response=reply,
            emotional_analysis=analysis,
            suggested_actions=[CRISIS_SUGGESTED_ACTION] if crisis_detected else [],
            crisis_detected=crisis_detected,
        )


def create_orchestrator(
    settings: Settings,
    clock: Callable[[], datetime] = utc_now,
) -> ConversationOrchestrator:
    """
    Build an orchestrator and its collaborators from settings.

    Args:
        settings: Application settings
        clock: Source of timestamps for messages and sweeps

    Returns:
        Configured ConversationOrchestrator
    """
    conversation = settings.conversation
    store = SessionStore(max_messages=conversation.max_context_messages)
    reaper = SessionReaper(
        store,
        ttl=timedelta(seconds=conversation.context_ttl_seconds),
        interval=timedelta(seconds=conversation.sweep_interval_seconds),
        clock=clock,
    )
    return ConversationOrchestrator(
        store=store,
        crisis_detector=CrisisDetector(conversation.crisis_keywords),
        emotion_analyzer=EmotionAnalyzer(),
        response_selector=ResponseSelector(),
        reaper=reaper,
        clock=clock,
    )
