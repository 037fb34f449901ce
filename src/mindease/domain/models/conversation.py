"""
Conversation Domain Model

Messages, per-session conversation contexts and the structured
response returned for every processed message.

PRIVACY: Message content may contain sensitive information.
Contexts are held in memory only and evicted when idle.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import StrEnum
from typing import NamedTuple, Optional


def utc_now() -> datetime:
    """Current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


class MessageSender(StrEnum):
    """Author of a message in a conversation."""

    USER = "user"
    ASSISTANT = "assistant"


@dataclass(frozen=True)
class Message:
    """
    A single message in a conversation.

    Immutable once created.

    Attributes:
        content: Message text content
        sender: Message author
        timestamp: When the message was created
    """

    content: str
    sender: MessageSender
    timestamp: datetime = field(default_factory=utc_now)

    def to_dict(self) -> dict:
        """Serialize message to dictionary."""
        return {
            "content": self.content,
            "sender": self.sender.value,
            "timestamp": self.timestamp.isoformat(),
        }


class SessionKey(NamedTuple):
    """Composite key identifying one conversation context."""

    user_id: str
    session_id: str


@dataclass
class ConversationContext:
    """
    Rolling window of recent messages for one user/session pair.

    Owned by the SessionStore. Callers must not hold a reference
    across requests.

    Attributes:
        user_id: Owning user identifier
        session_id: Session identifier
        recent_messages: Most recent messages, oldest first
    """

    user_id: str
    session_id: str
    recent_messages: list[Message] = field(default_factory=list)

    @property
    def key(self) -> SessionKey:
        return SessionKey(self.user_id, self.session_id)

    @property
    def last_activity(self) -> Optional[datetime]:
        """Timestamp of the most recent message, if any."""
        return self.recent_messages[-1].timestamp if self.recent_messages else None

    def add_message(self, message: Message, max_messages: int) -> None:
        """
        Append a message and drop the oldest beyond the cap.

        Args:
            message: Message to append
            max_messages: Maximum number of messages to retain
        """
        self.recent_messages.append(message)
        overflow = len(self.recent_messages) - max_messages
        if overflow > 0:
            del self.recent_messages[:overflow]

    def to_dict(self) -> dict:
        return {
            "user_id": self.user_id,
            "session_id": self.session_id,
            "recent_messages": [m.to_dict() for m in self.recent_messages],
        }


@dataclass
class SentimentScores:
    """Coarse sentiment split for a message."""

    positive: float = 0.0
    neutral: float = 0.5
    negative: float = 0.0

    def to_dict(self) -> dict:
        return {
            "positive": self.positive,
            "neutral": self.neutral,
            "negative": self.negative,
        }


@dataclass
class EmotionScores:
    """Per-emotion scores (0.0-1.0)."""

    joy: float = 0.0
    sadness: float = 0.0
    anger: float = 0.0
    fear: float = 0.0
    surprise: float = 0.0
    disgust: float = 0.0

    def to_dict(self) -> dict:
        return {
            "joy": self.joy,
            "sadness": self.sadness,
            "anger": self.anger,
            "fear": self.fear,
            "surprise": self.surprise,
            "disgust": self.disgust,
        }


@dataclass
class EmotionalAnalysis:
    """
    Lightweight emotional analysis of a single message.

    Attributes:
        sentiment: Sentiment split
        emotions: Emotion scores
        key_phrases: Up to three salient sentence fragments
    """

    sentiment: SentimentScores = field(default_factory=SentimentScores)
    emotions: EmotionScores = field(default_factory=EmotionScores)
    key_phrases: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "sentiment": self.sentiment.to_dict(),
            "emotions": self.emotions.to_dict(),
            "keyPhrases": list(self.key_phrases),
        }


@dataclass
class ConversationResponse:
    """
    Structured reply for one processed message.

    Produced fresh per call; never stored.

    Attributes:
        response: Reply text shown to the user
        crisis_detected: Whether crisis language was detected
        suggested_actions: Follow-up actions for the user
        emotional_analysis: Analysis of the input message, absent on fallback
    """

    response: str
    crisis_detected: bool = False
    suggested_actions: list[str] = field(default_factory=list)
    emotional_analysis: Optional[EmotionalAnalysis] = None

    def to_dict(self) -> dict:
        """Serialize using wire field names."""
        data: dict = {
            "response": self.response,
            "suggestedActions": list(self.suggested_actions),
            "crisisDetected": self.crisis_detected,
        }
        if self.emotional_analysis is not None:
            data["emotionalAnalysis"] = self.emotional_analysis.to_dict()
        return data
