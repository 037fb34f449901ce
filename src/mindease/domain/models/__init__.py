"""Domain models package."""

from mindease.domain.models.conversation import (
    ConversationContext,
    ConversationResponse,
    EmotionalAnalysis,
    EmotionScores,
    Message,
    MessageSender,
    SentimentScores,
    SessionKey,
    utc_now,
)

__all__ = [
    "ConversationContext",
    "ConversationResponse",
    "EmotionalAnalysis",
    "EmotionScores",
    "Message",
    "MessageSender",
    "SentimentScores",
    "SessionKey",
    "utc_now",
]
