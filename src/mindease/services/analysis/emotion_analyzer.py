"""
Emotion Analyzer

Heuristic sentiment and emotion scoring for a single message.

Rules are applied in order to one accumulator. Each matching rule
sets its own emotion score and replaces the whole sentiment split,
so when several rules match only the last one's sentiment survives
while the earlier emotion scores stay set. Downstream consumers
depend on these exact numbers; keep the overwrite behaviour.

Patterns are unanchored, so "down" matches "download" and "good"
matches "goodbye".
"""

import re
from dataclasses import dataclass
from typing import Optional, Sequence

from mindease.domain.models.conversation import (
    EmotionalAnalysis,
    EmotionScores,
    SentimentScores,
)


@dataclass(frozen=True)
class EmotionRule:
    """
    One emotion category test.

    Attributes:
        emotion: EmotionScores field set on match
        pattern: Pattern searched in the lower-cased text
        score: Emotion score assigned on match
        sentiment: Sentiment split that replaces the current one on match
    """

    emotion: str
    pattern: re.Pattern
    score: float
    sentiment: SentimentScores


DEFAULT_EMOTION_RULES: tuple[EmotionRule, ...] = (
    EmotionRule(
        emotion="joy",
        pattern=re.compile(r"happy|joy|excited|great|wonderful|amazing|love|good"),
        score=0.8,
        sentiment=SentimentScores(positive=0.7, neutral=0.2, negative=0.1),
    ),
    EmotionRule(
        emotion="sadness",
        pattern=re.compile(r"sad|depressed|down|upset|cry|hurt|pain|lonely"),
        score=0.8,
        sentiment=SentimentScores(positive=0.1, neutral=0.2, negative=0.7),
    ),
    EmotionRule(
        emotion="anger",
        pattern=re.compile(r"angry|mad|furious|hate|annoyed|frustrated"),
        score=0.7,
        sentiment=SentimentScores(positive=0.1, neutral=0.3, negative=0.6),
    ),
    EmotionRule(
        emotion="fear",
        pattern=re.compile(r"scared|afraid|anxious|worried|nervous|panic"),
        score=0.7,
        sentiment=SentimentScores(positive=0.1, neutral=0.3, negative=0.6),
    ),
)

SENTENCE_SPLIT = re.compile(r"[.!?]+")


class EmotionAnalyzer:
    """
    Rule-based emotion analyzer.

    Usage:
        analyzer = EmotionAnalyzer()
        analysis = analyzer.analyze("I am so sad and lonely")
    """

    MIN_KEY_PHRASE_LENGTH: int = 10
    MAX_KEY_PHRASES: int = 3

    def __init__(self, rules: Optional[Sequence[EmotionRule]] = None) -> None:
        self._rules: tuple[EmotionRule, ...] = tuple(
            DEFAULT_EMOTION_RULES if rules is None else rules
        )

    def analyze(self, text: str) -> EmotionalAnalysis:
        """
        Analyze a message.

        Args:
            text: Raw user input

        Returns:
            EmotionalAnalysis with sentiment, emotions and key phrases
        """
        lowered = text.lower()
        emotions = EmotionScores()
        sentiment = SentimentScores()

        for rule in self._rules:
            if rule.pattern.search(lowered):
                setattr(emotions, rule.emotion, rule.score)
                # Last match wins
                sentiment = SentimentScores(
                    positive=rule.sentiment.positive,
                    neutral=rule.sentiment.neutral,
                    negative=rule.sentiment.negative,
                )

        return EmotionalAnalysis(
            sentiment=sentiment,
            emotions=emotions,
            key_phrases=self.extract_key_phrases(text),
        )

    def extract_key_phrases(self, text: str) -> list[str]:
        """Return up to three trimmed sentence fragments longer than ten characters."""
        fragments = (part.strip() for part in SENTENCE_SPLIT.split(text))
        phrases = [f for f in fragments if len(f) > self.MIN_KEY_PHRASE_LENGTH]
        return phrases[:self.MAX_KEY_PHRASES]
