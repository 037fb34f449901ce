"""Heuristic text analysis services."""

from mindease.services.analysis.emotion_analyzer import (
    DEFAULT_EMOTION_RULES,
    EmotionAnalyzer,
    EmotionRule,
)

__all__ = ["DEFAULT_EMOTION_RULES", "EmotionAnalyzer", "EmotionRule"]
