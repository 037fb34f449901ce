"""
Crisis Detector

Flags possible self-harm risk language in raw user text.

SAFETY-CRITICAL: Any single keyword match flags the message.
Matching is plain case-insensitive substring search, so false
negatives are expected for paraphrased or misspelled phrasing.

LOCALIZATION: The vocabulary is injected, defaulting to the
English list in settings.
"""

from typing import Iterable, Optional

from mindease.config.settings import DEFAULT_CRISIS_KEYWORDS


class CrisisDetector:
    """
    Keyword-based crisis detection.

    Pure and stateless apart from the vocabulary fixed at
    construction.

    Usage:
        detector = CrisisDetector()
        if detector.scan("I want to kill myself"):
            ...
    """

    def __init__(self, keywords: Optional[Iterable[str]] = None) -> None:
        """
        Initialize crisis detector.

        Args:
            keywords: Crisis phrases; defaults to DEFAULT_CRISIS_KEYWORDS
        """
        source = DEFAULT_CRISIS_KEYWORDS if keywords is None else keywords
        self._keywords: tuple[str, ...] = tuple(k.lower() for k in source)

    @property
    def keywords(self) -> tuple[str, ...]:
        return self._keywords

    def scan(self, text: str) -> bool:
        """
        Check text for crisis language.

        Args:
            text: Raw user input

        Returns:
            True if any crisis keyword occurs anywhere in the text
        """
        lowered = text.lower()
        return any(keyword in lowered for keyword in self._keywords)

    def matched_keywords(self, text: str) -> list[str]:
        """
        List every crisis keyword found in text, in vocabulary order.

        Used for audit logging; never log the text itself.
        """
        lowered = text.lower()
        return [keyword for keyword in self._keywords if keyword in lowered]
