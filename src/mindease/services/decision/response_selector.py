"""
Response Selector

Chooses a static reply for a message from an ordered rule chain.

SAFETY-CRITICAL: CRISIS_RESPONSE is user-facing safety copy and
must stay byte-for-byte identical. Changes need clinical review.

Replies are fixed templates. Conversation history is not consulted.
"""

from dataclasses import dataclass
from typing import Optional, Sequence


CRISIS_RESPONSE: str = (
    "I'm really concerned about what you're sharing with me. "
    "Your life has value, and there are people who want to help. "
    "Please reach out to the 988 Suicide & Crisis Lifeline (call or text 988) "
    "for immediate support. You don't have to go through this alone."
)

GREETING_RESPONSE: str = (
    "Hello! I'm here to listen and support you. How are you feeling today?"
)

SADNESS_RESPONSE: str = (
    "I'm sorry to hear you're feeling sad. It's okay to feel this way, "
    "and I'm here to listen. Would you like to talk about what's making "
    "you feel this way?"
)

ANXIETY_RESPONSE: str = (
    "I understand that anxiety can be overwhelming. It's completely normal "
    "to feel worried sometimes. Would you like to try a breathing exercise "
    "together, or would you prefer to talk about what's causing your anxiety?"
)

STRESS_RESPONSE: str = (
    "Stress can be really challenging to deal with. You're not alone in "
    "feeling this way. What's been the biggest source of stress for you lately?"
)

LONELINESS_RESPONSE: str = (
    "Feeling lonely can be really difficult. I want you to know that you're "
    "not alone - I'm here with you right now. Sometimes talking about these "
    "feelings can help. What's been making you feel lonely?"
)

GRATITUDE_RESPONSE: str = (
    "You're very welcome. I'm glad I could be here for you. Remember, it "
    "takes courage to reach out and talk about your feelings."
)

DEFAULT_RESPONSE: str = (
    "I hear you, and I want you to know that your feelings are valid. "
    "It sounds like you're going through something difficult. I'm here to "
    "listen and support you. Would you like to tell me more about how "
    "you're feeling?"
)


@dataclass(frozen=True)
class ResponseRule:
    """
    A keyword rule mapping to a fixed reply.

    Attributes:
        name: Rule identifier for logging
        keywords: Substrings tested against the lower-cased text
        reply: Reply returned when any keyword matches
    """

    name: str
    keywords: tuple[str, ...]
    reply: str

    def matches(self, lowered_text: str) -> bool:
        return any(keyword in lowered_text for keyword in self.keywords)


# Priority order: first match wins
DEFAULT_RESPONSE_RULES: tuple[ResponseRule, ...] = (
    ResponseRule("greeting", ("hello", "hi"), GREETING_RESPONSE),
    ResponseRule("sadness", ("sad", "depressed"), SADNESS_RESPONSE),
    ResponseRule("anxiety", ("anxious", "worried"), ANXIETY_RESPONSE),
    ResponseRule("stress", ("stressed",), STRESS_RESPONSE),
    ResponseRule("loneliness", ("lonely",), LONELINESS_RESPONSE),
    ResponseRule("gratitude", ("thank",), GRATITUDE_RESPONSE),
)


class ResponseSelector:
    """
    Rule-based reply selection.

    Usage:
        selector = ResponseSelector()
        reply = selector.select("Hello", crisis_detected=False)
    """

    def __init__(
        self,
        rules: Optional[Sequence[ResponseRule]] = None,
        crisis_response: str = CRISIS_RESPONSE,
        default_response: str = DEFAULT_RESPONSE,
    ) -> None:
        self._rules: tuple[ResponseRule, ...] = tuple(
            DEFAULT_RESPONSE_RULES if rules is None else rules
        )
        self._crisis_response = crisis_response
        self._default_response = default_response

    def select(self, text: str, crisis_detected: bool) -> str:
        """
        Select a reply.

        Args:
            text: Raw user input
            crisis_detected: Crisis flag from the crisis detector

        Returns:
            Crisis reply, first matching rule's reply, or the default
        """
        if crisis_detected:
            return self._crisis_response

        rule = self.match_rule(text)
        return rule.reply if rule else self._default_response

    def match_rule(self, text: str) -> Optional[ResponseRule]:
        """Return the first rule matching text, if any."""
        lowered = text.lower()
        for rule in self._rules:
            if rule.matches(lowered):
                return rule
        return None
