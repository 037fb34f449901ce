"""Reply decision services."""

from mindease.services.decision.response_selector import (
    CRISIS_RESPONSE,
    DEFAULT_RESPONSE,
    DEFAULT_RESPONSE_RULES,
    ResponseRule,
    ResponseSelector,
)

__all__ = [
    "CRISIS_RESPONSE",
    "DEFAULT_RESPONSE",
    "DEFAULT_RESPONSE_RULES",
    "ResponseRule",
    "ResponseSelector",
]
