"""Safety services package."""

from mindease.services.safety.crisis_detector import CrisisDetector
from mindease.services.safety.crisis_resources import (
    CrisisResource,
    DEFAULT_CRISIS_RESOURCES,
    get_crisis_resources,
)

__all__ = [
    "CrisisDetector",
    "CrisisResource",
    "DEFAULT_CRISIS_RESOURCES",
    "get_crisis_resources",
]
