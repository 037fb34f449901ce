"""
Crisis Resources

Static directory of crisis support contacts surfaced to users.

LEGAL_REVIEW_REQUIRED: Contact details must be verified for
accuracy before changes are released.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class CrisisResource:
    """
    A single crisis support resource.

    Attributes:
        name: Resource name (e.g., "988 Suicide & Crisis Lifeline")
        contact: How to reach it (phone, text, URL)
        description: Brief description
        available: Availability window
    """

    name: str
    contact: str
    description: str
    available: str = "24/7"

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "contact": self.contact,
            "description": self.description,
            "available": self.available,
        }


DEFAULT_CRISIS_RESOURCES: tuple[CrisisResource, ...] = (
    CrisisResource(
        name="988 Suicide & Crisis Lifeline",
        contact="Call or text 988",
        description="24/7 free and confidential support for people in distress",
    ),
    CrisisResource(
        name="Crisis Text Line",
        contact="Text HOME to 741741",
        description="Free 24/7 support via text message",
    ),
    CrisisResource(
        name="International Association for Suicide Prevention",
        contact="https://www.iasp.info/resources/Crisis_Centres/",
        description="Find crisis centers worldwide",
    ),
    CrisisResource(
        name="Emergency Services",
        contact="Call 911 (US) or your local emergency number",
        description="For immediate life-threatening emergencies",
    ),
)


def get_crisis_resources() -> list[CrisisResource]:
    """Return the crisis resource directory in display order."""
    return list(DEFAULT_CRISIS_RESOURCES)
