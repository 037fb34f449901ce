"""
Crisis Endpoints

Serves the static crisis support directory and a standalone crisis
language check.

SAFETY: The check uses the same vocabulary as the conversation
pipeline, so both always agree on what counts as crisis language.
"""

from datetime import datetime, timezone

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from mindease.api.dependencies import get_orchestrator
from mindease.config.logging_config import get_logger
from mindease.services.orchestration.conversation_orchestrator import ConversationOrchestrator
from mindease.services.safety.crisis_resources import get_crisis_resources

logger = get_logger(__name__)

router = APIRouter()


class CrisisResourceModel(BaseModel):
    """A single crisis support resource."""

    name: str
    contact: str
    description: str
    available: str


class CrisisResourcesResponse(BaseModel):
    """Crisis resource directory."""

    resources: list[CrisisResourceModel]


class CrisisCheckRequest(BaseModel):
    """Text to scan for crisis language."""

    message: str = Field(..., min_length=1)


class CrisisCheckResponse(BaseModel):
    """Result of a crisis language check."""

    is_crisis: bool = Field(alias="isCrisis")
    indicators: list[str]
    resources: list[CrisisResourceModel]
    timestamp: str

    model_config = {"populate_by_name": True}


def _resource_models() -> list[CrisisResourceModel]:
    return [
        CrisisResourceModel(**resource.to_dict())
        for resource in get_crisis_resources()
    ]


@router.get(
    "/resources",
    response_model=CrisisResourcesResponse,
    summary="List crisis support resources",
)
async def list_crisis_resources() -> CrisisResourcesResponse:
    """Return crisis support contacts in display order."""
    return CrisisResourcesResponse(resources=_resource_models())


@router.post(
    "/check",
    response_model=CrisisCheckResponse,
    response_model_by_alias=True,
    summary="Check a message for crisis language",
)
def check_crisis(
    request: CrisisCheckRequest,
    orchestrator: ConversationOrchestrator = Depends(get_orchestrator),
) -> CrisisCheckResponse:
    """
    Scan a message without recording it in any session.

    Resources are returned only when crisis language is found.
    """
    detector = orchestrator.crisis_detector
    indicators = detector.matched_keywords(request.message)
    is_crisis = bool(indicators)

    if is_crisis:
        logger.warning("Crisis check matched", matched_keywords=indicators)

    return CrisisCheckResponse(
        is_crisis=is_crisis,
        indicators=indicators,
        resources=_resource_models() if is_crisis else [],
        timestamp=datetime.now(timezone.utc).isoformat(),
    )
