"""
Health Check Endpoints

Provides system health and liveness endpoints for:
- Load balancer health checks
- Kubernetes probes
- Monitoring systems
"""

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from mindease import __version__
from mindease.api.dependencies import get_app_settings, get_orchestrator
from mindease.config import Settings
from mindease.services.orchestration.conversation_orchestrator import ConversationOrchestrator

router = APIRouter()


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str
    environment: str


class DetailedHealthResponse(HealthResponse):
    """Health check response with conversation core state."""

    active_sessions: int
    reaper_running: bool


@router.get(
    "",
    response_model=DetailedHealthResponse,
    summary="Health check",
    description="Health check including conversation core state",
)
async def health_check(
    orchestrator: ConversationOrchestrator = Depends(get_orchestrator),
    settings: Settings = Depends(get_app_settings),
) -> DetailedHealthResponse:
    """
    Basic health check.

    Returns 200 if application is running, with the number of
    in-memory sessions and whether the reaper loop is active.
    """
    return DetailedHealthResponse(
        status="healthy",
        version=__version__,
        environment=settings.env,
        active_sessions=orchestrator.active_session_count,
        reaper_running=orchestrator.reaper.is_running,
    )


@router.get(
    "/live",
    response_model=HealthResponse,
    summary="Liveness probe",
    description="Kubernetes liveness probe endpoint",
)
async def liveness_check(
    settings: Settings = Depends(get_app_settings),
) -> HealthResponse:
    """
    Kubernetes liveness probe.

    Returns 200 if application process is alive.
    """
    return HealthResponse(
        status="alive",
        version=__version__,
        environment=settings.env,
    )
