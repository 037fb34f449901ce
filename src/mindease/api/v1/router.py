"""
API v1 Router

Aggregates all v1 API endpoints.
"""

from fastapi import APIRouter

from mindease.api.v1.endpoints.conversation import router as conversation_router
from mindease.api.v1.endpoints.crisis import router as crisis_router
from mindease.api.v1.endpoints.health import router as health_router

api_router = APIRouter()

# Include endpoint routers
api_router.include_router(
    health_router,
    prefix="/health",
    tags=["Health"],
)

api_router.include_router(
    conversation_router,
    tags=["Conversation"],
)

api_router.include_router(
    crisis_router,
    prefix="/crisis",
    tags=["Crisis"],
)
