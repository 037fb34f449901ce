"""
Conversation Endpoints

Main interaction point for user conversations.
Derives anonymous identifiers when the caller supplies none and
renders the orchestrator's ConversationResponse.
"""

from datetime import datetime, timezone
from typing import Optional
from uuid import uuid4

from fastapi import APIRouter, Depends, Header, HTTPException, Request, status
from pydantic import BaseModel, Field

from mindease.api.dependencies import get_app_settings, get_orchestrator
from mindease.config import Settings
from mindease.services.orchestration.conversation_orchestrator import ConversationOrchestrator

router = APIRouter()


# Request/Response Models

class ChatRequest(BaseModel):
    """Request to send a text message."""

    message: str = Field(..., min_length=1, description="User message")


class ConversationEnvelope(BaseModel):
    """Response envelope carrying the serialized ConversationResponse."""

    success: bool = True
    data: dict
    user_id: str = Field(alias="userId")
    session_id: str = Field(alias="sessionId")
    timestamp: str

    model_config = {
        "populate_by_name": True,
        "json_schema_extra": {
            "example": {
                "success": True,
                "data": {
                    "response": "Hello! I'm here to listen and support you. How are you feeling today?",
                    "suggestedActions": [],
                    "crisisDetected": False,
                },
                "userId": "a2b7f0d4-1c3e-4f6a-9b8d-2e5c7a1f3b90",
                "sessionId": "5d9e2c1a-7b4f-4e8d-a6c3-0f1b2d3e4a5c",
                "timestamp": "2026-01-01T12:00:00+00:00",
            }
        }
    }


def _resolve_ids(user_id: Optional[str], session_id: Optional[str]) -> tuple[str, str]:
    """Default missing identifiers to a fresh anonymous session."""
    return user_id or str(uuid4()), session_id or str(uuid4())


def _envelope(data: dict, user_id: str, session_id: str) -> ConversationEnvelope:
    return ConversationEnvelope(
        data=data,
        user_id=user_id,
        session_id=session_id,
        timestamp=datetime.now(timezone.utc).isoformat(),
    )


@router.post(
    "/chat",
    response_model=ConversationEnvelope,
    response_model_by_alias=True,
    summary="Send a text message and receive a reply",
)
def chat(
    request: ChatRequest,
    orchestrator: ConversationOrchestrator = Depends(get_orchestrator),
    settings: Settings = Depends(get_app_settings),
    x_user_id: Optional[str] = Header(default=None),
    x_session_id: Optional[str] = Header(default=None),
) -> ConversationEnvelope:
    """
    Process a text message through the conversation core.

    Replies always succeed at the core level; pipeline failures are
    returned as a fallback reply rather than an HTTP error.
    """
    max_length = settings.conversation.max_message_length
    if len(request.message) > max_length:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Message must be at most {max_length} characters",
        )

    user_id, session_id = _resolve_ids(x_user_id, x_session_id)
    result = orchestrator.process_message(user_id, session_id, request.message)
    return _envelope(result.to_dict(), user_id, session_id)


@router.post(
    "/voice",
    response_model=ConversationEnvelope,
    response_model_by_alias=True,
    summary="Send a voice message and receive a reply",
)
async def voice(
    request: Request,
    orchestrator: ConversationOrchestrator = Depends(get_orchestrator),
    x_user_id: Optional[str] = Header(default=None),
    x_session_id: Optional[str] = Header(default=None),
) -> ConversationEnvelope:
    """
    Process a voice message.

    The raw request body is the audio payload.
    """
    audio = await request.body()
    if not audio:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Audio payload is required",
        )

    user_id, session_id = _resolve_ids(x_user_id, x_session_id)
    result = orchestrator.process_voice_input(user_id, session_id, audio)
    return _envelope(result.to_dict(), user_id, session_id)
