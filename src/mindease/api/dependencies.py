"""
API Dependencies

FastAPI dependency providers backed by application state.
The orchestrator is created in create_application() and stored
on app.state, so tests can build isolated applications.
"""

from fastapi import Request

from mindease.config import Settings
from mindease.services.orchestration.conversation_orchestrator import ConversationOrchestrator


def get_orchestrator(request: Request) -> ConversationOrchestrator:
    """Get the orchestrator bound to this application."""
    return request.app.state.orchestrator


def get_app_settings(request: Request) -> Settings:
    """Get the settings bound to this application."""
    return request.app.state.settings
