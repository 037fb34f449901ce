"""Conversation orchestration."""

from mindease.services.orchestration.conversation_orchestrator import (
    ConversationOrchestrator,
    create_orchestrator,
)

__all__ = ["ConversationOrchestrator", "create_orchestrator"]
