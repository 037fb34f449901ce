"""
MindEase Configuration Module

Provides centralized configuration management with:
- Environment-based settings loading
- Validation of required values
- Swappable keyword vocabularies
"""

from mindease.config.settings import ConversationSettings, Settings, get_settings

__all__ = ["ConversationSettings", "Settings", "get_settings"]
