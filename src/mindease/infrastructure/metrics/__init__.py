"""Metrics infrastructure package."""

from mindease.infrastructure.metrics.prometheus_metrics import (
    # Conversation metrics
    MESSAGES_PROCESSED_TOTAL,
    MESSAGE_PROCESSING_SECONDS,
    CRISIS_DETECTED_TOTAL,
    PIPELINE_FAILURES_TOTAL,
    # Session metrics
    ACTIVE_SESSIONS,
    SESSIONS_EVICTED_TOTAL,
    # Helpers
    track_message,
    track_pipeline_failure,
    track_sweep,
    update_active_sessions,
    update_system_info,
    # Router
    metrics_router,
)

__all__ = [
    "MESSAGES_PROCESSED_TOTAL",
    "MESSAGE_PROCESSING_SECONDS",
    "CRISIS_DETECTED_TOTAL",
    "PIPELINE_FAILURES_TOTAL",
    "ACTIVE_SESSIONS",
    "SESSIONS_EVICTED_TOTAL",
    "track_message",
    "track_pipeline_failure",
    "track_sweep",
    "update_active_sessions",
    "update_system_info",
    "metrics_router",
]
