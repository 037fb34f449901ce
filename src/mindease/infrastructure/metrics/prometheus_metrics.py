"""
Prometheus Metrics

Metrics for conversation core observability.
Exposed at /metrics for Prometheus scraping.

ARCHITECTURE: Metrics are decoupled from business logic.
Only increment/observe; never block on metrics operations.
"""

from fastapi import APIRouter, Response
from prometheus_client import (
    CONTENT_TYPE_LATEST,
    REGISTRY,
    Counter,
    Gauge,
    Histogram,
    Info,
    generate_latest,
)

from mindease import __version__

# =============================================================================
# CONVERSATION METRICS
# =============================================================================

MESSAGES_PROCESSED_TOTAL = Counter(
    "mindease_messages_processed_total",
    "Messages processed by the conversation orchestrator",
    ["channel"],  # text, voice
)

MESSAGE_PROCESSING_SECONDS = Histogram(
    "mindease_message_processing_seconds",
    "Time spent in the conversation pipeline",
    buckets=[0.0005, 0.001, 0.005, 0.01, 0.05, 0.1, 0.5],
)

CRISIS_DETECTED_TOTAL = Counter(
    "mindease_crisis_detected_total",
    "Messages flagged by crisis detection",
)

PIPELINE_FAILURES_TOTAL = Counter(
    "mindease_pipeline_failures_total",
    "Pipeline failures converted into fallback responses",
    ["channel"],
)

# =============================================================================
# SESSION METRICS
# =============================================================================

ACTIVE_SESSIONS = Gauge(
    "mindease_active_sessions",
    "Conversation contexts currently held in memory",
)

SESSIONS_EVICTED_TOTAL = Counter(
    "mindease_sessions_evicted_total",
    "Conversation contexts evicted by the session reaper",
)

# =============================================================================
# SYSTEM INFO
# =============================================================================

SYSTEM_INFO = Info(
    "mindease_system",
    "MindEase system information",
)

SYSTEM_INFO.info({
    "version": __version__,
    "environment": "development",  # Updated at runtime
})


# =============================================================================
# HELPER FUNCTIONS
# =============================================================================

def track_message(channel: str, crisis_detected: bool, duration_seconds: float) -> None:
    """Record a successfully processed message."""
    MESSAGES_PROCESSED_TOTAL.labels(channel=channel).inc()
    MESSAGE_PROCESSING_SECONDS.observe(duration_seconds)
    if crisis_detected:
        CRISIS_DETECTED_TOTAL.inc()


def track_pipeline_failure(channel: str) -> None:
    """Record a failure that was turned into a fallback response."""
    PIPELINE_FAILURES_TOTAL.labels(channel=channel).inc()


def track_sweep(evicted: int, remaining: int) -> None:
    """Record the outcome of a reaper sweep."""
    if evicted:
        SESSIONS_EVICTED_TOTAL.inc(evicted)
    ACTIVE_SESSIONS.set(remaining)


def update_active_sessions(count: int) -> None:
    ACTIVE_SESSIONS.set(count)


def update_system_info(environment: str, version: str = __version__) -> None:
    """Update system info metric with current environment."""
    SYSTEM_INFO.info({
        "version": version,
        "environment": environment,
    })


# =============================================================================
# METRICS ENDPOINT
# =============================================================================

metrics_router = APIRouter(tags=["metrics"])


@metrics_router.get("/metrics")
async def metrics() -> Response:
    """
    Prometheus metrics endpoint.

    Returns metrics in Prometheus text format for scraping.
    """
    return Response(
        content=generate_latest(REGISTRY),
        media_type=CONTENT_TYPE_LATEST,
    )
