"""
MindEase Logging Configuration

structlog setup shared by the core and the HTTP transport.

PRIVACY: Never log raw user messages. Log lengths, flags and
matched keywords instead. Keys that could carry message text or
credentials are redacted before rendering.
"""

import logging
import sys
from typing import Any

import structlog

from mindease import __version__
from mindease.config.settings import Settings

REDACTED = "[REDACTED]"

# Substrings of log keys whose values are redacted
SENSITIVE_PATTERNS: frozenset[str] = frozenset({
    "password",
    "token",
    "secret",
    "api_key",
    "authorization",
    "message_text",
    "content",
})


def _is_sensitive(key: str) -> bool:
    lowered = key.lower()
    return any(pattern in lowered for pattern in SENSITIVE_PATTERNS)


def _scrub(key: str, value: Any) -> Any:
    if _is_sensitive(key):
        return REDACTED
    if isinstance(value, dict):
        return {k: _scrub(k, v) for k, v in value.items()}
    if isinstance(value, list):
        return [_scrub(key, item) for item in value]
    return value


def _redact_sensitive_data(
    logger: logging.Logger,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """structlog processor redacting sensitive keys, nested ones included."""
    return {
        key: value if key == "event" else _scrub(key, value)
        for key, value in event_dict.items()
    }


def _add_service_context(
    logger: logging.Logger,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    event_dict["service"] = "mindease-core"
    event_dict["version"] = __version__
    return event_dict


def configure_logging(settings: Settings) -> None:
    """
    Configure structlog and the stdlib root logger.

    Development renders to the console; every other environment
    renders JSON lines. Call once at application startup.

    Args:
        settings: Application settings
    """
    renderer: list[Any]
    if settings.env == "development":
        renderer = [structlog.dev.ConsoleRenderer(colors=True)]
    else:
        renderer = [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.TimeStamper(fmt="iso"),
            _redact_sensitive_data,
            _add_service_context,
            *renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, settings.log_level.upper()),
    )
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


def bind_correlation_id(correlation_id: str) -> None:
    """Attach a request correlation id to every log entry in this context."""
    structlog.contextvars.bind_contextvars(correlation_id=correlation_id)


def clear_context() -> None:
    structlog.contextvars.clear_contextvars()
