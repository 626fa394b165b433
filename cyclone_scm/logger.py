"""Logging configuration for cyclone-scm.

Supports two logging formats:
- JSON logging (production): Structured logs for log aggregation systems
- Console logging (development): Human-readable, colored key/value logs

Configure via CYCLONE_SCM_LOG_FORMAT_JSON environment variable (default: True).
"""

import logging

import structlog
from structlog.typing import EventDict, Processor

from cyclone_scm.config import Settings

SENSITIVE_KEYS = frozenset({"authorization", "private-token", "password", "token"})


def redact_secrets(
    _logger: object, _method_name: str, event_dict: EventDict
) -> EventDict:
    """Structlog processor replacing credential values with a placeholder."""
    for key in event_dict:
        if key.lower() in SENSITIVE_KEYS:
            event_dict[key] = "<redacted>"
    return event_dict


def setup_logging(settings: Settings) -> None:
    """Configure structlog according to ``settings``."""
    level = logging.getLevelNamesMapping().get(settings.log_level.upper(), logging.INFO)
    renderer: Processor
    if settings.log_format_json:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer()

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            redact_secrets,
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        cache_logger_on_first_use=True,
    )
