"""
Structlog configuration and helpers.
"""

from __future__ import annotations

import logging
from typing import Optional

import structlog

from storage_gateway.infra.config.settings import Settings, get_settings

# chatty at INFO, and botocore logs request details at DEBUG
QUIET_LOGGERS = ("botocore", "boto3", "urllib3", "s3transfer", "passlib")


def setup_logging(settings: Optional[Settings] = None) -> None:
    """Route stdlib and structlog output through one renderer.

    LOG_FORMAT=json renders one JSON object per line, anything else uses the
    coloured console renderer.
    """
    settings = settings or get_settings()
    level = getattr(logging, settings.log_level.upper(), logging.INFO)

    logging.basicConfig(level=level, format="%(message)s")
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))

    renderer = (
        structlog.processors.JSONRenderer(sort_keys=True)
        if settings.log_format.lower() == "json"
        else structlog.dev.ConsoleRenderer()
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.make_filtering_bound_logger(level),
        cache_logger_on_first_use=True,
    )


def get_logger(name: Optional[str] = None) -> structlog.stdlib.BoundLogger:  # type: ignore[name-defined]
    """Get a structlog logger bound with a name."""
    if name:
        return structlog.get_logger(name)
    return structlog.get_logger()


def bind_context(**kwargs) -> None:
    """Bind contextvars for correlation (request_id, username)."""
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_context() -> None:
    structlog.contextvars.clear_contextvars()
