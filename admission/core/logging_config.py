"""
Logging setup - Admission Engine
admission/core/logging_config.py

Configures stdlib logging and structlog from Settings.LOG_LEVEL / LOG_FORMAT.
"""

import logging
from typing import Optional

import structlog

from admission.config import Settings, get_settings


def configure_logging(settings: Optional[Settings] = None) -> None:
    """Configure the root logger and structlog processors."""
    settings = settings or get_settings()
    level = getattr(logging, settings.LOG_LEVEL)

    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s - %(message)s",
    )

    if settings.LOG_FORMAT == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer()

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        cache_logger_on_first_use=True,
    )
