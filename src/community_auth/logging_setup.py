"""
structlog wiring. Library modules only call ``structlog.get_logger``;
applications call :func:`configure_logging` once at start-up.
"""

from __future__ import annotations

import logging

import structlog

from .settings import Settings, load_settings


def configure_logging(settings: Settings | None = None) -> None:
    settings = settings or load_settings()
    level = getattr(logging, settings.log_level, logging.INFO)

    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]
    if settings.log_json:
        processors += [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors.append(structlog.dev.ConsoleRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        cache_logger_on_first_use=True,
    )
