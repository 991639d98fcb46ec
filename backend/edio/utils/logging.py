"""structlog setup shared by the API and the stores."""

import logging
import sys
from typing import Any, List, Optional

import structlog
from structlog.types import EventDict, Processor

from edio.config import settings

# Chatty stdlib loggers, never emitted below WARNING
QUIET_LOGGERS = ("sqlalchemy.engine", "uvicorn.access")


def add_app_context(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
    event_dict["app"] = settings.app_name
    return event_dict


def resolve_level() -> int:
    """LOG_LEVEL when set, else DEBUG in debug mode and INFO otherwise."""
    if settings.log_level:
        level = logging.getLevelName(settings.log_level.upper())
        if isinstance(level, int):
            return level
    return logging.DEBUG if settings.debug else logging.INFO


def _renderer() -> Processor:
    json_output = settings.log_json if settings.log_json is not None else not settings.debug
    if json_output:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty())


def configure_logging() -> None:
    """Configure structlog and the stdlib root logger. Safe to call twice."""
    level = resolve_level()

    processors: List[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        add_app_context,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        _renderer(),
    ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=level)
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))


def get_logger(name: Optional[str] = None) -> structlog.BoundLogger:
    logger = structlog.get_logger()
    return logger.bind(name=name) if name else logger


def bind_context(**kwargs: Any) -> None:
    """Attach request-scoped fields (request_id, user_id) to later entries."""
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_context() -> None:
    structlog.contextvars.clear_contextvars()
