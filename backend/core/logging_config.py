"""Structured logging configuration using structlog.

Every entry carries the service name, and while a request is being handled
also its ``request_id`` (bound by ``RequestTrackingMiddleware``). Output is
JSON unless ``LOG_FORMAT=text`` or the service runs in development.
"""

import logging
import sys
from typing import Optional

import structlog
from app.config import Settings, get_settings

_QUIET_LOGGERS = ("uvicorn.access", "aiosqlite")


def _add_service(settings: Settings):
    def processor(logger, method_name, event_dict):
        event_dict.setdefault("service", settings.APP_NAME)
        return event_dict

    return processor


def bind_request(request_id: str, **extra) -> None:
    """Attach request-scoped fields to every log entry until ``clear_request``."""
    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(request_id=request_id, **extra)


def clear_request() -> None:
    structlog.contextvars.clear_contextvars()


def setup_logging(settings: Optional[Settings] = None) -> None:
    """Route stdlib and structlog output through one formatter on stdout."""
    settings = settings or get_settings()

    shared_processors: list = [
        structlog.contextvars.merge_contextvars,
        _add_service(settings),
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if settings.is_development or settings.LOG_FORMAT == "text":
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty())
    else:
        renderer = structlog.processors.JSONRenderer()

    structlog.configure(
        processors=[*shared_processors, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
            foreign_pre_chain=shared_processors,
        )
    )

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO))

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    # SQL statements only when explicitly asked for
    logging.getLogger("sqlalchemy.engine").setLevel(
        logging.INFO if settings.SQLALCHEMY_ECHO else logging.WARNING
    )
