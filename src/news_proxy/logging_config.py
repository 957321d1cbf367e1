import logging

import structlog

from .config import settings


def configure_logging(log_level: str | None = None, json_logs: bool | None = None) -> None:
    """Route structlog through stdlib logging at the configured level.

    Defaults come from ``LOG_LEVEL`` / ``LOG_JSON``; ``json_logs=False`` switches
    to the console renderer for local runs.
    """
    level = logging.getLevelName((log_level or settings.log_level).upper())
    if not isinstance(level, int):
        level = logging.INFO
    if json_logs is None:
        json_logs = settings.log_json

    logging.basicConfig(level=level, format="%(message)s")
    logging.getLogger().setLevel(level)

    renderer = structlog.processors.JSONRenderer() if json_logs else structlog.dev.ConsoleRenderer()
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


configure_logging()


def get_logger(name: str | None = None):
    if name is None:
        return structlog.get_logger()
    return structlog.get_logger(name)
