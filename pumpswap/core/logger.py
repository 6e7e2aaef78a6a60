import sys
import logging

import structlog
from loguru import logger as loguru_logger

from .config import check_log_level, settings


class LoguruHandler(logging.Handler):
    """Forwards stdlib records, and so structlog output, to the loguru sink."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level = loguru_logger.level(record.levelname).name
        except ValueError:
            level = record.levelno
        loguru_logger.opt(exception=record.exc_info).log(level, record.getMessage())


def _renderer(json_output: bool):
    if json_output:
        return structlog.processors.JSONRenderer(indent=2)
    return structlog.dev.ConsoleRenderer(colors=False)


def setup_logger(
    service_name: str = settings.log_service,
    level: str = settings.log_level,
    json_output: bool = settings.log_json,
):
    """
    Console sink through loguru, structured records through structlog.

    Replaces the root handlers and the loguru sinks, so it belongs to the
    application entry point. Importing ``pumpswap`` never calls it.
    """
    level = check_log_level(level)
    logging.basicConfig(level=level, handlers=[LoguruHandler()], force=True)

    loguru_logger.remove()
    loguru_logger.add(
        sys.stderr,
        level=level,
        colorize=True,
        backtrace=True,
        diagnose=False,
        format="<green>{time:HH:mm:ss}</green> | "
               "<level>{level: <8}</level> | "
               "<cyan>{extra[service]}</cyan> - "
               "<level>{message}</level>",
    )
    loguru_logger.configure(extra={"service": service_name})

    structlog.configure(
        wrapper_class=structlog.make_filtering_bound_logger(logging.getLevelName(level)),
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.ExceptionRenderer(),
            _renderer(json_output),
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )

    return structlog.get_logger(service=service_name)


def get_logger(component: str):
    # stays a lazy proxy, so a later setup_logger call still applies
    return structlog.get_logger(service=settings.log_service, component=component)
