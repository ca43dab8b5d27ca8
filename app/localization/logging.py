"""Structured logging for the localization engine.

Events go through structlog onto the stdlib "localization" logger
hierarchy, so the host application keeps control of its root logger.
"""

import inspect
import logging
import sys

import structlog
from structlog.stdlib import BoundLogger

from localization.config import settings

LOGGER_NAME = "localization"


def _is_test_environment() -> bool:
    """Detect if running in a test environment."""
    return "pytest" in sys.modules


def _renderer():
    # Pretty printing for development, JSON for production
    if settings.is_production:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=False)


def configure_logging() -> BoundLogger:
    """Configure structlog and the engine's stdlib logger.

    A structlog configuration made by the host application is left alone.
    Under pytest the engine logger is silenced; tests patch module loggers
    to assert on events.
    """
    if not structlog.is_configured():
        structlog.configure(
            processors=[
                structlog.contextvars.merge_contextvars,
                structlog.stdlib.add_log_level,
                structlog.stdlib.add_logger_name,
                structlog.processors.TimeStamper(fmt="iso"),
                structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
            ],
            logger_factory=structlog.stdlib.LoggerFactory(),
            wrapper_class=structlog.stdlib.BoundLogger,
            cache_logger_on_first_use=True,
        )

    engine_logger = logging.getLogger(LOGGER_NAME)
    if _is_test_environment():
        engine_logger.setLevel(logging.CRITICAL + 1)
        return structlog.stdlib.get_logger(LOGGER_NAME)

    if not engine_logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(
            structlog.stdlib.ProcessorFormatter(
                processors=[
                    structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                    _renderer(),
                ]
            )
        )
        engine_logger.addHandler(handler)
        engine_logger.propagate = False
    engine_logger.setLevel(getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO))

    return structlog.stdlib.get_logger(LOGGER_NAME)


logger: BoundLogger = configure_logging()


def get_module_logger() -> BoundLogger:
    """Get a logger named after the calling module.

    Module loggers live under "localization.<module>" and carry the
    component and module path as context.
    """
    current_frame = inspect.currentframe()
    if current_frame is None:
        return logger

    module = inspect.getmodule(current_frame.f_back)
    if module is None:
        return logger.bind(component="unknown")

    module_name = module.__name__
    return structlog.stdlib.get_logger(module_name).bind(
        component=module_name.split(".")[-1],
        module_path=module_name,
    )
