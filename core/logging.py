import logging
import sys
import structlog
import os
from typing import Optional

from opentelemetry.instrumentation.logging import LoggingInstrumentor

from core.settings import Settings


def get_environment(settings: Optional[Settings] = None) -> str:
    """Environment name from settings, falling back to the ENVIRONMENT variable"""
    if settings is not None:
        return settings.ENVIRONMENT
    return os.getenv("ENVIRONMENT", "development")


def get_log_level(settings: Optional[Settings] = None):
    """Get log level from settings or environment, default INFO"""
    if settings is not None:
        return settings.LOG_LEVEL.upper()
    return os.getenv("LOG_LEVEL", "INFO").upper()


def get_log_renderer(settings: Optional[Settings] = None):
    """Get log renderer based on environment"""
    env = get_environment(settings)
    # Use JSON format for tests and production
    if env in ["test", "production"]:
        return structlog.processors.JSONRenderer()
    # Pretty printing for local development
    return structlog.dev.ConsoleRenderer(colors=True, sort_keys=False)


def drop_secrets(logger, method_name, event_dict):
    """Strip credentials that may have been bound to a logger by mistake."""
    for key in ("api_key", "authorization", "auth"):
        if key in event_dict:
            event_dict[key] = "***"
    return event_dict


def configure_logging(settings: Optional[Settings] = None, instrument: bool = True):
    """Set up structlog + OTEL context injection.

    Args:
        settings: where LOG_LEVEL and ENVIRONMENT come from; the process
            environment is read when omitted
        instrument: install the OpenTelemetry logging instrumentation
    """
    shared_processors = [
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.format_exc_info,
    ]

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            *shared_processors,
            drop_secrets,
            get_log_renderer(settings),
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    env = get_environment(settings)
    if env == "test":
        # In test mode, write to stdout for easier capture
        handler = logging.StreamHandler(sys.stdout)
    else:
        handler = logging.StreamHandler()

    handler.setFormatter(logging.Formatter("%(message)s"))
    root_logger = logging.getLogger()
    root_logger.handlers = [handler]  # Replace any existing handlers
    root_logger.setLevel(get_log_level(settings))

    # urllib3 logs every connection at DEBUG; keep it out of request logs
    logging.getLogger("urllib3").setLevel(logging.WARNING)

    if instrument:
        # Initialize OpenTelemetry logging instrumentation AFTER configuring logging
        LoggingInstrumentor().instrument(set_logging_format=False)


# Request Event Log Names
class RequestEvents:
    """Standard names for transport event logs"""

    REQUEST = "stripe.request"
    RESPONSE = "stripe.response"
    REQUEST_FAILED = "stripe.request_failed"
    DECODE_FAILED = "stripe.decode_failed"
    INVALID_PARAMS = "stripe.invalid_params"
