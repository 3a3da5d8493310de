import logging
import os
import sys
from typing import Optional

import structlog
from opentelemetry.instrumentation.logging import LoggingInstrumentor


def get_log_level(level: Optional[str] = None):
    """Get log level from argument, environment or default to INFO"""
    return (level or os.getenv("LOG_LEVEL", "INFO")).upper()


def get_log_renderer(env: Optional[str] = None):
    """Get log renderer based on environment"""
    env = env or os.getenv("ENVIRONMENT", "development")
    # Use JSON format for tests and production
    if env in ["test", "production"]:
        return structlog.processors.JSONRenderer()
    # Pretty printing for local development
    return structlog.dev.ConsoleRenderer(colors=True, sort_keys=False)


def configure_logging(level: Optional[str] = None, env: Optional[str] = None):
    """Set up structlog + OTEL context injection."""
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
            get_log_renderer(env),
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    env = env or os.getenv("ENVIRONMENT", "development")
    if env == "test":
        # In test mode, write to stdout for easier capture
        handler = logging.StreamHandler(sys.stdout)
    else:
        handler = logging.StreamHandler()

    handler.setFormatter(logging.Formatter("%(message)s"))
    root_logger = logging.getLogger()
    root_logger.handlers = [handler]  # Replace any existing handlers
    root_logger.setLevel(get_log_level(level))

    # Our middleware logs every request; uvicorn's access log would duplicate it
    logging.getLogger("uvicorn.access").handlers.clear()
    logging.getLogger("uvicorn.access").propagate = False

    # Initialize OpenTelemetry logging instrumentation AFTER configuring logging
    instrumentor = LoggingInstrumentor()
    if not instrumentor.is_instrumented_by_opentelemetry:
        instrumentor.instrument(set_logging_format=False)


# Business Event Log Names
class BusinessEvents:
    """Standard names for business event logs"""

    API_ENTRY = "api.request"
    API_RESPONSE = "api.response"
    ACCOUNT_CREATED = "account.created"
    ACCOUNT_LINK_CREATED = "account_link.created"
    PAYMENT_INTENT_CREATED = "payment_intent.created"
    TRANSFER_CREATED = "transfer.created"
    PROVIDER_FAILURE = "provider.failure"
    CONFIG_INVALID = "config.invalid"
    SERVER_LISTENING = "server.listening"
