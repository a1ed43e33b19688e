"""
Logging setup for the classifier.

structlog events and plain stdlib records both end up on one stderr handler,
rendered for a terminal or as JSON lines for log shipping. stdout is left to
the command-line entry point, which writes one classification result per line.
"""

import logging
import sys

import structlog

from .config import Settings

# Libraries whose INFO chatter would drown out per-document events
QUIET_LOGGERS = {
    "httpx": logging.WARNING,
    "pypdf": logging.ERROR,
}


def configure_logging(settings: Settings):
    """
    Route structlog through the stdlib root logger at ``settings.LOG_LEVEL``.

    ``LOG_FORMAT=json`` renders every record as one JSON object; anything
    else uses structlog's coloured console renderer.
    """
    shared_processors = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        # Hands the event dict to the ProcessorFormatter below; keep it last
        structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
    ]

    structlog.configure(
        processors=shared_processors,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    if settings.LOG_FORMAT == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=True)
    formatter = structlog.stdlib.ProcessorFormatter(processor=renderer)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)
    root_logger = logging.getLogger()
    root_logger.addHandler(handler)
    root_logger.setLevel(settings.LOG_LEVEL)

    for logger_name, level in QUIET_LOGGERS.items():
        logging.getLogger(logger_name).setLevel(level)
    # The SDK may attach its own handler; funnel it through ours instead
    for logger_name in ("openai", "openai._base_client"):
        logger = logging.getLogger(logger_name)
        logger.handlers.clear()
        logger.setLevel(logging.WARNING)
        logger.propagate = True
