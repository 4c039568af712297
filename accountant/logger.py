"""
Structured Logging

DESIGN DECISION: Every mutation of the transaction store and every
storage failure is logged as a structured event. This gives:
1. Traceability when a save fails or persisted data turns out corrupt
2. Debugging capability without printing user data

Only identifiers and counts are logged. Descriptions and amounts
stay out of the log.
"""

import logging
from typing import Optional

import structlog

from accountant.config import get_settings


_configured = False


def configure_logging(level: Optional[str] = None) -> None:
    """
    Configure structlog on top of the stdlib logging module.

    Safe to call more than once; only the first call configures
    structlog, later calls just adjust the root level.
    """
    global _configured

    if level is None:
        level = get_settings().app.log_level

    logging.basicConfig(format="%(message)s")
    logging.getLogger().setLevel(level)

    if _configured:
        return

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer()
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
    _configured = True


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a named structured logger, configuring logging on first use."""
    if not _configured:
        configure_logging()
    return structlog.get_logger(name)
