"""
Logging configuration.

Provides a single entry point for configuring structured logging.
All output goes to stderr: with the stdio transport, stdout carries MCP
messages and must never see a log line.

Configuration is read from arguments, falling back to environment variables:
- BLOG_MCP_LOG_LEVEL: DEBUG | INFO | WARNING | ERROR (default: INFO)
- BLOG_MCP_LOG_FORMAT: json | console (default: console)

Usage:
    from blogmcp.framework.logging import configure_logging
    configure_logging()

    # Or with explicit settings
    configure_logging(level="DEBUG", format="json")
"""

import logging
import os
import sys
from typing import Literal

import structlog
from structlog.types import Processor

from blogmcp.framework.logging.context import add_context_processor

# Track if logging has been configured
_configured = False


def configure_logging(
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] | None = None,
    format: Literal["json", "console"] | None = None,
    force: bool = False,
) -> None:
    """
    Configure structured logging for the bridge process.

    Should be called once at startup. Subsequent calls are no-ops unless
    force=True.

    Args:
        level: Log level (overrides BLOG_MCP_LOG_LEVEL env var)
        format: Output format (overrides BLOG_MCP_LOG_FORMAT env var)
        force: Reconfigure even if already configured
    """
    global _configured

    if _configured and not force:
        return

    log_level = (level or os.environ.get("BLOG_MCP_LOG_LEVEL", "INFO")).upper()
    log_format = (format or os.environ.get("BLOG_MCP_LOG_FORMAT", "console")).lower()

    processors: list[Processor] = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        # Invocation context from contextvars
        add_context_processor,
        structlog.processors.format_exc_info,
        structlog.processors.StackInfoRenderer(),
    ]

    if log_format == "json":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(
            structlog.dev.ConsoleRenderer(
                colors=False,
                exception_formatter=structlog.dev.plain_traceback,
            )
        )

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=getattr(logging, log_level),
        force=True,
    )

    # pymongo is chatty at DEBUG
    for logger_name in ["blogmcp", "mcp"]:
        logging.getLogger(logger_name).setLevel(getattr(logging, log_level))
    logging.getLogger("pymongo").setLevel(max(logging.INFO, getattr(logging, log_level)))

    _configured = True
