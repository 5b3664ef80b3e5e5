"""
Bridge logging - structured, invocation-aware logging.

This module provides:
- Structured logging with structlog, rendered to stderr
- Invocation context propagation via contextvars
- Timing utilities for store reads

Usage:
    from blogmcp.framework.logging import get_logger, configure_logging, log_step, push_context

    configure_logging()
    log = get_logger(__name__)

    token = push_context(tool="list-blog", request_id=new_request_id())
    try:
        with log_step("store.find", limit=20):
            ...
    finally:
        token.restore()
"""

from blogmcp.framework.logging.config import configure_logging
from blogmcp.framework.logging.context import (
    LogContext,
    bind_context,
    clear_context,
    get_context,
    get_logger,
    new_request_id,
    push_context,
    set_context,
)
from blogmcp.framework.logging.timing import TimingResult, log_step, timed_block

__all__ = [
    # Configuration
    "configure_logging",
    # Context
    "LogContext",
    "bind_context",
    "clear_context",
    "get_context",
    "get_logger",
    "new_request_id",
    "push_context",
    "set_context",
    # Timing
    "TimingResult",
    "log_step",
    "timed_block",
]
