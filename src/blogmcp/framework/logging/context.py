"""
Logging context management using contextvars.

Each tool invocation or resource read pushes its own context (request id,
tool or resource name) so every log line emitted while servicing it carries
those fields, including lines from the store connector.  contextvars are
per-task under asyncio, so interleaved invocations never see each other's
context.
"""

import uuid
from contextvars import ContextVar
from dataclasses import asdict, dataclass
from typing import Any

import structlog


def _generate_request_id() -> str:
    """Generate a short request ID (12 hex chars)."""
    return uuid.uuid4().hex[:12]


@dataclass
class LogContext:
    """
    Invocation context attached to all log entries.

    Request identity:
        request_id: Per-invocation identifier
        tool: Tool name being invoked
        resource: Resource URI being read

    Tracing (for nested timing blocks):
        span_id: Current span identifier
        parent_span_id: Parent span for nested operations
        step: Current step name
    """

    request_id: str | None = None
    tool: str | None = None
    resource: str | None = None

    span_id: str | None = None
    parent_span_id: str | None = None
    step: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Return non-None fields as dict."""
        return {k: v for k, v in asdict(self).items() if v is not None}

    def merge(self, **kwargs) -> "LogContext":
        """Create new context with merged values."""
        current = asdict(self)
        current.update({k: v for k, v in kwargs.items() if v is not None})
        return LogContext(**current)


_log_context: ContextVar[LogContext] = ContextVar("log_context")  # noqa: B039


def get_context() -> LogContext:
    """Get the current log context."""
    return _log_context.get(LogContext())


def set_context(
    request_id: str | None = None,
    tool: str | None = None,
    resource: str | None = None,
    step: str | None = None,
) -> LogContext:
    """
    Set the current log context.

    This replaces the current context. Use bind_context() to add to existing.
    A request_id is generated when none is given.
    """
    ctx = LogContext(
        request_id=request_id or _generate_request_id(),
        tool=tool,
        resource=resource,
        step=step,
    )
    _log_context.set(ctx)
    return ctx


def bind_context(**kwargs) -> LogContext:
    """Merge values into the current context."""
    updated = get_context().merge(**kwargs)
    _log_context.set(updated)
    return updated


def clear_context() -> None:
    """Clear the current context (reset to empty)."""
    _log_context.set(LogContext())


class _ContextToken:
    """Token for restoring context after a scoped operation."""

    def __init__(self, token):
        self._token = token

    def restore(self):
        """Restore the previous context."""
        _log_context.reset(self._token)


def push_context(**kwargs) -> _ContextToken:
    """
    Push new context values, returning a token to restore later.

    Usage:
        token = push_context(tool="list-blog", request_id=new_request_id())
        try:
            await handle()
        finally:
            token.restore()
    """
    updated = get_context().merge(**kwargs)
    token = _log_context.set(updated)
    return _ContextToken(token)


def new_request_id() -> str:
    """Public alias used by the registries when opening an invocation context."""
    return _generate_request_id()


def add_context_processor(
    logger: Any,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """Structlog processor that adds invocation context to every log entry."""
    for key, value in get_context().to_dict().items():
        if key not in event_dict:
            event_dict[key] = value
    return event_dict


def get_logger(name: str | None = None) -> Any:
    """Get a structured logger that includes invocation context."""
    return structlog.get_logger(name)
