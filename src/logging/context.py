# src/logging/context.py - v2
"""Contextual logging support: attach request_id, method and path to log records."""

from __future__ import annotations

import contextvars
from dataclasses import dataclass
from typing import Any

# Context variables for structured logging, set once per HTTP request.
_request_id: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "request_id", default=None
)
_method: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "method", default=None
)
_path: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "path", default=None
)


@dataclass
class LogContext:
    """Immutable snapshot of current logging context."""

    request_id: str | None = None
    method: str | None = None
    path: str | None = None

    def as_dict(self) -> dict[str, Any]:
        """Return non-None fields as dict for JSON log injection."""
        return {k: v for k, v in self.__dict__.items() if v is not None}


def get_context() -> LogContext:
    """Snapshot current context variables."""
    return LogContext(
        request_id=_request_id.get(),
        method=_method.get(),
        path=_path.get(),
    )


def set_request_context(request_id: str, method: str, path: str) -> None:
    """Set request-level context (called once per request by the middleware)."""
    _request_id.set(request_id)
    _method.set(method)
    _path.set(path)


def clear_context() -> None:
    """Reset all context variables."""
    _request_id.set(None)
    _method.set(None)
    _path.set(None)
