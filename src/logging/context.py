# src/logging/context.py — v1
"""Contextual logging support — attach request_id and analysis kind to log records."""

from __future__ import annotations

import contextvars
from dataclasses import dataclass
from typing import Any

# Context variables for structured logging, set per inbound request.
_request_id: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "request_id", default=None
)
_analysis_kind: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "analysis_kind", default=None
)


@dataclass
class LogContext:
    """Immutable snapshot of current logging context."""

    request_id: str | None = None
    analysis_kind: str | None = None

    def as_dict(self) -> dict[str, Any]:
        """Return non-None fields as dict for JSON log injection."""
        return {k: v for k, v in self.__dict__.items() if v is not None}


def get_context() -> LogContext:
    """Snapshot current context variables."""
    return LogContext(
        request_id=_request_id.get(),
        analysis_kind=_analysis_kind.get(),
    )


def set_request_context(request_id: str) -> None:
    """Set request-level context (called once per inbound request)."""
    _request_id.set(request_id)


def set_analysis_context(analysis_kind: str | None) -> None:
    """Set the analysis kind of the chat request being handled."""
    _analysis_kind.set(analysis_kind)


def clear_context() -> None:
    """Reset all context variables."""
    _request_id.set(None)
    _analysis_kind.set(None)
