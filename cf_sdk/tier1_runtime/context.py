"""
cf_sdk.tier1_runtime.context
─────────────────────────────
Request context — the correlation id sent to the platform as
X-Vcap-Request-Id, plus the targeted organization/space, propagated across
async boundaries into logs.

Uses Python contextvars for async-safe, framework-agnostic storage.
Automatically propagated into logs via structlog contextvars.
"""
from __future__ import annotations

import uuid
from contextvars import ContextVar
from dataclasses import dataclass, field
from typing import Any

import structlog


# ── Domain model ─────────────────────────────────────────────────────────────

@dataclass
class RequestContext:
    """Metadata attached to every call made while this context is active."""
    request_id: str = field(default_factory=lambda: str(uuid.uuid4()))
    organization_id: str | None = None
    space_id: str | None = None
    metadata: dict[str, Any] = field(default_factory=dict)


# ── ContextVar storage ────────────────────────────────────────────────────────

_ctx: ContextVar[RequestContext | None] = ContextVar(
    "cf_request_context",
    default=None,
)


# ── Public API ────────────────────────────────────────────────────────────────

def get_context() -> RequestContext | None:
    """Return the current request context, if one was set."""
    return _ctx.get()


def set_context(ctx: RequestContext) -> None:
    """Set the request context for the current async scope."""
    _ctx.set(ctx)
    # Sync with structlog contextvars so all log calls get these fields
    structlog.contextvars.bind_contextvars(
        request_id=ctx.request_id,
        organization_id=ctx.organization_id,
        space_id=ctx.space_id,
    )


def new_context(
    organization_id: str | None = None,
    space_id: str | None = None,
    **metadata: Any,
) -> RequestContext:
    """Create and activate a new request context. Returns the new context."""
    ctx = RequestContext(
        organization_id=organization_id,
        space_id=space_id,
        metadata=metadata,
    )
    set_context(ctx)
    return ctx


def get_request_id() -> str | None:
    ctx = get_context()
    return ctx.request_id if ctx else None


__all__ = ["RequestContext", "get_context", "set_context", "new_context", "get_request_id"]
