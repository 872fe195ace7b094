"""
cf_sdk.tier2_client.model
──────────────────────────
Base classes for every request and response value in the SDK.

All values are immutable pydantic models. Requests forbid unknown fields
and are constructed with ``Request.build(...)``, which raises
RequestValidationError; responses ignore unknown server fields and accept
both wire names (aliases) and Python field names.
"""
from __future__ import annotations

from typing import Any, Generic, Type, TypeVar

from pydantic import BaseModel, ConfigDict, Field

from cf_sdk.tier1_runtime.validate import validate_request

V = TypeVar("V", bound="Value")
E = TypeVar("E", bound=BaseModel)
R = TypeVar("R", bound=BaseModel)


class Value(BaseModel):
    """Immutable value with a validating factory."""

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        arbitrary_types_allowed=True,
    )

    @classmethod
    def build(cls: Type[V], **fields: Any) -> V:
        """Validate *fields* and return the value, or raise RequestValidationError."""
        return validate_request(cls, fields)


class Request(Value):
    """A value sent to the platform."""
    model_config = ConfigDict(extra="forbid")


class Response(Value):
    """A value received from the platform."""
    model_config = ConfigDict(extra="ignore")


# ── v2 envelope ──────────────────────────────────────────────────────────────

class Metadata(Response):
    id: str | None = Field(default=None, alias="guid")
    url: str | None = None
    created_at: str | None = None
    updated_at: str | None = None


class Resource(Response, Generic[E]):
    """A v2 resource: ``{"metadata": {...}, "entity": {...}}``."""
    metadata: Metadata | None = None
    entity: E | None = None

    @property
    def id(self) -> str | None:
        return self.metadata.id if self.metadata else None


class PaginatedResponse(Response, Generic[R]):
    """One page of a v2 list endpoint."""
    total_results: int = 0
    total_pages: int = 0
    prev_url: str | None = None
    next_url: str | None = None
    resources: list[R] = Field(default_factory=list)


# ── v3 envelope ──────────────────────────────────────────────────────────────

class Pagination(Response):
    total_results: int = 0
    total_pages: int = 0


class PaginatedV3Response(Response, Generic[R]):
    """One page of a v3 list endpoint."""
    pagination: Pagination = Field(default_factory=Pagination)
    resources: list[R] = Field(default_factory=list)

    @property
    def total_pages(self) -> int:
        return self.pagination.total_pages


__all__ = [
    "Value",
    "Request",
    "Response",
    "Metadata",
    "Resource",
    "PaginatedResponse",
    "Pagination",
    "PaginatedV3Response",
]
