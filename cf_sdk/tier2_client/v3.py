"""
cf_sdk.tier2_client.v3
───────────────────────
Request and response values for the Cloud Controller v3 API: packages,
space isolation segments and tasks.
"""
from __future__ import annotations

from pydantic import Field

from cf_sdk.tier2_client.model import PaginatedV3Response, Request, Response, Value


# ── Relationships ─────────────────────────────────────────────────────────────

class Relationship(Value):
    """Reference to another resource: ``{"guid": "..."}`` on the wire."""
    id: str = Field(alias="guid")

    def to_wire(self) -> dict[str, str]:
        return {"guid": self.id}


class ToOneRelationship(Value):
    data: Relationship | None = None

    def to_wire(self) -> dict[str, dict[str, str] | None]:
        return {"data": self.data.to_wire() if self.data else None}


# ── Packages ──────────────────────────────────────────────────────────────────

class PackageRelationships(Value):
    application: ToOneRelationship = Field(alias="app")

    def to_wire(self) -> dict[str, dict]:
        return {"app": self.application.to_wire()}


class CopyPackageRequest(Request):
    relationships: PackageRelationships
    source_package_id: str


class PackageResource(Response):
    id: str | None = Field(default=None, alias="guid")
    type: str | None = None
    state: str | None = None
    data: dict | None = None
    created_at: str | None = None
    updated_at: str | None = None


class CopyPackageResponse(PackageResource):
    pass


# ── Spaces ────────────────────────────────────────────────────────────────────

class AssignSpaceIsolationSegmentRequest(Request):
    """Assign (``data`` set) or unassign (``data`` None) a space's isolation segment."""
    space_id: str
    data: Relationship | None = None


class AssignSpaceIsolationSegmentResponse(Response):
    data: Relationship | None = None


# ── Tasks ─────────────────────────────────────────────────────────────────────

class TaskState:
    PENDING = "PENDING"
    RUNNING = "RUNNING"
    CANCELING = "CANCELING"
    SUCCEEDED = "SUCCEEDED"
    FAILED = "FAILED"


class TaskResource(Response):
    id: str | None = Field(default=None, alias="guid")
    name: str | None = None
    command: str | None = None
    sequence_id: int | None = None
    state: str | None = None
    memory_in_mb: int | None = None
    disk_in_mb: int | None = None
    created_at: str | None = None
    updated_at: str | None = None


class ListApplicationTasksRequest(Request):
    application_id: str
    sequence_id: int | None = None
    page: int | None = None


class ListApplicationTasksResponse(PaginatedV3Response[TaskResource]):
    pass


class CancelTaskRequest(Request):
    task_id: str


class CancelTaskResponse(TaskResource):
    pass


__all__ = [
    "Relationship",
    "ToOneRelationship",
    "PackageRelationships",
    "CopyPackageRequest",
    "PackageResource",
    "CopyPackageResponse",
    "AssignSpaceIsolationSegmentRequest",
    "AssignSpaceIsolationSegmentResponse",
    "TaskState",
    "TaskResource",
    "ListApplicationTasksRequest",
    "ListApplicationTasksResponse",
    "CancelTaskRequest",
    "CancelTaskResponse",
]
