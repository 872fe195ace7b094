"""
cf_sdk.tier2_client.v2
───────────────────────
Request and response values for the Cloud Controller v2 API: applications,
buildpacks, feature flags, jobs, service bindings, spaces, service
instances, service plans, services, domains and routes.
"""
from __future__ import annotations

import re
from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import Field, field_validator

from cf_sdk.tier1_runtime.validate import malformed
from cf_sdk.tier2_client.model import (
    Metadata,
    PaginatedResponse,
    Request,
    Resource,
    Response,
)


# ── Jobs ──────────────────────────────────────────────────────────────────────

class JobStatus(str, Enum):
    QUEUED = "queued"
    RUNNING = "running"
    FINISHED = "finished"
    FAILED = "failed"


TERMINAL_JOB_STATUSES = frozenset({JobStatus.FINISHED.value, JobStatus.FAILED.value})


class ErrorDetails(Response):
    code: int | None = None
    description: str | None = None
    error_code: str | None = None


class JobEntity(Response):
    id: str | None = Field(default=None, alias="guid")
    status: str | None = None
    error: str | None = None
    error_details: ErrorDetails | None = None

    @property
    def is_terminal(self) -> bool:
        return self.status in TERMINAL_JOB_STATUSES


class JobResource(Resource[JobEntity]):
    pass


class GetJobRequest(Request):
    job_id: str


class GetJobResponse(JobResource):
    pass


# ── Applications ──────────────────────────────────────────────────────────────

class ApplicationEntity(Response):
    name: str | None = None
    space_id: str | None = Field(default=None, alias="space_guid")
    stack_id: str | None = Field(default=None, alias="stack_guid")
    state: str | None = None
    instances: int | None = None
    memory: int | None = None
    disk_quota: int | None = None
    buildpack: str | None = None
    detected_start_command: str | None = None
    diego: bool | None = None
    package_state: str | None = None
    environment_json: dict[str, Any] | None = None


class ApplicationResource(Resource[ApplicationEntity]):
    pass


class GetApplicationRequest(Request):
    application_id: str


class GetApplicationResponse(ApplicationResource):
    pass


class ApplicationBit(Request):
    """A file the platform may already hold, matched by hash."""
    sha1: str
    size: int
    fn: str
    mode: str | None = None


class UploadApplicationRequest(Request):
    application: Path
    application_id: str
    resources: list[ApplicationBit] = Field(default_factory=list)
    async_: bool | None = None


class UploadApplicationResponse(JobResource):
    pass


# ── Service bindings ──────────────────────────────────────────────────────────

class ServiceBindingEntity(Response):
    application_id: str | None = Field(default=None, alias="app_guid")
    service_instance_id: str | None = Field(default=None, alias="service_instance_guid")
    name: str | None = None
    credentials: dict[str, Any] = Field(default_factory=dict)
    binding_options: dict[str, Any] = Field(default_factory=dict)
    syslog_drain_url: str | None = None


class ServiceBindingResource(Resource[ServiceBindingEntity]):
    pass


class ListApplicationServiceBindingsRequest(Request):
    application_id: str
    service_instance_id: str | None = None
    page: int | None = None


class ListApplicationServiceBindingsResponse(PaginatedResponse[ServiceBindingResource]):
    pass


class CreateServiceBindingRequest(Request):
    application_id: str
    service_instance_id: str
    name: str | None = None
    parameters: dict[str, Any] | None = None


class CreateServiceBindingResponse(ServiceBindingResource):
    pass


class DeleteServiceBindingRequest(Request):
    service_binding_id: str
    async_: bool | None = None


class DeleteServiceBindingResponse(JobResource):
    pass


class ListServiceBindingsRequest(Request):
    application_id: str | None = None
    service_instance_id: str | None = None
    page: int | None = None


class ListServiceBindingsResponse(PaginatedResponse[ServiceBindingResource]):
    pass


# ── Buildpacks ────────────────────────────────────────────────────────────────

class BuildpackEntity(Response):
    name: str | None = None
    position: int | None = None
    enabled: bool | None = None
    locked: bool | None = None
    filename: str | None = None
    stack: str | None = None


class UploadBuildpackRequest(Request):
    buildpack: Path
    buildpack_id: str
    filename: str


class UploadBuildpackResponse(Resource[BuildpackEntity]):
    pass


# ── Feature flags ─────────────────────────────────────────────────────────────

# No whitespace, slashes, quotes, parentheses or commas anywhere, and no
# trailing period.
_FLAG_NAME = re.compile(r"[^\s/\"'(),]*[^\s/\"'(),.]")


def _check_flag_name(name: str) -> str:
    if not _FLAG_NAME.fullmatch(name):
        raise malformed(
            "name",
            "name must not contain whitespace, slashes, quotes, parentheses "
            "or commas, and must not end with a period",
        )
    return name


class GetFeatureFlagRequest(Request):
    name: str

    @field_validator("name")
    @classmethod
    def check_name(cls, v: str) -> str:
        return _check_flag_name(v)


class GetFeatureFlagResponse(Response):
    name: str | None = None
    enabled: bool | None = None
    error_message: str | None = None
    url: str | None = None


class SetFeatureFlagRequest(Request):
    name: str
    enabled: bool
    custom_error_message: str | None = None

    @field_validator("name")
    @classmethod
    def check_name(cls, v: str) -> str:
        return _check_flag_name(v)


class SetFeatureFlagResponse(GetFeatureFlagResponse):
    pass


# ── Service instances, plans, services ────────────────────────────────────────

class LastOperation(Response):
    type: str | None = None
    state: str | None = None
    description: str | None = None
    updated_at: str | None = None


class ServiceInstanceEntity(Response):
    name: str | None = None
    type: str | None = None
    service_plan_id: str | None = Field(default=None, alias="service_plan_guid")
    space_id: str | None = Field(default=None, alias="space_guid")
    dashboard_url: str | None = None
    credentials: dict[str, Any] = Field(default_factory=dict)
    last_operation: LastOperation | None = None
    tags: list[str] = Field(default_factory=list)


class ServiceInstanceResource(Resource[ServiceInstanceEntity]):
    pass


class ServicePlanEntity(Response):
    name: str | None = None
    service_id: str | None = Field(default=None, alias="service_guid")
    description: str | None = None
    free: bool | None = None
    public: bool | None = None
    unique_id: str | None = None


class GetServicePlanRequest(Request):
    service_plan_id: str


class GetServicePlanResponse(Resource[ServicePlanEntity]):
    pass


class ServiceEntity(Response):
    label: str | None = None
    description: str | None = None
    active: bool | None = None
    bindable: bool | None = None
    service_broker_id: str | None = Field(default=None, alias="service_broker_guid")


class GetServiceRequest(Request):
    service_id: str


class GetServiceResponse(Resource[ServiceEntity]):
    pass


# ── Spaces ────────────────────────────────────────────────────────────────────

class ListSpaceApplicationsRequest(Request):
    space_id: str
    name: str | None = None
    diego: bool | None = None
    page: int | None = None


class ListSpaceApplicationsResponse(PaginatedResponse[ApplicationResource]):
    pass


class ListSpaceServiceInstancesRequest(Request):
    space_id: str
    name: str | None = None
    return_user_provided_service_instances: bool | None = None
    page: int | None = None


class ListSpaceServiceInstancesResponse(PaginatedResponse[ServiceInstanceResource]):
    pass


# ── Domains and routes ────────────────────────────────────────────────────────

class DomainEntity(Response):
    name: str | None = None
    owning_organization_id: str | None = Field(default=None, alias="owning_organization_guid")
    router_group_id: str | None = Field(default=None, alias="router_group_guid")
    router_group_type: str | None = None


class DomainResource(Resource[DomainEntity]):
    pass


class ListDomainsRequest(Request):
    name: str | None = None
    page: int | None = None


class ListDomainsResponse(PaginatedResponse[DomainResource]):
    pass


class RouteEntity(Response):
    host: str | None = None
    path: str | None = None
    port: int | None = None
    domain_id: str | None = Field(default=None, alias="domain_guid")
    space_id: str | None = Field(default=None, alias="space_guid")


class RouteResource(Resource[RouteEntity]):
    pass


class ListRoutesRequest(Request):
    domain_id: str | None = None
    host: str | None = None
    path: str | None = None
    port: int | None = None
    page: int | None = None


class ListRoutesResponse(PaginatedResponse[RouteResource]):
    pass


class DeleteRouteRequest(Request):
    route_id: str
    async_: bool | None = None
    recursive: bool | None = None


class DeleteRouteResponse(JobResource):
    pass


__all__ = [
    "Metadata",
    "JobStatus",
    "TERMINAL_JOB_STATUSES",
    "ErrorDetails",
    "JobEntity",
    "JobResource",
    "GetJobRequest",
    "GetJobResponse",
    "ApplicationEntity",
    "ApplicationResource",
    "GetApplicationRequest",
    "GetApplicationResponse",
    "ApplicationBit",
    "UploadApplicationRequest",
    "UploadApplicationResponse",
    "ServiceBindingEntity",
    "ServiceBindingResource",
    "ListApplicationServiceBindingsRequest",
    "ListApplicationServiceBindingsResponse",
    "CreateServiceBindingRequest",
    "CreateServiceBindingResponse",
    "DeleteServiceBindingRequest",
    "DeleteServiceBindingResponse",
    "ListServiceBindingsRequest",
    "ListServiceBindingsResponse",
    "BuildpackEntity",
    "UploadBuildpackRequest",
    "UploadBuildpackResponse",
    "GetFeatureFlagRequest",
    "GetFeatureFlagResponse",
    "SetFeatureFlagRequest",
    "SetFeatureFlagResponse",
    "LastOperation",
    "ServiceInstanceEntity",
    "ServiceInstanceResource",
    "ServicePlanEntity",
    "GetServicePlanRequest",
    "GetServicePlanResponse",
    "ServiceEntity",
    "GetServiceRequest",
    "GetServiceResponse",
    "ListSpaceApplicationsRequest",
    "ListSpaceApplicationsResponse",
    "ListSpaceServiceInstancesRequest",
    "ListSpaceServiceInstancesResponse",
    "DomainEntity",
    "DomainResource",
    "ListDomainsRequest",
    "ListDomainsResponse",
    "RouteEntity",
    "RouteResource",
    "ListRoutesRequest",
    "ListRoutesResponse",
    "DeleteRouteRequest",
    "DeleteRouteResponse",
]
