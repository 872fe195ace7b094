"""
cf_sdk.tier2_client.client
───────────────────────────
Cloud Controller client. One resource group per REST resource; every
method takes one request value and returns one response value.

Usage::

    async with CloudFoundryClient() as client:
        job = await client.jobs.get(GetJobRequest.build(job_id="abc"))
"""
from __future__ import annotations

import asyncio
import io
import json
import zipfile
from pathlib import Path
from typing import Any

import httpx

from cf_sdk.tier0_core.config import SdkSettings, get_settings
from cf_sdk.tier2_client.auth import ClientCredentialsTokenProvider, StaticTokenProvider
from cf_sdk.tier2_client.transport import RestTransport, TokenProvider, build_http_client
from cf_sdk.tier2_client.uaa import UaaClient
from cf_sdk.tier2_client.v2 import (
    CreateServiceBindingRequest,
    CreateServiceBindingResponse,
    DeleteRouteRequest,
    DeleteRouteResponse,
    DeleteServiceBindingRequest,
    DeleteServiceBindingResponse,
    GetApplicationRequest,
    GetApplicationResponse,
    GetFeatureFlagRequest,
    GetFeatureFlagResponse,
    GetJobRequest,
    GetJobResponse,
    GetServicePlanRequest,
    GetServicePlanResponse,
    GetServiceRequest,
    GetServiceResponse,
    ListApplicationServiceBindingsRequest,
    ListApplicationServiceBindingsResponse,
    ListDomainsRequest,
    ListDomainsResponse,
    ListRoutesRequest,
    ListRoutesResponse,
    ListServiceBindingsRequest,
    ListServiceBindingsResponse,
    ListSpaceApplicationsRequest,
    ListSpaceApplicationsResponse,
    ListSpaceServiceInstancesRequest,
    ListSpaceServiceInstancesResponse,
    SetFeatureFlagRequest,
    SetFeatureFlagResponse,
    UploadApplicationRequest,
    UploadApplicationResponse,
    UploadBuildpackRequest,
    UploadBuildpackResponse,
)
from cf_sdk.tier2_client.v3 import (
    AssignSpaceIsolationSegmentRequest,
    AssignSpaceIsolationSegmentResponse,
    CancelTaskRequest,
    CancelTaskResponse,
    CopyPackageRequest,
    CopyPackageResponse,
    ListApplicationTasksRequest,
    ListApplicationTasksResponse,
)


# ── Query helpers ─────────────────────────────────────────────────────────────

def _flag(value: bool) -> str:
    return "true" if value else "false"


def v2_query(page: int | None = None, **filters: Any) -> list[tuple[str, str]]:
    """
    Build v2 list parameters: one ``q=field:value`` per non-None filter,
    plus ``page``.
    """
    params = [("q", f"{name}:{value}") for name, value in filters.items() if value is not None]
    if page is not None:
        params.append(("page", str(page)))
    return params


def _zip_path(path: Path) -> bytes:
    """Return *path* as zip bytes: a directory is zipped, a file is sent as-is."""
    if path.is_file():
        return path.read_bytes()
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w", zipfile.ZIP_DEFLATED) as archive:
        for file in sorted(path.rglob("*")):
            if file.is_file():
                archive.write(file, file.relative_to(path).as_posix())
    return buffer.getvalue()


class _Group:
    def __init__(self, transport: RestTransport) -> None:
        self._transport = transport


# ── v2 groups ─────────────────────────────────────────────────────────────────

class ApplicationsV2(_Group):
    """``/v2/apps``"""

    async def get(self, request: GetApplicationRequest) -> GetApplicationResponse:
        body = await self._transport.get(f"/v2/apps/{request.application_id}")
        return GetApplicationResponse.model_validate(body)

    async def list_service_bindings(
        self, request: ListApplicationServiceBindingsRequest
    ) -> ListApplicationServiceBindingsResponse:
        body = await self._transport.get(
            f"/v2/apps/{request.application_id}/service_bindings",
            params=v2_query(request.page, service_instance_guid=request.service_instance_id),
        )
        return ListApplicationServiceBindingsResponse.model_validate(body)

    async def upload(self, request: UploadApplicationRequest) -> UploadApplicationResponse:
        bits = await asyncio.to_thread(_zip_path, request.application)
        resources = [r.model_dump(exclude_none=True) for r in request.resources]
        params = {"async": _flag(request.async_)} if request.async_ is not None else None
        body = await self._transport.put(
            f"/v2/apps/{request.application_id}/bits",
            params=params,
            data={"resources": json.dumps(resources)},
            files={"application": ("application.zip", bits, "application/zip")},
        )
        return UploadApplicationResponse.model_validate(body or {})


class Buildpacks(_Group):
    """``/v2/buildpacks``"""

    async def upload(self, request: UploadBuildpackRequest) -> UploadBuildpackResponse:
        bits = await asyncio.to_thread(_zip_path, request.buildpack)
        body = await self._transport.put(
            f"/v2/buildpacks/{request.buildpack_id}/bits",
            files={"buildpack": (request.filename, bits, "application/zip")},
        )
        return UploadBuildpackResponse.model_validate(body)


class FeatureFlags(_Group):
    """``/v2/config/feature_flags``"""

    async def get(self, request: GetFeatureFlagRequest) -> GetFeatureFlagResponse:
        body = await self._transport.get(f"/v2/config/feature_flags/{request.name}")
        return GetFeatureFlagResponse.model_validate(body)

    async def set(self, request: SetFeatureFlagRequest) -> SetFeatureFlagResponse:
        payload: dict[str, Any] = {"enabled": request.enabled}
        if request.custom_error_message is not None:
            payload["error_message"] = request.custom_error_message
        body = await self._transport.put(f"/v2/config/feature_flags/{request.name}", json=payload)
        return SetFeatureFlagResponse.model_validate(body)


class Jobs(_Group):
    """``/v2/jobs``"""

    async def get(self, request: GetJobRequest) -> GetJobResponse:
        body = await self._transport.get(f"/v2/jobs/{request.job_id}")
        return GetJobResponse.model_validate(body)


class ServiceBindingsV2(_Group):
    """``/v2/service_bindings``"""

    async def create(self, request: CreateServiceBindingRequest) -> CreateServiceBindingResponse:
        payload: dict[str, Any] = {
            "app_guid": request.application_id,
            "service_instance_guid": request.service_instance_id,
        }
        if request.name is not None:
            payload["name"] = request.name
        if request.parameters is not None:
            payload["parameters"] = request.parameters
        body = await self._transport.post("/v2/service_bindings", json=payload)
        return CreateServiceBindingResponse.model_validate(body)

    async def delete(self, request: DeleteServiceBindingRequest) -> DeleteServiceBindingResponse:
        params = {"async": _flag(request.async_)} if request.async_ is not None else None
        body = await self._transport.delete(
            f"/v2/service_bindings/{request.service_binding_id}",
            params=params,
        )
        return DeleteServiceBindingResponse.model_validate(body or {})

    async def list(self, request: ListServiceBindingsRequest) -> ListServiceBindingsResponse:
        body = await self._transport.get(
            "/v2/service_bindings",
            params=v2_query(
                request.page,
                app_guid=request.application_id,
                service_instance_guid=request.service_instance_id,
            ),
        )
        return ListServiceBindingsResponse.model_validate(body)


class Spaces(_Group):
    """``/v2/spaces``"""

    async def list_applications(
        self, request: ListSpaceApplicationsRequest
    ) -> ListSpaceApplicationsResponse:
        params = v2_query(request.page, name=request.name)
        if request.diego is not None:
            params.append(("diego", _flag(request.diego)))
        body = await self._transport.get(f"/v2/spaces/{request.space_id}/apps", params=params)
        return ListSpaceApplicationsResponse.model_validate(body)

    async def list_service_instances(
        self, request: ListSpaceServiceInstancesRequest
    ) -> ListSpaceServiceInstancesResponse:
        params = v2_query(request.page, name=request.name)
        if request.return_user_provided_service_instances is not None:
            params.append((
                "return_user_provided_service_instances",
                _flag(request.return_user_provided_service_instances),
            ))
        body = await self._transport.get(
            f"/v2/spaces/{request.space_id}/service_instances",
            params=params,
        )
        return ListSpaceServiceInstancesResponse.model_validate(body)


class ServicePlans(_Group):
    """``/v2/service_plans``"""

    async def get(self, request: GetServicePlanRequest) -> GetServicePlanResponse:
        body = await self._transport.get(f"/v2/service_plans/{request.service_plan_id}")
        return GetServicePlanResponse.model_validate(body)


class Services(_Group):
    """``/v2/services``"""

    async def get(self, request: GetServiceRequest) -> GetServiceResponse:
        body = await self._transport.get(f"/v2/services/{request.service_id}")
        return GetServiceResponse.model_validate(body)


class Domains(_Group):
    """``/v2/domains``"""

    async def list(self, request: ListDomainsRequest) -> ListDomainsResponse:
        body = await self._transport.get("/v2/domains", params=v2_query(request.page, name=request.name))
        return ListDomainsResponse.model_validate(body)


class Routes(_Group):
    """``/v2/routes``"""

    async def list(self, request: ListRoutesRequest) -> ListRoutesResponse:
        body = await self._transport.get(
            "/v2/routes",
            params=v2_query(
                request.page,
                domain_guid=request.domain_id,
                host=request.host,
                path=request.path,
                port=request.port,
            ),
        )
        return ListRoutesResponse.model_validate(body)

    async def delete(self, request: DeleteRouteRequest) -> DeleteRouteResponse:
        params: dict[str, str] = {}
        if request.async_ is not None:
            params["async"] = _flag(request.async_)
        if request.recursive is not None:
            params["recursive"] = _flag(request.recursive)
        body = await self._transport.delete(f"/v2/routes/{request.route_id}", params=params or None)
        return DeleteRouteResponse.model_validate(body or {})


# ── v3 groups ─────────────────────────────────────────────────────────────────

class PackagesV3(_Group):
    """``/v3/packages``"""

    async def copy(self, request: CopyPackageRequest) -> CopyPackageResponse:
        body = await self._transport.post(
            "/v3/packages",
            params={"source_guid": request.source_package_id},
            json={"relationships": request.relationships.to_wire()},
        )
        return CopyPackageResponse.model_validate(body)


class SpacesV3(_Group):
    """``/v3/spaces``"""

    async def assign_isolation_segment(
        self, request: AssignSpaceIsolationSegmentRequest
    ) -> AssignSpaceIsolationSegmentResponse:
        body = await self._transport.patch(
            f"/v3/spaces/{request.space_id}/relationships/isolation_segment",
            json={"data": request.data.to_wire() if request.data else None},
        )
        return AssignSpaceIsolationSegmentResponse.model_validate(body or {})


class TasksV3(_Group):
    """``/v3/tasks``"""

    async def list_for_application(
        self, request: ListApplicationTasksRequest
    ) -> ListApplicationTasksResponse:
        params: dict[str, str] = {}
        if request.sequence_id is not None:
            params["sequence_ids"] = str(request.sequence_id)
        if request.page is not None:
            params["page"] = str(request.page)
        body = await self._transport.get(f"/v3/apps/{request.application_id}/tasks", params=params)
        return ListApplicationTasksResponse.model_validate(body)

    async def cancel(self, request: CancelTaskRequest) -> CancelTaskResponse:
        body = await self._transport.post(f"/v3/tasks/{request.task_id}/actions/cancel")
        return CancelTaskResponse.model_validate(body)


# ── Client ────────────────────────────────────────────────────────────────────

class CloudFoundryClient:
    """
    Entry point to the Cloud Controller.

    Without an explicit token provider, CF_TOKEN is used when set;
    otherwise a client-credentials token is fetched from the UAA.
    """

    def __init__(
        self,
        settings: SdkSettings | None = None,
        *,
        http: httpx.AsyncClient | None = None,
        token_provider: TokenProvider | None = None,
    ) -> None:
        self._settings = settings or get_settings()
        self._owns_http = http is None
        self._http = http or build_http_client(self._settings)
        self.token_provider = token_provider or self._default_token_provider()

        transport = RestTransport(
            self._settings.api_url,
            http=self._http,
            settings=self._settings,
            token_provider=self.token_provider,
        )
        self.applications_v2 = ApplicationsV2(transport)
        self.buildpacks = Buildpacks(transport)
        self.domains = Domains(transport)
        self.feature_flags = FeatureFlags(transport)
        self.jobs = Jobs(transport)
        self.routes = Routes(transport)
        self.service_bindings = ServiceBindingsV2(transport)
        self.service_plans = ServicePlans(transport)
        self.services = Services(transport)
        self.spaces = Spaces(transport)
        self.packages = PackagesV3(transport)
        self.spaces_v3 = SpacesV3(transport)
        self.tasks = TasksV3(transport)

    def _default_token_provider(self) -> TokenProvider:
        if self._settings.token is not None:
            return StaticTokenProvider(self._settings.token.get_secret_value())
        uaa = UaaClient(self._settings, http=self._http)
        return ClientCredentialsTokenProvider(
            uaa.tokens,
            self._settings.client_id,
            self._settings.client_secret,
        )

    async def close(self) -> None:
        if self._owns_http:
            await self._http.aclose()

    async def __aenter__(self) -> "CloudFoundryClient":
        return self

    async def __aexit__(self, *exc: object) -> None:
        await self.close()


__all__ = [
    "CloudFoundryClient",
    "ApplicationsV2",
    "Buildpacks",
    "Domains",
    "FeatureFlags",
    "Jobs",
    "Routes",
    "ServiceBindingsV2",
    "ServicePlans",
    "Services",
    "Spaces",
    "PackagesV3",
    "SpacesV3",
    "TasksV3",
    "v2_query",
]
