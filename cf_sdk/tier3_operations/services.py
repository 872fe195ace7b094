"""
cf_sdk.tier3_operations.services
─────────────────────────────────
Service instance operations in the targeted space: bind, unbind and list.

Usage::

    services = DefaultServices(client, space_id)
    await services.bind(BindServiceInstanceRequest.build(
        application_name="my-app",
        service_instance_name="my-db",
    ))
    async for instance in services.list_instances():
        print(instance.name, instance.applications)
"""
from __future__ import annotations

from collections.abc import AsyncIterator
from enum import Enum
from typing import Any

from pydantic import Field

from cf_sdk.tier0_core.config import SdkSettings
from cf_sdk.tier0_core.errors import ResolutionError, UpstreamError
from cf_sdk.tier0_core.logging import get_logger
from cf_sdk.tier2_client.model import Request, Value
from cf_sdk.tier2_client.paging import first_resource, request_resources
from cf_sdk.tier2_client.v2 import (
    CreateServiceBindingRequest,
    DeleteServiceBindingRequest,
    GetApplicationRequest,
    GetServicePlanRequest,
    GetServiceRequest,
    ListApplicationServiceBindingsRequest,
    ListServiceBindingsRequest,
    ListSpaceServiceInstancesRequest,
    ServiceInstanceResource,
)
from cf_sdk.tier3_operations.jobs import wait_for_completion
from cf_sdk.tier3_operations.lookups import (
    get_space_application,
    get_space_service_instance,
    require_space_id,
)

log = get_logger(__name__)


# ── Values ────────────────────────────────────────────────────────────────────

class BindServiceInstanceRequest(Request):
    application_name: str
    service_instance_name: str
    parameters: dict[str, Any] | None = None


class UnbindServiceInstanceRequest(Request):
    application_name: str
    service_instance_name: str


class ServiceInstanceType(str, Enum):
    USER_PROVIDED = "user-provided"
    MANAGED = "managed"

    @classmethod
    def from_wire(cls, value: str | None) -> "ServiceInstanceType":
        try:
            return _WIRE_TYPES[value]
        except KeyError:
            raise UpstreamError(
                user_message=f"Unknown service instance type: {value}",
                upstream_service="cloud_controller",
            ) from None


_WIRE_TYPES = {
    "user_provided_service_instance": ServiceInstanceType.USER_PROVIDED,
    "managed_service_instance": ServiceInstanceType.MANAGED,
}


class ServiceInstance(Value):
    """Summary of one service instance, as printed by ``cf services``."""
    id: str
    name: str
    type: ServiceInstanceType
    applications: list[str] = Field(default_factory=list)
    last_operation: str | None = None
    plan: str | None = None
    service: str | None = None


# ── Operations ────────────────────────────────────────────────────────────────

class DefaultServices:
    """Service instance operations scoped to one space."""

    def __init__(
        self,
        client: Any,
        space_id: str | None,
        settings: SdkSettings | None = None,
    ) -> None:
        self._client = client
        self._space_id = space_id
        self._settings = settings

    async def bind(self, request: BindServiceInstanceRequest) -> None:
        space_id = require_space_id(self._space_id)
        application = await get_space_application(self._client, space_id, request.application_name)
        instance = await get_space_service_instance(
            self._client, space_id, request.service_instance_name
        )
        await self._client.service_bindings.create(
            CreateServiceBindingRequest(
                application_id=application.id,
                service_instance_id=instance.id,
                parameters=request.parameters,
            )
        )
        log.info(
            "services.bind",
            application=request.application_name,
            service_instance=request.service_instance_name,
        )

    async def unbind(self, request: UnbindServiceInstanceRequest) -> None:
        space_id = require_space_id(self._space_id)
        application = await get_space_application(self._client, space_id, request.application_name)
        instance = await get_space_service_instance(
            self._client, space_id, request.service_instance_name
        )
        binding = await first_resource(
            lambda page: self._client.applications_v2.list_service_bindings(
                ListApplicationServiceBindingsRequest(
                    application_id=application.id,
                    service_instance_id=instance.id,
                    page=page,
                )
            )
        )
        if binding is None:
            raise ResolutionError(
                f"Service instance {request.service_instance_name} is not bound "
                f"to application {request.application_name}"
            )

        job = await self._client.service_bindings.delete(
            DeleteServiceBindingRequest(service_binding_id=binding.id, async_=True)
        )
        await wait_for_completion(self._client, job, self._settings)
        log.info(
            "services.unbind",
            application=request.application_name,
            service_instance=request.service_instance_name,
        )

    async def list_instances(self) -> AsyncIterator[ServiceInstance]:
        """Yield a summary of every service instance in the space, user-provided included."""
        space_id = require_space_id(self._space_id)
        instances = request_resources(
            lambda page: self._client.spaces.list_service_instances(
                ListSpaceServiceInstancesRequest(
                    space_id=space_id,
                    return_user_provided_service_instances=True,
                    page=page,
                )
            )
        )
        async for resource in instances:
            yield await self._summarise(resource)

    async def _summarise(self, resource: ServiceInstanceResource) -> ServiceInstance:
        entity = resource.entity
        plan = service = None
        if entity.service_plan_id:
            plan_response = await self._client.service_plans.get(
                GetServicePlanRequest(service_plan_id=entity.service_plan_id)
            )
            plan = plan_response.entity.name
            service_response = await self._client.services.get(
                GetServiceRequest(service_id=plan_response.entity.service_id)
            )
            service = service_response.entity.label

        last_operation = None
        if entity.last_operation is not None:
            last_operation = f"{entity.last_operation.type} {entity.last_operation.state}"

        return ServiceInstance(
            id=resource.id,
            name=entity.name,
            type=ServiceInstanceType.from_wire(entity.type),
            applications=await self._bound_application_names(resource.id),
            last_operation=last_operation,
            plan=plan,
            service=service,
        )

    async def _bound_application_names(self, service_instance_id: str) -> list[str]:
        names = []
        bindings = request_resources(
            lambda page: self._client.service_bindings.list(
                ListServiceBindingsRequest(service_instance_id=service_instance_id, page=page)
            )
        )
        async for binding in bindings:
            application = await self._client.applications_v2.get(
                GetApplicationRequest(application_id=binding.entity.application_id)
            )
            names.append(application.entity.name)
        return names


__all__ = [
    "BindServiceInstanceRequest",
    "UnbindServiceInstanceRequest",
    "ServiceInstanceType",
    "ServiceInstance",
    "DefaultServices",
]
