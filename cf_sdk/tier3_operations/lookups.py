"""
cf_sdk.tier3_operations.lookups
────────────────────────────────
Name → id resolution shared by the operations façades. Each lookup issues
one filtered list call and takes the first match; no match raises
ResolutionError naming what was looked for.
"""
from __future__ import annotations

from typing import Any

from cf_sdk.tier0_core.errors import ConfigurationError, ResolutionError
from cf_sdk.tier2_client.paging import first_resource
from cf_sdk.tier2_client.v2 import (
    ApplicationResource,
    DomainResource,
    ListDomainsRequest,
    ListRoutesRequest,
    ListSpaceApplicationsRequest,
    ListSpaceServiceInstancesRequest,
    RouteResource,
    ServiceInstanceResource,
)
from cf_sdk.tier2_client.v3 import ListApplicationTasksRequest, TaskResource


def require_space_id(space_id: str | None) -> str:
    if not space_id:
        raise ConfigurationError("missing_space_id", "No space targeted (MISSING_SPACE_ID)")
    return space_id


async def get_space_application(client: Any, space_id: str, name: str) -> ApplicationResource:
    resource = await first_resource(
        lambda page: client.spaces.list_applications(
            ListSpaceApplicationsRequest(space_id=space_id, name=name, page=page)
        )
    )
    if resource is None:
        raise ResolutionError(f"Application {name} does not exist", space_id=space_id)
    return resource


async def get_space_service_instance(
    client: Any, space_id: str, name: str
) -> ServiceInstanceResource:
    resource = await first_resource(
        lambda page: client.spaces.list_service_instances(
            ListSpaceServiceInstancesRequest(
                space_id=space_id,
                name=name,
                return_user_provided_service_instances=True,
                page=page,
            )
        )
    )
    if resource is None:
        raise ResolutionError(f"Service instance {name} does not exist", space_id=space_id)
    return resource


async def get_domain(client: Any, name: str) -> DomainResource:
    resource = await first_resource(
        lambda page: client.domains.list(ListDomainsRequest(name=name, page=page))
    )
    if resource is None:
        raise ResolutionError(f"Domain {name} does not exist")
    return resource


def describe_route(domain: str, host: str | None, path: str | None, port: int | None) -> str:
    """Render a route the way ``cf routes`` prints it, e.g. ``host.example.com/path``."""
    if port is not None:
        return f"{domain}:{port}"
    name = f"{host}.{domain}" if host else domain
    return f"{name}{path or ''}"


async def get_route(
    client: Any,
    domain: str,
    domain_id: str,
    host: str | None,
    path: str | None,
    port: int | None,
) -> RouteResource:
    resource = await first_resource(
        lambda page: client.routes.list(
            ListRoutesRequest(domain_id=domain_id, host=host, path=path, port=port, page=page)
        )
    )
    if resource is None:
        raise ResolutionError(f"Route for {describe_route(domain, host, path, port)} does not exist")
    return resource


async def get_application_task(client: Any, application_id: str, sequence_id: int) -> TaskResource:
    resource = await first_resource(
        lambda page: client.tasks.list_for_application(
            ListApplicationTasksRequest(
                application_id=application_id,
                sequence_id=sequence_id,
                page=page,
            )
        )
    )
    if resource is None:
        raise ResolutionError(f"Task with sequence id {sequence_id} does not exist")
    return resource


__all__ = [
    "require_space_id",
    "get_space_application",
    "get_space_service_instance",
    "get_domain",
    "get_route",
    "get_application_task",
    "describe_route",
]
