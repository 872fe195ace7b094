"""
cf_sdk.tier3_operations.routes
───────────────────────────────
Route operations. A route is named by its domain plus either a host and
optional path (HTTP routes) or a port (TCP routes), never both.
"""
from __future__ import annotations

from typing import Any

from pydantic import model_validator

from cf_sdk.tier0_core.config import SdkSettings
from cf_sdk.tier0_core.logging import get_logger
from cf_sdk.tier1_runtime.validate import conflict
from cf_sdk.tier2_client.model import Request
from cf_sdk.tier2_client.v2 import DeleteRouteRequest as DeleteRouteByIdRequest
from cf_sdk.tier3_operations.jobs import wait_for_completion
from cf_sdk.tier3_operations.lookups import describe_route, get_domain, get_route

log = get_logger(__name__)


class DeleteRouteRequest(Request):
    domain: str
    host: str | None = None
    path: str | None = None
    port: int | None = None

    @model_validator(mode="after")
    def check_port_exclusive(self) -> "DeleteRouteRequest":
        if self.port is not None and (self.host is not None or self.path is not None):
            raise conflict("port", "cannot specify port together with host and/or path")
        return self


class DefaultRoutes:
    def __init__(
        self,
        client: Any,
        space_id: str | None,
        settings: SdkSettings | None = None,
    ) -> None:
        self._client = client
        self._space_id = space_id
        self._settings = settings

    async def delete(self, request: DeleteRouteRequest) -> None:
        """Delete the route and wait for the platform to finish removing it."""
        domain = await get_domain(self._client, request.domain)
        route = await get_route(
            self._client,
            request.domain,
            domain.id,
            request.host,
            request.path,
            request.port,
        )
        job = await self._client.routes.delete(
            DeleteRouteByIdRequest(route_id=route.id, async_=True)
        )
        await wait_for_completion(self._client, job, self._settings)
        log.info(
            "routes.delete",
            route=describe_route(request.domain, request.host, request.path, request.port),
        )


__all__ = ["DeleteRouteRequest", "DefaultRoutes"]
