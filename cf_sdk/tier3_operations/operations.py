"""
cf_sdk.tier3_operations.operations
───────────────────────────────────
High-level, ``cf`` CLI-style operations over a CloudFoundryClient.

Usage::

    async with CloudFoundryClient() as client:
        cf = CloudFoundryOperations(client, space_id="...")
        await cf.services.bind(BindServiceInstanceRequest.build(...))
"""
from __future__ import annotations

from typing import Any

from cf_sdk.tier0_core.config import SdkSettings
from cf_sdk.tier3_operations.applications import DefaultApplications
from cf_sdk.tier3_operations.routes import DefaultRoutes
from cf_sdk.tier3_operations.services import DefaultServices


class CloudFoundryOperations:
    """
    Operations bound to one targeted space. Without a space id, any
    operation that needs one raises ConfigurationError(``missing_space_id``).
    """

    def __init__(
        self,
        client: Any,
        space_id: str | None = None,
        settings: SdkSettings | None = None,
    ) -> None:
        self.client = client
        self.space_id = space_id
        self.applications = DefaultApplications(client, space_id)
        self.routes = DefaultRoutes(client, space_id, settings)
        self.services = DefaultServices(client, space_id, settings)


__all__ = ["CloudFoundryOperations"]
