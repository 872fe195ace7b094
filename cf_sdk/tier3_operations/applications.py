"""
cf_sdk.tier3_operations.applications
─────────────────────────────────────
Application operations in the targeted space.
"""
from __future__ import annotations

from typing import Any

from cf_sdk.tier0_core.logging import get_logger
from cf_sdk.tier2_client.model import Request
from cf_sdk.tier2_client.v3 import CancelTaskRequest
from cf_sdk.tier3_operations.lookups import (
    get_application_task,
    get_space_application,
    require_space_id,
)

log = get_logger(__name__)


class TerminateApplicationTaskRequest(Request):
    application_name: str
    sequence_id: int


class DefaultApplications:
    def __init__(self, client: Any, space_id: str | None) -> None:
        self._client = client
        self._space_id = space_id

    async def terminate_task(self, request: TerminateApplicationTaskRequest) -> None:
        """Cancel the task with the given sequence id of the named application."""
        space_id = require_space_id(self._space_id)
        application = await get_space_application(self._client, space_id, request.application_name)
        task = await get_application_task(self._client, application.id, request.sequence_id)
        await self._client.tasks.cancel(CancelTaskRequest(task_id=task.id))
        log.info(
            "applications.terminate_task",
            application=request.application_name,
            sequence_id=request.sequence_id,
        )


__all__ = ["TerminateApplicationTaskRequest", "DefaultApplications"]
