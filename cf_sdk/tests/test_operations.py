"""Tests for job polling and the application/route operations."""
from __future__ import annotations

import pytest

from cf_sdk.tier0_core.errors import (
    CloudFoundryError,
    ConfigurationError,
    JobTimeoutError,
    ResolutionError,
)
from cf_sdk.tier2_client.v2 import (
    DeleteServiceBindingResponse,
    DeleteRouteRequest as DeleteRouteByIdRequest,
    DeleteRouteResponse,
    GetJobRequest,
    GetJobResponse,
    ListDomainsRequest,
    ListDomainsResponse,
    ListRoutesRequest,
    ListRoutesResponse,
    ListSpaceApplicationsResponse,
)
from cf_sdk.tier2_client.v3 import (
    CancelTaskRequest,
    CancelTaskResponse,
    ListApplicationTasksRequest,
    ListApplicationTasksResponse,
)
from cf_sdk.tier3_operations.applications import (
    DefaultApplications,
    TerminateApplicationTaskRequest,
)
from cf_sdk.tier3_operations.jobs import wait_for_completion
from cf_sdk.tier3_operations.lookups import describe_route
from cf_sdk.tier3_operations.operations import CloudFoundryOperations
from cf_sdk.tier3_operations.routes import DefaultRoutes, DeleteRouteRequest

SPACE_ID = "test-space-id"


def _v2_page(model, resources):
    return model.model_validate({
        "total_results": len(resources),
        "total_pages": 1,
        "resources": resources,
    })


def _job(status, **entity):
    return GetJobResponse.model_validate({
        "metadata": {"guid": "test-job-id"},
        "entity": {"guid": "test-job-id", "status": status, **entity},
    })


# ── jobs ───────────────────────────────────────────────────────────────────

class TestWaitForCompletion:
    @pytest.mark.asyncio
    async def test_polls_until_finished(self, stub_client):
        stub_client.jobs.get.side_effect = [_job("queued"), _job("running"), _job("finished")]
        assert await wait_for_completion(stub_client, _job("queued")) is None
        assert stub_client.jobs.get.await_count == 3
        stub_client.jobs.get.assert_awaited_with(GetJobRequest(job_id="test-job-id"))

    @pytest.mark.asyncio
    async def test_already_finished_is_not_polled(self, stub_client):
        await wait_for_completion(stub_client, _job("finished"))
        stub_client.jobs.get.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_failed_job_raises_remote_error(self, stub_client):
        stub_client.jobs.get.side_effect = [
            _job("running"),
            _job("failed", error_details={
                "code": 10001, "description": "Route is in use", "error_code": "CF-RouteInUse",
            }),
        ]
        with pytest.raises(CloudFoundryError) as info:
            await wait_for_completion(stub_client, _job("running"))
        assert str(info.value) == "CF-RouteInUse(10001): Route is in use"
        assert info.value.error_code == "CF-RouteInUse"

    @pytest.mark.asyncio
    async def test_failed_job_without_details(self, stub_client):
        stub_client.jobs.get.return_value = _job("failed", error="boom")
        with pytest.raises(CloudFoundryError, match="boom"):
            await wait_for_completion(stub_client, _job("running"))

    @pytest.mark.asyncio
    async def test_job_id_falls_back_to_entity(self, stub_client):
        stub_client.jobs.get.return_value = _job("finished")
        job = GetJobResponse.model_validate({"entity": {"guid": "entity-job-id", "status": "queued"}})
        await wait_for_completion(stub_client, job)
        stub_client.jobs.get.assert_awaited_once_with(GetJobRequest(job_id="entity-job-id"))

    @pytest.mark.asyncio
    async def test_timeout(self, stub_client):
        from cf_sdk.tier0_core.config import SdkSettings

        stub_client.jobs.get.return_value = _job("running")
        settings = SdkSettings(
            job_poll_min_wait=0.01,
            job_poll_max_wait=0.01,
            job_completion_timeout=0.05,
        )
        with pytest.raises(JobTimeoutError):
            await wait_for_completion(stub_client, _job("running"), settings)

    @pytest.mark.asyncio
    async def test_empty_delete_response_is_complete(self, stub_client):
        assert await wait_for_completion(stub_client, DeleteServiceBindingResponse.model_validate({})) is None
        stub_client.jobs.get.assert_not_awaited()


# ── applications ───────────────────────────────────────────────────────────

@pytest.fixture
def with_application(stub_client):
    stub_client.spaces.list_applications.return_value = _v2_page(
        ListSpaceApplicationsResponse,
        [{"metadata": {"guid": "test-application-id"}, "entity": {"name": "test-application-name"}}],
    )
    return stub_client


class TestTerminateTask:
    @pytest.mark.asyncio
    async def test_terminate_task(self, with_application):
        with_application.tasks.list_for_application.return_value = (
            ListApplicationTasksResponse.model_validate({
                "pagination": {"total_results": 1, "total_pages": 1},
                "resources": [{"guid": "test-task-id", "sequence_id": 1, "state": "RUNNING"}],
            })
        )
        with_application.tasks.cancel.return_value = CancelTaskResponse.model_validate(
            {"guid": "test-task-id", "state": "CANCELING"}
        )
        applications = DefaultApplications(with_application, SPACE_ID)

        result = await applications.terminate_task(TerminateApplicationTaskRequest.build(
            application_name="test-application-name", sequence_id=1,
        ))

        assert result is None
        with_application.tasks.list_for_application.assert_awaited_once_with(
            ListApplicationTasksRequest(application_id="test-application-id", sequence_id=1, page=1)
        )
        with_application.tasks.cancel.assert_awaited_once_with(CancelTaskRequest(task_id="test-task-id"))

    @pytest.mark.asyncio
    async def test_no_task(self, with_application):
        with_application.tasks.list_for_application.return_value = (
            ListApplicationTasksResponse.model_validate({"resources": []})
        )
        applications = DefaultApplications(with_application, SPACE_ID)

        with pytest.raises(ResolutionError, match="^Task with sequence id 1 does not exist$"):
            await applications.terminate_task(TerminateApplicationTaskRequest.build(
                application_name="test-application-name", sequence_id=1,
            ))
        with_application.tasks.cancel.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_no_application(self, stub_client):
        stub_client.spaces.list_applications.return_value = _v2_page(
            ListSpaceApplicationsResponse, []
        )
        applications = DefaultApplications(stub_client, SPACE_ID)
        with pytest.raises(ResolutionError, match="Application test-application-name does not exist"):
            await applications.terminate_task(TerminateApplicationTaskRequest.build(
                application_name="test-application-name", sequence_id=1,
            ))


# ── routes ─────────────────────────────────────────────────────────────────

@pytest.fixture
def with_domain(stub_client):
    stub_client.domains.list.return_value = _v2_page(
        ListDomainsResponse,
        [{"metadata": {"guid": "test-domain-id"}, "entity": {"name": "example.com"}}],
    )
    return stub_client


class TestDeleteRoute:
    @pytest.mark.asyncio
    async def test_delete_route(self, with_domain):
        with_domain.routes.list.return_value = _v2_page(
            ListRoutesResponse,
            [{"metadata": {"guid": "test-route-id"}, "entity": {"host": "host"}}],
        )
        with_domain.routes.delete.return_value = DeleteRouteResponse.model_validate({
            "metadata": {"guid": "test-job-id"},
            "entity": {"guid": "test-job-id", "status": "queued"},
        })
        with_domain.jobs.get.side_effect = [_job("running"), _job("finished")]
        routes = DefaultRoutes(with_domain, SPACE_ID)

        result = await routes.delete(DeleteRouteRequest.build(
            domain="example.com", host="host", path="/path",
        ))

        assert result is None
        with_domain.domains.list.assert_awaited_once_with(ListDomainsRequest(name="example.com", page=1))
        with_domain.routes.list.assert_awaited_once_with(ListRoutesRequest(
            domain_id="test-domain-id", host="host", path="/path", port=None, page=1,
        ))
        with_domain.routes.delete.assert_awaited_once_with(
            DeleteRouteByIdRequest(route_id="test-route-id", async_=True)
        )
        assert with_domain.jobs.get.await_count == 2

    @pytest.mark.asyncio
    async def test_no_domain(self, stub_client):
        stub_client.domains.list.return_value = _v2_page(ListDomainsResponse, [])
        routes = DefaultRoutes(stub_client, SPACE_ID)
        with pytest.raises(ResolutionError, match="^Domain example.com does not exist$"):
            await routes.delete(DeleteRouteRequest.build(domain="example.com", host="host"))
        stub_client.routes.list.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_no_route(self, with_domain):
        with_domain.routes.list.return_value = _v2_page(ListRoutesResponse, [])
        routes = DefaultRoutes(with_domain, SPACE_ID)
        with pytest.raises(ResolutionError, match="^Route for host.example.com does not exist$"):
            await routes.delete(DeleteRouteRequest.build(domain="example.com", host="host"))
        with_domain.routes.delete.assert_not_awaited()

    @pytest.mark.parametrize("domain, host, path, port, expected", [
        ("example.com", "host", None, None, "host.example.com"),
        ("example.com", "host", "/path", None, "host.example.com/path"),
        ("example.com", None, None, None, "example.com"),
        ("tcp.example.com", None, None, 1024, "tcp.example.com:1024"),
    ])
    def test_describe_route(self, domain, host, path, port, expected):
        assert describe_route(domain, host, path, port) == expected


# ── façade ─────────────────────────────────────────────────────────────────

class TestCloudFoundryOperations:
    def test_groups_share_client_and_space(self, stub_client):
        cf = CloudFoundryOperations(stub_client, SPACE_ID)
        assert cf.space_id == SPACE_ID
        assert isinstance(cf.applications, DefaultApplications)
        assert isinstance(cf.routes, DefaultRoutes)

    @pytest.mark.asyncio
    async def test_missing_space_id(self, stub_client):
        cf = CloudFoundryOperations(stub_client)
        with pytest.raises(ConfigurationError) as info:
            await cf.applications.terminate_task(TerminateApplicationTaskRequest.build(
                application_name="test-application-name", sequence_id=1,
            ))
        assert info.value.code == "missing_space_id"
