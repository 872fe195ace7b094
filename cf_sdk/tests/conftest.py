"""
cf_sdk test configuration.

All tests run against mocked transports and stub clients; no Cloud Foundry
installation is required. Override by setting environment variables
before running pytest.
"""
from __future__ import annotations

import os
from collections.abc import Callable
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest

# ── Force test settings for all tests ──────────────────────────────────────
# These must be set before any cf_sdk modules are imported.

os.environ.setdefault("CF_API_URL", "https://api.test.example.com")
os.environ.setdefault("CF_TOKEN", "test-access-token")
os.environ.setdefault("CF_MAX_ATTEMPTS", "1")
os.environ.setdefault("CF_JOB_POLL_MIN_WAIT", "0")
os.environ.setdefault("CF_JOB_POLL_MAX_WAIT", "0")
os.environ.setdefault("CF_JOB_COMPLETION_TIMEOUT", "5")
os.environ.setdefault("CF_ERROR_BACKEND", "none")


# ── Fixtures ───────────────────────────────────────────────────────────────

@pytest.fixture(autouse=True)
def reset_settings():
    """Re-read settings from the environment for every test."""
    from cf_sdk.tier0_core.config import _reset_settings

    _reset_settings()
    yield
    _reset_settings()


@pytest.fixture
def settings():
    from cf_sdk.tier0_core.config import get_settings
    return get_settings()


Handler = Callable[[httpx.Request], httpx.Response]


@pytest.fixture
def mock_http():
    """
    Return a factory building an ``httpx.AsyncClient`` whose requests are
    answered by *handler*. Every request is recorded on ``client.requests``.
    """
    def factory(handler: Handler) -> httpx.AsyncClient:
        requests: list[httpx.Request] = []

        def record(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return handler(request)

        client = httpx.AsyncClient(transport=httpx.MockTransport(record))
        client.requests = requests  # type: ignore[attr-defined]
        return client

    return factory


@pytest.fixture
def cf_client(settings, mock_http):
    """Return a factory for a CloudFoundryClient answered by *handler*."""
    from cf_sdk.tier2_client.auth import StaticTokenProvider
    from cf_sdk.tier2_client.client import CloudFoundryClient

    def factory(handler: Handler):
        http = mock_http(handler)
        client = CloudFoundryClient(
            settings,
            http=http,
            token_provider=StaticTokenProvider("test-access-token"),
        )
        client.requests = http.requests  # type: ignore[attr-defined]
        return client

    return factory


@pytest.fixture
def stub_client():
    """
    Return a stand-in CloudFoundryClient whose resource-group methods are
    AsyncMocks. Tests set ``return_value`` / ``side_effect`` per call.
    """
    client = MagicMock(name="CloudFoundryClient")
    groups = {
        "applications_v2": ["get", "list_service_bindings", "upload"],
        "domains": ["list"],
        "jobs": ["get"],
        "routes": ["list", "delete"],
        "service_bindings": ["create", "delete", "list"],
        "service_plans": ["get"],
        "services": ["get"],
        "spaces": ["list_applications", "list_service_instances"],
        "tasks": ["list_for_application", "cancel"],
    }
    for group, methods in groups.items():
        resource = MagicMock(name=group)
        for method in methods:
            setattr(resource, method, AsyncMock(name=f"{group}.{method}"))
        setattr(client, group, resource)
    return client
