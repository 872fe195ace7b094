"""
cf_sdk.tier2_client.transport
──────────────────────────────
HTTP transport shared by every resource group. Adds auth header injection,
request-id propagation, retry of idempotent calls, debug logging, and
structured error mapping to every outbound request.

Backed by: httpx (async HTTP).

Error mapping:
  - v2 body ``{"code", "description", "error_code"}``  → CloudFoundryError
  - v3 body ``{"errors": [{"code", "title", "detail"}]}`` → CloudFoundryError
  - UAA body ``{"error", "error_description"}``         → UaaError
  - network failure or unrecognised 5xx                  → UpstreamError
"""
from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

import httpx

from cf_sdk.tier0_core.config import SdkSettings
from cf_sdk.tier0_core.errors import CloudFoundryError, UaaError, UpstreamError
from cf_sdk.tier0_core.http import HTTP, REQUEST_ID_HEADER, USER_AGENT, is_server_error, is_success
from cf_sdk.tier0_core.logging import get_logger
from cf_sdk.tier0_core.redact import scrub_string
from cf_sdk.tier1_runtime.context import get_request_id
from cf_sdk.tier1_runtime.retry import retry_policy

log = get_logger(__name__)


@runtime_checkable
class TokenProvider(Protocol):
    """Supplies the Authorization header value for a request."""

    async def authorization(self) -> str: ...

    def invalidate(self) -> None: ...


def build_http_client(settings: SdkSettings) -> httpx.AsyncClient:
    """Create the shared ``httpx.AsyncClient`` with the SDK's timeouts and TLS policy."""
    return httpx.AsyncClient(
        timeout=httpx.Timeout(settings.request_timeout),
        verify=not settings.skip_ssl_validation,
        headers={"User-Agent": USER_AGENT, "Accept": "application/json"},
    )


class RestTransport:
    """
    JSON-over-HTTP transport rooted at one base URL.

    Usage::

        transport = RestTransport("https://api.example.com", http=client, settings=settings)
        body = await transport.get("/v2/jobs/abc")
    """

    def __init__(
        self,
        base_url: str,
        *,
        http: httpx.AsyncClient,
        settings: SdkSettings,
        token_provider: TokenProvider | None = None,
        service_name: str = "cloud_controller",
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._http = http
        self._settings = settings
        self._token_provider = token_provider
        self._service_name = service_name

    async def get(self, path: str, **kwargs: Any) -> Any:
        send = retry_policy(
            max_attempts=self._settings.max_attempts,
            min_wait=0.5,
            max_wait=5.0,
            jitter=0.5,
        )(self._request)
        return await send("GET", path, **kwargs)

    async def post(self, path: str, json: Any = None, **kwargs: Any) -> Any:
        return await self._request("POST", path, json=json, **kwargs)

    async def put(self, path: str, json: Any = None, **kwargs: Any) -> Any:
        return await self._request("PUT", path, json=json, **kwargs)

    async def patch(self, path: str, json: Any = None, **kwargs: Any) -> Any:
        return await self._request("PATCH", path, json=json, **kwargs)

    async def delete(self, path: str, **kwargs: Any) -> Any:
        return await self._request("DELETE", path, **kwargs)

    async def _build_headers(self, extra: dict[str, str]) -> dict[str, str]:
        headers: dict[str, str] = {}
        if self._token_provider is not None:
            headers["Authorization"] = await self._token_provider.authorization()
        request_id = get_request_id()
        if request_id:
            headers[REQUEST_ID_HEADER] = request_id
        headers.update(extra)
        return headers

    async def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        url = f"{self._base_url}/{path.lstrip('/')}"
        headers = await self._build_headers(kwargs.pop("headers", {}))

        log.debug("http.request", method=method, url=scrub_string(url), service=self._service_name)
        try:
            response = await self._http.request(method, url, headers=headers, **kwargs)
        except httpx.HTTPError as exc:
            raise UpstreamError(
                user_message=f"Request to {self._service_name} failed: {exc}",
                upstream_service=self._service_name,
            ) from exc

        log.debug(
            "http.response",
            method=method,
            url=scrub_string(url),
            status=response.status_code,
            service=self._service_name,
        )
        if not is_success(response.status_code):
            if response.status_code == HTTP.UNAUTHORIZED and self._token_provider is not None:
                self._token_provider.invalidate()
            raise _map_error(response, self._service_name)

        if response.status_code == HTTP.NO_CONTENT or not response.content:
            return None
        if response.headers.get("content-type", "").startswith("application/json"):
            return response.json()
        return response.text


def _map_error(response: httpx.Response, service_name: str) -> Exception:
    status = response.status_code
    try:
        body = response.json()
    except ValueError:
        body = None

    if isinstance(body, dict):
        if "error_code" in body:
            return CloudFoundryError(
                body["error_code"],
                body.get("description", ""),
                body.get("code"),
                http_status=status,
            )
        errors = body.get("errors")
        if isinstance(errors, list) and errors:
            first = errors[0]
            return CloudFoundryError(
                first.get("title", "UnknownError"),
                first.get("detail", ""),
                first.get("code"),
                http_status=status,
            )
        if "error" in body:
            return UaaError(body["error"], body.get("error_description"), http_status=status)

    if is_server_error(status):
        return UpstreamError(
            user_message=f"{service_name} returned HTTP {status}",
            upstream_service=service_name,
            http_status=status,
        )
    return CloudFoundryError(
        "UnknownError",
        response.text or f"HTTP {status}",
        None,
        http_status=status,
    )


__all__ = ["TokenProvider", "RestTransport", "build_http_client"]
