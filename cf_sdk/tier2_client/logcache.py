"""
cf_sdk.tier2_client.logcache
─────────────────────────────
Log cache ``/api/v1/read`` endpoint: envelope values and the client.

Log payloads arrive base64-encoded; ``Log.text`` decodes them.
"""
from __future__ import annotations

import base64
from enum import Enum

import httpx
from pydantic import Field

from cf_sdk.tier0_core.config import SdkSettings, get_settings
from cf_sdk.tier2_client.model import Request, Response
from cf_sdk.tier2_client.transport import RestTransport, TokenProvider, build_http_client


class EnvelopeType(str, Enum):
    LOG = "LOG"
    COUNTER = "COUNTER"
    GAUGE = "GAUGE"
    TIMER = "TIMER"
    EVENT = "EVENT"


class Log(Response):
    payload: str = ""
    type: str | None = None

    @property
    def text(self) -> str:
        return base64.b64decode(self.payload).decode("utf-8", errors="replace")


class Counter(Response):
    name: str | None = None
    delta: int | None = None
    total: int | None = None


class GaugeValue(Response):
    unit: str | None = None
    value: float | None = None


class Gauge(Response):
    metrics: dict[str, GaugeValue] = Field(default_factory=dict)


class Envelope(Response):
    source_id: str | None = None
    instance_id: str | None = None
    timestamp: str | None = None
    tags: dict[str, str] = Field(default_factory=dict)
    log: Log | None = None
    counter: Counter | None = None
    gauge: Gauge | None = None


class EnvelopeBatch(Response):
    batch: list[Envelope] = Field(default_factory=list)


class ReadRequest(Request):
    source_id: str
    start_time: int | None = None
    end_time: int | None = None
    envelope_types: list[EnvelopeType] | None = None
    limit: int | None = None
    descending: bool | None = None


class ReadResponse(Response):
    envelopes: EnvelopeBatch = Field(default_factory=EnvelopeBatch)


class LogCacheClient:
    """
    Client for the log cache.

    Usage::

        async with LogCacheClient(settings, token_provider=provider) as logcache:
            response = await logcache.read(ReadRequest.build(source_id=app_id))
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
        self._transport = RestTransport(
            self._settings.resolved_log_cache_url,
            http=self._http,
            settings=self._settings,
            token_provider=token_provider,
            service_name="log_cache",
        )

    async def read(self, request: ReadRequest) -> ReadResponse:
        params: list[tuple[str, str]] = []
        if request.start_time is not None:
            params.append(("start_time", str(request.start_time)))
        if request.end_time is not None:
            params.append(("end_time", str(request.end_time)))
        for envelope_type in request.envelope_types or []:
            params.append(("envelope_types", envelope_type.value))
        if request.limit is not None:
            params.append(("limit", str(request.limit)))
        if request.descending is not None:
            params.append(("descending", str(request.descending).lower()))
        body = await self._transport.get(f"/api/v1/read/{request.source_id}", params=params)
        return ReadResponse.model_validate(body or {})

    async def close(self) -> None:
        if self._owns_http:
            await self._http.aclose()

    async def __aenter__(self) -> "LogCacheClient":
        return self

    async def __aexit__(self, *exc: object) -> None:
        await self.close()


__all__ = [
    "EnvelopeType",
    "Log",
    "Counter",
    "GaugeValue",
    "Gauge",
    "Envelope",
    "EnvelopeBatch",
    "ReadRequest",
    "ReadResponse",
    "LogCacheClient",
]
