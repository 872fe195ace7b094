"""
cf_sdk.tier2_client.uaa
────────────────────────
UAA token endpoint: request/response values and the ``tokens`` resource
group. Token requests are form-encoded POSTs to ``/oauth/token`` and carry
no bearer token themselves.
"""
from __future__ import annotations

from enum import Enum

import httpx
from pydantic import SecretStr

from cf_sdk.tier0_core.config import SdkSettings, get_settings
from cf_sdk.tier2_client.model import Request, Response
from cf_sdk.tier2_client.transport import RestTransport, build_http_client


class TokenFormat(str, Enum):
    OPAQUE = "opaque"
    JWT = "jwt"


class GetTokenByOpenIdRequest(Request):
    authorization_code: str
    client_id: str
    client_secret: SecretStr
    redirect_uri: str | None = None
    token_format: TokenFormat | None = None


class GetTokenByClientCredentialsRequest(Request):
    client_id: str
    client_secret: SecretStr
    token_format: TokenFormat | None = None


class TokenResponse(Response):
    access_token: str
    token_type: str = "bearer"
    expires_in: int | None = None
    refresh_token: str | None = None
    id_token: str | None = None
    scope: str | None = None
    jti: str | None = None

    def __repr__(self) -> str:
        return f"TokenResponse(token_type={self.token_type!r}, expires_in={self.expires_in!r})"

    __str__ = __repr__


class GetTokenByOpenIdResponse(TokenResponse):
    pass


class GetTokenByClientCredentialsResponse(TokenResponse):
    pass


class Tokens:
    """``/oauth/token`` grants."""

    def __init__(self, transport: RestTransport) -> None:
        self._transport = transport

    async def get_by_open_id(self, request: GetTokenByOpenIdRequest) -> GetTokenByOpenIdResponse:
        form = {
            "grant_type": "authorization_code",
            "response_type": "id_token",
            "code": request.authorization_code,
            "client_id": request.client_id,
            "client_secret": request.client_secret.get_secret_value(),
        }
        if request.redirect_uri is not None:
            form["redirect_uri"] = request.redirect_uri
        if request.token_format is not None:
            form["token_format"] = request.token_format.value
        body = await self._transport.post("/oauth/token", data=form)
        return GetTokenByOpenIdResponse.model_validate(body)

    async def get_by_client_credentials(
        self, request: GetTokenByClientCredentialsRequest
    ) -> GetTokenByClientCredentialsResponse:
        form = {
            "grant_type": "client_credentials",
            "client_id": request.client_id,
            "client_secret": request.client_secret.get_secret_value(),
        }
        if request.token_format is not None:
            form["token_format"] = request.token_format.value
        body = await self._transport.post("/oauth/token", data=form)
        return GetTokenByClientCredentialsResponse.model_validate(body)


class UaaClient:
    """
    Client for the UAA.

    Usage::

        uaa = UaaClient(settings, http=http)
        token = await uaa.tokens.get_by_client_credentials(request)
    """

    def __init__(
        self,
        settings: SdkSettings | None = None,
        *,
        http: httpx.AsyncClient | None = None,
    ) -> None:
        self._settings = settings or get_settings()
        self._owns_http = http is None
        self._http = http or build_http_client(self._settings)
        transport = RestTransport(
            self._settings.resolved_uaa_url,
            http=self._http,
            settings=self._settings,
            service_name="uaa",
        )
        self.tokens = Tokens(transport)

    async def close(self) -> None:
        if self._owns_http:
            await self._http.aclose()

    async def __aenter__(self) -> "UaaClient":
        return self

    async def __aexit__(self, *exc: object) -> None:
        await self.close()


__all__ = [
    "TokenFormat",
    "GetTokenByOpenIdRequest",
    "GetTokenByOpenIdResponse",
    "GetTokenByClientCredentialsRequest",
    "GetTokenByClientCredentialsResponse",
    "TokenResponse",
    "Tokens",
    "UaaClient",
]
