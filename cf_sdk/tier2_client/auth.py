"""
cf_sdk.tier2_client.auth
─────────────────────────
Token providers for the Cloud Controller transport.

- StaticTokenProvider: a pre-issued access token (e.g. from ``cf oauth-token``)
- ClientCredentialsTokenProvider: fetches and caches a client-credentials
  token from the UAA, refreshing shortly before it expires

Select via: CF_TOKEN set → static, otherwise client credentials
"""
from __future__ import annotations

import asyncio
import time
from collections.abc import Callable

from pydantic import SecretStr

from cf_sdk.tier0_core.logging import get_logger
from cf_sdk.tier2_client.uaa import GetTokenByClientCredentialsRequest, Tokens

log = get_logger(__name__)


class StaticTokenProvider:
    """Always returns the same token."""

    def __init__(self, token: str) -> None:
        # Accept both "abc" and "bearer abc"
        scheme, _, value = token.partition(" ")
        self._token = value if scheme.lower() == "bearer" and value else token

    async def authorization(self) -> str:
        return f"bearer {self._token}"

    def invalidate(self) -> None:
        pass


class ClientCredentialsTokenProvider:
    """
    Client-credentials grant with an in-memory token cache.

    Concurrent callers share one refresh; the cached token is treated as
    expired ``leeway`` seconds before the UAA says it is.
    """

    def __init__(
        self,
        tokens: Tokens,
        client_id: str,
        client_secret: str | SecretStr,
        *,
        leeway: float = 30.0,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._tokens = tokens
        self._client_id = client_id
        self._client_secret = (
            client_secret if isinstance(client_secret, SecretStr) else SecretStr(client_secret)
        )
        self._leeway = leeway
        self._clock = clock
        self._access_token: str | None = None
        self._expires_at = 0.0
        self._lock = asyncio.Lock()

    async def authorization(self) -> str:
        async with self._lock:
            if self._access_token is None or self._clock() >= self._expires_at:
                await self._refresh()
            return f"bearer {self._access_token}"

    def invalidate(self) -> None:
        self._access_token = None

    async def _refresh(self) -> None:
        response = await self._tokens.get_by_client_credentials(
            GetTokenByClientCredentialsRequest(
                client_id=self._client_id,
                client_secret=self._client_secret,
            )
        )
        self._access_token = response.access_token
        self._expires_at = self._clock() + max((response.expires_in or 0) - self._leeway, 0)
        log.info("token.refreshed", client_id=self._client_id, expires_in=response.expires_in)


__all__ = ["StaticTokenProvider", "ClientCredentialsTokenProvider"]
