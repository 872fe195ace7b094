"""
cf_sdk.tier2_client.paging
───────────────────────────
Helpers for walking paged list endpoints (v2 and v3 alike). A fetch
function takes a 1-based page number and returns one page exposing
``resources`` and ``total_pages``.
"""
from __future__ import annotations

from collections.abc import AsyncIterator, Awaitable, Callable
from typing import Any, Protocol


class Page(Protocol):
    @property
    def resources(self) -> list[Any]: ...

    @property
    def total_pages(self) -> int: ...


async def request_resources(fetch: Callable[[int], Awaitable[Page]]) -> AsyncIterator[Any]:
    """Yield every resource of every page, in order."""
    first = await fetch(1)
    for resource in first.resources:
        yield resource
    for page in range(2, (first.total_pages or 1) + 1):
        response = await fetch(page)
        for resource in response.resources:
            yield resource


async def first_resource(fetch: Callable[[int], Awaitable[Page]]) -> Any | None:
    """Return the first resource of the first page, or None."""
    response = await fetch(1)
    return response.resources[0] if response.resources else None


__all__ = ["request_resources", "first_resource"]
