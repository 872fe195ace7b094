"""
cf_sdk.tier1_runtime.retry
───────────────────────────
Standard retry/backoff policy with jitter, and the polling loop used to
wait for asynchronous platform jobs. Backed by Tenacity.

Usage:
    @retry_policy()
    async def fetch():
        ...

    job = await poll_until(fetch_job, is_terminal, timeout=300.0)
"""
from __future__ import annotations

import functools
from collections.abc import Awaitable, Callable
from typing import Any, Type, TypeVar

from tenacity import (
    AsyncRetrying,
    RetryError,
    retry_if_exception,
    retry_if_exception_type,
    retry_if_result,
    stop_after_attempt,
    stop_after_delay,
    stop_never,
    wait_exponential,
    wait_random,
)

from cf_sdk.tier0_core.errors import JobTimeoutError, UpstreamError

T = TypeVar("T")


def _is_retryable(exc: BaseException) -> bool:
    """Only transport failures are retried; remote and local errors are final."""
    return isinstance(exc, UpstreamError)


def retry_policy(
    max_attempts: int = 3,
    min_wait: float = 0.5,
    max_wait: float = 10.0,
    jitter: float = 1.0,
    on: list[Type[Exception]] | None = None,
) -> Callable:
    """
    Decorator applying exponential backoff with jitter.

    Args:
        max_attempts: Total number of attempts (including first).
        min_wait:     Minimum wait seconds between retries.
        max_wait:     Maximum wait seconds between retries.
        jitter:       Maximum random seconds added to each wait.
        on:           Specific exception types to retry on. If None, retries
                      on UpstreamError only.
    """
    def decorator(fn: Callable) -> Callable:

        @functools.wraps(fn)
        async def wrapper(*args: Any, **kwargs: Any) -> Any:
            if on:
                retry_on = retry_if_exception_type(tuple(on))
            else:
                retry_on = retry_if_exception(_is_retryable)

            async for attempt in AsyncRetrying(
                stop=stop_after_attempt(max_attempts),
                wait=wait_exponential(min=min_wait, max=max_wait) + wait_random(0, jitter),
                retry=retry_on,
                reraise=True,
            ):
                with attempt:
                    return await fn(*args, **kwargs)

        return wrapper
    return decorator


async def poll_until(
    fetch: Callable[[], Awaitable[T]],
    done: Callable[[T], bool],
    *,
    min_wait: float = 1.0,
    max_wait: float = 15.0,
    timeout: float | None = 300.0,
    description: str = "operation",
) -> T:
    """
    Call *fetch* until *done* accepts its result, backing off exponentially
    between calls. Exceptions raised by *fetch* propagate immediately.

    Raises JobTimeoutError when *timeout* seconds pass first. A timeout of
    None polls until done.
    """
    stop = stop_after_delay(timeout) if timeout is not None else stop_never
    try:
        async for attempt in AsyncRetrying(
            stop=stop,
            wait=wait_exponential(min=min_wait, max=max_wait),
            retry=retry_if_result(lambda result: not done(result)),
        ):
            with attempt:
                result = await fetch()
            if not attempt.retry_state.outcome.failed:
                attempt.retry_state.set_result(result)
        return result
    except RetryError as exc:
        raise JobTimeoutError(
            user_message=f"{description} did not complete within {timeout} seconds",
        ) from exc


__all__ = ["retry_policy", "poll_until"]
