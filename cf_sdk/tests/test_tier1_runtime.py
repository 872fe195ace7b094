"""Tests for tier1_runtime modules."""
from __future__ import annotations

import pytest
from pydantic import BaseModel, model_validator

from cf_sdk.tier0_core.errors import JobTimeoutError, RequestValidationError, UpstreamError
from cf_sdk.tier1_runtime.context import (
    RequestContext,
    get_context,
    get_request_id,
    new_context,
    set_context,
)
from cf_sdk.tier1_runtime.retry import poll_until, retry_policy
from cf_sdk.tier1_runtime.validate import (
    CONFLICT,
    MALFORMED,
    MISSING,
    check_request,
    conflict,
    validate_request,
)


# ── context ────────────────────────────────────────────────────────────────

class TestContext:
    def test_set_and_get_context(self):
        ctx = RequestContext(request_id="req-abc", space_id="space-1")
        set_context(ctx)
        retrieved = get_context()
        assert retrieved is not None
        assert retrieved.request_id == "req-abc"
        assert get_request_id() == "req-abc"

    def test_context_defaults(self):
        ctx = RequestContext()
        assert ctx.request_id is not None  # auto-generated

    def test_new_context_activates(self):
        ctx = new_context(space_id="space-2", caller="test")
        assert get_context() is ctx
        assert ctx.metadata == {"caller": "test"}


# ── validate ───────────────────────────────────────────────────────────────

class _Route(BaseModel):
    domain: str
    host: str | None = None
    port: int | None = None

    @model_validator(mode="after")
    def check_port(self) -> "_Route":
        if self.port is not None and self.host is not None:
            raise conflict("port", "cannot specify port together with host")
        return self


class TestValidate:
    def test_valid_input_returns_model(self):
        result = validate_request(_Route, {"domain": "example.com", "host": "www"})
        assert result.domain == "example.com"

    def test_missing_field(self):
        with pytest.raises(RequestValidationError) as info:
            validate_request(_Route, {})
        assert str(info.value) == "Request is invalid: domain must be specified"
        assert info.value.kinds == {MISSING}

    def test_explicit_none_is_missing(self):
        result = check_request(_Route, {"domain": None})
        assert not result.ok
        assert result.violations[0].kind == MISSING

    def test_conflict(self):
        result = check_request(_Route, {"domain": "example.com", "host": "www", "port": 80})
        assert not result.ok
        assert result.violations[0].kind == CONFLICT
        assert result.violations[0].field == "port"
        with pytest.raises(RequestValidationError, match="cannot specify port together with host"):
            result.unwrap()

    def test_malformed(self):
        result = check_request(_Route, {"domain": "example.com", "port": "eighty"})
        assert result.violations[0].kind == MALFORMED
        assert result.violations[0].message.startswith("port: ")


# ── retry ──────────────────────────────────────────────────────────────────

class TestRetry:
    @pytest.mark.asyncio
    async def test_retries_upstream_errors(self):
        calls = []

        @retry_policy(max_attempts=3, min_wait=0, max_wait=0, jitter=0)
        async def flaky():
            calls.append(1)
            if len(calls) < 3:
                raise UpstreamError(user_message="down")
            return "ok"

        assert await flaky() == "ok"
        assert len(calls) == 3

    @pytest.mark.asyncio
    async def test_does_not_retry_other_errors(self):
        calls = []

        @retry_policy(max_attempts=3, min_wait=0, max_wait=0, jitter=0)
        async def broken():
            calls.append(1)
            raise ValueError("nope")

        with pytest.raises(ValueError):
            await broken()
        assert len(calls) == 1

    @pytest.mark.asyncio
    async def test_poll_until_done(self):
        statuses = iter(["running", "running", "finished"])

        async def fetch():
            return next(statuses)

        result = await poll_until(fetch, lambda s: s == "finished", min_wait=0, max_wait=0)
        assert result == "finished"

    @pytest.mark.asyncio
    async def test_poll_until_propagates_fetch_errors(self):
        async def fetch():
            raise UpstreamError(user_message="down")

        with pytest.raises(UpstreamError):
            await poll_until(fetch, lambda s: True, min_wait=0, max_wait=0)

    @pytest.mark.asyncio
    async def test_poll_until_times_out(self):
        async def fetch():
            return "running"

        with pytest.raises(JobTimeoutError):
            await poll_until(
                fetch,
                lambda s: s == "finished",
                min_wait=0.01,
                max_wait=0.01,
                timeout=0.05,
            )
