"""
cf_sdk.tier0_core.errors
─────────────────────────
Standard error taxonomy for the SDK. Three families surface to callers:

- local validation errors, raised while constructing a request value
- remote platform errors, carrying the Cloud Controller / UAA error payload
- resolution errors, raised when a name-based lookup finds nothing

Raising an SdkError automatically reports it if an error backend is
configured.

Select via: CF_ERROR_BACKEND=sentry|none
"""
from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Any


# ── Base error ────────────────────────────────────────────────────────────────

class SdkError(Exception):
    """
    Base class for all SDK errors. Every error has:
    - code: stable machine-readable string (snake_case)
    - user_message: safe to surface to end users
    - detail: internal context
    - status_code: closest HTTP status code
    """

    status_code: int = 500
    code: str = "internal_error"

    def __init__(
        self,
        code: str | None = None,
        user_message: str = "An unexpected error occurred.",
        detail: str | None = None,
        **metadata: Any,
    ) -> None:
        self.code = code or self.__class__.code
        self.user_message = user_message
        self.detail = detail or user_message
        self.metadata = metadata
        super().__init__(self.detail)
        _capture(self)

    def to_dict(self) -> dict:
        return {
            "error": {
                "code": self.code,
                "message": self.user_message,
            }
        }


# ── Local validation ──────────────────────────────────────────────────────────

@dataclass(frozen=True)
class Violation:
    """One problem found while validating a request."""
    field: str
    kind: str  # missing | conflict | malformed
    message: str


class RequestValidationError(SdkError):
    """A request value could not be constructed."""
    status_code = 422
    code = "request_invalid"

    def __init__(
        self,
        violations: list[Violation],
        code: str | None = None,
        **metadata: Any,
    ) -> None:
        self.violations = list(violations)
        self.fields = {v.field: v.message for v in self.violations}
        message = "Request is invalid: " + ", ".join(v.message for v in self.violations)
        super().__init__(code, message, **metadata)

    @property
    def kinds(self) -> set[str]:
        return {v.kind for v in self.violations}

    def to_dict(self) -> dict:
        d = super().to_dict()
        d["error"]["fields"] = self.fields
        return d


# ── Remote errors ─────────────────────────────────────────────────────────────

class CloudFoundryError(SdkError):
    """
    Error reported by the Cloud Controller, either directly in a response
    body or through the error details of a failed job.
    """
    status_code = 502
    code = "cloud_foundry_error"

    def __init__(
        self,
        error_code: str,
        description: str,
        cf_code: int | None = None,
        *,
        http_status: int | None = None,
        **metadata: Any,
    ) -> None:
        self.error_code = error_code
        self.description = description
        self.cf_code = cf_code
        self.http_status = http_status
        if cf_code is None:
            message = f"{error_code}: {description}"
        else:
            message = f"{error_code}({cf_code}): {description}"
        super().__init__(None, message, **metadata)


class UaaError(SdkError):
    """OAuth error returned by the UAA token endpoint."""
    status_code = 401
    code = "uaa_error"

    def __init__(
        self,
        error: str,
        error_description: str | None = None,
        *,
        http_status: int | None = None,
        **metadata: Any,
    ) -> None:
        self.error = error
        self.error_description = error_description
        self.http_status = http_status
        message = f"{error}: {error_description}" if error_description else error
        super().__init__(None, message, **metadata)


class JobTimeoutError(SdkError):
    """A job did not reach a terminal status within the completion timeout."""
    status_code = 504
    code = "job_timeout"


class UpstreamError(SdkError):
    """Network failure or a server error without a recognisable error body."""
    status_code = 502
    code = "upstream_error"


# ── Local errors ──────────────────────────────────────────────────────────────

class ResolutionError(SdkError):
    """A name could not be resolved to a resource id."""
    status_code = 404
    code = "resolution_error"

    def __init__(self, user_message: str, **metadata: Any) -> None:
        super().__init__(None, user_message, **metadata)


class ConfigurationError(SdkError):
    """Misconfiguration, e.g. no space targeted."""
    status_code = 500
    code = "configuration_error"


# ── Error capture backend ─────────────────────────────────────────────────────

def _capture(error: SdkError) -> None:
    """Send error to configured backend. Called automatically by SdkError.__init__."""
    backend = os.getenv("CF_ERROR_BACKEND", "none").lower()
    if backend == "sentry":
        _capture_sentry(error)


def _capture_sentry(error: SdkError) -> None:
    import sentry_sdk

    if error.status_code >= 500:
        sentry_sdk.capture_exception(error)
    else:
        sentry_sdk.capture_message(
            str(error),
            level="warning",
            extras={"code": error.code, **error.metadata},
        )


def configure_sentry(dsn: str, **kwargs: Any) -> None:
    """Initialize Sentry. Call once at application startup."""
    import sentry_sdk
    sentry_sdk.init(dsn=dsn, **kwargs)
    os.environ["CF_ERROR_BACKEND"] = "sentry"


__all__ = [
    "SdkError",
    "Violation",
    "RequestValidationError",
    "CloudFoundryError",
    "UaaError",
    "JobTimeoutError",
    "UpstreamError",
    "ResolutionError",
    "ConfigurationError",
    "configure_sentry",
]
