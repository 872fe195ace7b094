"""
cf_sdk.tier0_core.http
───────────────────────
HTTP primitives shared by every transport: the status codes the platform
APIs answer with, and the request header names the SDK sends.
"""
from __future__ import annotations


# ── Status code constants ──────────────────────────────────────────────────

class HTTP:
    """HTTP status codes the Cloud Controller, UAA and log cache return."""

    # 2xx
    OK = 200
    CREATED = 201
    ACCEPTED = 202
    NO_CONTENT = 204

    # 4xx
    BAD_REQUEST = 400
    UNAUTHORIZED = 401
    FORBIDDEN = 403
    NOT_FOUND = 404
    CONFLICT = 409
    UNPROCESSABLE_ENTITY = 422
    TOO_MANY_REQUESTS = 429

    # 5xx
    INTERNAL_SERVER_ERROR = 500
    BAD_GATEWAY = 502
    SERVICE_UNAVAILABLE = 503
    GATEWAY_TIMEOUT = 504


def is_success(status_code: int) -> bool:
    return 200 <= status_code < 300


def is_server_error(status_code: int) -> bool:
    return status_code >= HTTP.INTERNAL_SERVER_ERROR


# ── Header names ───────────────────────────────────────────────────────────

REQUEST_ID_HEADER = "X-Vcap-Request-Id"
USER_AGENT = "cf-sdk-python/0.1.0"


__all__ = ["HTTP", "is_success", "is_server_error", "REQUEST_ID_HEADER", "USER_AGENT"]
