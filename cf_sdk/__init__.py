"""
cf_sdk
──────
Stable top-level exports. Import from here, not from sub-modules directly.
Every name exported here is part of the public API and subject to semver.
"""
from cf_sdk.tier0_core.logging import get_logger
from cf_sdk.tier0_core.errors import (
    SdkError,
    Violation,
    RequestValidationError,
    CloudFoundryError,
    UaaError,
    JobTimeoutError,
    UpstreamError,
    ResolutionError,
    ConfigurationError,
    configure_sentry,
)
from cf_sdk.tier0_core.config import get_settings, SdkSettings

from cf_sdk.tier1_runtime.context import (
    get_context,
    set_context,
    new_context,
    RequestContext,
)
from cf_sdk.tier1_runtime.validate import check_request, validate_request, ValidationResult
from cf_sdk.tier1_runtime.retry import retry_policy, poll_until

from cf_sdk.tier2_client.client import CloudFoundryClient
from cf_sdk.tier2_client.uaa import UaaClient
from cf_sdk.tier2_client.logcache import LogCacheClient, EnvelopeType, ReadRequest, ReadResponse
from cf_sdk.tier2_client.doppler import ValueMetric
from cf_sdk.tier2_client.auth import StaticTokenProvider, ClientCredentialsTokenProvider
from cf_sdk.tier2_client.paging import request_resources, first_resource

from cf_sdk.tier3_operations.operations import CloudFoundryOperations
from cf_sdk.tier3_operations.applications import DefaultApplications, TerminateApplicationTaskRequest
from cf_sdk.tier3_operations.routes import DefaultRoutes, DeleteRouteRequest
from cf_sdk.tier3_operations.services import (
    DefaultServices,
    BindServiceInstanceRequest,
    UnbindServiceInstanceRequest,
    ServiceInstance,
    ServiceInstanceType,
)
from cf_sdk.tier3_operations.jobs import wait_for_completion

__version__ = "0.1.0"
__all__ = [
    # logging
    "get_logger",
    # errors
    "SdkError", "Violation", "RequestValidationError", "CloudFoundryError",
    "UaaError", "JobTimeoutError", "UpstreamError", "ResolutionError",
    "ConfigurationError", "configure_sentry",
    # config
    "get_settings", "SdkSettings",
    # context
    "get_context", "set_context", "new_context", "RequestContext",
    # validate
    "check_request", "validate_request", "ValidationResult",
    # retry
    "retry_policy", "poll_until",
    # clients
    "CloudFoundryClient", "UaaClient", "LogCacheClient",
    "EnvelopeType", "ReadRequest", "ReadResponse", "ValueMetric",
    "StaticTokenProvider", "ClientCredentialsTokenProvider",
    "request_resources", "first_resource",
    # operations
    "CloudFoundryOperations", "DefaultApplications", "DefaultRoutes", "DefaultServices",
    "TerminateApplicationTaskRequest", "DeleteRouteRequest",
    "BindServiceInstanceRequest", "UnbindServiceInstanceRequest",
    "ServiceInstance", "ServiceInstanceType",
    "wait_for_completion",
]
