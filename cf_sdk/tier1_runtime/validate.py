"""
cf_sdk.tier1_runtime.validate
──────────────────────────────
Request validation via Pydantic v2. Raises RequestValidationError (not raw
Pydantic errors) so every construction failure reads the same way:

    Request is invalid: application name must be specified

Each problem is classified as one of three kinds:

- missing   — a required field was not supplied
- conflict  — mutually exclusive fields were supplied together
- malformed — a field was supplied but its value is not acceptable

Models signal conflict/malformed from their own validators with the
``conflict()`` / ``malformed()`` helpers below.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Generic, Type, TypeVar

from pydantic import BaseModel, ValidationError as PydanticValidationError
from pydantic_core import PydanticCustomError

from cf_sdk.tier0_core.errors import RequestValidationError, Violation

T = TypeVar("T", bound=BaseModel)

MISSING = "missing"
CONFLICT = "conflict"
MALFORMED = "malformed"


# ── Error helpers for model validators ───────────────────────────────────────

def conflict(field_name: str, message: str) -> PydanticCustomError:
    """Return an error to raise from a validator when fields clash."""
    return PydanticCustomError(CONFLICT, message, {"field": field_name})


def malformed(field_name: str, message: str) -> PydanticCustomError:
    """Return an error to raise from a validator when a value is unacceptable."""
    return PydanticCustomError(MALFORMED, message, {"field": field_name})


# ── Result type ──────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class ValidationResult(Generic[T]):
    """Outcome of check_request: either a value or the violations found."""
    value: T | None = None
    violations: tuple[Violation, ...] = field(default_factory=tuple)

    @property
    def ok(self) -> bool:
        return not self.violations

    def unwrap(self) -> T:
        if self.violations:
            raise RequestValidationError(list(self.violations))
        assert self.value is not None
        return self.value


# ── Public API ────────────────────────────────────────────────────────────────

def check_request(model: Type[T], data: Any) -> ValidationResult[T]:
    """
    Validate raw data against a request model without raising.

    Usage:
        result = check_request(DeleteRouteRequest, {"domain": "example.com"})
        if not result.ok:
            for violation in result.violations: ...
    """
    try:
        return ValidationResult(value=model.model_validate(data))
    except PydanticValidationError as exc:
        return ValidationResult(violations=tuple(_violations(exc, model)))


def validate_request(model: Type[T], data: Any) -> T:
    """
    Validate raw data against a request model.
    Raises RequestValidationError (not Pydantic's) on failure.

    Usage:
        request = validate_request(GetJobRequest, {"job_id": "abc"})
    """
    return check_request(model, data).unwrap()


# ── Internals ─────────────────────────────────────────────────────────────────

def _violations(exc: PydanticValidationError, model: Type[BaseModel]) -> list[Violation]:
    # Report Python field names even when the wire alias was used
    names = {f.alias: n for n, f in model.model_fields.items() if f.alias}
    violations = []
    for err in exc.errors(include_url=False):
        ctx = err.get("ctx") or {}
        loc = [str(part) for part in err["loc"]]
        if loc:
            loc[0] = names.get(loc[0], loc[0])
        name = ctx.get("field") or ".".join(loc) or "request"
        words = _words(name)

        if err["type"] == "missing" or (
            err.get("input") is None and err["type"].endswith("_type")
        ):
            violations.append(Violation(name, MISSING, f"{words} must be specified"))
        elif err["type"] in (CONFLICT, MALFORMED):
            violations.append(Violation(name, err["type"], err["msg"]))
        else:
            violations.append(Violation(name, MALFORMED, f"{words}: {err['msg']}"))
    return violations


def _words(field_name: str) -> str:
    return " ".join(field_name.replace(".", "_").split("_")).strip()


__all__ = [
    "MISSING",
    "CONFLICT",
    "MALFORMED",
    "ValidationResult",
    "check_request",
    "validate_request",
    "conflict",
    "malformed",
]
