"""
cf_sdk.tier2_client.doppler
────────────────────────────
Doppler firehose event values.
"""
from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from cf_sdk.tier0_core.errors import RequestValidationError, Violation
from cf_sdk.tier1_runtime.validate import MALFORMED
from cf_sdk.tier2_client.model import Value


class ValueMetric(Value):
    """A named gauge reading emitted by a platform component."""
    name: str
    unit: str
    value: float

    @classmethod
    def from_dropsonde(cls, event: Mapping[str, Any]) -> "ValueMetric":
        """
        Build from a decoded dropsonde ``ValueMetric`` event, or from an
        envelope carrying one under ``valueMetric``.
        """
        payload = event.get("valueMetric") or event
        if not isinstance(payload, Mapping):
            raise RequestValidationError(
                [Violation("valueMetric", MALFORMED, "value metric must be an object")]
            )
        return cls.build(
            name=payload.get("name"),
            unit=payload.get("unit"),
            value=payload.get("value"),
        )


__all__ = ["ValueMetric"]
