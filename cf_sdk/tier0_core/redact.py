"""
cf_sdk.tier0_core.redact
─────────────────────────
Secret redaction utilities. Provides field-level redaction for structured
data, regex-based scrubbing of tokens embedded in strings, and a structlog
processor that redacts sensitive keys before log emission.

Every log line written by the transport passes through here so bearer
tokens and client secrets never reach a log aggregator.
"""
from __future__ import annotations

import re
from typing import Any

# ── Default redacted key names (case-insensitive) ─────────────────────────

_SENSITIVE_KEYS: frozenset[str] = frozenset({
    "password", "passwd", "secret", "token", "access_token", "refresh_token",
    "id_token", "client_secret", "authorization", "authorization_code",
    "credentials", "cookie",
})

# ── Regex patterns for inline scrubbing ───────────────────────────────────

_PATTERNS: list[tuple[re.Pattern[str], str]] = [
    # Bearer tokens
    (re.compile(r"(bearer)\s+[A-Za-z0-9\-._~+/]+=*", re.I), r"\1 [REDACTED]"),
    # Basic auth
    (re.compile(r"(Basic)\s+[A-Za-z0-9+/=]+"), r"\1 [REDACTED]"),
    # Secrets passed as query/form parameters
    (re.compile(
        r"(password|client_secret|access_token|refresh_token)=[^\s&\"']+",
        re.I,
    ), r"\1=[REDACTED]"),
]

REDACTED = "[REDACTED]"


# ── Public API ─────────────────────────────────────────────────────────────

def redact_dict(
    data: dict[str, Any],
    sensitive_keys: frozenset[str] | None = None,
    *,
    deep: bool = True,
) -> dict[str, Any]:
    """
    Return a copy of *data* with sensitive key values replaced by REDACTED.
    If *deep* is True, recurse into nested dicts and lists.
    """
    keys = sensitive_keys if sensitive_keys is not None else _SENSITIVE_KEYS
    result: dict[str, Any] = {}
    for k, v in data.items():
        if isinstance(k, str) and k.lower() in keys:
            result[k] = REDACTED
        elif deep and isinstance(v, dict):
            result[k] = redact_dict(v, keys, deep=True)
        elif deep and isinstance(v, list):
            result[k] = [
                redact_dict(item, keys, deep=True) if isinstance(item, dict) else item
                for item in v
            ]
        elif isinstance(v, str):
            result[k] = scrub_string(v)
        else:
            result[k] = v
    return result


def scrub_string(text: str) -> str:
    """Apply regex-based scrubbing to an arbitrary string."""
    for pattern, replacement in _PATTERNS:
        text = pattern.sub(replacement, text)
    return text


def structlog_redact_processor(
    logger: Any,
    method: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """
    structlog processor that redacts sensitive keys from the event dict.
    Add to the structlog processor chain before any serialisation step.
    """
    return redact_dict(event_dict)


__all__ = [
    "REDACTED",
    "redact_dict",
    "scrub_string",
    "structlog_redact_processor",
]
