"""Authentication outcome and profile normalization."""
from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any


def coerce_profile_value(value: Any) -> str | None:
    """Turn a decoded JSON value into the string stored in a profile.

    Empty values map to ``None`` so callers can skip them.
    """
    if value is None or value == "":
        return None
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    return json.dumps(value, separators=(",", ":"), default=str)


def add_item_if_not_empty(profile: dict[str, str], key: str, value: Any) -> None:
    """Store ``value`` under ``key`` unless it is empty."""
    if key is None:
        raise ValueError("key must not be None")
    coerced = coerce_profile_value(value)
    if coerced is not None:
        profile[key] = coerced


@dataclass(frozen=True)
class AuthenticationResult:
    """Outcome of a completed login.

    On failure every identity field is ``None``. ``error`` keeps the internal
    cause for logging; it is not part of the public outcome.
    """

    is_successful: bool
    provider: str | None = None
    provider_user_id: str | None = None
    user_name: str | None = None
    extra_data: dict[str, str] = field(default_factory=dict)
    error: Exception | None = field(default=None, compare=False, repr=False)

    @classmethod
    def success(
        cls,
        provider: str,
        provider_user_id: str,
        user_name: str,
        extra_data: dict[str, str],
    ) -> AuthenticationResult:
        return cls(
            is_successful=True,
            provider=provider,
            provider_user_id=provider_user_id,
            user_name=user_name,
            extra_data=extra_data,
        )

    @classmethod
    def failed(cls, error: Exception | None = None) -> AuthenticationResult:
        return cls(is_successful=False, error=error)
