"""Pydantic request models for session and client entrypoints.

These models provide a consistent "validate → normalize → execute" flow.
Validation happens synchronously in the caller's frame, before any
request is scheduled.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

from pyweatherstation._constants import DEFAULT_HISTORY_HOURS


def is_valid_address(address: str) -> bool:
    """Return True for a dotted-quad IPv4 address with octets 0-255."""
    if not address or not address.strip():
        return False
    parts = address.split(".")
    if len(parts) != 4:
        return False
    for part in parts:
        if not part or not (part.isascii() and part.isdigit()):
            return False
        if int(part) > 255:
            return False
    return True


class _RequestModel(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        validate_default=True,
        str_strip_whitespace=True,
    )


class TargetRequest(_RequestModel):
    """Request to point the session at another station."""

    address: str

    @field_validator("address")
    @classmethod
    def _address_is_ipv4(cls, value: str) -> str:
        if not is_valid_address(value):
            raise ValueError(f"not a valid IPv4 address: {value!r}")
        return value


class LocationRequest(_RequestModel):
    """Body of ``POST /location``."""

    location: str

    @field_validator("location")
    @classmethod
    def _location_non_empty(cls, value: str) -> str:
        if not value:
            raise ValueError("location must be non-empty")
        return value


class HistoryRequest(_RequestModel):
    """Query of ``GET /history``."""

    hours: int = Field(default=DEFAULT_HISTORY_HOURS, ge=1)
