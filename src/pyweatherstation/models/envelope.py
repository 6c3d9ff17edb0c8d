"""Wire envelope wrapping every station response."""

from __future__ import annotations

from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, field_validator

from pyweatherstation._normalize import safe_int

T = TypeVar("T")


class Envelope(BaseModel, Generic[T]):
    """``{success, data, message, timestamp}`` wrapper.

    Parameters
    ----------
    success : bool
        Whether the station handled the request.
    data : T or None
        Payload; absent on failure and for some acknowledgements.
    message : str
        Human-readable status from the station.
    timestamp : int or None
        Server-side timestamp, if the firmware sends one.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    success: bool
    data: T | None = None
    message: str = ""
    timestamp: int | None = None

    @field_validator("message", mode="before")
    @classmethod
    def _coerce_message(cls, value: Any) -> str:
        if value is None:
            return ""
        return str(value)

    @field_validator("timestamp", mode="before")
    @classmethod
    def _coerce_timestamp(cls, value: Any) -> int | None:
        return safe_int(value)
