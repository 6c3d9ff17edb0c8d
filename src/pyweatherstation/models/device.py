"""Device target and device status models."""

from __future__ import annotations

from datetime import timedelta

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from pyweatherstation._constants import DEFAULT_DEVICE_NAME
from pyweatherstation.models._base import StationBaseModel


class DeviceTarget(BaseModel):
    """The station the session is pointed at.

    Parameters
    ----------
    address : str
        Network address of the station.
    name : str
        Display name.
    connected : bool
        Whether the last liveness probe succeeded.
    last_seen_at : int
        Epoch milliseconds of the last successful probe, ``0`` if never.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        str_strip_whitespace=True,
    )

    address: str
    name: str = DEFAULT_DEVICE_NAME
    connected: bool = False
    last_seen_at: int = 0


class DeviceStatus(StationBaseModel):
    """Station health as reported by ``/status``.

    Parameters
    ----------
    uptime_ms : int
        Milliseconds since boot (``uptime`` on the wire).
    free_memory : int
        Free heap in bytes.
    wifi_signal_strength : int
        Wi-Fi RSSI in dBm.
    firmware_version : str
        Firmware version string.
    battery_level : float or None
        Battery charge in %, ``None`` for mains-powered stations.
    """

    uptime_ms: int = Field(validation_alias=AliasChoices("uptime", "uptimeMs", "uptime_ms"))
    free_memory: int
    wifi_signal_strength: int
    firmware_version: str
    battery_level: float | None = None

    @field_validator("firmware_version", mode="before")
    @classmethod
    def _coerce_firmware_version(cls, value: object) -> object:
        # Some firmware builds report the version as a bare number.
        if isinstance(value, (int, float)):
            return str(value)
        return value

    @property
    def uptime(self) -> timedelta:
        return timedelta(milliseconds=self.uptime_ms)
