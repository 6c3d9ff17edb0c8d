"""Session state snapshot."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from pyweatherstation.models.device import DeviceStatus, DeviceTarget
from pyweatherstation.models.weather import WeatherSnapshot


class SessionState(BaseModel):
    """Everything a display layer needs to render a station session.

    ``None`` means "not known yet": no reading, no target, no status.
    The model is frozen; every change produces a new instance.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    current_weather: WeatherSnapshot | None = None
    history: tuple[WeatherSnapshot, ...] = ()
    available_locations: tuple[str, ...] = ()
    selected_location: str = ""
    device: DeviceTarget | None = None
    device_status: DeviceStatus | None = None
    is_loading: bool = False
    is_refreshing: bool = False
    error_message: str | None = None

    @property
    def is_connected(self) -> bool:
        return self.device is not None and self.device.connected
