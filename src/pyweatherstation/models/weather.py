"""Weather snapshot model."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

from pydantic import AliasChoices, Field, model_validator

from pyweatherstation._normalize import normalize_timestamp_ms, now_ms
from pyweatherstation.models._base import StationBaseModel

UNKNOWN_CONDITION = "Unknown"

_TIMESTAMP_KEYS = ("timestamp", "observedAt", "observed_at")


def infer_condition(temperature: float, humidity: float, pressure: float | None = None) -> str:
    """Guess a condition label from raw sensor readings.

    Stations without a condition sensor report ``"Unknown"``; this gives
    the display something better to show.
    """
    if humidity > 85 and temperature < 10:
        return "fog"
    if humidity > 80:
        return "rain"
    if humidity < 30 and temperature > 25:
        return "sunny"
    if 30 <= humidity <= 60:
        return "clear"
    if pressure is not None and pressure < 1010:
        return "cloudy"
    return "partly cloudy"


class WeatherSnapshot(StationBaseModel):
    """One point-in-time weather reading.

    Parameters
    ----------
    temperature : float
        Air temperature in °C.
    humidity : float
        Relative humidity in %.
    pressure : float
        Barometric pressure in hPa.
    location : str
        Location label configured on the station.
    observed_at : int
        Epoch milliseconds of the reading. Defaults to *now* when the
        station sends no usable timestamp.
    condition : str
        Condition label (``weather_condition`` on the wire).
    wind_speed : float
        Wind speed.
    wind_direction : str
        Compass direction, e.g. ``"NE"``.
    uv_index : float
        UV index.
    visibility : float
        Visibility.
    raw : dict
        Original payload.
    """

    temperature: float = 0.0
    humidity: float = 0.0
    pressure: float = 0.0
    location: str = ""
    observed_at: int = Field(default_factory=now_ms)
    condition: str = Field(
        default=UNKNOWN_CONDITION,
        validation_alias=AliasChoices("weather_condition", "weatherCondition", "condition"),
    )
    wind_speed: float = 0.0
    wind_direction: str = "N"
    uv_index: float = 0.0
    visibility: float = 0.0

    @model_validator(mode="before")
    @classmethod
    def _normalize_observed_at(cls, values: Any) -> Any:
        if not isinstance(values, dict):
            return values
        working = dict(values)
        working.setdefault("raw", dict(values))
        found: int | None = None
        for key in _TIMESTAMP_KEYS:
            if key in working:
                candidate = normalize_timestamp_ms(working.pop(key))
                if found is None:
                    found = candidate
        if found is not None:
            working["observed_at"] = found
        return working

    @property
    def observed_datetime(self) -> datetime:
        """``observed_at`` as a timezone-aware UTC datetime."""
        return datetime.fromtimestamp(self.observed_at / 1000, tz=UTC)

    @property
    def effective_condition(self) -> str:
        """Reported condition, or one inferred from the readings."""
        if self.condition and self.condition != UNKNOWN_CONDITION:
            return self.condition
        return infer_condition(self.temperature, self.humidity, self.pressure)
