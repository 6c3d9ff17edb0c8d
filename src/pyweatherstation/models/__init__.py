"""Data models for station payloads."""

from pyweatherstation.models._base import StationBaseModel
from pyweatherstation.models.device import DeviceStatus, DeviceTarget
from pyweatherstation.models.envelope import Envelope
from pyweatherstation.models.requests import HistoryRequest, LocationRequest, TargetRequest, is_valid_address
from pyweatherstation.models.weather import UNKNOWN_CONDITION, WeatherSnapshot, infer_condition

__all__ = [
    "DeviceStatus",
    "DeviceTarget",
    "Envelope",
    "HistoryRequest",
    "LocationRequest",
    "StationBaseModel",
    "TargetRequest",
    "UNKNOWN_CONDITION",
    "WeatherSnapshot",
    "infer_condition",
    "is_valid_address",
]
