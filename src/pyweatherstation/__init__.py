"""pyweatherstation - Async Python client for ESP32 weather stations."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pyweatherstation")
except PackageNotFoundError:
    __version__ = "0+local"
from pyweatherstation.client import WeatherStationClient
from pyweatherstation.config import StationConfig
from pyweatherstation.exceptions import (
    StationAddressError,
    StationConfigError,
    StationEmptyPayloadError,
    StationError,
    StationHttpError,
    StationServerError,
    StationTransportError,
)
from pyweatherstation.manager import DeviceSessionManager
from pyweatherstation.models import (
    DeviceStatus,
    DeviceTarget,
    Envelope,
    WeatherSnapshot,
    infer_condition,
    is_valid_address,
)
from pyweatherstation.state import SessionState, StateStore

__all__ = [
    "__version__",
    "DeviceSessionManager",
    "DeviceStatus",
    "DeviceTarget",
    "Envelope",
    "SessionState",
    "StateStore",
    "StationAddressError",
    "StationConfig",
    "StationConfigError",
    "StationEmptyPayloadError",
    "StationError",
    "StationHttpError",
    "StationServerError",
    "StationTransportError",
    "WeatherSnapshot",
    "WeatherStationClient",
    "infer_condition",
    "is_valid_address",
]
