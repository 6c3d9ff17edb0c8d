"""Client configuration for pyweatherstation."""

from __future__ import annotations

import dataclasses
import os
from typing import Any

from pyweatherstation._constants import (
    DEFAULT_ADDRESS,
    DEFAULT_DEVICE_NAME,
    DEFAULT_HISTORY_HOURS,
    DEFAULT_POLL_INTERVAL,
    DEFAULT_REQUEST_TIMEOUT,
)


def _env_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    return default


@dataclasses.dataclass(frozen=True)
class StationConfig:
    """Client configuration.

    Parameters
    ----------
    address : str
        Station address on the local network (dotted-quad IPv4).
    port : int or None
        HTTP port. ``None`` uses the scheme default.
    scheme : str
        URL scheme, ``"http"`` for stock firmware.
    device_name : str
        Display name given to the target device.
    request_timeout : float
        Connect and read timeout in seconds for each request.
    poll_interval : float
        Seconds between periodic weather refreshes while connected.
    history_hours : int
        Default window for history requests.
    probe_on_poll : bool
        Re-check liveness with ``/ping`` on every poll tick before
        refreshing. When disabled the loop trusts the connected flag.
    """

    address: str = DEFAULT_ADDRESS
    port: int | None = None
    scheme: str = "http"
    device_name: str = DEFAULT_DEVICE_NAME
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT
    poll_interval: float = DEFAULT_POLL_INTERVAL
    history_hours: int = DEFAULT_HISTORY_HOURS
    probe_on_poll: bool = True

    @property
    def base_url(self) -> str:
        """Base URL without a trailing slash, e.g. ``http://192.168.1.50``."""
        host = self.address.strip()
        if self.port is not None:
            host = f"{host}:{self.port}"
        return f"{self.scheme}://{host}"

    def with_address(self, address: str) -> StationConfig:
        """Return a copy of this configuration bound to another address."""
        return dataclasses.replace(self, address=address)

    @classmethod
    def from_env(cls, **overrides: Any) -> StationConfig:
        """Create configuration from environment variables.

        Reads optional ``WEATHERSTATION_*`` variables. Explicit keyword
        arguments override environment values.
        """
        env = os.environ

        _ENV_STR_MAP = {
            "WEATHERSTATION_ADDRESS": "address",
            "WEATHERSTATION_SCHEME": "scheme",
            "WEATHERSTATION_DEVICE_NAME": "device_name",
        }
        config_kwargs: dict[str, Any] = {}
        for env_key, field_name in _ENV_STR_MAP.items():
            val = env.get(env_key)
            if val is not None:
                config_kwargs[field_name] = val

        # Numeric values, handled separately
        port_env = env.get("WEATHERSTATION_PORT")
        if port_env:
            config_kwargs["port"] = int(port_env)

        timeout_env = env.get("WEATHERSTATION_REQUEST_TIMEOUT")
        if timeout_env is not None:
            config_kwargs["request_timeout"] = float(timeout_env)

        interval_env = env.get("WEATHERSTATION_POLL_INTERVAL")
        if interval_env is not None:
            config_kwargs["poll_interval"] = float(interval_env)

        hours_env = env.get("WEATHERSTATION_HISTORY_HOURS")
        if hours_env is not None:
            config_kwargs["history_hours"] = int(hours_env)

        config_kwargs["probe_on_poll"] = _env_bool(env.get("WEATHERSTATION_PROBE_ON_POLL"), True)

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
