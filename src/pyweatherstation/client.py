"""Async client for a single weather station."""

from __future__ import annotations

from typing import Any

import aiohttp

from pyweatherstation._api import device as _device_api
from pyweatherstation._api import locations as _locations_api
from pyweatherstation._api import weather as _weather_api
from pyweatherstation._transport import HttpTransport, Transport
from pyweatherstation.config import StationConfig
from pyweatherstation.exceptions import StationError
from pyweatherstation.models.device import DeviceStatus
from pyweatherstation.models.requests import HistoryRequest, LocationRequest
from pyweatherstation.models.weather import WeatherSnapshot


class WeatherStationClient:
    """Async client bound to one station base URL.

    Usage::

        async with WeatherStationClient(StationConfig(address="192.168.1.50")) as client:
            await client.ping()
            weather = await client.get_current_weather()

    When *session* is given the client borrows it and never closes it;
    the transport is ready immediately, without entering the context.
    """

    def __init__(
        self,
        config: StationConfig,
        *,
        session: aiohttp.ClientSession | None = None,
        transport: Transport | None = None,
    ) -> None:
        self._config = config
        self._external_session = session is not None
        self._http_session = session
        self._transport: Transport | None = transport
        if self._transport is None and session is not None:
            self._transport = HttpTransport(config, session)

    @property
    def config(self) -> StationConfig:
        return self._config

    @property
    def base_url(self) -> str:
        return self._config.base_url

    # ------------------------------------------------------------------
    # Context manager lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> WeatherStationClient:
        if self._transport is None:
            if self._http_session is None:
                self._http_session = aiohttp.ClientSession()
            self._transport = HttpTransport(self._config, self._http_session)
        return self

    async def __aexit__(self, *exc: Any) -> None:
        if not self._external_session and self._http_session is not None:
            await self._http_session.close()
            self._http_session = None
            self._transport = None

    def _require_transport(self) -> Transport:
        if self._transport is None:
            raise StationError("Client not initialized. Use 'async with WeatherStationClient(...) as client:'")
        return self._transport

    # ------------------------------------------------------------------
    # Endpoints
    # ------------------------------------------------------------------

    async def ping(self) -> str:
        """Liveness probe; returns the station's confirmation string."""
        return await _device_api.ping(self._require_transport())

    async def get_current_weather(self) -> WeatherSnapshot:
        return await _weather_api.fetch_current_weather(self._require_transport())

    async def get_weather_for_location(self, location: str) -> WeatherSnapshot:
        """Fetch the reading for *location* without changing the selection."""
        request = LocationRequest(location=location)
        return await _weather_api.fetch_location_weather(self._require_transport(), request.location)

    async def get_locations(self) -> list[str]:
        return await _locations_api.fetch_locations(self._require_transport())

    async def set_location(self, location: str) -> str:
        request = LocationRequest(location=location)
        return await _locations_api.set_location(self._require_transport(), request)

    async def get_history(self, hours: int | None = None) -> list[WeatherSnapshot]:
        """Fetch history for the last *hours* (default from config), oldest first."""
        request = HistoryRequest(hours=hours if hours is not None else self._config.history_hours)
        return await _weather_api.fetch_history(self._require_transport(), request)

    async def get_device_status(self) -> DeviceStatus:
        return await _device_api.fetch_device_status(self._require_transport())
