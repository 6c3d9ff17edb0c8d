"""Weather reading endpoints."""

from __future__ import annotations

from urllib.parse import quote

from pyweatherstation._api._common import get_json
from pyweatherstation._constants import HISTORY_ENDPOINT, WEATHER_ENDPOINT
from pyweatherstation._transport import Transport
from pyweatherstation.models.requests import HistoryRequest
from pyweatherstation.models.weather import WeatherSnapshot


async def fetch_current_weather(transport: Transport) -> WeatherSnapshot:
    """Fetch the reading for the station's selected location."""
    return await get_json(transport, WEATHER_ENDPOINT, WeatherSnapshot)


async def fetch_location_weather(transport: Transport, location: str) -> WeatherSnapshot:
    """Fetch the reading for a named location."""
    endpoint = f"{WEATHER_ENDPOINT}/{quote(location, safe='')}"
    return await get_json(transport, endpoint, WeatherSnapshot)


async def fetch_history(transport: Transport, request: HistoryRequest) -> list[WeatherSnapshot]:
    """Fetch readings for the last ``request.hours`` hours, oldest first."""
    return await get_json(
        transport,
        HISTORY_ENDPOINT,
        list[WeatherSnapshot],
        params={"hours": request.hours},
    )
