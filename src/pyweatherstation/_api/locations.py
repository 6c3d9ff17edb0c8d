"""Location listing and selection endpoints."""

from __future__ import annotations

from pyweatherstation._api._common import get_json, post_json
from pyweatherstation._constants import LOCATIONS_ENDPOINT, SET_LOCATION_ENDPOINT
from pyweatherstation._transport import Transport
from pyweatherstation.models.requests import LocationRequest


async def fetch_locations(transport: Transport) -> list[str]:
    return await get_json(transport, LOCATIONS_ENDPOINT, list[str])


async def set_location(transport: Transport, request: LocationRequest) -> str:
    """Select the location the station reports on; returns its confirmation."""
    return await post_json(
        transport,
        SET_LOCATION_ENDPOINT,
        request.model_dump(),
        str,
    )
