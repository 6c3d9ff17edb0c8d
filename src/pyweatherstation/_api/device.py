"""Liveness and device health endpoints."""

from __future__ import annotations

from pyweatherstation._api._common import get_json
from pyweatherstation._constants import PING_ENDPOINT, STATUS_ENDPOINT
from pyweatherstation._transport import Transport
from pyweatherstation.models.device import DeviceStatus


async def ping(transport: Transport) -> str:
    return await get_json(transport, PING_ENDPOINT, str)


async def fetch_device_status(transport: Transport) -> DeviceStatus:
    return await get_json(transport, STATUS_ENDPOINT, DeviceStatus)
