from __future__ import annotations

import socket
from typing import Any

import pytest
from aiohttp import test_utils, web

from pyweatherstation.client import WeatherStationClient
from pyweatherstation.config import StationConfig
from pyweatherstation.exceptions import (
    StationError,
    StationHttpError,
    StationServerError,
    StationTransportError,
)
from pyweatherstation.manager import DeviceSessionManager


def _envelope(data: Any, *, success: bool = True, message: str = "") -> dict[str, Any]:
    return {"success": success, "data": data, "message": message, "timestamp": 1771000000000}


def _station_app() -> web.Application:
    selected = {"location": "Garden"}

    async def ping(_request: web.Request) -> web.Response:
        return web.json_response(_envelope("pong"))

    async def weather(_request: web.Request) -> web.Response:
        return web.json_response(
            _envelope({"temperature": 21.5, "humidity": 44, "location": selected["location"], "weather_condition": "clear"})
        )

    async def location_weather(request: web.Request) -> web.Response:
        name = request.match_info["location"]
        return web.json_response(_envelope({"temperature": 7.0, "location": name}))

    async def locations(_request: web.Request) -> web.Response:
        return web.json_response(_envelope(["Garden", "Back Yard"]))

    async def set_location(request: web.Request) -> web.Response:
        body = await request.json()
        if body.get("location") not in {"Garden", "Back Yard"}:
            return web.json_response(_envelope(None, success=False, message="unknown location"))
        selected["location"] = body["location"]
        return web.json_response(_envelope(f"Location set to {body['location']}"))

    async def history(request: web.Request) -> web.Response:
        hours = int(request.query.get("hours", "24"))
        return web.json_response(_envelope([{"temperature": float(i), "timestamp": 1771000000000 + i} for i in range(hours)]))

    async def status(_request: web.Request) -> web.Response:
        return web.json_response(_envelope(None, success=False, message="status unavailable"), status=500)

    app = web.Application()
    app.router.add_get("/ping", ping)
    app.router.add_get("/weather", weather)
    app.router.add_get("/weather/{location}", location_weather)
    app.router.add_get("/locations", locations)
    app.router.add_post("/location", set_location)
    app.router.add_get("/history", history)
    app.router.add_get("/status", status)
    return app


def _unused_port() -> int:
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind(("127.0.0.1", 0))
        return int(sock.getsockname()[1])


@pytest.mark.asyncio
async def test_client_against_local_station() -> None:
    async with test_utils.TestServer(_station_app(), host="127.0.0.1") as server:
        config = StationConfig(address="127.0.0.1", port=server.port)
        async with WeatherStationClient(config) as client:
            assert await client.ping() == "pong"

            weather = await client.get_current_weather()
            assert weather.temperature == pytest.approx(21.5)
            assert weather.location == "Garden"

            assert await client.get_locations() == ["Garden", "Back Yard"]
            assert await client.set_location("Back Yard") == "Location set to Back Yard"

            other = await client.get_weather_for_location("Back Yard")
            assert other.location == "Back Yard"

            history = await client.get_history(3)
            assert [item.temperature for item in history] == [0.0, 1.0, 2.0]

            with pytest.raises(StationServerError, match="unknown location"):
                await client.set_location("Moon")

            with pytest.raises(StationHttpError) as exc_info:
                await client.get_device_status()
            assert exc_info.value.status_code == 500
            assert exc_info.value.server_message == "status unavailable"


@pytest.mark.asyncio
async def test_unknown_route_is_http_failure() -> None:
    app = web.Application()
    async with test_utils.TestServer(app, host="127.0.0.1") as server:
        async with WeatherStationClient(StationConfig(address="127.0.0.1", port=server.port)) as client:
            with pytest.raises(StationHttpError) as exc_info:
                await client.ping()

    assert exc_info.value.status_code == 404


@pytest.mark.asyncio
async def test_connection_refused_is_transport_failure() -> None:
    config = StationConfig(address="127.0.0.1", port=_unused_port(), request_timeout=2.0)

    async with WeatherStationClient(config) as client:
        with pytest.raises(StationTransportError) as exc_info:
            await client.ping()

    assert exc_info.value.endpoint == "/ping"
    assert str(exc_info.value).startswith("Request to /ping failed")


@pytest.mark.asyncio
async def test_client_requires_context_without_session() -> None:
    client = WeatherStationClient(StationConfig())

    with pytest.raises(StationError, match="not initialized"):
        await client.ping()


@pytest.mark.asyncio
@pytest.mark.e2e
async def test_session_manager_against_local_station() -> None:
    async with test_utils.TestServer(_station_app(), host="127.0.0.1") as server:
        config = StationConfig(port=server.port, poll_interval=3600.0)
        async with DeviceSessionManager(config) as manager:
            manager.set_target("127.0.0.1")
            await manager.wait_idle()

            assert manager.state.is_connected is True
            assert manager.state.current_weather is not None
            assert manager.state.current_weather.temperature == pytest.approx(21.5)
            assert manager.state.available_locations == ("Garden", "Back Yard")
            assert manager.state.error_message is None

            manager.select_location("Back Yard")
            await manager.wait_idle()
            assert manager.state.selected_location == "Back Yard"
            assert manager.state.current_weather.location == "Back Yard"

            manager.fetch_status()
            await manager.wait_idle()
            assert manager.state.error_message == "Failed to get device status: HTTP 500: status unavailable"
            assert manager.state.device_status is None
