#!/usr/bin/env python3
"""Watch a weather station from the terminal.

Connects to a station, prints every session state change as one line,
and keeps polling until interrupted.

Usage
-----
::

    python scripts/watch_station.py 192.168.1.50
    WEATHERSTATION_ADDRESS=192.168.1.50 python scripts/watch_station.py

Options::

    --port PORT          HTTP port (default: 80)
    --interval SECONDS   Poll interval (default: 30)
    --history HOURS      Also load this many hours of history once connected
    --status             Also fetch device status once connected
    --location NAME      Select this location once connected
    --verbose, -v        Debug logging
"""

from __future__ import annotations

import argparse
import asyncio
import contextlib
import logging
import signal
import sys
from datetime import datetime
from pathlib import Path
from typing import Any

# Allow running from the repo root without installing the package.
_repo = Path(__file__).resolve().parent.parent
_src = _repo / "src"
if _src.is_dir():
    sys.path.insert(0, str(_src))

from pyweatherstation import DeviceSessionManager, SessionState, StationAddressError, StationConfig  # noqa: E402


def _format_state(state: SessionState) -> str:
    parts: list[str] = []
    device = state.device
    if device is None:
        parts.append("no target")
    else:
        parts.append(f"{device.address} {'online' if device.connected else 'offline'}")
    if state.is_loading:
        parts.append("loading")
    if state.is_refreshing:
        parts.append("refreshing")
    weather = state.current_weather
    if weather is not None:
        observed = datetime.fromtimestamp(weather.observed_at / 1000).strftime("%H:%M:%S")
        parts.append(
            f"{weather.location or '?'}: {weather.temperature:.1f}°C {weather.humidity:.0f}% "
            f"{weather.pressure:.1f}hPa {weather.effective_condition} @ {observed}"
        )
    if state.history:
        parts.append(f"history={len(state.history)}")
    status = state.device_status
    if status is not None:
        parts.append(f"fw {status.firmware_version} rssi {status.wifi_signal_strength}dBm up {status.uptime}")
    if state.error_message:
        parts.append(f"ERROR {state.error_message}")
    return " | ".join(parts)


async def _run(args: argparse.Namespace) -> int:
    overrides: dict[str, Any] = {}
    if args.port is not None:
        overrides["port"] = args.port
    if args.interval is not None:
        overrides["poll_interval"] = args.interval
    config = StationConfig.from_env(**overrides)

    stop = asyncio.Event()
    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        with contextlib.suppress(NotImplementedError):
            loop.add_signal_handler(sig, stop.set)

    async with DeviceSessionManager(config) as manager:
        manager.subscribe(lambda state: print(_format_state(state), flush=True))
        try:
            manager.set_target(args.address or config.address)
        except StationAddressError as exc:
            print(exc, file=sys.stderr)
            return 2
        await manager.wait_idle()

        if manager.state.is_connected:
            if args.location:
                manager.select_location(args.location)
            if args.history:
                manager.load_history(args.history)
            if args.status:
                manager.fetch_status()
            await manager.wait_idle()

        await stop.wait()
    return 0


def main() -> int:
    parser = argparse.ArgumentParser(description="Watch an ESP32 weather station.")
    parser.add_argument("address", nargs="?", help="Station IPv4 address (default: WEATHERSTATION_ADDRESS)")
    parser.add_argument("--port", type=int, help="HTTP port")
    parser.add_argument("--interval", type=float, help="Poll interval in seconds")
    parser.add_argument("--history", type=int, help="Load this many hours of history once connected")
    parser.add_argument("--status", action="store_true", help="Fetch device status once connected")
    parser.add_argument("--location", help="Select this location once connected")
    parser.add_argument("--verbose", "-v", action="store_true")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    return asyncio.run(_run(args))


if __name__ == "__main__":
    sys.exit(main())
