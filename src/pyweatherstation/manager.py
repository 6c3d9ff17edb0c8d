"""Session manager for one weather station.

Owns the connection target, the observable :class:`SessionState`, and the
periodic polling loop. Public commands are fire-and-observe: they validate
their arguments synchronously, schedule the network work on the running
event loop and return ``None``. Callers watch the state store for results.

Every piece of scheduled work captures the current *generation* when it
starts. Changing the target or closing the manager bumps the generation,
so results that arrive for a previous target are discarded instead of
being applied to the new one.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Coroutine
from typing import Any

import aiohttp
from pydantic import ValidationError

from pyweatherstation._normalize import now_ms
from pyweatherstation.client import WeatherStationClient
from pyweatherstation.config import StationConfig
from pyweatherstation.exceptions import StationAddressError, StationError
from pyweatherstation.models.device import DeviceTarget
from pyweatherstation.models.requests import HistoryRequest, LocationRequest, TargetRequest
from pyweatherstation.state.models import SessionState
from pyweatherstation.state.store import StateListener, StateStore

_logger = logging.getLogger(__name__)


class DeviceSessionManager:
    """Keeps a :class:`SessionState` in sync with one station.

    Usage::

        async with DeviceSessionManager(StationConfig.from_env()) as manager:
            manager.subscribe(render)
            manager.set_target("192.168.1.50")
            ...

    All commands must be called from inside the running event loop.
    """

    def __init__(
        self,
        config: StationConfig | None = None,
        *,
        store: StateStore | None = None,
        http_session: aiohttp.ClientSession | None = None,
        clock: Callable[[], int] = now_ms,
    ) -> None:
        self._config = config if config is not None else StationConfig()
        self._store = store if store is not None else StateStore()
        self._external_session = http_session is not None
        self._http_session = http_session
        self._clock = clock
        self._client: WeatherStationClient | None = None
        self._generation = 0
        self._poll_task: asyncio.Task[None] | None = None
        self._tasks: set[asyncio.Task[None]] = set()

    # ------------------------------------------------------------------
    # Context manager lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> DeviceSessionManager:
        return self

    async def __aexit__(self, *exc: Any) -> None:
        await self.close()

    async def close(self) -> None:
        """Stop polling, cancel in-flight work and release the HTTP session.

        Cancelled requests never apply their results.
        """
        self._generation += 1
        poll_task = self._poll_task
        self._cancel_polling()
        pending = list(self._tasks)
        if poll_task is not None:
            pending.append(poll_task)
        for task in pending:
            task.cancel()
        if pending:
            await asyncio.gather(*pending, return_exceptions=True)
        self._client = None
        if not self._external_session and self._http_session is not None:
            await self._http_session.close()
            self._http_session = None

    async def wait_idle(self) -> None:
        """Wait until every scheduled command (not the polling loop) has finished."""
        while True:
            pending = [task for task in self._tasks if not task.done()]
            if not pending:
                return
            await asyncio.gather(*pending, return_exceptions=True)

    # ------------------------------------------------------------------
    # Observation
    # ------------------------------------------------------------------

    @property
    def state(self) -> SessionState:
        return self._store.state

    @property
    def store(self) -> StateStore:
        return self._store

    @property
    def client(self) -> WeatherStationClient | None:
        """Client bound to the current target, ``None`` before the first target."""
        return self._client

    @property
    def is_polling(self) -> bool:
        return self._poll_task is not None and not self._poll_task.done()

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        return self._store.subscribe(listener)

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def start(self) -> None:
        """Connect to the station named in the configuration."""
        self.set_target(self._config.address)

    def set_target(self, address: str) -> None:
        """Point the session at *address* and check connectivity.

        Raises :class:`StationAddressError` for anything but a dotted-quad
        IPv4 address, and :class:`RuntimeError` outside a running event loop;
        the state is left untouched in both cases.
        """
        try:
            request = TargetRequest(address=address)
        except ValidationError as exc:
            raise StationAddressError(f"Invalid station address: {address!r}", address=address) from exc
        # Raises outside a running loop before anything is mutated.
        asyncio.get_running_loop()

        self._cancel_polling()
        self._generation += 1
        config = self._config.with_address(request.address)
        self._client = WeatherStationClient(config, session=self._ensure_http_session())
        _logger.debug("Target set to %s (generation %d)", config.base_url, self._generation)

        self._store.update(
            device=DeviceTarget(address=request.address, name=config.device_name),
            is_loading=True,
            is_refreshing=False,
        )
        self.check_connectivity()

    def check_connectivity(self) -> None:
        """Probe the station; on success start polling and load initial data."""
        self._spawn(self._check_connectivity)

    def refresh_current(self) -> None:
        self._spawn(self._refresh_current)

    def refresh_locations(self) -> None:
        self._spawn(self._refresh_locations)

    def select_location(self, name: str) -> None:
        """Ask the station to report on *name*, then refresh the reading."""
        request = LocationRequest(location=name)
        self._spawn(self._select_location, request)

    def load_history(self, hours: int | None = None) -> None:
        """Load the last *hours* of readings (default from config)."""
        request = HistoryRequest(hours=hours if hours is not None else self._config.history_hours)
        self._spawn(self._load_history, request)

    def fetch_status(self) -> None:
        self._spawn(self._fetch_status)

    def dismiss_error(self) -> None:
        self._store.update(error_message=None)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _ensure_http_session(self) -> aiohttp.ClientSession:
        if self._http_session is None:
            self._http_session = aiohttp.ClientSession()
        return self._http_session

    def _spawn(self, fn: Callable[..., Coroutine[Any, Any, None]], *args: Any) -> None:
        loop = asyncio.get_running_loop()
        task = loop.create_task(fn(*args))
        self._tasks.add(task)
        task.add_done_callback(self._on_task_done)

    def _on_task_done(self, task: asyncio.Task[None]) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            _logger.error("Session task failed", exc_info=exc)

    def _current(self) -> tuple[WeatherStationClient | None, int]:
        return self._client, self._generation

    def _is_stale(self, generation: int, what: str, exc: BaseException | None = None) -> bool:
        if exc is not None and not isinstance(exc, StationError):
            _logger.warning("Unexpected %s failure", what, exc_info=exc)
        if generation != self._generation:
            _logger.debug("Discarding %s result for a previous target", what)
            return True
        return False

    def _device_with(self, **changes: Any) -> DeviceTarget | None:
        device = self._store.state.device
        if device is None:
            return None
        return device.model_copy(update=changes)

    # ------------------------------------------------------------------
    # Polling
    # ------------------------------------------------------------------

    def _start_polling(self, generation: int) -> None:
        self._cancel_polling()
        task = asyncio.get_running_loop().create_task(self._poll_loop(generation))
        task.add_done_callback(self._on_task_done)
        self._poll_task = task

    def _cancel_polling(self) -> None:
        task = self._poll_task
        self._poll_task = None
        if task is not None and not task.done():
            task.cancel()

    async def _poll_loop(self, generation: int) -> None:
        interval = self._config.poll_interval
        _logger.debug("Polling every %.1fs (generation %d)", interval, generation)
        while True:
            await asyncio.sleep(interval)
            if generation != self._generation:
                break
            if not self._store.state.is_connected:
                _logger.debug("Station disconnected; polling stopped")
                break
            if self._config.probe_on_poll and not await self._probe(generation):
                break
            await self._refresh_current()

    async def _probe(self, generation: int) -> bool:
        """Re-check liveness on a poll tick. Returns False when polling should stop."""
        client = self._client
        if client is None:
            return False
        try:
            await client.ping()
        except Exception as exc:
            if self._is_stale(generation, "probe", exc):
                return False
            _logger.debug("Poll probe failed: %s", exc)
            self._store.update(
                device=self._device_with(connected=False),
                error_message=f"Connection failed: {exc}",
            )
            return False
        if self._is_stale(generation, "probe"):
            return False
        self._store.update(device=self._device_with(last_seen_at=self._clock()))
        return True

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    async def _check_connectivity(self) -> None:
        client, generation = self._current()
        if client is None:
            return
        self._store.update(is_loading=True, error_message=None)
        try:
            await client.ping()
        except Exception as exc:
            if self._is_stale(generation, "ping", exc):
                return
            self._store.update(
                device=self._device_with(connected=False),
                is_loading=False,
                error_message=f"Connection failed: {exc}",
            )
            return
        if self._is_stale(generation, "ping"):
            return
        self._store.update(
            device=self._device_with(connected=True, last_seen_at=self._clock()),
            is_loading=False,
        )
        self._start_polling(generation)
        self.refresh_current()
        self.refresh_locations()

    async def _refresh_current(self) -> None:
        client, generation = self._current()
        if client is None:
            return
        self._store.update(is_refreshing=True, error_message=None)
        try:
            weather = await client.get_current_weather()
        except asyncio.CancelledError:
            if generation == self._generation:
                self._store.update(is_refreshing=False)
            raise
        except Exception as exc:
            if self._is_stale(generation, "weather", exc):
                return
            self._store.update(
                is_refreshing=False,
                error_message=f"Failed to refresh weather data: {exc}",
            )
            return
        if self._is_stale(generation, "weather"):
            return
        self._store.update(current_weather=weather, is_refreshing=False)

    async def _refresh_locations(self) -> None:
        client, generation = self._current()
        if client is None:
            return
        try:
            locations = await client.get_locations()
        except Exception as exc:
            if self._is_stale(generation, "locations", exc):
                return
            self._store.update(error_message=f"Failed to load locations: {exc}")
            return
        if self._is_stale(generation, "locations"):
            return
        self._store.update(available_locations=tuple(locations))

    async def _select_location(self, request: LocationRequest) -> None:
        client, generation = self._current()
        if client is None:
            return
        self._store.update(is_loading=True, error_message=None)
        try:
            await client.set_location(request.location)
        except Exception as exc:
            if self._is_stale(generation, "set-location", exc):
                return
            self._store.update(
                is_loading=False,
                error_message=f"Failed to set location: {exc}",
            )
            return
        if self._is_stale(generation, "set-location"):
            return
        self._store.update(selected_location=request.location, is_loading=False)
        self.refresh_current()

    async def _load_history(self, request: HistoryRequest) -> None:
        client, generation = self._current()
        if client is None:
            return
        try:
            history = await client.get_history(request.hours)
        except Exception as exc:
            if self._is_stale(generation, "history", exc):
                return
            self._store.update(error_message=f"Failed to load weather history: {exc}")
            return
        if self._is_stale(generation, "history"):
            return
        self._store.update(history=tuple(history))

    async def _fetch_status(self) -> None:
        client, generation = self._current()
        if client is None:
            return
        try:
            status = await client.get_device_status()
        except Exception as exc:
            if self._is_stale(generation, "status", exc):
                return
            self._store.update(error_message=f"Failed to get device status: {exc}")
            return
        if self._is_stale(generation, "status"):
            return
        self._store.update(device_status=status)
