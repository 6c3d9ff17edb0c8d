"""HTTP transport for the station REST API."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Protocol

import aiohttp

from pyweatherstation._constants import USER_AGENT
from pyweatherstation.config import StationConfig
from pyweatherstation.exceptions import StationTransportError

_logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class RawResponse:
    """Status line and body of a completed HTTP exchange."""

    status: int
    text: str
    reason: str = ""
    endpoint: str = ""

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300


class Transport(Protocol):
    """Structural transport interface used by endpoint modules.

    Having a protocol here makes it easy to pass test doubles while
    keeping the production implementation (`HttpTransport`) concrete.
    """

    async def request(
        self,
        method: str,
        endpoint: str,
        *,
        params: Mapping[str, Any] | None = None,
        json_body: Mapping[str, Any] | None = None,
    ) -> RawResponse:
        ...


class HttpTransport:
    """aiohttp-backed transport bound to a single station base URL."""

    def __init__(self, config: StationConfig, http_session: aiohttp.ClientSession) -> None:
        self._base_url = config.base_url
        self._http = http_session
        self._timeout = aiohttp.ClientTimeout(
            total=None,
            sock_connect=config.request_timeout,
            sock_read=config.request_timeout,
        )

    @property
    def base_url(self) -> str:
        return self._base_url

    async def request(
        self,
        method: str,
        endpoint: str,
        *,
        params: Mapping[str, Any] | None = None,
        json_body: Mapping[str, Any] | None = None,
    ) -> RawResponse:
        """Perform one request and return the raw status and body.

        Only failures that prevent a response from arriving are raised
        here; status and envelope classification belong to the decoder.
        """
        url = f"{self._base_url}{endpoint}"
        headers = {
            "accept": "application/json",
            "user-agent": USER_AGENT,
        }

        _logger.debug("%s %s params=%s", method, url, dict(params) if params else None)

        try:
            async with self._http.request(
                method,
                url,
                params=dict(params) if params else None,
                json=dict(json_body) if json_body is not None else None,
                headers=headers,
                timeout=self._timeout,
            ) as resp:
                text = await resp.text()
                return RawResponse(
                    status=resp.status,
                    text=text,
                    reason=resp.reason or "",
                    endpoint=endpoint,
                )
        except TimeoutError as exc:
            raise StationTransportError(
                f"Request to {endpoint} timed out",
                endpoint=endpoint,
            ) from exc
        except aiohttp.ClientError as exc:
            raise StationTransportError(
                f"Request to {endpoint} failed: {exc}",
                endpoint=endpoint,
            ) from exc
        except UnicodeDecodeError as exc:
            raise StationTransportError(
                f"Undecodable response from {endpoint}",
                endpoint=endpoint,
            ) from exc
