"""Shared helpers for station endpoint modules.

It is internal to pyweatherstation and may change at any time.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, TypeVar

from pyweatherstation._api._envelope import decode_envelope
from pyweatherstation._transport import Transport

T = TypeVar("T")


async def get_json(
    transport: Transport,
    endpoint: str,
    payload_type: type[T] | Any,
    *,
    params: Mapping[str, Any] | None = None,
) -> T:
    """GET *endpoint* and return its decoded payload."""
    response = await transport.request("GET", endpoint, params=params)
    return decode_envelope(response, payload_type)


async def post_json(
    transport: Transport,
    endpoint: str,
    body: Mapping[str, Any],
    payload_type: type[T] | Any,
) -> T:
    """POST a JSON *body* to *endpoint* and return its decoded payload."""
    response = await transport.request("POST", endpoint, json_body=body)
    return decode_envelope(response, payload_type)
