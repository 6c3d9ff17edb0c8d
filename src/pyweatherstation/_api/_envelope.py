"""Envelope decoding: classify a raw response into a payload or an error.

Rules, applied in order:

1. transport failure (raised by the transport before we get here)
2. non-2xx HTTP status           -> :class:`StationHttpError`
3. ``success: false``            -> :class:`StationServerError`
4. ``success: true`` and no data -> :class:`StationEmptyPayloadError`
5. payload validated into the requested type

A body that is not JSON, not an envelope, or whose payload does not
validate is a :class:`StationTransportError`. Nothing here retries.
"""

from __future__ import annotations

import json
from typing import Any, TypeVar

from pydantic import TypeAdapter, ValidationError

from pyweatherstation._transport import RawResponse
from pyweatherstation.exceptions import (
    StationEmptyPayloadError,
    StationHttpError,
    StationServerError,
    StationTransportError,
)
from pyweatherstation.models.envelope import Envelope

T = TypeVar("T")


def _server_message(response: RawResponse) -> str:
    """Best-effort message from an error body, falling back to the reason phrase."""
    try:
        body = json.loads(response.text)
    except (json.JSONDecodeError, TypeError):
        body = None
    if isinstance(body, dict):
        message = body.get("message")
        if isinstance(message, str) and message:
            return message
    return response.reason or response.text[:200]


def _parse_envelope(response: RawResponse) -> Envelope[Any]:
    endpoint = response.endpoint
    try:
        body = json.loads(response.text)
    except json.JSONDecodeError as exc:
        raise StationTransportError(
            f"Invalid JSON from {endpoint}: {response.text[:200]}",
            endpoint=endpoint,
        ) from exc
    try:
        return Envelope[Any].model_validate(body)
    except (ValidationError, ValueError, OverflowError) as exc:
        raise StationTransportError(
            f"Malformed envelope from {endpoint}",
            endpoint=endpoint,
        ) from exc


def decode_envelope(response: RawResponse, payload_type: type[T] | Any) -> T:
    """Unwrap *response* and validate its payload as *payload_type*."""
    endpoint = response.endpoint

    if not response.ok:
        message = _server_message(response)
        raise StationHttpError(
            f"HTTP {response.status}: {message}",
            status_code=response.status,
            server_message=message,
            endpoint=endpoint,
        )

    envelope = _parse_envelope(response)

    if not envelope.success:
        raise StationServerError(envelope.message or f"{endpoint} reported failure", endpoint=endpoint)

    if envelope.data is None:
        raise StationEmptyPayloadError("No data received", endpoint=endpoint)

    try:
        payload: T = TypeAdapter(payload_type).validate_python(envelope.data)
    except (ValidationError, ValueError, OverflowError) as exc:
        raise StationTransportError(
            f"Unexpected payload from {endpoint}: {exc.error_count()} validation error(s)",
            endpoint=endpoint,
        ) from exc
    return payload
