"""Custom exception hierarchy for pyweatherstation."""

from __future__ import annotations


class StationError(Exception):
    """Base exception for all pyweatherstation errors."""

    def __init__(self, message: str, *, endpoint: str = "") -> None:
        self.endpoint = endpoint
        super().__init__(message)


class StationConfigError(StationError):
    """Invalid or missing configuration."""


class StationAddressError(StationConfigError):
    """Device address is not a dotted-quad IPv4 address."""

    def __init__(self, message: str, *, address: str = "") -> None:
        self.address = address
        super().__init__(message)


class StationTransportError(StationError):
    """Request never produced a usable response.

    Covers connection failures, timeouts and bodies that are not a
    well-formed envelope (invalid JSON, wrong shape, payload that does
    not validate).
    """


class StationHttpError(StationError):
    """Station answered with a non-2xx HTTP status."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int,
        server_message: str = "",
        endpoint: str = "",
    ) -> None:
        self.status_code = status_code
        self.server_message = server_message
        super().__init__(message, endpoint=endpoint)


class StationServerError(StationError):
    """Envelope reported ``success: false``.

    ``str(exc)`` is the station's own message so it can be shown as-is.
    """


class StationEmptyPayloadError(StationError):
    """Envelope reported success but carried no ``data``."""
