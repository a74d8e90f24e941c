from __future__ import annotations


class WeatherError(Exception):
    """Base class for every way a weather fetch can fail."""


class EncodingError(WeatherError):
    """The location query could not be percent-encoded."""


class TransportError(WeatherError):
    """No HTTP response was obtained (DNS, connection, TLS, timeout)."""


class UnauthorizedError(WeatherError):
    """The API rejected our credentials (HTTP 401)."""


class UnexpectedStatusError(WeatherError):
    def __init__(self, status_code: int, reason: str = ''):
        self.status_code = status_code
        self.reason = reason
        super().__init__(f"{status_code} {reason}".strip())


class DecodeError(WeatherError):
    """Body was not JSON, or a required field was missing or mistyped."""
