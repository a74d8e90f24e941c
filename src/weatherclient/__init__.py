"""
Weather API client for current conditions (OpenWeatherMap).
Fetches on a background worker and delivers typed snapshots via callbacks.
"""

__all__ = [
    'WeatherClient', 'WeatherSettings', 'WeatherSnapshot', 'FetchResult',
    'decode_weather', 'encode_query',
    'WeatherError', 'EncodingError', 'TransportError', 'UnauthorizedError',
    'UnexpectedStatusError', 'DecodeError',
]

from .client import WeatherClient, encode_query
from .config import WeatherSettings
from .errors import (
    DecodeError,
    EncodingError,
    TransportError,
    UnauthorizedError,
    UnexpectedStatusError,
    WeatherError,
)
from .models import FetchResult, WeatherSnapshot, decode_weather
