from __future__ import annotations

import os
from dataclasses import dataclass

DEFAULT_BASE_URL = "http://api.openweathermap.org/data/2.5/weather"
DEFAULT_LOCATION = "Seattle, WA"


@dataclass
class WeatherSettings:
    """Configuration for the OpenWeatherMap current-weather client."""
    api_key: str
    base_url: str = DEFAULT_BASE_URL
    units: str = 'imperial'  # Fahrenheit; fixed
    timeout: float = 30.0
    default_location: str = DEFAULT_LOCATION

    @staticmethod
    def from_env() -> 'WeatherSettings':
        """Create Weather settings from environment variables."""
        api_key = os.environ['OPENWEATHERMAP_API_KEY']
        base_url = os.environ.get('WEATHER_BASE_URL', DEFAULT_BASE_URL)
        try:
            timeout = float(os.environ.get('WEATHER_TIMEOUT', '30'))
        except ValueError as e:
            raise ValueError(f"Malformed WEATHER_TIMEOUT: {e}")
        default_location = os.environ.get('WEATHER_DEFAULT_LOCATION', '').strip() or DEFAULT_LOCATION

        return WeatherSettings(
            api_key=api_key,
            base_url=base_url,
            timeout=timeout,
            default_location=default_location,
        )
