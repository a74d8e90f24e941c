from __future__ import annotations

import json
import math
from dataclasses import dataclass
from typing import Any, Dict, Optional

from .errors import DecodeError, WeatherError


@dataclass(frozen=True)
class WeatherSnapshot:
    """One current-weather reading, as reported by the API."""
    location_name: str
    temperature_f: float
    conditions: str
    icon_id: str

    def __str__(self) -> str:
        return f"{self.location_name}: {self.temperature_f}F and {self.conditions}"


@dataclass(frozen=True)
class FetchResult:
    """Outcome of a fetch: exactly one of ``snapshot`` / ``error`` is set."""
    snapshot: Optional[WeatherSnapshot] = None
    error: Optional[WeatherError] = None

    def __post_init__(self):
        if (self.snapshot is None) == (self.error is None):
            raise ValueError("FetchResult needs exactly one of snapshot or error")

    @property
    def ok(self) -> bool:
        return self.snapshot is not None

    @classmethod
    def success(cls, snapshot: WeatherSnapshot) -> 'FetchResult':
        return cls(snapshot=snapshot)

    @classmethod
    def failure(cls, error: WeatherError) -> 'FetchResult':
        return cls(error=error)


def _require(obj: Dict[str, Any], key: str, kind, where: str):
    if key not in obj:
        raise DecodeError(f"missing field {where}{key}")
    val = obj[key]
    # bool is an int subclass; a JSON true/false is never a valid number here
    if isinstance(val, bool) or not isinstance(val, kind):
        raise DecodeError(f"field {where}{key} has wrong type {type(val).__name__}")
    return val


def _temperature(val) -> float:
    try:
        temp = float(val)
    except OverflowError:
        raise DecodeError("field main.temp is out of range")
    if not math.isfinite(temp):
        raise DecodeError(f"field main.temp is not finite: {temp}")
    return temp


def _reject_constant(token: str):
    # NaN and Infinity are not JSON
    raise ValueError(f"invalid JSON constant {token}")


def parse_weather(payload: Any) -> WeatherSnapshot:
    """Validate an already-parsed JSON payload and build a snapshot.

    Raises DecodeError on any missing or mistyped field; never returns a
    partially filled snapshot.
    """
    if not isinstance(payload, dict):
        raise DecodeError(f"expected a JSON object, got {type(payload).__name__}")
    name = _require(payload, 'name', str, '')
    main = _require(payload, 'main', dict, '')
    temp = _temperature(_require(main, 'temp', (int, float), 'main.'))
    weather = _require(payload, 'weather', list, '')
    if not weather:
        raise DecodeError("field weather is empty")
    first = weather[0]
    if not isinstance(first, dict):
        raise DecodeError(f"weather[0] has wrong type {type(first).__name__}")
    conditions = _require(first, 'main', str, 'weather[0].')
    icon = _require(first, 'icon', str, 'weather[0].')
    return WeatherSnapshot(
        location_name=name,
        temperature_f=temp,
        conditions=conditions,
        icon_id=icon,
    )


def decode_weather(body: bytes | str) -> FetchResult:
    """Decode a response body into a tagged result instead of raising."""
    try:
        payload = json.loads(body, parse_constant=_reject_constant)
    except ValueError as e:  # JSONDecodeError and UnicodeDecodeError
        return FetchResult.failure(DecodeError(f"JSON parsing failed: {e}"))
    try:
        return FetchResult.success(parse_weather(payload))
    except DecodeError as e:
        return FetchResult.failure(e)
