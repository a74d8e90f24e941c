from __future__ import annotations
import logging
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Callable, Optional
from urllib.parse import quote

import httpx

from .config import WeatherSettings
from .errors import (
    EncodingError,
    TransportError,
    UnauthorizedError,
    UnexpectedStatusError,
    WeatherError,
)
from .models import FetchResult, WeatherSnapshot, decode_weather

SuccessCallback = Callable[[WeatherSnapshot], None]
ErrorCallback = Callable[[WeatherError], None]


def encode_query(query: str) -> str:
    """Percent-encode a location query for the ``q`` parameter.

    Spaces and every reserved character are escaped. Raises EncodingError for
    blank input or text that cannot be represented in UTF-8.
    """
    if not isinstance(query, str) or not query.strip():
        raise EncodingError("location query is empty")
    try:
        return quote(query, safe='')
    except UnicodeEncodeError as e:
        raise EncodingError(f"cannot encode location query {query!r}: {e}") from e


class WeatherClient:
    """
    Client for the OpenWeatherMap current-weather endpoint.

    Requests run on a small worker pool so ``fetch_weather`` returns at once;
    the outcome arrives through the callbacks and the returned future.
    """

    def __init__(self, settings: WeatherSettings,
                 http_client: httpx.Client | None = None,
                 max_workers: int = 2):
        self.settings = settings
        self._client = http_client or httpx.Client(timeout=settings.timeout)
        self._executor = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix='weather-fetch')
        self._log = logging.getLogger(__name__)

    def __enter__(self) -> 'WeatherClient':
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    def close(self) -> None:
        """Wait for in-flight requests, then release the pool and HTTP client."""
        self._executor.shutdown(wait=True)
        self._client.close()

    def build_url(self, query: str) -> str:
        encoded = encode_query(query)
        key = quote(self.settings.api_key, safe='')
        return f"{self.settings.base_url}?APPID={key}&units={self.settings.units}&q={encoded}"

    def fetch_weather(self, query: str,
                      on_success: SuccessCallback,
                      on_error: Optional[ErrorCallback] = None) -> Future:
        """
        Fetch current weather for ``query`` without blocking.

        Args:
            query: Free-text location, e.g. "Seattle, WA"
            on_success: Called exactly once with the snapshot if the fetch succeeds
            on_error: Optional; called exactly once with the error if it fails

        Returns:
            Future resolving to a FetchResult. It never raises.
        """
        try:
            url = self.build_url(query)
        except EncodingError as e:
            self._log.error("weather api error: %s", e)
            return self._fail_now(e, on_success, on_error)
        try:
            return self._executor.submit(self._run, url, on_success, on_error)
        except RuntimeError:
            # pool already shut down by close()
            self._log.error("weather api error: client is closed")
            return self._fail_now(TransportError("client is closed"), on_success, on_error)

    def get_current_weather(self, query: str) -> FetchResult:
        """Blocking variant: issue the request on the calling thread."""
        try:
            url = self.build_url(query)
        except EncodingError as e:
            self._log.error("weather api error: %s", e)
            return FetchResult.failure(e)
        return self._request(url)

    # ---------------- Internal Helpers -----------------
    def _run(self, url: str, on_success: SuccessCallback, on_error: Optional[ErrorCallback]) -> FetchResult:
        result = self._request(url)
        self._deliver(result, on_success, on_error)
        return result

    def _request(self, url: str) -> FetchResult:
        try:
            resp = self._client.get(url)
        except httpx.TransportError as e:
            self._log.error("weather api error: %s", e)
            return FetchResult.failure(TransportError(str(e) or type(e).__name__))

        status = resp.status_code
        if status == 200:
            result = decode_weather(resp.content)
            if result.ok:
                self._log.debug("Fetched weather %s", result.snapshot)
            else:
                self._log.error("weather api decode failed: %s", result.error)
            return result
        if status == 401:
            self._log.error("weather api returned an 'unauthorized' response. Check the API key (OPENWEATHERMAP_API_KEY).")
            return FetchResult.failure(UnauthorizedError("401 Unauthorized"))
        reason = httpx.codes.get_reason_phrase(status)
        self._log.error("weather api returned response: %d %s", status, reason)
        return FetchResult.failure(UnexpectedStatusError(status, reason))

    def _fail_now(self, error: WeatherError, on_success: SuccessCallback, on_error: Optional[ErrorCallback]) -> Future:
        result = FetchResult.failure(error)
        self._deliver(result, on_success, on_error)
        done: Future = Future()
        done.set_result(result)
        return done

    def _deliver(self, result: FetchResult, on_success: SuccessCallback, on_error: Optional[ErrorCallback]) -> None:
        try:
            if result.ok:
                on_success(result.snapshot)
            elif on_error is not None:
                on_error(result.error)
        except Exception:  # noqa: BLE001
            self._log.exception("weather callback raised")
