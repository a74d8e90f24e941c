from __future__ import annotations

import logging
import threading
from concurrent.futures import Future
from typing import Callable, Optional

from weatherclient.client import WeatherClient
from weatherclient.errors import WeatherError
from weatherclient.models import WeatherSnapshot

from .dispatch import UiDispatcher
from .renderer import Renderer
from .settings import Settings, location_from


class WeatherController:
    """
    Reads the configured location, fetches its weather, and forwards the
    snapshot to the renderer on the UI dispatcher.

    Overlapping refreshes are not coordinated: the panel shows whichever
    snapshot arrives last. With ``supersede_stale=True`` a delivery from a
    refresh that has since been superseded by a newer one is dropped instead.
    """

    def __init__(self, client: WeatherClient, settings: Settings, renderer: Renderer,
                 dispatcher: UiDispatcher, default_location: str,
                 supersede_stale: bool = False,
                 on_failure: Optional[Callable[[WeatherError], None]] = None):
        self.client = client
        self.settings = settings
        self.renderer = renderer
        self.dispatcher = dispatcher
        self.default_location = default_location
        self.supersede_stale = supersede_stale
        self.on_failure = on_failure
        self._generation = 0
        self._lock = threading.Lock()
        self._log = logging.getLogger(__name__)

    def refresh(self) -> Future:
        """Start a fetch for the current location. Returns the client's future."""
        location = location_from(self.settings, self.default_location)
        with self._lock:
            self._generation += 1
            generation = self._generation
        self._log.info("Refreshing weather for %r", location)

        def delivered(snapshot: WeatherSnapshot) -> None:
            self.dispatcher.call_soon(self._render, generation, snapshot)

        def failed(error: WeatherError) -> None:
            if self.on_failure is not None:
                self.dispatcher.call_soon(self.on_failure, error)

        return self.client.fetch_weather(location, delivered, failed)

    def _render(self, generation: int, snapshot: WeatherSnapshot) -> None:
        if self.supersede_stale and generation != self._generation:
            self._log.debug("Dropping stale snapshot %s (refresh %d, latest %d)", snapshot, generation, self._generation)
            return
        self.renderer.update(snapshot)
