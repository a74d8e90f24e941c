"""Menu-bar triggers: launch, the Update item, and closing Preferences."""
from __future__ import annotations

import logging
from concurrent.futures import Future

from weatherclient.client import WeatherClient
from weatherclient.config import WeatherSettings

from .controller import WeatherController
from .dispatch import UiDispatcher
from .renderer import Renderer
from .settings import LOCATION_KEY, Settings, location_from


class WeatherBarApp:
    def __init__(self, controller: WeatherController):
        self.controller = controller
        self._log = logging.getLogger(__name__)

    @staticmethod
    def create(weather_settings: WeatherSettings, settings: Settings, renderer: Renderer,
               dispatcher: UiDispatcher, supersede_stale: bool = False) -> 'WeatherBarApp':
        client = WeatherClient(weather_settings)
        controller = WeatherController(
            client=client,
            settings=settings,
            renderer=renderer,
            dispatcher=dispatcher,
            default_location=weather_settings.default_location,
            supersede_stale=supersede_stale,
        )
        return WeatherBarApp(controller)

    def launch(self) -> Future:
        return self.controller.refresh()

    def refresh_clicked(self) -> Future:
        return self.controller.refresh()

    def current_location(self) -> str:
        """Value the preferences window shows when it opens."""
        return location_from(self.controller.settings, self.controller.default_location)

    def preferences_saved(self, location: str) -> Future:
        """Persist the location typed into Preferences, then refresh."""
        self.controller.settings.set(LOCATION_KEY, location)
        self._log.info("Location changed to %r", location)
        return self.controller.refresh()

    def quit(self) -> None:
        self.controller.client.close()
