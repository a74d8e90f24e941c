"""
WeatherBar: menu-bar current weather.
Wires the weatherclient package to settings, a UI dispatcher and a renderer.
"""

from .app import WeatherBarApp  # noqa: F401
from .controller import WeatherController  # noqa: F401
from .dispatch import ImmediateDispatcher, QueueDispatcher, UiDispatcher  # noqa: F401
from .renderer import PanelRenderer, PanelText, Renderer, format_panel  # noqa: F401
from .settings import LOCATION_KEY, JsonFileSettings, MemorySettings, Settings, location_from  # noqa: F401

__all__ = [
    'WeatherBarApp', 'WeatherController',
    'UiDispatcher', 'QueueDispatcher', 'ImmediateDispatcher',
    'Renderer', 'PanelRenderer', 'PanelText', 'format_panel',
    'Settings', 'JsonFileSettings', 'MemorySettings', 'LOCATION_KEY', 'location_from',
]
