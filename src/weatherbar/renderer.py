from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Protocol

from weatherclient.models import WeatherSnapshot


class Renderer(Protocol):
    def update(self, snapshot: WeatherSnapshot) -> None:
        ...


@dataclass(frozen=True)
class PanelText:
    """Text fields of the weather panel."""
    location: str
    conditions: str
    icon: str


def format_panel(snapshot: WeatherSnapshot) -> PanelText:
    # whole degrees on the panel, truncated
    return PanelText(
        location=snapshot.location_name,
        conditions=f"{int(snapshot.temperature_f)}°F and {snapshot.conditions}",
        icon=snapshot.icon_id,
    )


class PanelRenderer:
    """Holds the panel's current text. Call ``update`` on the UI thread only."""

    def __init__(self):
        self.panel: Optional[PanelText] = None
        self.updates = 0
        self._log = logging.getLogger(__name__)

    def update(self, snapshot: WeatherSnapshot) -> None:
        self.panel = format_panel(snapshot)
        self.updates += 1
        self._log.info("Panel updated: %s | %s (icon %s)", self.panel.location, self.panel.conditions, self.panel.icon)

    def render(self) -> str:
        if self.panel is None:
            return "WeatherBar: no weather yet"
        return f"{self.panel.location}\n{self.panel.conditions} [{self.panel.icon}]"
