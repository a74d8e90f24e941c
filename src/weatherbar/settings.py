from __future__ import annotations

import json
import logging
import os
import threading
from typing import Dict, Optional, Protocol

LOCATION_KEY = 'location'
DEFAULT_SETTINGS_PATH = os.path.join('~', '.weatherbar', 'settings.json')


class Settings(Protocol):
    """Persisted key-value preferences."""

    def get(self, key: str) -> Optional[str]:
        ...

    def set(self, key: str, value: str) -> None:
        ...


class MemorySettings:
    """In-process settings; nothing survives a restart."""

    def __init__(self, initial: Dict[str, str] | None = None):
        self._values: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._values.get(key)

    def set(self, key: str, value: str) -> None:
        self._values[key] = value


class JsonFileSettings:
    """Preferences persisted as a single JSON object on disk."""

    def __init__(self, path: str):
        self.path = os.path.expanduser(path)
        self._lock = threading.Lock()
        self._log = logging.getLogger(__name__)

    @staticmethod
    def from_env() -> 'JsonFileSettings':
        return JsonFileSettings(os.environ.get('WEATHERBAR_SETTINGS_PATH', DEFAULT_SETTINGS_PATH))

    def _load(self) -> Dict[str, str]:
        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except FileNotFoundError:
            return {}
        except (OSError, ValueError) as e:
            self._log.warning("Ignoring unreadable settings file %s: %s", self.path, e)
            return {}
        return data if isinstance(data, dict) else {}

    def get(self, key: str) -> Optional[str]:
        """
        Get a stored preference.

        Args:
            key: Preference name (e.g. "location")

        Returns:
            The stored string, or None if the key is absent or not a string
        """
        val = self._load().get(key)
        return val if isinstance(val, str) else None

    def set(self, key: str, value: str) -> None:
        """
        Store a preference, keeping every other key in the file.

        Args:
            key: Preference name
            value: Value to store
        """
        with self._lock:
            data = self._load()
            data[key] = value
            folder = os.path.dirname(self.path)
            if folder:
                os.makedirs(folder, exist_ok=True)
            tmp = self.path + '.tmp'
            try:
                with open(tmp, 'w', encoding='utf-8') as f:
                    json.dump(data, f, indent=2)
                os.replace(tmp, self.path)
            finally:
                if os.path.exists(tmp):
                    os.remove(tmp)


def location_from(settings: Settings, default_location: str) -> str:
    """Configured location, or ``default_location`` when unset or blank."""
    val = settings.get(LOCATION_KEY)
    if val is None or not val.strip():
        return default_location
    return val
