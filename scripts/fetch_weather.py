"""One-shot WeatherBar refresh from the command line.

Usage (example):
    python scripts/fetch_weather.py
    python scripts/fetch_weather.py --location "Portland, OR" --save

Reads OPENWEATHERMAP_API_KEY (and optional WEATHER_* settings) from the
environment or a local .env, runs one refresh and prints the panel text.
"""
from __future__ import annotations
import argparse
import logging
import os
from concurrent.futures import TimeoutError as FutureTimeout

from dotenv import load_dotenv

from weatherbar.app import WeatherBarApp
from weatherbar.dispatch import QueueDispatcher
from weatherbar.renderer import PanelRenderer
from weatherbar.settings import LOCATION_KEY, JsonFileSettings, MemorySettings
from weatherclient.config import WeatherSettings

logger = logging.getLogger("weatherbar.fetch")
logging.basicConfig(level=os.environ.get("LOG_LEVEL", "INFO"))


def main():
    parser = argparse.ArgumentParser()
    parser.add_argument('--location', help='Location to fetch instead of the saved one')
    parser.add_argument('--save', action='store_true', help='Persist --location as the saved location')
    parser.add_argument('--wait', type=float, default=60.0, help='Seconds to wait for the response (default: 60)')
    args = parser.parse_args()

    if os.path.exists('.env'):
        load_dotenv('.env')

    if args.save and not args.location:
        logger.error('--save needs --location.')
        return 2

    weather_settings = WeatherSettings.from_env()
    settings = JsonFileSettings.from_env()
    if args.location and not args.save:
        # one-off lookup, leave the saved preference alone
        settings = MemorySettings({LOCATION_KEY: args.location})

    dispatcher = QueueDispatcher()
    renderer = PanelRenderer()
    app = WeatherBarApp.create(weather_settings, settings, renderer, dispatcher)
    try:
        future = app.preferences_saved(args.location) if args.save else app.launch()
        try:
            result = future.result(timeout=args.wait)
        except FutureTimeout:
            logger.error("No response within %.0fs", args.wait)
            return 1
        dispatcher.run_pending()
    finally:
        app.quit()

    print(renderer.render())
    if not result.ok:
        logger.error("Fetch failed: %s: %s", type(result.error).__name__, result.error)
        return 1
    return 0


if __name__ == '__main__':
    raise SystemExit(main())
