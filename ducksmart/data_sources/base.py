"""Interfaces and helpers for weather data sources."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Protocol

from ducksmart.data_sources.openweather_client import mock_weather_report
from ducksmart.domain import WeatherReport


class WeatherDataSource(Protocol):
    """Interface for anything that can provide a WeatherReport for a location."""

    def fetch_report(self, latitude: float, longitude: float) -> WeatherReport:
        """Return the current weather report for the coordinates."""
        ...


@dataclass
class CallableWeatherDataSource(WeatherDataSource):
    """Wrap a callable so live backends can be swapped without subclassing."""

    fetch: Callable[[float, float], WeatherReport]

    def fetch_report(self, latitude: float, longitude: float) -> WeatherReport:
        """Delegate to the configured callable."""
        return self.fetch(latitude, longitude)


class MockWeatherDataSource(WeatherDataSource):
    """Always returns the fixed mock report; used without an API key."""

    def fetch_report(self, latitude: float, longitude: float) -> WeatherReport:
        """Return the mock report regardless of location."""
        return mock_weather_report()
