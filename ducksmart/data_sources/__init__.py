"""Data source factories for plugging different weather backends."""

from .base import CallableWeatherDataSource, MockWeatherDataSource, WeatherDataSource
from .factory import build_data_source
from .openweather_client import (
    MOCK_WEATHER,
    build_weather_report,
    fetch_weather_report,
    mock_weather_report,
)

__all__ = [
    "build_data_source",
    "WeatherDataSource",
    "CallableWeatherDataSource",
    "MockWeatherDataSource",
    "MOCK_WEATHER",
    "build_weather_report",
    "fetch_weather_report",
    "mock_weather_report",
]
