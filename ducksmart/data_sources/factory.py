"""Factory helpers for choosing a weather data source at startup."""

from __future__ import annotations

from functools import partial

from ducksmart import config
from ducksmart.data_sources.base import (
    CallableWeatherDataSource,
    MockWeatherDataSource,
    WeatherDataSource,
)
from ducksmart.data_sources.openweather_client import fetch_weather_report
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="data_sources/factory")


DEFAULT_SOURCE_NAME = "openweathermap"


def build_data_source(settings: config.Settings | None = None) -> WeatherDataSource:
    """Instantiate the configured weather data source."""
    settings = settings or config.settings
    source = (settings.weather_source or DEFAULT_SOURCE_NAME).lower()

    if source == "mock":
        logger.info("Using mock weather data source")
        return MockWeatherDataSource()

    if source == "openweathermap":
        if not settings.owm_api_key:
            logger.warning("No OpenWeatherMap API key configured; using mock weather data")
            return MockWeatherDataSource()
        logger.info("Using OpenWeatherMap data source", extra={"base_url": settings.owm_base_url})
        return CallableWeatherDataSource(
            fetch=partial(
                fetch_weather_report,
                api_key=settings.owm_api_key,
                base_url=settings.owm_base_url,
                timeout=settings.weather_timeout_seconds,
            )
        )

    raise ValueError(f"Unknown weather source '{source}'")
