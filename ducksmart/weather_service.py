"""Resolve the weather report the scoring engine runs on.

Live data comes from the configured data source; when it cannot be fetched
or parsed, the fixed mock report is used so the score stays available.
"""
from __future__ import annotations

import requests

from ducksmart.data_sources import WeatherDataSource, build_data_source, mock_weather_report
from ducksmart.domain import WeatherReport
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="weather_service")


def get_weather_report(
    latitude: float,
    longitude: float,
    data_source: WeatherDataSource | None = None,
) -> WeatherReport:
    """Fetch a report for the coordinates, falling back to mock weather on failure."""
    source = data_source or build_data_source()
    try:
        return source.fetch_report(latitude, longitude)
    except requests.RequestException as exc:
        logger.warning(
            "Weather fetch failed; using mock weather",
            extra={"latitude": latitude, "longitude": longitude, "error": str(exc)},
        )
    # payload shape errors surface as pydantic.ValidationError, a ValueError
    except (KeyError, TypeError, ValueError) as exc:
        logger.warning(
            "Malformed weather payload; using mock weather",
            extra={"latitude": latitude, "longitude": longitude, "error": str(exc)},
        )
    return mock_weather_report()
