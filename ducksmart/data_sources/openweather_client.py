"""Helpers for fetching current conditions and forecasts from OpenWeatherMap.

Uses the free-tier 2.5 endpoints (`/weather` and `/forecast`, 3-hour steps)
with imperial units, and reduces them to the WeatherSnapshot the scoring
engine consumes, plus the hourly and 48h outlook shown beside it.
"""
from __future__ import annotations

import datetime as dt
from typing import Any, List, Mapping, Optional
from urllib.parse import urlencode

import requests
from pydantic import BaseModel, ConfigDict, Field, field_validator

from ducksmart.domain import HourlyPoint, TrendPoint, WeatherReport, WeatherSnapshot, WeatherSource
from ducksmart.helpers import round_half_up
from utils.logging_utils import get_tagged_logger, mask_url_secrets

logger = get_tagged_logger(__name__, tag="openweather_client")

session = requests.Session()

DEFAULT_BASE_URL = "https://api.openweathermap.org/data/2.5"
HPA_PER_INHG = 33.8639

# The forecast is forward-looking, so "24h delta" compares now against the
# first step at least this far out.
DELTA_TEMP_LOOKAHEAD_SECONDS = 22 * 3600
DELTA_PRESSURE_LOOKAHEAD_SECONDS = int(2.5 * 3600)

HOURLY_POINTS = 6
TREND_STEPS = 16  # 48h of 3-hour steps

MOCK_WEATHER = WeatherSnapshot(
    temp_f=31,
    feels_like_f=26,
    wind_mph=12,
    wind_deg=315,
    pressure_inhg=30.08,
    delta_temp_24h_f=-10,
    delta_pressure_3h=0.06,
    precip_chance=35,
    cloud_pct=70,
)

# (label, temp, precip, wind, gust)
_MOCK_HOURLY = (
    ("Now", 31, 25, 12, 18),
    ("1pm", 32, 28, 12, 19),
    ("2pm", 33, 30, 13, 20),
    ("3pm", 34, 35, 14, 22),
    ("4pm", 34, 40, 13, 21),
    ("5pm", 32, 30, 11, 17),
)

# (label, temp, pressure_inhg, wind, wind_deg)
_MOCK_TRENDS = (
    ("12p", 31, 30.08, 12, 315),
    ("3p", 33, 30.05, 13, 310),
    ("6p", 30, 30.02, 14, 305),
    ("9p", 27, 29.98, 11, 300),
    ("12a", 24, 29.95, 10, 295),
    ("3a", 22, 29.92, 9, 290),
    ("6a", 21, 29.90, 8, 285),
    ("9a", 25, 29.88, 10, 280),
    ("12p", 29, 29.92, 12, 275),
    ("3p", 31, 29.95, 14, 270),
    ("6p", 28, 29.98, 12, 265),
    ("9p", 25, 30.00, 10, 260),
    ("12a", 22, 30.02, 8, 255),
    ("3a", 20, 30.04, 7, 250),
    ("6a", 19, 30.06, 6, 250),
    ("9a", 23, 30.08, 9, 255),
)


def mock_weather_report() -> WeatherReport:
    """Fallback report used when live data is unavailable."""
    return WeatherReport(
        location_name="Your Area",
        observed_at=None,
        source=WeatherSource.MOCK,
        snapshot=MOCK_WEATHER,
        sunrise="7:32 AM",
        sunset="5:18 PM",
        hourly=[HourlyPoint(t=t, temp=temp, precip=p, wind=w, gust=g) for t, temp, p, w, g in _MOCK_HOURLY],
        trends_48h=[
            TrendPoint(t=t, temp=temp, pressure_inhg=inhg, wind=w, wind_deg=deg)
            for t, temp, inhg, w, deg in _MOCK_TRENDS
        ],
    )


def hpa_to_inhg(hpa: float) -> float:
    """Convert hectopascals to inches of mercury."""
    return hpa / HPA_PER_INHG


def _get_json(url: str, params: Mapping[str, Any], timeout: float) -> dict:
    logger.debug("OpenWeatherMap request", extra={"url": mask_url_secrets(f"{url}?{urlencode(params)}")})
    resp = session.get(url, params=params, timeout=timeout)
    resp.raise_for_status()
    return resp.json()


def fetch_current_weather(
    latitude: float,
    longitude: float,
    *,
    api_key: str,
    base_url: str = DEFAULT_BASE_URL,
    timeout: float = 10.0,
) -> dict:
    """Fetch the raw current-conditions payload."""
    params = {"lat": latitude, "lon": longitude, "units": "imperial", "appid": api_key}
    return _get_json(f"{base_url}/weather", params, timeout)


def fetch_forecast(
    latitude: float,
    longitude: float,
    *,
    api_key: str,
    base_url: str = DEFAULT_BASE_URL,
    timeout: float = 10.0,
) -> dict:
    """Fetch the raw 5-day / 3-hour forecast payload."""
    params = {"lat": latitude, "lon": longitude, "units": "imperial", "appid": api_key}
    return _get_json(f"{base_url}/forecast", params, timeout)


# Raw payload shapes. Only the fields read below are declared; OpenWeatherMap
# sends many more, so extras are ignored rather than forbidden.
class _OwmModel(BaseModel):
    model_config = ConfigDict(extra="ignore")


class _OwmMain(_OwmModel):
    temp: float
    feels_like: Optional[float] = None
    pressure: float


class _OwmWind(_OwmModel):
    speed: Optional[float] = None
    deg: Optional[float] = None
    gust: Optional[float] = None


class _OwmClouds(_OwmModel):
    all: Optional[float] = None


class _OwmSys(_OwmModel):
    sunrise: Optional[int] = None
    sunset: Optional[int] = None


class _OwmCurrent(_OwmModel):
    dt: Optional[int] = None
    name: Optional[str] = None
    timezone: Optional[int] = None
    main: _OwmMain
    wind: Optional[_OwmWind] = None
    clouds: Optional[_OwmClouds] = None
    sys: Optional[_OwmSys] = None


class _OwmForecastEntry(_OwmModel):
    dt: int
    pop: Optional[float] = None
    main: _OwmMain
    wind: Optional[_OwmWind] = None

    @property
    def wind_speed(self) -> float:
        return (self.wind.speed if self.wind else None) or 0

    @property
    def wind_gust(self) -> float:
        return (self.wind.gust if self.wind else None) or self.wind_speed


class _OwmForecast(_OwmModel):
    entries: List[_OwmForecastEntry] = Field(default_factory=list, alias="list")

    @field_validator("entries", mode="before")
    @classmethod
    def none_as_empty(cls, v):
        return [] if v is None else v


def _local_clock(unix: int, tz_offset: int) -> dt.datetime:
    # OWM reports the location's offset from UTC in seconds; shifting the
    # timestamp and reading it as UTC gives the location's wall clock.
    return dt.datetime.fromtimestamp(unix + tz_offset, tz=dt.timezone.utc)


def format_clock_time(unix: int, tz_offset: int = 0) -> str:
    """`7:32 AM` style local time."""
    clock = _local_clock(unix, tz_offset)
    suffix = "PM" if clock.hour >= 12 else "AM"
    return f"{clock.hour % 12 or 12}:{clock.minute:02d} {suffix}"


def format_hour_short(unix: int, tz_offset: int = 0) -> str:
    """Compact chart label: `12a`, `3a`, `12p`, `9p`."""
    hour = _local_clock(unix, tz_offset).hour
    if hour == 0:
        return "12a"
    if hour < 12:
        return f"{hour}a"
    if hour == 12:
        return "12p"
    return f"{hour - 12}p"


def format_hour_label(unix: int, tz_offset: int = 0) -> str:
    """Hourly strip label: `1pm`, `12am`."""
    hour = _local_clock(unix, tz_offset).hour
    return f"{hour % 12 or 12}{'pm' if hour >= 12 else 'am'}"


def _lerp(a: float, b: float, t: float) -> float:
    return a + (b - a) * t


def _bracket(entries: List[_OwmForecastEntry], target: int):
    """Forecast steps on either side of `target`, or the nearest step twice."""
    for before, after in zip(entries, entries[1:]):
        if before.dt <= target <= after.dt:
            return before, after
    if target <= entries[0].dt:
        return entries[0], entries[0]
    nearest = next((e for e in entries if e.dt >= target), entries[-1])
    return nearest, nearest


def build_hourly(
    entries: List[_OwmForecastEntry], now_ts: float, tz_offset: int = 0
) -> List[HourlyPoint]:
    """Interpolate the 3-hour forecast steps to one point per hour.

    Starts at the top of the current hour. Needs at least two steps.
    """
    if len(entries) < 2:
        return []

    top_of_hour = int(now_ts // 3600) * 3600
    points = []
    for h in range(HOURLY_POINTS):
        target = top_of_hour + h * 3600
        before, after = _bracket(entries, target)
        span = after.dt - before.dt
        t = (target - before.dt) / span if span > 0 else 0
        points.append(
            HourlyPoint(
                t="Now" if h == 0 else format_hour_label(target, tz_offset),
                temp=round_half_up(_lerp(before.main.temp, after.main.temp, t)),
                precip=round_half_up(_lerp((before.pop or 0) * 100, (after.pop or 0) * 100, t)),
                wind=round_half_up(_lerp(before.wind_speed, after.wind_speed, t)),
                gust=round_half_up(_lerp(before.wind_gust, after.wind_gust, t)),
            )
        )
    return points


def build_trends(entries: List[_OwmForecastEntry], tz_offset: int = 0) -> List[TrendPoint]:
    """The first 48 hours of forecast steps, for the trend charts."""
    return [
        TrendPoint(
            t=format_hour_short(entry.dt, tz_offset),
            temp=round_half_up(entry.main.temp),
            pressure_inhg=round(hpa_to_inhg(entry.main.pressure), 2),
            wind=round_half_up(entry.wind_speed),
            wind_deg=(entry.wind.deg if entry.wind else None) or 0,
        )
        for entry in entries[:TREND_STEPS]
    ]


def _first_at_or_after(entries: List[_OwmForecastEntry], ts: float) -> Optional[_OwmForecastEntry]:
    return next((e for e in entries if e.dt >= ts), None)


def build_weather_report(
    current: Mapping[str, Any],
    forecast: Mapping[str, Any],
    *,
    now: Optional[float] = None,
) -> WeatherReport:
    """Reduce raw current + forecast payloads into a WeatherReport.

    `now` is a unix timestamp (seconds); defaults to the current time.
    Raises pydantic.ValidationError (a ValueError) when either payload does
    not have the expected shape.
    """
    now_ts = dt.datetime.now(dt.timezone.utc).timestamp() if now is None else now
    cur = _OwmCurrent.model_validate(current)
    entries = _OwmForecast.model_validate(forecast).entries
    tz_offset = cur.timezone or 0
    wind = cur.wind or _OwmWind()
    sun = cur.sys or _OwmSys()

    temp_f = round_half_up(cur.main.temp)
    pressure_inhg = round(hpa_to_inhg(cur.main.pressure), 2)

    precip_chance = round_half_up((entries[0].pop or 0) * 100) if entries else 0

    delta_temp = 0
    entry_24h = _first_at_or_after(entries, now_ts + DELTA_TEMP_LOOKAHEAD_SECONDS) or (
        entries[-1] if entries else None
    )
    if entry_24h:
        # negative means colder air is on the way
        delta_temp = round_half_up(entry_24h.main.temp - temp_f)

    delta_pressure = 0.0
    entry_3h = _first_at_or_after(entries, now_ts + DELTA_PRESSURE_LOOKAHEAD_SECONDS)
    if entry_3h:
        future_inhg = hpa_to_inhg(entry_3h.main.pressure)
        delta_pressure = round(pressure_inhg - future_inhg, 2)

    feels_like = cur.main.feels_like if cur.main.feels_like is not None else cur.main.temp
    snapshot = WeatherSnapshot(
        temp_f=temp_f,
        feels_like_f=round_half_up(feels_like),
        wind_mph=round_half_up(wind.speed or 0),
        wind_deg=wind.deg or 0,
        pressure_inhg=pressure_inhg,
        delta_temp_24h_f=delta_temp,
        delta_pressure_3h=delta_pressure,
        precip_chance=precip_chance,
        cloud_pct=(cur.clouds.all if cur.clouds else None) or 0,
    )

    observed_at = None
    if cur.dt is not None:
        observed_at = dt.datetime.fromtimestamp(cur.dt, tz=dt.timezone.utc)

    return WeatherReport(
        location_name=cur.name or "Your Area",
        observed_at=observed_at,
        source=WeatherSource.OPENWEATHERMAP,
        snapshot=snapshot,
        sunrise=format_clock_time(sun.sunrise, tz_offset) if sun.sunrise else None,
        sunset=format_clock_time(sun.sunset, tz_offset) if sun.sunset else None,
        hourly=build_hourly(entries, now_ts, tz_offset),
        trends_48h=build_trends(entries, tz_offset),
    )


def fetch_weather_report(
    latitude: float,
    longitude: float,
    *,
    api_key: str,
    base_url: str = DEFAULT_BASE_URL,
    timeout: float = 10.0,
) -> WeatherReport:
    """Fetch current conditions and forecast, then build a WeatherReport."""
    current = fetch_current_weather(latitude, longitude, api_key=api_key, base_url=base_url, timeout=timeout)
    forecast = fetch_forecast(latitude, longitude, api_key=api_key, base_url=base_url, timeout=timeout)
    report = build_weather_report(current, forecast)
    logger.info(
        "Fetched OpenWeatherMap conditions",
        extra={"location": report.location_name, "latitude": latitude, "longitude": longitude},
    )
    return report
