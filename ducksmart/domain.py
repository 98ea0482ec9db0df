"""Domain vocabulary and strict schemas for hunt scoring and spread matching.

This module defines the contract between the two engines and their callers
(weather collaborator, HTTP layer): enums and Pydantic models for everything
that flows in or out. No scoring or matching logic lives here.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import List, Tuple

from pydantic import BaseModel, ConfigDict, Field


class _StrictBaseModel(BaseModel):
    """Base model with strict extra handling."""

    model_config = ConfigDict(extra="forbid")


class _FrozenModel(_StrictBaseModel):
    """Strict model that cannot be mutated after construction."""

    model_config = ConfigDict(extra="forbid", frozen=True)


class ReasonType(str, Enum):
    """Whether a reason lifts or drags the hunt score."""
    UP = "up"
    DOWN = "down"


class HuntRating(str, Enum):
    """Headline label shown next to the score gauge."""
    PRIME = "prime"
    FAIR = "fair"
    TOUGH = "tough"


class PressureLevel(str, Enum):
    """Hunting pressure a spread is built for."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    ANY = "any"


class WeatherSource(str, Enum):
    """Where a weather report came from."""
    OPENWEATHERMAP = "openweathermap"
    MOCK = "mock"


class WeatherSnapshot(_StrictBaseModel):
    """Point-in-time weather observation used for scoring.

    Values are deliberately not range-validated: the scoring engine saturates
    anything out of range instead of rejecting it. Only the five scored
    fields are required; the rest are display-only.
    """
    temp_f: float | None = None
    feels_like_f: float | None = None
    wind_mph: float
    wind_deg: float | None = None
    pressure_inhg: float | None = None
    delta_temp_24h_f: float
    delta_pressure_3h: float
    precip_chance: float
    cloud_pct: float


class HourlyPoint(_StrictBaseModel):
    """One hour of the short-range outlook."""
    t: str
    temp: int
    precip: int
    wind: int
    gust: int


class TrendPoint(_StrictBaseModel):
    """One 3-hour forecast step of the 48h trend charts."""
    t: str
    temp: int
    pressure_inhg: float
    wind: int
    wind_deg: float = 0


class WeatherReport(_StrictBaseModel):
    """A snapshot plus where and when it was observed, with the outlook around it."""
    location_name: str = "Your Area"
    observed_at: datetime | None = None
    source: WeatherSource
    snapshot: WeatherSnapshot
    sunrise: str | None = None
    sunset: str | None = None
    hourly: List[HourlyPoint] = Field(default_factory=list)
    trends_48h: List[TrendPoint] = Field(default_factory=list)


class HuntReason(_StrictBaseModel):
    """One human-readable justification for the score."""
    type: ReasonType
    text: str


class HuntScore(_StrictBaseModel):
    """Minimal score-only result."""
    score: int = Field(ge=0, le=100)


class HuntScoreResult(_StrictBaseModel):
    """Full score with push/go sub-scores and ranked reasons."""
    score: int = Field(ge=0, le=100)
    push: int = Field(ge=0, le=100)
    go: int = Field(ge=0, le=100)
    why: List[HuntReason] = Field(default_factory=list, max_length=3)


class SpreadProfile(_FrozenModel):
    """A named decoy layout and the conditions it suits."""
    key: str
    name: str
    type: str
    water_types: Tuple[str, ...] = ()
    weather: Tuple[str, ...] = ()
    seasons: Tuple[str, ...] = ()
    species: Tuple[str, ...] = ()
    pressure: PressureLevel = PressureLevel.ANY
    decoy_count: str = ""
    notes: str = ""
    mistakes: str = ""
    is_addon: bool = False
    motion_decoys: bool | None = None
    calling: str | None = None
    hide_type: str | None = None
    best_time: str | None = None
    high_pressure_friendly: bool | None = None
    wind_dependent: bool | None = None
    big_water: bool | None = None
    low_visibility: bool | None = None


class ScoredSpread(SpreadProfile):
    """A spread profile with its match score for one set of selections."""
    score: int


class SelectionInput(_StrictBaseModel):
    """Categorical hunt conditions picked by the user; every field is optional."""
    water_type: str | None = None
    weather: str | None = None
    season: str | None = None
    pressure: str | None = None
    species: str | None = None


class RecommendationResult(_StrictBaseModel):
    """Ranked spreads plus the independent add-on suggestion."""
    primary: ScoredSpread | None = None
    addon: ScoredSpread | None = None
    all: List[ScoredSpread] = Field(default_factory=list)


class SpreadOptions(_StrictBaseModel):
    """Enumerated choices offered for each selection."""
    water_types: List[str]
    weather: List[str]
    seasons: List[str]
    pressure: List[str]
    species: List[str]


class QuickSpread(_StrictBaseModel):
    """Environment-only spread suggestion."""
    name: str
    detail: str
