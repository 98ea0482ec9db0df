"""Decoy spread matching and recommendation.

Each catalog entry is scored against the user's selections with fixed
weights per axis. Non-addon entries are ranked (stable, so catalog order
breaks ties) and the add-on entry is returned alongside, whatever its rank.
"""

from __future__ import annotations

from typing import Any, Iterable, Mapping

from ducksmart.catalog import SpreadCatalog, default_catalog
from ducksmart.domain import (
    PressureLevel,
    QuickSpread,
    RecommendationResult,
    ScoredSpread,
    SelectionInput,
    SpreadOptions,
    SpreadProfile,
)
from ducksmart.helpers import format_wind

WATER_WEIGHT = 30
WEATHER_WEIGHT = 25
SEASON_WEIGHT = 20
PRESSURE_WEIGHT = 15
SPECIES_WEIGHT = 10


def _normalize(value: str | None) -> str:
    return (value or "").lower()


def tags_match(selection: str | None, tags: Iterable[str]) -> bool:
    """Case-insensitive containment in either direction against any tag.

    Loose on purpose ("river" and "river edge" match each other); swap this
    out for exact matching without touching the weights.
    """
    wanted = _normalize(selection)
    if not wanted:
        return False
    for tag in tags:
        candidate = tag.lower()
        if wanted in candidate or candidate in wanted:
            return True
    return False


def _season_matches(season: str | None, seasons: Iterable[str]) -> bool:
    wanted = _normalize(season)
    return bool(wanted) and any(wanted == s.lower() for s in seasons)


def _pressure_matches(pressure: str | None, spread_pressure: PressureLevel) -> bool:
    wanted = _normalize(pressure)
    if not wanted:
        return False
    return spread_pressure == PressureLevel.ANY or spread_pressure.value == wanted


def _coerce_selections(selections: SelectionInput | Mapping[str, Any] | None) -> SelectionInput:
    if selections is None:
        return SelectionInput()
    if isinstance(selections, SelectionInput):
        return selections
    return SelectionInput.model_validate(dict(selections))


def score_spread(profile: SpreadProfile, selections: SelectionInput | Mapping[str, Any] | None) -> int:
    """Sum the axis weights this spread earns for the given selections."""
    sel = _coerce_selections(selections)
    score = 0
    if tags_match(sel.water_type, profile.water_types):
        score += WATER_WEIGHT
    if tags_match(sel.weather, profile.weather):
        score += WEATHER_WEIGHT
    if _season_matches(sel.season, profile.seasons):
        score += SEASON_WEIGHT
    if _pressure_matches(sel.pressure, profile.pressure):
        score += PRESSURE_WEIGHT
    if tags_match(sel.species, profile.species):
        score += SPECIES_WEIGHT
    return score


def _scored(profile: SpreadProfile, score: int) -> ScoredSpread:
    return ScoredSpread(**profile.model_dump(), score=score)


def recommend_spread(
    selections: SelectionInput | Mapping[str, Any] | None,
    catalog: SpreadCatalog | None = None,
) -> RecommendationResult:
    """Rank the catalog against the selections.

    Unknown selection values simply earn nothing on their axis; this never
    raises for string input. A mapping with keys outside SelectionInput is
    rejected with a ValidationError.
    """
    if catalog is None:
        catalog = default_catalog()
    sel = _coerce_selections(selections)

    scored = [_scored(profile, score_spread(profile, sel)) for profile in catalog.spreads]
    # sorted() is stable, so catalog order breaks ties
    main = sorted((s for s in scored if not s.is_addon), key=lambda s: s.score, reverse=True)
    addon = next((s for s in scored if s.is_addon), None)

    return RecommendationResult(
        primary=main[0] if main else None,
        addon=addon,
        all=main,
    )


def spread_options(catalog: SpreadCatalog | None = None) -> SpreadOptions:
    """Option lists for the five selection pickers."""
    if catalog is None:
        catalog = default_catalog()
    return catalog.options


_QUICK_SPREADS = {
    "timber": (
        "Small Pocket / Landing Hole",
        "Keep it tight. Open a landing hole downwind.",
    ),
    "marsh": (
        "J-Hook",
        "Set the hook into the wind; keep the kill hole just off the tip.",
    ),
    "field": (
        "Pods + Landing Zone",
        "Two pods with a wide landing zone downwind.",
    ),
    "open water": (
        "U-Shape",
        "Open end downwind; keep a clean runway to the pocket.",
    ),
}
_QUICK_FALLBACK = ("Runway Line", "Create a runway into the wind with a clean pocket.")


def quick_spread(environment: str | None, wind_deg: float) -> QuickSpread:
    """One-line spread suggestion from the hunting environment alone."""
    name, detail = _QUICK_SPREADS.get(_normalize(environment), _QUICK_FALLBACK)
    return QuickSpread(name=name, detail=f"{detail} Wind: {format_wind(wind_deg)}.")
