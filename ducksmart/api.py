"""HTTP API for hunt scores and decoy spread recommendations."""

import hmac
from typing import List

from fastapi import APIRouter, Depends, Header, HTTPException, Query, status
from pydantic import BaseModel

from ducksmart.catalog import CatalogError, SpreadCatalog, default_catalog
from ducksmart.config import settings
from ducksmart.data_sources import build_data_source
from ducksmart.domain import (
    HuntRating,
    HuntScoreResult,
    QuickSpread,
    RecommendationResult,
    SelectionInput,
    SpreadOptions,
    SpreadProfile,
    WeatherReport,
    WeatherSnapshot,
)
from ducksmart.scoring import hunt_rating, score_hunt_today
from ducksmart.spreads import quick_spread, recommend_spread, spread_options
from ducksmart.weather_service import get_weather_report
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="ducksmart/api")


def require_api_key(x_api_key: str | None = Header(default=None)):
    """Validate the X-API-Key header against the configured static key, if any."""
    if not settings.api_key:
        return

    if not x_api_key:
        logger.debug("No API key provided")
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Missing API key")

    if hmac.compare_digest(str(x_api_key), str(settings.api_key)):
        return

    logger.debug("Invalid API key provided")
    raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid API key")


router = APIRouter(dependencies=[Depends(require_api_key)])
DATA_SOURCE = build_data_source(settings)


class HuntScoreResponse(BaseModel):
    """Score, sub-scores and reasons plus the gauge label."""
    result: HuntScoreResult
    rating: HuntRating


class HuntTodayResponse(HuntScoreResponse):
    """Hunt score for a location, with the weather it was computed from."""
    report: WeatherReport


def _catalog() -> SpreadCatalog:
    """Resolve the shared catalog, surfacing authoring errors as a 500."""
    try:
        return default_catalog()
    except CatalogError as exc:
        logger.error("Spread catalog unavailable", extra={"error": str(exc)})
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                            detail="Spread catalog unavailable.")


def _score_response(snapshot: WeatherSnapshot) -> HuntScoreResponse:
    result = score_hunt_today(snapshot)
    return HuntScoreResponse(result=result, rating=hunt_rating(result.score))


@router.get("/hunt/today", response_model=HuntTodayResponse)
def hunt_today(
    latitude: float = Query(ge=-90, le=90),
    longitude: float = Query(ge=-180, le=180),
):
    """Fetch weather for a location and score today's hunt."""
    report = get_weather_report(latitude, longitude, data_source=DATA_SOURCE)
    scored = _score_response(report.snapshot)
    logger.info(
        "Scored hunt",
        extra={"source": report.source.value, "score": scored.result.score},
    )
    return HuntTodayResponse(result=scored.result, rating=scored.rating, report=report)


@router.post("/hunt/score", response_model=HuntScoreResponse)
def hunt_score(snapshot: WeatherSnapshot):
    """Score a caller-supplied weather snapshot."""
    return _score_response(snapshot)


@router.post("/spreads/recommend", response_model=RecommendationResult)
def recommend(selections: SelectionInput):
    """Rank decoy spreads for the given hunt conditions."""
    result = recommend_spread(selections, catalog=_catalog())
    logger.debug(
        "Recommended spread",
        extra={"primary": result.primary.key if result.primary else None},
    )
    return result


@router.get("/spreads", response_model=List[SpreadProfile])
def list_spreads():
    """Return every catalog entry in catalog order."""
    return list(_catalog().spreads)


@router.get("/spreads/options", response_model=SpreadOptions)
def list_options():
    """Return the enumerated values for each selection picker."""
    return spread_options(_catalog())


@router.get("/spreads/quick", response_model=QuickSpread)
def quick(environment: str = Query(min_length=1), wind_deg: float = 0.0):
    """Suggest a spread from the hunting environment and wind bearing only."""
    return quick_spread(environment, wind_deg)
