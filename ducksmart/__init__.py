"""DuckSmart hunt scoring and decoy spread recommendation."""

from ducksmart.scoring import hunt_rating, score_hunt, score_hunt_today
from ducksmart.spreads import quick_spread, recommend_spread

__all__ = [
    "hunt_rating",
    "quick_spread",
    "recommend_spread",
    "score_hunt",
    "score_hunt_today",
]
