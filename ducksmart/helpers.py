"""Small numeric and formatting helpers shared by the engines and the weather client."""

from __future__ import annotations

import math

COMPASS_POINTS = ("N", "NE", "E", "SE", "S", "SW", "W", "NW")


def clamp(value: float, lower: float, upper: float) -> float:
    """Clamp a value to the [lower, upper] range."""
    return max(lower, min(upper, value))


def round_half_up(value: float) -> int:
    """Round to the nearest integer with .5 going up (display rounding, not banker's)."""
    return int(math.floor(value + 0.5))


def format_wind(deg: float) -> str:
    """Return the 8-point compass label for a bearing in degrees."""
    idx = round_half_up(deg / 45.0) % len(COMPASS_POINTS)
    return COMPASS_POINTS[idx]
