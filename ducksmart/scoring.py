"""Deterministic hunt scoring.

A weather snapshot is reduced to five sub-signals in [0, 1], grouped into two
factors:

- push: weather that moves birds (cold fronts, pressure swings)
- go:   conditions that let them fly a huntable window (wind, precip, cloud)

The factors are combined multiplicatively so a poor value in either one
drags the whole score down instead of being averaged away. Every input
saturates at the curve boundaries; nothing here raises for numeric input.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from ducksmart.domain import (
    HuntRating,
    HuntReason,
    HuntScore,
    HuntScoreResult,
    ReasonType,
    WeatherSnapshot,
)
from ducksmart.helpers import clamp, round_half_up

PUSH_WEIGHTS = {"cold": 0.60, "pressure": 0.40}
GO_WEIGHTS = {"tailwind": 0.55, "no_precip": 0.30, "cloud": 0.15}
PUSH_EXPONENT = 0.9
GO_EXPONENT = 1.1

MAX_UP_REASONS = 2
MAX_DOWN_REASONS = 2
MAX_REASONS = 3

PRIME_THRESHOLD = 70
FAIR_THRESHOLD = 45


@dataclass(frozen=True)
class _SignalRule:
    """Thresholds and copy for explaining one sub-signal."""
    name: str
    strong: float
    weak: float
    up_text: str
    down_text: str


# Evaluation order is also the order reasons are reported in.
SIGNAL_RULES = (
    _SignalRule(
        name="cold",
        strong=0.7,
        weak=0.25,
        up_text="Recent temperature drop can spark movement.",
        down_text="Warm-up can slow daytime movement.",
    ),
    _SignalRule(
        name="pressure",
        strong=0.7,
        weak=0.3,
        up_text="Pressure swing points to a front moving through.",
        down_text="Flat pressure; no front to push new birds in.",
    ),
    _SignalRule(
        name="tailwind",
        strong=0.8,
        weak=0.5,
        up_text="Good wind speed for movement + decoy realism.",
        down_text="Wind is far outside the 8-16 mph sweet spot.",
    ),
    _SignalRule(
        name="no_precip",
        strong=0.7,
        weak=0.4,
        up_text="Low precipitation odds keep the flight window open.",
        down_text="High precipitation can reduce visibility and comfort.",
    ),
    # cloud_signal bottoms out at 0.6 for in-range cover, so this down reason never fires.
    _SignalRule(
        name="cloud",
        strong=0.85,
        weak=0.5,
        up_text="Cloud cover can extend quality light + reduce glare.",
        down_text="Bluebird skies can increase pressure and visibility.",
    ),
)


def cold_signal(delta_temp_24h_f: float) -> float:
    """Cold-front strength: 1.0 at a 15F drop or more, 0.0 at a 10F rise or more."""
    if delta_temp_24h_f <= -15:
        return 1.0
    if delta_temp_24h_f >= 10:
        return 0.0
    return clamp((10 - delta_temp_24h_f) / 25, 0.0, 1.0)


def pressure_signal(delta_pressure_3h: float) -> float:
    """Front-passage strength from the magnitude of the 3h pressure change."""
    magnitude = abs(delta_pressure_3h)
    if magnitude >= 0.10:
        return 1.0
    return 0.2 + (magnitude / 0.10) * 0.8


def tailwind_signal(wind_mph: float) -> float:
    """Sweet-spot curve peaking at 8-16 mph; not monotonic."""
    wind = max(0.0, wind_mph)
    if wind < 3:
        return 0.15
    if wind < 8:
        return 0.15 + ((wind - 3) / 5) * 0.85
    if wind <= 16:
        return 1.0
    if wind <= 22:
        return 1.0 - ((wind - 16) / 6) * 0.35
    return max(0.1, 0.65 - 0.06 * (wind - 22))


def no_precip_signal(precip_chance: float) -> float:
    """Linear penalty for precipitation odds, floored at 0.1."""
    chance = clamp(precip_chance, 0.0, 100.0)
    return clamp(1.0 - chance * 0.009, 0.1, 1.0)


def cloud_signal(cloud_pct: float) -> float:
    """Sweet spot at 30-70% cover; 0.6 under clear sky, 0.7 when overcast."""
    cover = clamp(cloud_pct, 0.0, 100.0)
    if cover < 30:
        return 0.6 + (cover / 30) * 0.4
    if cover <= 70:
        return 1.0
    return 1.0 - ((cover - 70) / 30) * 0.3


def _coerce_snapshot(weather: Any) -> WeatherSnapshot:
    """Accept a WeatherSnapshot, a mapping, or an object with matching attributes.

    Mappings are validated as-is, so unknown keys are rejected rather than
    silently scored as missing.
    """
    if isinstance(weather, WeatherSnapshot):
        return weather
    if isinstance(weather, Mapping):
        return WeatherSnapshot.model_validate(dict(weather))
    return WeatherSnapshot.model_validate(weather, from_attributes=True)


def compute_signals(weather: WeatherSnapshot | Mapping[str, Any]) -> dict[str, float]:
    """Return every sub-signal keyed by name, in evaluation order."""
    snap = _coerce_snapshot(weather)
    return {
        "cold": cold_signal(snap.delta_temp_24h_f),
        "pressure": pressure_signal(snap.delta_pressure_3h),
        "tailwind": tailwind_signal(snap.wind_mph),
        "no_precip": no_precip_signal(snap.precip_chance),
        "cloud": cloud_signal(snap.cloud_pct),
    }


def _combine(signals: Mapping[str, float]) -> tuple[float, float, int]:
    """Fold sub-signals into (push, go, score)."""
    push = sum(weight * signals[name] for name, weight in PUSH_WEIGHTS.items())
    go = sum(weight * signals[name] for name, weight in GO_WEIGHTS.items())
    push = clamp(push, 0.0, 1.0)
    go = clamp(go, 0.0, 1.0)
    raw = 100 * (push ** PUSH_EXPONENT) * (go ** GO_EXPONENT)
    score = int(clamp(round_half_up(raw), 0, 100))
    return push, go, score


def _explain(signals: Mapping[str, float]) -> list[HuntReason]:
    """Pick at most one reason per signal, ups first, capped at three."""
    ups: list[HuntReason] = []
    downs: list[HuntReason] = []
    for rule in SIGNAL_RULES:
        value = signals[rule.name]
        if value >= rule.strong:
            ups.append(HuntReason(type=ReasonType.UP, text=rule.up_text))
        elif value <= rule.weak:
            downs.append(HuntReason(type=ReasonType.DOWN, text=rule.down_text))
    return (ups[:MAX_UP_REASONS] + downs[:MAX_DOWN_REASONS])[:MAX_REASONS]


def score_hunt(weather: WeatherSnapshot | Mapping[str, Any]) -> HuntScore:
    """Score-only variant of score_hunt_today."""
    _push, _go, score = _combine(compute_signals(weather))
    return HuntScore(score=score)


def score_hunt_today(weather: WeatherSnapshot | Mapping[str, Any]) -> HuntScoreResult:
    """Score a snapshot and explain the result."""
    signals = compute_signals(weather)
    push, go, score = _combine(signals)
    return HuntScoreResult(
        score=score,
        push=round_half_up(100 * push),
        go=round_half_up(100 * go),
        why=_explain(signals),
    )


def hunt_rating(score: int) -> HuntRating:
    """Map a 0-100 score onto the gauge label."""
    if score >= PRIME_THRESHOLD:
        return HuntRating.PRIME
    if score >= FAIR_THRESHOLD:
        return HuntRating.FAIR
    return HuntRating.TOUGH
