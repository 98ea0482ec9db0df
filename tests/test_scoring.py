import pytest
from pydantic import ValidationError

from ducksmart.domain import HuntRating, ReasonType, WeatherSnapshot
from ducksmart.scoring import (
    cloud_signal,
    cold_signal,
    hunt_rating,
    no_precip_signal,
    pressure_signal,
    score_hunt,
    score_hunt_today,
    tailwind_signal,
)


def make_weather(**overrides):
    base = {
        "temp_f": 31,
        "feels_like_f": 26,
        "wind_mph": 12,
        "wind_deg": 315,
        "pressure_inhg": 30.08,
        "delta_temp_24h_f": -10,
        "delta_pressure_3h": 0.06,
        "precip_chance": 35,
        "cloud_pct": 70,
    }
    base.update(overrides)
    return WeatherSnapshot(**base)


@pytest.mark.parametrize("delta", [-15, -15.5, -40, -1e6])
def test_cold_signal_saturates_high(delta):
    assert cold_signal(delta) == 1.0


@pytest.mark.parametrize("delta", [10, 10.1, 35, 1e6])
def test_cold_signal_saturates_low(delta):
    assert cold_signal(delta) == 0.0


def test_cold_signal_linear_between():
    assert cold_signal(-10) == pytest.approx(0.8)
    assert cold_signal(0) == pytest.approx(0.4)


def test_pressure_signal_uses_magnitude():
    assert pressure_signal(0) == pytest.approx(0.2)
    assert pressure_signal(0.06) == pytest.approx(0.68)
    assert pressure_signal(-0.06) == pytest.approx(0.68)
    assert pressure_signal(0.10) == 1.0
    assert pressure_signal(-0.5) == 1.0


@pytest.mark.parametrize("wind", [8, 10, 12, 16])
def test_tailwind_sweet_spot(wind):
    assert tailwind_signal(wind) == 1.0


def test_tailwind_curve_segments():
    assert tailwind_signal(0) == pytest.approx(0.15)
    assert tailwind_signal(2.9) == pytest.approx(0.15)
    assert tailwind_signal(5.5) == pytest.approx(0.575)
    assert tailwind_signal(19) == pytest.approx(0.825)
    assert tailwind_signal(22) == pytest.approx(0.65)
    assert tailwind_signal(27) == pytest.approx(0.35)
    assert tailwind_signal(200) == pytest.approx(0.1)
    assert tailwind_signal(-10) == pytest.approx(0.15)


def test_tailwind_is_not_monotonic():
    assert tailwind_signal(4) < tailwind_signal(12)
    assert tailwind_signal(30) < tailwind_signal(12)


def test_no_precip_signal_floors_at_point_one():
    assert no_precip_signal(0) == 1.0
    assert no_precip_signal(35) == pytest.approx(0.685)
    assert no_precip_signal(100) == pytest.approx(0.1)
    assert no_precip_signal(250) == pytest.approx(0.1)
    assert no_precip_signal(-20) == 1.0


def test_cloud_signal_curve():
    assert cloud_signal(30) == 1.0
    assert cloud_signal(70) == 1.0
    assert cloud_signal(0) == pytest.approx(0.6)
    assert cloud_signal(15) == pytest.approx(0.8)
    assert cloud_signal(85) == pytest.approx(0.85)
    assert cloud_signal(100) == pytest.approx(0.7)
    assert cloud_signal(400) == pytest.approx(0.7)


def test_mock_weather_scenario():
    result = score_hunt_today(make_weather())
    # push = 0.6*0.8 + 0.4*0.68 = 0.752; go = 0.55 + 0.30*0.685 + 0.15 = 0.9055
    assert result.push == 75
    assert 90 <= result.go <= 91
    assert result.score == 69
    assert [r.type for r in result.why] == [ReasonType.UP, ReasonType.UP]
    assert result.why[0].text.startswith("Recent temperature drop")
    assert result.why[1].text.startswith("Good wind speed")


def test_ideal_conditions_hit_100():
    result = score_hunt_today(
        make_weather(delta_temp_24h_f=-20, delta_pressure_3h=0.2, wind_mph=12, precip_chance=0, cloud_pct=50)
    )
    assert (result.score, result.push, result.go) == (100, 100, 100)
    assert len(result.why) == 2  # two ups max, no downs


def test_why_puts_ups_before_downs_and_caps_at_three():
    result = score_hunt_today(
        make_weather(delta_temp_24h_f=10, delta_pressure_3h=0, wind_mph=12, precip_chance=0, cloud_pct=50)
    )
    assert [r.type for r in result.why] == [ReasonType.UP, ReasonType.UP, ReasonType.DOWN]
    assert result.why[2].text.startswith("Warm-up")


def test_all_bad_conditions():
    result = score_hunt_today(
        make_weather(delta_temp_24h_f=20, delta_pressure_3h=0, wind_mph=0, precip_chance=100, cloud_pct=0)
    )
    assert result.score <= 5
    assert [r.type for r in result.why] == [ReasonType.DOWN, ReasonType.DOWN]
    assert hunt_rating(result.score) == HuntRating.TOUGH


@pytest.mark.parametrize(
    "overrides",
    [
        {"wind_mph": -50, "precip_chance": -10, "cloud_pct": -10},
        {"wind_mph": 1e6, "precip_chance": 1e6, "cloud_pct": 1e6},
        {"delta_temp_24h_f": -1e9, "delta_pressure_3h": 1e9},
        {"delta_temp_24h_f": 1e9, "delta_pressure_3h": -1e9},
        {"delta_temp_24h_f": 0, "delta_pressure_3h": 0, "wind_mph": 0, "precip_chance": 0, "cloud_pct": 0},
    ],
)
def test_score_is_bounded_integer_for_extreme_input(overrides):
    result = score_hunt_today(make_weather(**overrides))
    assert isinstance(result.score, int)
    assert 0 <= result.score <= 100
    assert 0 <= result.push <= 100
    assert 0 <= result.go <= 100
    assert len(result.why) <= 3
    types = [r.type for r in result.why]
    if ReasonType.DOWN in types and ReasonType.UP in types:
        assert types.index(ReasonType.UP) < types.index(ReasonType.DOWN)


def test_minimal_variant_matches_full_score():
    weather = make_weather(wind_mph=25, cloud_pct=10)
    assert score_hunt(weather).score == score_hunt_today(weather).score


def test_accepts_the_five_scored_fields_alone():
    payload = {
        "delta_temp_24h_f": -10,
        "delta_pressure_3h": 0.06,
        "wind_mph": 12,
        "precip_chance": 35,
        "cloud_pct": 70,
    }
    assert score_hunt_today(payload) == score_hunt_today(make_weather())
    assert score_hunt(payload).score == 69


def test_accepts_full_snapshot_mapping():
    assert score_hunt(make_weather().model_dump()).score == 69


def test_rejects_unknown_mapping_keys():
    payload = make_weather().model_dump()
    payload["deltaTemp24hF"] = -10
    with pytest.raises(ValidationError):
        score_hunt(payload)


@pytest.mark.parametrize("cloud_pct", [0, 100, -20, 500])
def test_cloud_never_produces_a_down_reason(cloud_pct):
    result = score_hunt_today(make_weather(cloud_pct=cloud_pct, delta_temp_24h_f=0, delta_pressure_3h=0.05))
    assert all(not r.text.startswith("Bluebird") for r in result.why)


@pytest.mark.parametrize(
    "score,expected",
    [(100, HuntRating.PRIME), (70, HuntRating.PRIME), (69, HuntRating.FAIR), (45, HuntRating.FAIR), (44, HuntRating.TOUGH)],
)
def test_hunt_rating_thresholds(score, expected):
    assert hunt_rating(score) == expected
