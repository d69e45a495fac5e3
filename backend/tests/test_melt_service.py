"""Tests for snow and ice melt estimation."""

from datetime import UTC, datetime, timedelta

import pytest

from models.drying import Season, SeasonalMeltFallback
from models.rock import RockType
from models.weather import WeatherSample
from services.melt_service import MeltEstimator


def _current(when, temperature, wind=0.0):
    return WeatherSample(
        timestamp=when, temperature_fahrenheit=temperature, wind_speed_mph=wind
    )


JANUARY = datetime(2026, 1, 15, 12, 0, tzinfo=UTC)
APRIL = datetime(2026, 4, 15, 12, 0, tzinfo=UTC)
JULY = datetime(2026, 7, 15, 12, 0, tzinfo=UTC)


class TestSeasonalMeltFallback:
    """Test cases for the seasonal melt strategy."""

    def test_seasons(self):
        fallback = SeasonalMeltFallback()
        assert fallback.season_for(7) == Season.SUMMER
        assert fallback.season_for(10) == Season.SHOULDER
        assert fallback.season_for(11) == Season.WINTER
        assert fallback.season_for(1) == Season.WINTER

    def test_snow_hours_by_season(self):
        fallback = SeasonalMeltFallback()
        assert fallback.snow_melt_hours(7, 3) == 48 + 36
        assert fallback.snow_melt_hours(4, 3) == 96 + 72
        assert fallback.snow_melt_hours(1, 3) == 168 + 108

    def test_ice_hours_by_season(self):
        fallback = SeasonalMeltFallback()
        assert fallback.ice_melt_hours(7, 1) == 24 + 8
        assert fallback.ice_melt_hours(9, 1) == 48 + 12
        assert fallback.ice_melt_hours(12, 1) == 84 + 18


class TestSnowMelt:
    """Test cases for snow melt estimation."""

    def test_freezing_january_snow_uses_winter_fallback(self, make_samples, granite):
        historical = make_samples(12, JANUARY - timedelta(hours=12), temperature=28)
        estimator = MeltEstimator()

        hours = estimator.estimate_snow_melt_hours(
            3.0, _current(JANUARY, 30), historical, granite
        )

        assert hours >= 276

    def test_freezing_summer_snow_uses_summer_fallback(self, make_samples, granite):
        historical = make_samples(12, JULY - timedelta(hours=12), temperature=30)
        hours = MeltEstimator().estimate_snow_melt_hours(
            3.0, _current(JULY, 31), historical, granite
        )
        assert hours == pytest.approx(84)

    def test_warming_trend_melts_despite_freezing_reading(self, make_samples, granite):
        historical = make_samples(12, JANUARY - timedelta(hours=12), temperature=40)

        hours = MeltEstimator().estimate_snow_melt_hours(
            3.0, _current(JANUARY, 30), historical, granite
        )

        # 0.02 * 1.12^8 * 1.29 rock multiplier, plus half of granite's 6h
        expected = 3.0 / (0.02 * 1.12**8 * 1.29) + 3.0
        assert hours == pytest.approx(expected)

    def test_warmer_weather_melts_faster(self, make_samples, granite):
        estimator = MeltEstimator()
        cool_history = make_samples(12, APRIL - timedelta(hours=12), temperature=36)
        warm_history = make_samples(12, APRIL - timedelta(hours=12), temperature=55)

        cool = estimator.estimate_snow_melt_hours(2.0, _current(APRIL, 36), cool_history, granite)
        warm = estimator.estimate_snow_melt_hours(2.0, _current(APRIL, 55), warm_history, granite)

        assert warm < cool

    def test_wind_speeds_melt(self, make_samples, granite):
        estimator = MeltEstimator()
        history = make_samples(12, APRIL - timedelta(hours=12), temperature=40)

        calm = estimator.estimate_snow_melt_hours(2.0, _current(APRIL, 40), history, granite)
        windy = estimator.estimate_snow_melt_hours(
            2.0, _current(APRIL, 40, wind=20), history, granite
        )

        assert windy < calm

    def test_melt_hours_are_capped(self, make_samples, granite):
        historical = make_samples(12, APRIL - timedelta(hours=12), temperature=33)

        hours = MeltEstimator().estimate_snow_melt_hours(
            10.0, _current(APRIL, 33), historical, granite
        )

        assert hours == pytest.approx(336 + 3)

    def test_cooling_trend_slows_melt(self, make_samples, granite):
        estimator = MeltEstimator()
        steady = make_samples(12, APRIL - timedelta(hours=12), temperature=45)
        cooling = make_samples(12, APRIL - timedelta(hours=12), temperature=35)

        steady_hours = estimator.estimate_snow_melt_hours(
            1.0, _current(APRIL, 45), steady, granite
        )
        cooling_hours = estimator.estimate_snow_melt_hours(
            1.0, _current(APRIL, 45), cooling, granite
        )

        assert cooling_hours > steady_hours

    def test_custom_seasonal_fallback(self, make_samples, granite):
        fallback = SeasonalMeltFallback(winter_snow_base_hours=100, winter_snow_hours_per_inch=10)
        historical = make_samples(12, JANUARY - timedelta(hours=12), temperature=20)

        hours = MeltEstimator(fallback).estimate_snow_melt_hours(
            2.0, _current(JANUARY, 20), historical, granite
        )

        assert hours == pytest.approx(120)


class TestIceMelt:
    """Test cases for ice melt estimation."""

    def test_freezing_january_ice_uses_winter_fallback(self, make_samples, granite):
        historical = make_samples(12, JANUARY - timedelta(hours=12), temperature=28)

        hours = MeltEstimator().estimate_ice_melt_hours(
            0.2, _current(JANUARY, 30), historical, granite
        )

        # 0.2in of precipitation forms about 2in of ice
        assert hours == pytest.approx(84 + 2 * 18)

    def test_above_freezing_ice_melt(self, make_samples, granite):
        historical = make_samples(12, APRIL - timedelta(hours=12), temperature=40)

        hours = MeltEstimator().estimate_ice_melt_hours(
            0.2, _current(APRIL, 40), historical, granite
        )

        expected = 2.0 / (0.03 * 1.15**8 * 1.29) + 6 * 0.4
        assert hours == pytest.approx(expected)

    def test_ice_melts_faster_than_snow(self, make_samples, granite):
        estimator = MeltEstimator()
        historical = make_samples(12, APRIL - timedelta(hours=12), temperature=40)
        current = _current(APRIL, 40)

        ice = estimator.estimate_ice_melt_hours(0.1, current, historical, granite)
        snow = estimator.estimate_snow_melt_hours(1.0, current, historical, granite)

        assert ice < snow


class TestPorosity:
    """Test cases for the rock porosity melt multiplier."""

    @pytest.mark.parametrize(
        "method,amount",
        [("estimate_snow_melt_hours", 3.0), ("estimate_ice_melt_hours", 0.2)],
    )
    def test_hours_never_decrease_with_porosity(self, make_samples, method, amount):
        estimator = MeltEstimator()
        historical = make_samples(12, APRIL - timedelta(hours=12), temperature=40)

        hours = [
            getattr(estimator, method)(
                amount,
                _current(APRIL, 40),
                historical,
                RockType(name="Test", base_drying_hours=6, porosity_percent=porosity),
            )
            for porosity in (0, 1, 5, 20, 40, 80)
        ]

        assert hours == sorted(hours)

    def test_zero_porosity_melts_fastest(self, make_samples):
        historical = make_samples(12, APRIL - timedelta(hours=12), temperature=40)
        dense = RockType(name="Dense", base_drying_hours=6, porosity_percent=0)

        hours = MeltEstimator().estimate_snow_melt_hours(
            3.0, _current(APRIL, 40), historical, dense
        )

        expected = 3.0 / (0.02 * 1.12**8 * 1.3) + 3.0
        assert hours == pytest.approx(expected)
