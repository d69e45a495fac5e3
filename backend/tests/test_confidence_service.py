"""Tests for confidence scoring."""

from datetime import timedelta

from services.confidence_service import (
    calculate_confidence,
    clamp_confidence,
    temperature_std_dev,
)


class TestCalculateConfidence:
    """Test cases for calculate_confidence."""

    def test_long_dry_spell_with_full_data(self, make_samples, as_of):
        historical = make_samples(48, as_of - timedelta(hours=48))

        score = calculate_confidence(
            is_dry=True,
            last_rain_time=None,
            historical=historical,
            has_sun_exposure_profile=True,
            is_wet_sensitive=False,
            as_of=as_of,
        )

        assert score == 85

    def test_thin_history_and_no_profile(self, make_samples, as_of):
        historical = make_samples(10, as_of - timedelta(hours=10))

        score = calculate_confidence(
            is_dry=True,
            last_rain_time=None,
            historical=historical,
            has_sun_exposure_profile=False,
            is_wet_sensitive=False,
            as_of=as_of,
        )

        assert score == 75 - 15 - 10 + 10

    def test_moderate_history_penalty(self, make_samples, as_of):
        historical = make_samples(30, as_of - timedelta(hours=30))

        score = calculate_confidence(
            is_dry=False,
            last_rain_time=as_of - timedelta(hours=12),
            historical=historical,
            has_sun_exposure_profile=True,
            is_wet_sensitive=False,
            as_of=as_of,
        )

        assert score == 75 - 8

    def test_very_recent_rain_on_wet_sensitive_rock(self, make_samples, as_of):
        historical = make_samples(48, as_of - timedelta(hours=48))

        score = calculate_confidence(
            is_dry=False,
            last_rain_time=as_of - timedelta(hours=3),
            historical=historical,
            has_sun_exposure_profile=True,
            is_wet_sensitive=True,
            as_of=as_of,
        )

        assert score == 75 - 5 - 5

    def test_old_rain_raises_confidence_while_wet(self, make_samples, as_of):
        historical = make_samples(96, as_of - timedelta(hours=96))

        score = calculate_confidence(
            is_dry=False,
            last_rain_time=as_of - timedelta(hours=80),
            historical=historical,
            has_sun_exposure_profile=True,
            is_wet_sensitive=False,
            as_of=as_of,
        )

        assert score == 75 + 8

    def test_dry_after_recent_rain_gets_no_dry_bonus(self, make_samples, as_of):
        historical = make_samples(48, as_of - timedelta(hours=48))

        score = calculate_confidence(
            is_dry=True,
            last_rain_time=as_of - timedelta(hours=20),
            historical=historical,
            has_sun_exposure_profile=True,
            is_wet_sensitive=False,
            as_of=as_of,
        )

        assert score == 75

    def test_erratic_temperatures_lower_confidence(self, make_samples, as_of):
        historical = []
        for hour in range(48):
            historical += make_samples(
                1,
                as_of - timedelta(hours=48 - hour),
                temperature=40.0 if hour % 2 else 80.0,
            )

        score = calculate_confidence(
            is_dry=True,
            last_rain_time=None,
            historical=historical,
            has_sun_exposure_profile=True,
            is_wet_sensitive=False,
            as_of=as_of,
        )

        assert score == 75 - 8 + 10

    def test_score_stays_in_range(self, make_samples, as_of):
        historical = make_samples(5, as_of - timedelta(hours=5))

        score = calculate_confidence(
            is_dry=False,
            last_rain_time=as_of - timedelta(hours=1),
            historical=historical,
            has_sun_exposure_profile=False,
            is_wet_sensitive=True,
            as_of=as_of,
        )

        assert 20 <= score <= 95


class TestConfidenceHelpers:
    """Test cases for confidence helpers."""

    def test_clamp_confidence(self):
        assert clamp_confidence(5) == 20
        assert clamp_confidence(120) == 95
        assert clamp_confidence(64.6) == 65

    def test_temperature_std_dev(self, make_samples, as_of):
        assert temperature_std_dev(make_samples(10, as_of)) == 0.0
        assert temperature_std_dev([]) == 0.0

        mixed = make_samples(1, as_of, temperature=40) + make_samples(
            1, as_of + timedelta(hours=1), temperature=60
        )
        assert temperature_std_dev(mixed) == 10.0
