"""Pytest configuration and shared fixtures."""

from datetime import UTC, datetime, timedelta

import pytest

from models.drying import DryingAlgorithm, RockDryingStatus, RockStatus
from models.rock import LocationSunExposureProfile, RockType
from models.weather import WeatherSample
from services.boulder_drying_service import BoulderDryingService
from services.rock_drying_service import RockDryingService


@pytest.fixture
def as_of():
    """Fixed reference time so results do not depend on the wall clock."""
    return datetime(2026, 10, 15, 18, 0, tzinfo=UTC)


@pytest.fixture
def make_samples():
    """Factory for ascending hourly weather samples.

    Baseline conditions (60°F, 4mph, 60% humidity, 60% cloud) have a drying
    power of exactly 1.0. precipitation may be a single value or one per sample.
    """

    def build(
        count,
        start,
        precipitation=0.0,
        temperature=60.0,
        humidity=60.0,
        wind=4.0,
        cloud=60.0,
        step_hours=1.0,
    ):
        if not isinstance(precipitation, list):
            precipitation = [precipitation] * count
        return [
            WeatherSample(
                timestamp=start + timedelta(hours=i * step_hours),
                temperature_fahrenheit=temperature,
                precipitation_inches=precipitation[i],
                humidity_percent=humidity,
                wind_speed_mph=wind,
                cloud_cover_percent=cloud,
            )
            for i in range(count)
        ]

    return build


@pytest.fixture
def baseline_current(as_of):
    """Dry current observation with baseline drying conditions."""
    return WeatherSample(
        timestamp=as_of,
        temperature_fahrenheit=60.0,
        precipitation_inches=0.0,
        humidity_percent=60.0,
        wind_speed_mph=4.0,
        cloud_cover_percent=60.0,
    )


@pytest.fixture
def granite():
    return RockType(
        name="Granite",
        base_drying_hours=6,
        porosity_percent=1,
        is_wet_sensitive=False,
        group_name="Fast-Drying Rocks",
    )


@pytest.fixture
def sandstone():
    return RockType(
        name="Sandstone",
        base_drying_hours=36,
        porosity_percent=20,
        is_wet_sensitive=True,
        group_name="Wet-Sensitive Rocks",
    )


@pytest.fixture
def south_facing_profile():
    """Mostly south facing slabby crag with light trees."""
    return LocationSunExposureProfile(
        south_facing_percent=70,
        west_facing_percent=20,
        east_facing_percent=10,
        slab_percent=40,
        overhang_percent=10,
        tree_coverage_percent=20,
    )


@pytest.fixture
def drying_algorithm():
    return DryingAlgorithm()


@pytest.fixture
def rock_drying_service(drying_algorithm):
    return RockDryingService(drying_algorithm)


@pytest.fixture
def boulder_drying_service(drying_algorithm):
    return BoulderDryingService(drying_algorithm)


@pytest.fixture
def wet_location_status(as_of):
    """Granite location still wet a few hours after rain."""
    return RockDryingStatus(
        is_wet=True,
        is_safe=False,
        is_wet_sensitive=False,
        hours_until_dry=24,
        last_rain_timestamp=(as_of - timedelta(hours=3)).isoformat(),
        status=RockStatus.POOR,
        message="Rock is still wet",
        rock_types=["Granite"],
        primary_rock_type="Granite",
        primary_group_name="Fast-Drying Rocks",
        confidence_score=60,
    )


@pytest.fixture
def dry_location_status():
    return RockDryingStatus(
        is_wet=False,
        is_safe=True,
        hours_until_dry=0,
        status=RockStatus.GOOD,
        message="Rock is dry - no recent rain",
        rock_types=["Granite"],
        primary_rock_type="Granite",
        primary_group_name="Fast-Drying Rocks",
        confidence_score=85,
    )
