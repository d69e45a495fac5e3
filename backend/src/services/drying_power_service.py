"""Drying power model.

Converts weather conditions and site geometry into a drying rate relative to
a baseline hour (1.0), integrates that rate since the end of the last rain,
and estimates how long a rock type needs to dry after a given amount of rain.
"""

import logging
from datetime import datetime

from models.rock import LocationSunExposureProfile, RockType
from models.weather import WeatherSample

logger = logging.getLogger(__name__)

MIN_SUN_FACTOR = 0.5
MAX_SUN_FACTOR = 1.5

# Rain amount relative to the 0.1in reference that base_drying_hours assumes
REFERENCE_RAIN_INCHES = 0.1
MIN_RAIN_FACTOR = 0.5
MAX_RAIN_FACTOR = 3.0

MIN_POROSITY_FACTOR = 0.7
MAX_POROSITY_FACTOR = 1.5


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def calculate_sun_exposure_factor(profile: LocationSunExposureProfile | None) -> float:
    """
    Calculate the drying multiplier contributed by site geometry.

    South and west faces dry fastest, north faces slowest. Slabs shed water
    while overhangs stay shaded, and heavy canopy slows everything down.

    Returns:
        Multiplier between 0.5 and 1.5, 1.0 when no profile is known
    """
    if profile is None:
        return 1.0

    aspect_bonus = (
        profile.south_facing_percent / 100 * 0.30
        + profile.west_facing_percent / 100 * 0.15
        + profile.east_facing_percent / 100 * 0.05
        - profile.north_facing_percent / 100 * 0.15
    )
    angle_bonus = profile.slab_percent / 100 * 0.20 - profile.overhang_percent / 100 * 0.10
    factor = 1.0 + aspect_bonus + angle_bonus

    trees = profile.tree_coverage_percent
    if trees > 75:
        factor *= 0.7
    elif trees > 50:
        factor *= 0.8
    elif trees > 25:
        factor *= 0.9

    return _clamp(factor, MIN_SUN_FACTOR, MAX_SUN_FACTOR)


def calculate_hourly_drying_power(
    sample: WeatherSample, profile: LocationSunExposureProfile | None = None
) -> float:
    """Drying achieved in one hour of the given weather, relative to baseline."""
    power = 1.0

    temp = sample.temperature_fahrenheit
    if temp > 70:
        power *= 1.3
    elif temp > 65:
        power *= 1.15
    elif temp < 50:
        power *= 0.6
    elif temp < 55:
        power *= 0.8

    # Moderate wind is best, gusty wind helps less, still air barely helps
    wind = sample.wind_speed_mph
    if 5 <= wind <= 15:
        power *= 1.25
    elif 15 < wind <= 25:
        power *= 1.1
    elif wind < 3:
        power *= 0.85

    humidity = sample.humidity_percent
    if humidity < 40:
        power *= 1.3
    elif humidity < 50:
        power *= 1.15
    elif humidity > 80:
        power *= 0.6
    elif humidity > 70:
        power *= 0.75

    cloud = sample.cloud_cover_percent
    if cloud < 30:
        power *= 1.2
    elif cloud < 50:
        power *= 1.1
    elif cloud > 80:
        power *= 0.85

    return power * calculate_sun_exposure_factor(profile)


def calculate_time_weighted_drying(
    rain_end: datetime,
    historical: list[WeatherSample],
    profile: LocationSunExposureProfile | None,
    as_of: datetime,
    current: WeatherSample | None = None,
) -> float:
    """
    Calculate drying progress since the rain stopped.

    Every hourly sample after the rain contributes its drying power. A current
    observation newer than the history contributes a prorated share when it is
    less than an hour old.

    Returns:
        Progress from 0.0 (just stopped raining) to 1.0 (fully dried)
    """
    hours_elapsed = (as_of - rain_end).total_seconds() / 3600
    if hours_elapsed <= 0:
        return 0.0

    total_power = 0.0
    latest_counted = rain_end
    for sample in historical:
        if rain_end < sample.timestamp <= as_of:
            total_power += calculate_hourly_drying_power(sample, profile)
            latest_counted = max(latest_counted, sample.timestamp)

    if current is not None and current.timestamp > latest_counted:
        current_age_hours = (as_of - current.timestamp).total_seconds() / 3600
        if 0 < current_age_hours < 1:
            total_power += calculate_hourly_drying_power(current, profile) * current_age_hours

    progress = min(1.0, total_power / hours_elapsed)
    logger.debug(
        f"Drying progress {progress:.2f} from {total_power:.2f} power "
        f"over {hours_elapsed:.1f}h since rain"
    )
    return progress


def estimate_drying_time(
    rock_type: RockType,
    rain_amount_inches: float,
    current: WeatherSample,
    profile: LocationSunExposureProfile | None = None,
    has_seepage_risk: bool = False,
    seepage_multiplier: float = 1.4,
    wet_sensitive_multiplier: float = 1.5,
) -> float:
    """
    Estimate total hours a rock type needs to dry after a rain event.

    Scales base drying hours by rain amount and porosity, then adjusts for
    the current weather, site geometry, seepage and wet-sensitivity.
    """
    rain_factor = _clamp(
        rain_amount_inches / REFERENCE_RAIN_INCHES, MIN_RAIN_FACTOR, MAX_RAIN_FACTOR
    )
    porosity_factor = _clamp(
        1.0 + (rock_type.porosity_percent - 5.0) / 100,
        MIN_POROSITY_FACTOR,
        MAX_POROSITY_FACTOR,
    )
    hours = rock_type.base_drying_hours * rain_factor * porosity_factor

    temp = current.temperature_fahrenheit
    if temp > 70:
        hours *= 0.75
    elif temp > 65:
        hours *= 0.85
    elif temp < 50:
        hours *= 1.4
    elif temp < 55:
        hours *= 1.2

    cloud = current.cloud_cover_percent
    if cloud < 30:
        hours *= 0.8
    elif cloud < 50:
        hours *= 0.9

    wind = current.wind_speed_mph
    if 5 <= wind <= 15:
        hours *= 0.8
    elif wind < 3:
        hours *= 1.1

    humidity = current.humidity_percent
    if humidity < 40:
        hours *= 0.75
    elif humidity < 50:
        hours *= 0.85
    elif humidity > 80:
        hours *= 1.35
    elif humidity > 70:
        hours *= 1.2

    hours /= calculate_sun_exposure_factor(profile)

    if has_seepage_risk:
        hours *= seepage_multiplier
    if rock_type.is_wet_sensitive:
        hours *= wet_sensitive_multiplier

    return hours
