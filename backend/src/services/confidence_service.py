"""Confidence scoring for rock drying verdicts."""

import statistics
from datetime import datetime

from models.drying import MAX_CONFIDENCE, MIN_CONFIDENCE
from models.weather import WeatherSample

BASE_CONFIDENCE = 75

# Temperature variance is judged over at most this many recent samples
VARIANCE_WINDOW_SAMPLES = 48
MIN_VARIANCE_SAMPLES = 12


def clamp_confidence(score: float) -> int:
    return int(max(MIN_CONFIDENCE, min(MAX_CONFIDENCE, round(score))))


def temperature_std_dev(samples: list[WeatherSample]) -> float:
    """Population standard deviation of sample temperatures."""
    if len(samples) < 2:
        return 0.0
    return statistics.pstdev(s.temperature_fahrenheit for s in samples)


def calculate_confidence(
    is_dry: bool,
    last_rain_time: datetime | None,
    historical: list[WeatherSample],
    has_sun_exposure_profile: bool,
    is_wet_sensitive: bool,
    as_of: datetime,
) -> int:
    """
    Score how much to trust a drying verdict.

    Starts from a baseline and deducts for thin weather history, missing site
    geometry, very recent rain and erratic temperatures. Long dry spells and
    long-past rain raise confidence.

    Returns:
        Score clamped to the 20-95 range
    """
    score = BASE_CONFIDENCE

    if len(historical) < 24:
        score -= 15
    elif len(historical) < 48:
        score -= 8

    if not has_sun_exposure_profile:
        score -= 10

    hours_since_rain = None
    if last_rain_time is not None:
        hours_since_rain = (as_of - last_rain_time).total_seconds() / 3600

    if not is_dry and hours_since_rain is not None:
        if hours_since_rain < 6:
            score -= 5
        elif hours_since_rain > 72:
            score += 8

    recent = historical[-VARIANCE_WINDOW_SAMPLES:]
    if len(recent) >= MIN_VARIANCE_SAMPLES:
        std_dev = temperature_std_dev(recent)
        if std_dev > 15:
            score -= 8
        elif std_dev > 10:
            score -= 4

    if is_wet_sensitive and not is_dry:
        score -= 5

    if is_dry and (hours_since_rain is None or hours_since_rain > 96):
        score += 10

    return clamp_confidence(score)
