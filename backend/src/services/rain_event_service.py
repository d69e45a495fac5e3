"""Rain event detection over hourly weather history."""

import logging
from datetime import datetime, timedelta

from models.weather import RainEvent, WeatherSample

logger = logging.getLogger(__name__)

# Anything above this per sample counts as rain, below is drizzle noise
RAIN_THRESHOLD_INCHES = 0.01


class WeatherSeriesError(ValueError):
    """Raised when a weather series handed to the engine is unusable."""


def validate_weather_series(
    samples: list[WeatherSample] | None, name: str = "weather series"
) -> list[WeatherSample]:
    """Ensure a series exists and is in ascending time order."""
    if samples is None:
        raise WeatherSeriesError(f"{name} is required")
    for previous, sample in zip(samples, samples[1:]):
        if sample.timestamp < previous.timestamp:
            raise WeatherSeriesError(
                f"{name} must be in ascending time order: "
                f"{sample.timestamp.isoformat()} follows {previous.timestamp.isoformat()}"
            )
    return samples


def find_last_rain_event(
    historical: list[WeatherSample],
    current: WeatherSample | None = None,
    threshold: float = RAIN_THRESHOLD_INCHES,
) -> RainEvent | None:
    """
    Reconstruct the most recent contiguous rain event.

    Scans from newest to oldest. Dry samples before the event are skipped and
    the scan stops at the first dry sample once the event has begun. When the
    current sample is raining it opens the event.

    Args:
        historical: Past samples in ascending order
        current: Latest observation, optional
        threshold: Minimum precipitation per sample that counts as rain

    Returns:
        The rain event, or None if nothing in the window exceeded the threshold
    """
    candidates = historical
    if current is not None:
        candidates = [s for s in historical if s.timestamp < current.timestamp]
        candidates.append(current)

    rainy: list[WeatherSample] = []
    for sample in reversed(candidates):
        if sample.precipitation_inches > threshold:
            rainy.append(sample)
        elif rainy:
            break

    if not rainy:
        return None

    total = sum(s.precipitation_inches for s in rainy)
    start_time = rainy[-1].timestamp
    end_time = rainy[0].timestamp
    event = RainEvent(
        start_time=start_time,
        end_time=end_time,
        total_rain_inches=total,
        duration_hours=(end_time - start_time).total_seconds() / 3600,
        max_hourly_rate=max(s.precipitation_inches for s in rainy),
        avg_hourly_rate=total / len(rainy),
        sample_count=len(rainy),
    )
    logger.debug(
        f"Last rain event {start_time.isoformat()} - {end_time.isoformat()}: "
        f"{total:.2f}in over {len(rainy)} samples"
    )
    return event


def recent_precipitation(
    historical: list[WeatherSample],
    as_of: datetime,
    lookback_hours: float = 48.0,
    threshold: float = RAIN_THRESHOLD_INCHES,
) -> float:
    """Total precipitation from rainy samples in the lookback window ending at as_of."""
    cutoff = as_of - timedelta(hours=lookback_hours)
    return sum(
        s.precipitation_inches
        for s in historical
        if cutoff < s.timestamp <= as_of and s.precipitation_inches > threshold
    )
