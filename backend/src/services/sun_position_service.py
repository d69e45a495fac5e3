"""Solar position and direct sun exposure calculations, backed by astral."""

import logging
import math
from datetime import datetime, timedelta, timezone
from typing import NamedTuple

from astral import Observer
from astral.sun import azimuth, elevation, sunrise, sunset

from utils.geo_utils import angle_difference, aspect_to_degrees
from utils.time_utils import ensure_utc

logger = logging.getLogger(__name__)


class SunPosition(NamedTuple):
    """Sun location in the sky."""

    azimuth: float  # Degrees clockwise from north
    elevation: float  # Degrees above the horizon


def calculate_sun_position(latitude: float, longitude: float, when: datetime) -> SunPosition:
    """
    Calculate the sun's azimuth and elevation for an observer.

    Args:
        latitude: Observer latitude in degrees
        longitude: Observer longitude in degrees, east positive
        when: Instant of observation, naive times are UTC

    Returns:
        SunPosition with azimuth (clockwise from north) and elevation in degrees
    """
    observer = Observer(latitude=latitude, longitude=longitude)
    when = ensure_utc(when)
    return SunPosition(
        azimuth=azimuth(observer, when),
        elevation=elevation(observer, when),
    )


def hourly_sun_positions(
    latitude: float, longitude: float, start: datetime, hours: int
) -> list[tuple[datetime, SunPosition]]:
    start = ensure_utc(start)
    return [
        (
            start + timedelta(hours=i),
            calculate_sun_position(latitude, longitude, start + timedelta(hours=i)),
        )
        for i in range(hours)
    ]


def calculate_sun_exposure_hours(
    latitude: float,
    longitude: float,
    aspect: str,
    tree_coverage_percent: float,
    start: datetime,
    hours: int,
) -> float:
    """
    Integrate effective direct sun hours on a rock face.

    Each hour the sun is above the horizon and within 90 degrees of the face
    direction counts cos(angle off the face), reduced linearly by tree cover.

    Args:
        latitude: Boulder latitude
        longitude: Boulder longitude
        aspect: Direction the face points (N, NE, ... NW)
        tree_coverage_percent: Canopy cover 0-100
        start: First hour of the window
        hours: Number of hourly samples

    Returns:
        Effective sun hours over the window
    """
    face_bearing = aspect_to_degrees(aspect)
    tree_factor = 1.0 - tree_coverage_percent / 100.0

    total = 0.0
    for _, position in hourly_sun_positions(latitude, longitude, start, hours):
        if position.elevation <= 0:
            continue
        diff = angle_difference(position.azimuth, face_bearing)
        if diff > 90:
            continue
        total += math.cos(math.radians(diff)) * tree_factor

    logger.debug(
        f"Sun exposure for {aspect} face at ({latitude:.4f}, {longitude:.4f}): "
        f"{total:.1f}h over {hours}h"
    )
    return total


def get_sunrise_and_sunset(
    latitude: float, longitude: float, day: datetime
) -> tuple[datetime | None, datetime | None]:
    """
    Find sunrise and the following sunset for the UTC day containing the given instant.

    Returns:
        Tuple of (sunrise, sunset); both None when the sun does not rise, and
        sunset None when it does not set
    """
    observer = Observer(latitude=latitude, longitude=longitude)
    date = ensure_utc(day).date()

    try:
        rise = sunrise(observer, date=date, tzinfo=timezone.utc)
    except ValueError as e:
        logger.debug(f"No sunrise at ({latitude:.4f}, {longitude:.4f}) on {date}: {e}")
        return None, None

    try:
        set_ = sunset(observer, date=date, tzinfo=timezone.utc)
        if set_ <= rise:
            # West of Greenwich the evening sunset falls on the next UTC day
            set_ = sunset(observer, date=date + timedelta(days=1), tzinfo=timezone.utc)
    except ValueError as e:
        logger.debug(f"No sunset at ({latitude:.4f}, {longitude:.4f}) on {date}: {e}")
        return rise, None

    return rise, set_
