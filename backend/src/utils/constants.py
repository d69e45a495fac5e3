"""Shared constants for the rock drying backend."""

import os

# Canopy cover assumed when no better source is available
DEFAULT_TREE_COVERAGE_PERCENT: float = float(
    os.environ.get("DEFAULT_TREE_COVERAGE_PERCENT", "30.0")
)

# Worker threads used when refining many boulders against one location
BOULDER_CONCURRENCY: int = int(os.environ.get("BOULDER_CONCURRENCY", "8"))

# Weather windows requested from the weather provider
HISTORICAL_WEATHER_HOURS: int = 168
FORECAST_WEATHER_HOURS: int = 144

# Static daily direct-sun hours by aspect, used when sun position is unavailable
ASPECT_SUN_HOURS_PER_DAY: dict[str, float] = {
    "N": 2.0,
    "NE": 3.0,
    "E": 4.0,
    "SE": 6.0,
    "S": 8.0,
    "SW": 6.0,
    "W": 4.0,
    "NW": 3.0,
}

# Default for aspects missing from the table above
DEFAULT_SUN_HOURS_PER_DAY: float = 4.0

# Canopy estimates for well known climbing areas.
# Each entry: (area, min_lat, max_lat, min_lon, max_lon, tree_coverage_percent).
# Leavenworth and Bishop are split into sub-zones, first match wins.
KNOWN_AREA_TREE_COVERAGE: list[tuple[str, float, float, float, float, float]] = [
    ("Leavenworth (Icicle Creek)", 47.5, 48.0, -121.0, -120.8, 60.0),
    ("Leavenworth", 47.5, 48.0, -120.8, -120.5, 25.0),
    ("Bishop (Buttermilks)", 37.3, 37.5, -119.0, -118.5, 5.0),
    ("Bishop", 37.0, 37.3, -119.0, -118.5, 15.0),
    ("Squamish", 49.5, 50.0, -123.5, -123.0, 70.0),
    ("Red Rocks", 36.0, 36.3, -115.6, -115.3, 2.0),
    ("Smith Rock", 44.3, 44.4, -121.2, -121.1, 10.0),
    ("Joshua Tree", 33.8, 34.2, -116.4, -116.0, 3.0),
    ("Yosemite", 37.7, 37.8, -119.7, -119.5, 55.0),
]
