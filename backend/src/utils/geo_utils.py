"""Geographic utility functions for compass aspects and area lookups."""

from utils.constants import KNOWN_AREA_TREE_COVERAGE

# Compass bearing of each aspect, clockwise from north
ASPECT_DEGREES: dict[str, float] = {
    "N": 0.0,
    "NE": 45.0,
    "E": 90.0,
    "SE": 135.0,
    "S": 180.0,
    "SW": 225.0,
    "W": 270.0,
    "NW": 315.0,
}

_ASPECTS_BY_SECTOR = ["N", "NE", "E", "SE", "S", "SW", "W", "NW"]


def aspect_to_degrees(aspect: str) -> float:
    """
    Convert a compass aspect to a bearing in degrees.

    Args:
        aspect: Eight-point aspect abbreviation (N, NE, ... NW)

    Returns:
        Bearing clockwise from north. Unknown aspects map to south (180).
    """
    return ASPECT_DEGREES.get(aspect.upper(), 180.0)


def degrees_to_aspect(degrees: float) -> str:
    """
    Convert a bearing to the nearest eight-point compass aspect.

    Each aspect owns the 45 degree sector centered on its bearing, so
    22.5 to 67.5 is NE.
    """
    normalized = degrees % 360
    sector = int(((normalized + 22.5) % 360) // 45)
    return _ASPECTS_BY_SECTOR[sector]


def angle_difference(a: float, b: float) -> float:
    """Smallest absolute difference between two bearings, 0 to 180 degrees."""
    diff = abs(a - b) % 360
    if diff > 180:
        diff = 360 - diff
    return diff


def find_known_area(lat: float, lon: float) -> tuple[str, float] | None:
    """
    Find the known climbing area containing a coordinate.

    Returns:
        Tuple of (area name, tree coverage percent), or None outside every area
    """
    for name, min_lat, max_lat, min_lon, max_lon, coverage in KNOWN_AREA_TREE_COVERAGE:
        if min_lat <= lat <= max_lat and min_lon <= lon <= max_lon:
            return name, coverage
    return None
