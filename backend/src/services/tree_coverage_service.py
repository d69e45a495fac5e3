"""Tree coverage resolution for boulders."""

import logging
from collections.abc import Callable
from dataclasses import dataclass

from models.boulder import TreeCoverageEstimate, TreeCoverageSource
from utils.constants import DEFAULT_TREE_COVERAGE_PERCENT
from utils.geo_utils import find_known_area

logger = logging.getLogger(__name__)

# Confidence lost whenever the boulder's own canopy measurement is unavailable
UNKNOWN_TREE_COVERAGE_PENALTY = 15


@dataclass
class TreeCoverageQuery:
    """Everything a strategy may use to guess canopy cover."""

    latitude: float | None = None
    longitude: float | None = None
    boulder_percent: float | None = None
    location_percent: float | None = None


TreeCoverageStrategy = Callable[[TreeCoverageQuery], float | None]


def from_boulder_cache(query: TreeCoverageQuery) -> float | None:
    """Per-boulder canopy lookup, zero means never measured."""
    if query.boulder_percent is not None and query.boulder_percent > 0:
        return query.boulder_percent
    return None


def from_location_profile(query: TreeCoverageQuery) -> float | None:
    if query.location_percent is not None and query.location_percent > 0:
        return query.location_percent
    return None


def from_known_climbing_area(query: TreeCoverageQuery) -> float | None:
    """Regional estimate for well known climbing areas."""
    if query.latitude is None or query.longitude is None:
        return None
    area = find_known_area(query.latitude, query.longitude)
    if area is None:
        return None
    name, coverage = area
    logger.debug(f"Using {name} regional tree coverage estimate of {coverage:.0f}%")
    return coverage


DEFAULT_STRATEGIES: list[tuple[TreeCoverageSource, TreeCoverageStrategy]] = [
    (TreeCoverageSource.BOULDER, from_boulder_cache),
    (TreeCoverageSource.LOCATION, from_location_profile),
    (TreeCoverageSource.REGIONAL, from_known_climbing_area),
]


class TreeCoverageResolver:
    """Tries canopy sources in order and reports which one answered."""

    def __init__(
        self,
        strategies: list[tuple[TreeCoverageSource, TreeCoverageStrategy]] | None = None,
        default_percent: float = DEFAULT_TREE_COVERAGE_PERCENT,
        penalty: int = UNKNOWN_TREE_COVERAGE_PENALTY,
    ):
        self.strategies = strategies if strategies is not None else DEFAULT_STRATEGIES
        self.default_percent = default_percent
        self.penalty = penalty

    def resolve(
        self,
        latitude: float | None = None,
        longitude: float | None = None,
        boulder_percent: float | None = None,
        location_percent: float | None = None,
    ) -> TreeCoverageEstimate:
        query = TreeCoverageQuery(
            latitude=latitude,
            longitude=longitude,
            boulder_percent=boulder_percent,
            location_percent=location_percent,
        )
        for source, strategy in self.strategies:
            percent = strategy(query)
            if percent is not None:
                return TreeCoverageEstimate(
                    percent=min(100.0, percent),
                    source=source,
                    confidence_penalty=0 if source == TreeCoverageSource.BOULDER else self.penalty,
                )

        return TreeCoverageEstimate(
            percent=self.default_percent,
            source=TreeCoverageSource.DEFAULT,
            confidence_penalty=self.penalty,
        )
