"""Data models for the rock drying engine."""

from .boulder import (
    AreaDryingStats,
    Aspect,
    BoulderDryingStatus,
    BoulderSite,
    TreeCoverageEstimate,
    TreeCoverageSource,
)
from .drying import DryingAlgorithm, DryingState, RockDryingStatus, RockStatus
from .location import ClimbingLocation
from .rock import LocationSunExposureProfile, RockType
from .weather import DryingForecastPeriod, ForecastStatus, RainEvent, WeatherSample

__all__ = [
    "WeatherSample",
    "RainEvent",
    "DryingForecastPeriod",
    "ForecastStatus",
    "RockType",
    "LocationSunExposureProfile",
    "ClimbingLocation",
    "DryingAlgorithm",
    "RockDryingStatus",
    "RockStatus",
    "DryingState",
    "Aspect",
    "BoulderSite",
    "BoulderDryingStatus",
    "AreaDryingStats",
    "TreeCoverageEstimate",
    "TreeCoverageSource",
]
