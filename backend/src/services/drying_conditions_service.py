"""Drying conditions facade.

Gathers weather, rock and site data from the injected providers and runs the
drying engine over it. The engine itself never performs I/O, so every fetch
happens here before any calculation starts.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Protocol

from models.boulder import AreaDryingStats, BoulderDryingStatus, BoulderSite
from models.drying import DryingAlgorithm, RockDryingStatus
from models.location import ClimbingLocation
from models.rock import LocationSunExposureProfile, RockType
from models.weather import WeatherSample
from services.boulder_drying_service import BoulderDryingService
from services.rock_drying_service import RockDryingService
from utils.constants import (
    BOULDER_CONCURRENCY,
    FORECAST_WEATHER_HOURS,
    HISTORICAL_WEATHER_HOURS,
)
from utils.time_utils import ensure_utc

logger = logging.getLogger(__name__)

# Used for forecast replay when a location has no rock type data
DEFAULT_BASE_DRYING_HOURS = 24.0


class WeatherProvider(Protocol):
    def get_current(self, latitude: float, longitude: float) -> WeatherSample: ...

    def get_historical(
        self, latitude: float, longitude: float, hours: int
    ) -> list[WeatherSample]: ...

    def get_forecast(
        self, latitude: float, longitude: float, hours: int
    ) -> list[WeatherSample]: ...


class RockTypeRepository(Protocol):
    def get_rock_types_by_location(self, location_id: str) -> list[RockType]: ...


class SunExposureProfileRepository(Protocol):
    def get_sun_exposure_by_location(
        self, location_id: str
    ) -> LocationSunExposureProfile | None: ...


class TreeCoverageProvider(Protocol):
    def get_tree_coverage(self, latitude: float, longitude: float) -> float | None: ...


class DryingConditionsService:
    """Computes location and boulder drying conditions from provider data."""

    def __init__(
        self,
        weather_provider: WeatherProvider,
        rock_type_repository: RockTypeRepository,
        sun_exposure_repository: SunExposureProfileRepository | None = None,
        tree_coverage_provider: TreeCoverageProvider | None = None,
        algorithm_config: DryingAlgorithm = None,
        max_workers: int = BOULDER_CONCURRENCY,
    ):
        self.weather_provider = weather_provider
        self.rock_type_repository = rock_type_repository
        self.sun_exposure_repository = sun_exposure_repository
        self.tree_coverage_provider = tree_coverage_provider
        self.algorithm = algorithm_config or DryingAlgorithm()
        self.rock_drying_service = RockDryingService(self.algorithm)
        self.boulder_drying_service = BoulderDryingService(self.algorithm)
        self.max_workers = max_workers

    def get_location_status(
        self, location: ClimbingLocation, as_of: datetime | None = None
    ) -> RockDryingStatus:
        """Drying verdict for a whole location."""
        snapshot = self._fetch_location_snapshot(location)
        return self._calculate_location_status(
            location, snapshot, self._reference_time(snapshot, as_of)
        )

    def get_boulder_statuses(
        self,
        location: ClimbingLocation,
        boulders: list[BoulderSite],
        as_of: datetime | None = None,
        include_forecast: bool = True,
    ) -> list[BoulderDryingStatus]:
        """
        Drying verdicts for every boulder at a location.

        The location verdict is computed once and shared by all boulders.

        Args:
            location: The climbing location
            boulders: Boulders at the location
            as_of: Reference time, defaults to the current weather sample's timestamp
            include_forecast: Whether to project wet/dry periods for each boulder

        Returns:
            Boulder statuses in the same order as boulders
        """
        snapshot = self._fetch_location_snapshot(location)
        as_of = self._reference_time(snapshot, as_of)
        location_status = self._calculate_location_status(location, snapshot, as_of)

        tree_coverage = {
            boulder.boulder_id: self._fetch_tree_coverage(boulder) for boulder in boulders
        }
        base_drying_hours = (
            snapshot.rock_types[0].base_drying_hours
            if snapshot.rock_types
            else DEFAULT_BASE_DRYING_HOURS
        )
        location_tree_coverage = (
            snapshot.sun_exposure.tree_coverage_percent if snapshot.sun_exposure else None
        )

        return self.boulder_drying_service.calculate_area_statuses(
            location_status,
            boulders,
            as_of=as_of,
            base_drying_hours=base_drying_hours,
            boulder_tree_coverage=tree_coverage,
            location_tree_coverage=location_tree_coverage,
            hourly_forecast=(snapshot.forecast or None) if include_forecast else None,
            max_workers=self.max_workers,
        )

    def get_area_drying_stats(
        self,
        location: ClimbingLocation,
        boulders: list[BoulderSite],
        as_of: datetime | None = None,
    ) -> AreaDryingStats:
        statuses = self.get_boulder_statuses(
            location, boulders, as_of=as_of, include_forecast=False
        )
        return self.boulder_drying_service.summarize_area(statuses)

    def _calculate_location_status(
        self,
        location: ClimbingLocation,
        snapshot: "_LocationSnapshot",
        as_of: datetime | None,
    ) -> RockDryingStatus:
        status = self.rock_drying_service.calculate_drying_status(
            snapshot.rock_types,
            snapshot.current,
            snapshot.historical,
            sun_exposure=snapshot.sun_exposure,
            has_seepage_risk=location.has_seepage_risk,
            snow_depth_inches=location.snow_depth_inches,
            as_of=as_of,
        )
        logger.info(
            f"Location {location.location_id}: {status.status}, "
            f"{status.hours_until_dry:.0f}h until dry"
        )
        return status

    @staticmethod
    def _reference_time(
        snapshot: "_LocationSnapshot", as_of: datetime | None
    ) -> datetime | None:
        """Reference time for every entry point, defaulting to the current sample."""
        if as_of is not None:
            return ensure_utc(as_of)
        return snapshot.current.timestamp if snapshot.current is not None else None

    def _fetch_location_snapshot(self, location: ClimbingLocation) -> "_LocationSnapshot":
        lat, lon = location.latitude, location.longitude
        current = self.weather_provider.get_current(lat, lon)
        historical = self.weather_provider.get_historical(lat, lon, HISTORICAL_WEATHER_HOURS)
        forecast = self.weather_provider.get_forecast(lat, lon, FORECAST_WEATHER_HOURS)
        rock_types = self.rock_type_repository.get_rock_types_by_location(location.location_id)

        sun_exposure = None
        if self.sun_exposure_repository is not None:
            try:
                sun_exposure = self.sun_exposure_repository.get_sun_exposure_by_location(
                    location.location_id
                )
            except Exception as e:
                logger.warning(
                    f"Failed to get sun exposure for location {location.location_id}: {e}"
                )

        return _LocationSnapshot(
            current=current,
            historical=historical,
            forecast=forecast,
            rock_types=rock_types,
            sun_exposure=sun_exposure,
        )

    def _fetch_tree_coverage(self, boulder: BoulderSite) -> float | None:
        if self.tree_coverage_provider is None or not boulder.has_gps:
            return None
        try:
            return self.tree_coverage_provider.get_tree_coverage(
                boulder.latitude, boulder.longitude
            )
        except Exception as e:
            logger.warning(f"Tree coverage lookup failed for {boulder.boulder_id}: {e}")
            return None


@dataclass
class _LocationSnapshot:
    """Provider data for one location, fetched before any calculation."""

    current: WeatherSample
    historical: list[WeatherSample]
    forecast: list[WeatherSample]
    rock_types: list[RockType]
    sun_exposure: LocationSunExposureProfile | None
