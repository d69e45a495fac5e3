"""Boulder-level drying refinement and multi-day forecast simulation."""

import logging
import math
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from datetime import datetime, timedelta

from models.boulder import (
    AreaDryingStats,
    Aspect,
    BoulderDryingStatus,
    BoulderSite,
)
from models.drying import DryingAlgorithm, RockDryingStatus, RockStatus
from models.weather import DryingForecastPeriod, ForecastStatus, WeatherSample
from services.confidence_service import clamp_confidence
from services.rain_event_service import WeatherSeriesError, validate_weather_series
from services.sun_position_service import calculate_sun_exposure_hours
from services.tree_coverage_service import TreeCoverageResolver
from utils.constants import (
    ASPECT_SUN_HOURS_PER_DAY,
    BOULDER_CONCURRENCY,
    DEFAULT_SUN_HOURS_PER_DAY,
)
from utils.time_utils import ensure_utc, hours_between, parse_iso_timestamp

logger = logging.getLogger(__name__)

# Confidence penalties for missing boulder data
BOULDER_BASE_CONFIDENCE = 100
MISSING_GPS_PENALTY = 30
MISSING_ASPECT_PENALTY = 20
SUN_FALLBACK_PENALTY = 25

POOR_STATUS_HOURS = 48
# Wet boulders this close to dry count as drying in area stats
DRYING_SOON_HOURS = 24


class BoulderDryingService:
    """Refines a location drying verdict for individual boulders.

    Adds sun exposure from the boulder's own position and orientation, tree
    cover, and a forward projection of wet and dry periods.
    """

    def __init__(
        self,
        algorithm_config: DryingAlgorithm = None,
        tree_coverage_resolver: TreeCoverageResolver | None = None,
    ):
        self.algorithm = algorithm_config or DryingAlgorithm()
        self.tree_coverage_resolver = tree_coverage_resolver or TreeCoverageResolver(
            default_percent=self.algorithm.default_tree_coverage_percent
        )

    def calculate_boulder_status(
        self,
        location_status: RockDryingStatus,
        boulder: BoulderSite,
        as_of: datetime,
        base_drying_hours: float,
        boulder_tree_coverage: float | None = None,
        location_tree_coverage: float | None = None,
        hourly_forecast: list[WeatherSample] | None = None,
    ) -> BoulderDryingStatus:
        """
        Calculate the drying status of one boulder.

        Args:
            location_status: Verdict for the boulder's location
            boulder: Boulder position and orientation
            as_of: Reference time for sun exposure and the forecast
            base_drying_hours: Base drying hours of the primary rock type
            boulder_tree_coverage: Cached canopy cover for the boulder, 0 if unknown
            location_tree_coverage: Canopy cover from the location profile
            hourly_forecast: Hourly forecast to project wet and dry periods, optional

        Returns:
            BoulderDryingStatus for the boulder
        """
        as_of = ensure_utc(as_of)
        confidence = BOULDER_BASE_CONFIDENCE

        if not boulder.has_gps:
            confidence -= MISSING_GPS_PENALTY

        aspect = boulder.aspect
        if aspect is None:
            confidence -= MISSING_ASPECT_PENALTY
            aspect = Aspect.S.value

        tree_coverage = self.tree_coverage_resolver.resolve(
            latitude=boulder.latitude if boulder.has_gps else None,
            longitude=boulder.longitude if boulder.has_gps else None,
            boulder_percent=boulder_tree_coverage,
            location_percent=location_tree_coverage,
        )
        confidence -= tree_coverage.confidence_penalty

        sun_hours, used_fallback = self._sun_exposure_hours(
            boulder, aspect, tree_coverage.percent, as_of
        )
        if used_fallback:
            confidence -= SUN_FALLBACK_PENALTY

        hours_until_dry = 0.0
        if location_status.is_wet:
            hours_until_dry = round(
                self.calculate_boulder_drying_time(
                    location_status.hours_until_dry, sun_hours, tree_coverage.percent
                ),
                1,
            )
        is_wet = hours_until_dry > 0
        is_wet_sensitive = location_status.is_wet_sensitive

        if not is_wet:
            status = RockStatus.GOOD
            message = "Boulder is dry and ready to climb"
        elif is_wet_sensitive:
            status = RockStatus.CRITICAL
            group = location_status.primary_group_name or location_status.primary_rock_type
            message = (
                f"DO NOT CLIMB - {group} is wet-sensitive and currently wet "
                f"({hours_until_dry:.0f}h until dry)"
            )
        else:
            status = RockStatus.POOR if hours_until_dry >= POOR_STATUS_HOURS else RockStatus.FAIR
            message = f"Boulder is wet ({hours_until_dry:.0f}h until dry) - {location_status.message}"

        last_rain = parse_iso_timestamp(location_status.last_rain_timestamp)

        forecast = None
        if hourly_forecast is not None:
            forecast = self.build_drying_forecast(
                hourly_forecast,
                start_time=as_of,
                is_wet=is_wet,
                hours_until_dry=hours_until_dry,
                base_drying_hours=base_drying_hours,
            )

        data = location_status.model_dump()
        data.update(
            boulder_id=boulder.boulder_id,
            latitude=boulder.latitude,
            longitude=boulder.longitude,
            aspect=aspect,
            is_wet=is_wet,
            is_safe=not is_wet or (not is_wet_sensitive and location_status.is_safe),
            hours_until_dry=hours_until_dry,
            last_rain_timestamp=last_rain.isoformat() if last_rain else None,
            status=status,
            message=message,
            confidence_score=clamp_confidence(confidence),
            sun_exposure_hours=round(sun_hours, 1),
            tree_coverage_percent=tree_coverage.percent,
            tree_coverage_source=tree_coverage.source,
            forecast=forecast,
        )
        logger.debug(
            f"Boulder {boulder.boulder_id}: {hours_until_dry}h until dry, "
            f"{sun_hours:.1f} sun hours, {tree_coverage.percent:.0f}% trees "
            f"({tree_coverage.source})"
        )
        return BoulderDryingStatus(**data)

    def calculate_boulder_drying_time(
        self, location_hours: float, sun_exposure_hours: float, tree_coverage_percent: float
    ) -> float:
        """Scale location drying hours by the boulder's sun and canopy."""
        avg_sun_per_day = sun_exposure_hours / self.algorithm.forecast_days

        if avg_sun_per_day >= 8:
            sun_modifier = 0.7
        elif avg_sun_per_day >= 6:
            sun_modifier = 0.85
        elif avg_sun_per_day >= 4:
            sun_modifier = 1.0
        elif avg_sun_per_day >= 2:
            sun_modifier = 1.15
        else:
            sun_modifier = 1.3

        tree_modifier = 1.0
        if tree_coverage_percent > 75:
            tree_modifier = 1.3
        elif tree_coverage_percent > 50:
            tree_modifier = 1.15
        elif tree_coverage_percent > 25:
            tree_modifier = 1.05

        return location_hours * sun_modifier * tree_modifier

    def estimate_sun_exposure_from_aspect(self, aspect: str) -> float:
        """Static sun hour estimate over the forecast window when GPS is unavailable."""
        per_day = ASPECT_SUN_HOURS_PER_DAY.get(aspect, DEFAULT_SUN_HOURS_PER_DAY)
        return per_day * self.algorithm.forecast_days

    def _sun_exposure_hours(
        self, boulder: BoulderSite, aspect: str, tree_coverage_percent: float, as_of: datetime
    ) -> tuple[float, bool]:
        """Returns (sun hours, whether the aspect fallback was used)."""
        if boulder.has_gps:
            try:
                hours = calculate_sun_exposure_hours(
                    boulder.latitude,
                    boulder.longitude,
                    aspect,
                    tree_coverage_percent,
                    as_of,
                    self.algorithm.forecast_hours,
                )
            except (ValueError, OverflowError) as e:
                logger.warning(
                    f"Sun position failed for boulder {boulder.boulder_id}: {e}, "
                    "using aspect estimate"
                )
            else:
                if math.isfinite(hours):
                    return hours, False
                logger.warning(
                    f"Sun exposure for boulder {boulder.boulder_id} is not finite, "
                    "using aspect estimate"
                )
        return self.estimate_sun_exposure_from_aspect(aspect), True

    def build_drying_forecast(
        self,
        hourly_forecast: list[WeatherSample],
        is_wet: bool,
        hours_until_dry: float,
        base_drying_hours: float,
        start_time: datetime | None = None,
    ) -> list[DryingForecastPeriod]:
        """
        Replay an hourly forecast into contiguous dry, drying and wet periods.

        Args:
            hourly_forecast: Forecast samples in ascending order
            is_wet: Whether the boulder is wet at start_time
            hours_until_dry: Remaining drying hours at start_time
            base_drying_hours: Drying hours after a normal rain
            start_time: Start of the projection, defaults to the first sample

        Returns:
            Periods covering start_time through the last forecast sample

        Raises:
            WeatherSeriesError: If the forecast is missing, empty or out of order
        """
        validate_weather_series(hourly_forecast, "hourly forecast")
        if not hourly_forecast:
            raise WeatherSeriesError("hourly forecast is empty")

        start_time = ensure_utc(start_time) if start_time else hourly_forecast[0].timestamp
        simulation = _ForecastSimulation(
            start_time=start_time,
            is_wet=is_wet,
            hours_until_dry=hours_until_dry,
            base_drying_hours=base_drying_hours,
            algorithm=self.algorithm,
        )
        for sample in hourly_forecast:
            if sample.timestamp < start_time:
                continue
            simulation.step(sample)
        return simulation.finish()

    def calculate_area_statuses(
        self,
        location_status: RockDryingStatus,
        boulders: list[BoulderSite],
        as_of: datetime,
        base_drying_hours: float,
        boulder_tree_coverage: dict[str, float] | None = None,
        location_tree_coverage: float | None = None,
        hourly_forecast: list[WeatherSample] | None = None,
        max_workers: int = BOULDER_CONCURRENCY,
    ) -> list[BoulderDryingStatus]:
        """Refine one location verdict for many boulders, preserving input order."""
        if not boulders:
            return []

        tree_coverage = boulder_tree_coverage or {}
        results: list[BoulderDryingStatus | None] = [None] * len(boulders)
        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            futures = {
                executor.submit(
                    self.calculate_boulder_status,
                    location_status,
                    boulder,
                    as_of,
                    base_drying_hours,
                    tree_coverage.get(boulder.boulder_id),
                    location_tree_coverage,
                    hourly_forecast,
                ): index
                for index, boulder in enumerate(boulders)
            }
            for future in as_completed(futures):
                results[futures[future]] = future.result()

        logger.info(f"Calculated drying status for {len(boulders)} boulders")
        return results

    @staticmethod
    def summarize_area(statuses: list[BoulderDryingStatus]) -> AreaDryingStats:
        """Aggregate boulder statuses into area-wide drying stats."""
        total = len(statuses)
        if total == 0:
            return AreaDryingStats()

        wet = [s for s in statuses if s.is_wet]
        drying = [s for s in wet if s.hours_until_dry <= DRYING_SOON_HOURS]
        known_trees = [s.tree_coverage_percent for s in statuses if s.tree_coverage_percent > 0]

        return AreaDryingStats(
            total_boulders=total,
            dry_count=total - len(wet),
            drying_count=len(drying),
            wet_count=len(wet) - len(drying),
            percent_dry=round((total - len(wet)) / total * 100, 1),
            avg_hours_until_dry=(
                round(sum(s.hours_until_dry for s in wet) / len(wet), 1) if wet else 0.0
            ),
            avg_tree_coverage=(
                round(sum(known_trees) / len(known_trees), 1) if known_trees else 0.0
            ),
            confidence_score=round(sum(s.confidence_score for s in statuses) / total),
        )


@dataclass
class _OpenPeriod:
    start_time: datetime
    status: ForecastStatus
    rain_amount: float = 0.0


class _ForecastSimulation:
    """Steps through forecast hours tracking the boulder's wet/dry state."""

    def __init__(
        self,
        start_time: datetime,
        is_wet: bool,
        hours_until_dry: float,
        base_drying_hours: float,
        algorithm: DryingAlgorithm,
    ):
        self.algorithm = algorithm
        self.base_drying_hours = base_drying_hours
        self.event_rain = 0.0
        self.closed: list[_OpenPeriod] = []
        self.closed_end_times: list[datetime] = []
        self.last_time = start_time
        # Span of the final sample, taken from the forecast spacing
        self.sample_hours = 1.0

        if is_wet and hours_until_dry > 0:
            # Already part way through a drying cycle of at least the normal length
            self.drying_time = max(hours_until_dry, base_drying_hours)
            self.hours_since_rain = self.drying_time - hours_until_dry
            status = self._wet_status()
        else:
            self.drying_time = 0.0
            self.hours_since_rain = 0.0
            status = ForecastStatus.DRY
        self.current = _OpenPeriod(start_time=start_time, status=status)

    def _wet_status(self) -> ForecastStatus:
        if self.hours_since_rain < self.drying_time * 0.5:
            return ForecastStatus.WET
        return ForecastStatus.DRYING

    def step(self, sample: WeatherSample) -> None:
        elapsed = hours_between(self.last_time, sample.timestamp)
        self.last_time = sample.timestamp
        if elapsed > 0:
            self.sample_hours = elapsed
        raining = sample.precipitation_inches >= self.algorithm.forecast_rain_threshold_inches

        if self.current.status == ForecastStatus.DRY:
            if raining:
                self._transition(sample.timestamp, ForecastStatus.WET)
                self._add_rain(sample.precipitation_inches)
            return

        if raining:
            if self.current.status != ForecastStatus.WET:
                self._transition(sample.timestamp, ForecastStatus.WET)
            self._add_rain(sample.precipitation_inches)
            return

        self.hours_since_rain += elapsed
        if self.hours_since_rain >= self.drying_time:
            self.event_rain = 0.0
            self._transition(sample.timestamp, ForecastStatus.DRY)
        elif self.current.status == ForecastStatus.WET and self._wet_status() == ForecastStatus.DRYING:
            self._transition(sample.timestamp, ForecastStatus.DRYING)

    def _add_rain(self, precipitation: float) -> None:
        owed = max(0.0, self.drying_time - self.hours_since_rain)
        self.event_rain += precipitation
        self.current.rain_amount += precipitation
        extra_rain = max(0.0, self.event_rain - self.algorithm.heavy_rain_threshold_inches)
        self.drying_time = max(
            self.base_drying_hours + extra_rain * self.algorithm.heavy_rain_hours_per_inch,
            owed,
        )
        self.hours_since_rain = 0.0

    def _transition(self, at: datetime, status: ForecastStatus) -> None:
        dropped = self._close(self.current, at)
        self.current = _OpenPeriod(start_time=at, status=status)
        if dropped is not None:
            # A leading blip hands its span to the next period
            self.current.start_time = dropped.start_time
            if status != ForecastStatus.DRY:
                self.current.rain_amount += dropped.rain_amount

    def _close(self, period: _OpenPeriod, end_time: datetime) -> _OpenPeriod | None:
        """Record a finished period. Returns it if it was too short to keep and has no predecessor."""
        if self.closed and self.closed[-1].status == period.status:
            self.closed[-1].rain_amount += period.rain_amount
            self.closed_end_times[-1] = end_time
            return None

        if hours_between(period.start_time, end_time) < self.algorithm.min_period_hours:
            if not self.closed:
                return period
            if self.closed[-1].status != ForecastStatus.DRY:
                self.closed[-1].rain_amount += period.rain_amount
            self.closed_end_times[-1] = end_time
            return None

        self.closed.append(period)
        self.closed_end_times.append(end_time)
        return None

    def finish(self) -> list[DryingForecastPeriod]:
        final_status = self.current.status
        horizon = self.last_time + timedelta(hours=self.sample_hours)
        dropped = self._close(self.current, horizon)
        if dropped is not None:
            self.closed.append(dropped)
            self.closed_end_times.append(horizon)

        owed_at_end = 0.0
        if final_status != ForecastStatus.DRY:
            owed_at_end = max(0.0, self.drying_time - self.hours_since_rain)

        periods = []
        for index, period in enumerate(self.closed):
            hours_until_dry = 0.0
            if period.status != ForecastStatus.DRY:
                next_dry = next(
                    (p for p in self.closed[index + 1 :] if p.status == ForecastStatus.DRY),
                    None,
                )
                if next_dry is not None:
                    hours_until_dry = hours_between(period.start_time, next_dry.start_time)
                else:
                    hours_until_dry = (
                        hours_between(period.start_time, self.last_time) + owed_at_end
                    )
            periods.append(
                DryingForecastPeriod(
                    start_time=period.start_time,
                    end_time=self.closed_end_times[index],
                    is_dry=period.status == ForecastStatus.DRY,
                    status=period.status,
                    hours_until_dry=round(hours_until_dry, 1),
                    rain_amount_inches=round(period.rain_amount, 2),
                )
            )
        return periods
