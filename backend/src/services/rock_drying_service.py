"""Location-level rock drying assessment service."""

import logging
import math
from dataclasses import dataclass
from datetime import datetime

from models.drying import DryingAlgorithm, DryingState, RockDryingStatus, RockStatus
from models.rock import LocationSunExposureProfile, RockType
from models.weather import RainEvent, WeatherSample
from services.confidence_service import calculate_confidence
from services.drying_power_service import (
    calculate_time_weighted_drying,
    estimate_drying_time,
)
from services.melt_service import MeltEstimator
from services.rain_event_service import (
    WeatherSeriesError,
    find_last_rain_event,
    recent_precipitation,
    validate_weather_series,
)
from utils.time_utils import ensure_utc

logger = logging.getLogger(__name__)

NO_ROCK_DATA_CONFIDENCE = 30
SNOW_CONFIDENCE = 95
ICE_CONFIDENCE = 90


class RockDryingService:
    """Decides whether a location's rock is wet and how long until it dries.

    Conditions are checked in priority order: snow on the ground, ice from
    freezing precipitation, active rain, no recent rain, then drying progress
    since the last rain event.
    """

    def __init__(self, algorithm_config: DryingAlgorithm = None):
        """Initialize the service with algorithm configuration."""
        self.algorithm = algorithm_config or DryingAlgorithm()
        self.melt_estimator = MeltEstimator(self.algorithm.seasonal_melt)

    def calculate_drying_status(
        self,
        rock_types: list[RockType],
        current: WeatherSample,
        historical: list[WeatherSample],
        sun_exposure: LocationSunExposureProfile | None = None,
        has_seepage_risk: bool = False,
        snow_depth_inches: float | None = None,
        as_of: datetime | None = None,
    ) -> RockDryingStatus:
        """
        Calculate the drying status for a location.

        Args:
            rock_types: Rock types at the location, primary first
            current: Latest weather observation
            historical: Past hourly samples in ascending order
            sun_exposure: Site geometry profile if known
            has_seepage_risk: Water seeps onto the rock after rain
            snow_depth_inches: Snow on the ground if known
            as_of: Reference time, defaults to the current sample's timestamp

        Returns:
            RockDryingStatus for the location

        Raises:
            WeatherSeriesError: If current is missing or history is out of order
        """
        if current is None:
            raise WeatherSeriesError("current weather sample is required")
        validate_weather_series(historical, "historical weather")

        if not rock_types:
            return RockDryingStatus(
                is_wet=False,
                is_safe=True,
                status=RockStatus.GOOD,
                message="No rock type data available",
                confidence_score=NO_ROCK_DATA_CONFIDENCE,
            )

        as_of = ensure_utc(as_of) if as_of else current.timestamp
        context = _LocationContext(
            primary=rock_types[0],
            rock_type_names=[rt.name for rt in rock_types],
            has_wet_sensitive=any(rt.is_wet_sensitive for rt in rock_types),
            current=current,
            historical=historical,
            sun_exposure=sun_exposure,
            has_seepage_risk=has_seepage_risk,
            as_of=as_of,
        )

        if (
            snow_depth_inches is not None
            and snow_depth_inches > self.algorithm.snow_depth_threshold_inches
        ):
            return self._snow_on_ground_status(context, snow_depth_inches)

        if current.temperature_fahrenheit <= self.algorithm.freezing_temp_fahrenheit:
            recent_precip = recent_precipitation(
                historical,
                as_of,
                lookback_hours=self.algorithm.ice_lookback_hours,
                threshold=self.algorithm.rain_threshold_inches,
            )
            if recent_precip > self.algorithm.ice_precip_threshold_inches:
                return self._ice_status(context, recent_precip)

        last_rain = find_last_rain_event(
            historical, current, threshold=self.algorithm.rain_threshold_inches
        )

        if current.precipitation_inches > self.algorithm.rain_threshold_inches:
            return self._currently_raining_status(context, last_rain)

        if last_rain is None:
            return self._build_status(
                context,
                is_wet=False,
                hours=0,
                status=RockStatus.GOOD,
                message="Rock is dry - no recent rain",
                state=DryingState.DRY,
                confidence=self._confidence(context, is_dry=True, last_rain=None),
            )

        return self._drying_status(context, last_rain)

    def _snow_on_ground_status(
        self, context: "_LocationContext", snow_depth_inches: float
    ) -> RockDryingStatus:
        hours = self.melt_estimator.estimate_snow_melt_hours(
            snow_depth_inches,
            context.current,
            context.historical,
            context.primary,
            context.sun_exposure,
        )

        status = RockStatus.POOR
        message = "Snow on ground - rock may be wet"
        if context.has_wet_sensitive:
            status = RockStatus.CRITICAL
            message = (
                f"DO NOT CLIMB - {context.primary.display_group} is wet-sensitive "
                "and there is snow on ground"
            )
        elif snow_depth_inches > self.algorithm.significant_snow_depth_inches:
            message = "Significant snow accumulation on ground"

        logger.info(f"Snow on ground ({snow_depth_inches:.1f}in), melt in {hours:.0f}h")
        return self._build_status(
            context,
            is_wet=True,
            hours=hours,
            status=status,
            message=message,
            state=DryingState.SNOW_ON_GROUND,
            confidence=SNOW_CONFIDENCE,
        )

    def _ice_status(
        self, context: "_LocationContext", recent_precip: float
    ) -> RockDryingStatus:
        hours = self.melt_estimator.estimate_ice_melt_hours(
            recent_precip,
            context.current,
            context.historical,
            context.primary,
            context.sun_exposure,
        )

        status = RockStatus.POOR
        message = "Freezing temps with recent precipitation - ice on rock"
        if context.has_wet_sensitive:
            status = RockStatus.CRITICAL
            message = (
                f"DO NOT CLIMB - {context.primary.display_group} is wet-sensitive "
                "and may have ice"
            )

        logger.info(f"Ice risk after {recent_precip:.2f}in at freezing, clear in {hours:.0f}h")
        return self._build_status(
            context,
            is_wet=True,
            hours=hours,
            status=status,
            message=message,
            state=DryingState.ICE_RISK,
            confidence=ICE_CONFIDENCE,
        )

    def _currently_raining_status(
        self, context: "_LocationContext", rain_event: RainEvent | None
    ) -> RockDryingStatus:
        rain_so_far = (
            rain_event.total_rain_inches
            if rain_event is not None
            else context.current.precipitation_inches
        )
        hours = self._required_drying_hours(context, rain_so_far)

        status = RockStatus.POOR
        message = "Currently raining - rock is wet"
        if context.has_wet_sensitive:
            status = RockStatus.CRITICAL
            message = (
                f"DO NOT CLIMB - {context.primary.display_group} is wet-sensitive "
                "and currently raining"
            )

        return self._build_status(
            context,
            is_wet=True,
            hours=hours,
            status=status,
            message=message,
            state=DryingState.CURRENTLY_RAINING,
            confidence=self._confidence(
                context, is_dry=False, last_rain=context.current.timestamp
            ),
            last_rain=context.current.timestamp,
        )

    def _drying_status(
        self, context: "_LocationContext", rain_event: RainEvent
    ) -> RockDryingStatus:
        required = self._required_drying_hours(context, rain_event.total_rain_inches)
        progress = calculate_time_weighted_drying(
            rain_event.end_time,
            context.historical,
            context.sun_exposure,
            context.as_of,
            context.current,
        )
        remaining = required * (1 - progress)
        logger.debug(
            f"Rain of {rain_event.total_rain_inches:.2f}in needs {required:.1f}h, "
            f"{progress:.0%} done, {remaining:.1f}h remaining"
        )

        if remaining <= 0:
            return self._build_status(
                context,
                is_wet=False,
                hours=0,
                status=RockStatus.GOOD,
                message="Rock is dry and safe to climb",
                state=DryingState.DRY,
                confidence=self._confidence(
                    context, is_dry=True, last_rain=rain_event.end_time
                ),
                last_rain=rain_event.end_time,
            )

        status = RockStatus.FAIR
        message = "Rock is drying"
        if remaining >= required * 0.5:
            status = RockStatus.POOR
            message = "Rock is still wet"
        if context.has_wet_sensitive:
            status = RockStatus.CRITICAL
            message = (
                f"DO NOT CLIMB - {context.primary.display_group} is wet-sensitive "
                "and still wet"
            )

        return self._build_status(
            context,
            is_wet=True,
            hours=remaining,
            status=status,
            message=message,
            state=DryingState.DRYING,
            confidence=self._confidence(
                context, is_dry=False, last_rain=rain_event.end_time
            ),
            last_rain=rain_event.end_time,
            # Hard rock past the rain may be climbed with care
            is_safe=status != RockStatus.CRITICAL,
        )

    def _required_drying_hours(
        self, context: "_LocationContext", rain_inches: float
    ) -> float:
        return estimate_drying_time(
            context.primary,
            rain_inches,
            context.current,
            context.sun_exposure,
            has_seepage_risk=context.has_seepage_risk,
            seepage_multiplier=self.algorithm.seepage_multiplier,
            wet_sensitive_multiplier=self.algorithm.wet_sensitive_multiplier,
        )

    def _confidence(
        self,
        context: "_LocationContext",
        is_dry: bool,
        last_rain: datetime | None,
    ) -> int:
        return calculate_confidence(
            is_dry=is_dry,
            last_rain_time=last_rain,
            historical=context.historical,
            has_sun_exposure_profile=context.sun_exposure is not None,
            is_wet_sensitive=context.has_wet_sensitive,
            as_of=context.as_of,
        )

    def _build_status(
        self,
        context: "_LocationContext",
        is_wet: bool,
        hours: float,
        status: RockStatus,
        message: str,
        state: DryingState,
        confidence: int,
        last_rain: datetime | None = None,
        is_safe: bool | None = None,
    ) -> RockDryingStatus:
        # Whole hours, rounded up so any remaining wetness reports at least 1h
        hours_until_dry = float(math.ceil(hours)) if is_wet else 0.0
        return RockDryingStatus(
            is_wet=is_wet,
            is_safe=(not is_wet) if is_safe is None else is_safe,
            is_wet_sensitive=context.has_wet_sensitive,
            hours_until_dry=hours_until_dry,
            last_rain_timestamp=last_rain.isoformat() if last_rain else None,
            status=status,
            message=message,
            rock_types=context.rock_type_names,
            primary_rock_type=context.primary.name,
            primary_group_name=context.primary.group_name,
            confidence_score=confidence,
            state=state,
        )


@dataclass
class _LocationContext:
    """Inputs shared by every branch of one drying calculation."""

    primary: RockType
    rock_type_names: list[str]
    has_wet_sensitive: bool
    current: WeatherSample
    historical: list[WeatherSample]
    sun_exposure: LocationSunExposureProfile | None
    has_seepage_risk: bool
    as_of: datetime
