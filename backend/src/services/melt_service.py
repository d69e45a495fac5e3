"""Snow and ice melt time estimation."""

import logging
from typing import NamedTuple

from models.drying import SeasonalMeltFallback
from models.rock import LocationSunExposureProfile, RockType
from models.weather import WeatherSample

logger = logging.getLogger(__name__)

# Samples averaged to detect a warming trend and to judge the temperature trend
WARMING_WINDOW_SAMPLES = 12
TREND_WINDOW_SAMPLES = 6

# A below-freezing reading still melts if the recent average is above this
WARMING_TREND_TEMP_F = 34.0
FREEZING_TEMP_F = 32.0
MIN_MELT_RATE = 0.01


class _MeltPhysics(NamedTuple):
    """Coefficients of the degree-hour melt model for one kind of frozen cover."""

    base_rate: float  # Inches per hour at freezing
    growth: float  # Rate multiplier per °F above freezing
    south_weight: float
    west_weight: float
    tree_weight: float
    moderate_wind_bonus: float  # Wind above 5 and below 15 mph
    strong_wind_bonus: float  # Wind 15 mph and above
    warming_multiplier: float
    cooling_multiplier: float
    max_hours: float
    drying_tail_fraction: float  # Share of base drying hours for the meltwater


SNOW_PHYSICS = _MeltPhysics(
    base_rate=0.02,
    growth=1.12,
    south_weight=0.5,
    west_weight=0.3,
    tree_weight=0.4,
    moderate_wind_bonus=0.2,
    strong_wind_bonus=0.4,
    warming_multiplier=0.85,
    cooling_multiplier=1.3,
    max_hours=336.0,
    drying_tail_fraction=0.5,
)

# Ice is thinner and conducts heat better than snow, and sun and wind matter more
ICE_PHYSICS = _MeltPhysics(
    base_rate=0.03,
    growth=1.15,
    south_weight=0.6,
    west_weight=0.4,
    tree_weight=0.5,
    moderate_wind_bonus=0.3,
    strong_wind_bonus=0.6,
    warming_multiplier=0.8,
    cooling_multiplier=1.4,
    max_hours=168.0,
    drying_tail_fraction=0.4,
)

# Thin ice coating formed per inch of recent precipitation
ICE_THICKNESS_PER_PRECIP_INCH = 10.0


def _mean_recent_temperature(historical: list[WeatherSample], count: int) -> float | None:
    recent = historical[-count:]
    if not recent:
        return None
    return sum(s.temperature_fahrenheit for s in recent) / len(recent)


class MeltEstimator:
    """Estimates hours until snow or ice clears from rock and the rock dries."""

    def __init__(self, seasonal_fallback: SeasonalMeltFallback | None = None):
        self.seasonal_fallback = seasonal_fallback or SeasonalMeltFallback()

    def estimate_snow_melt_hours(
        self,
        snow_depth_inches: float,
        current: WeatherSample,
        historical: list[WeatherSample],
        rock_type: RockType,
        profile: LocationSunExposureProfile | None = None,
    ) -> float:
        """Hours until snow of the given depth melts off and the rock dries."""
        effective_temp = self._effective_temperature(current, historical)
        if effective_temp is None:
            hours = self.seasonal_fallback.snow_melt_hours(
                current.timestamp.month, snow_depth_inches
            )
            logger.debug(f"Freezing with no warming trend, seasonal snow melt {hours:.0f}h")
            return hours

        return self._melt_hours(
            SNOW_PHYSICS,
            snow_depth_inches,
            effective_temp,
            current,
            historical,
            rock_type,
            profile,
        )

    def estimate_ice_melt_hours(
        self,
        recent_precip_inches: float,
        current: WeatherSample,
        historical: list[WeatherSample],
        rock_type: RockType,
        profile: LocationSunExposureProfile | None = None,
    ) -> float:
        """Hours until ice from recent freezing precipitation melts and the rock dries."""
        thickness = recent_precip_inches * ICE_THICKNESS_PER_PRECIP_INCH
        effective_temp = self._effective_temperature(current, historical)
        if effective_temp is None:
            hours = self.seasonal_fallback.ice_melt_hours(current.timestamp.month, thickness)
            logger.debug(f"Freezing with no warming trend, seasonal ice melt {hours:.0f}h")
            return hours

        return self._melt_hours(
            ICE_PHYSICS,
            thickness,
            effective_temp,
            current,
            historical,
            rock_type,
            profile,
        )

    def _effective_temperature(
        self, current: WeatherSample, historical: list[WeatherSample]
    ) -> float | None:
        """Temperature driving melt, or None when it is freezing with no warming trend."""
        temp = current.temperature_fahrenheit
        if temp > FREEZING_TEMP_F:
            return temp
        recent_avg = _mean_recent_temperature(historical, WARMING_WINDOW_SAMPLES)
        if recent_avg is not None and recent_avg > WARMING_TREND_TEMP_F:
            return recent_avg
        return None

    def _melt_hours(
        self,
        physics: _MeltPhysics,
        thickness_inches: float,
        temp: float,
        current: WeatherSample,
        historical: list[WeatherSample],
        rock_type: RockType,
        profile: LocationSunExposureProfile | None,
    ) -> float:
        rate = physics.base_rate * physics.growth ** (temp - FREEZING_TEMP_F)

        if profile is not None:
            south = 1.0 + profile.south_facing_percent / 100 * physics.south_weight
            west = 1.0 + profile.west_facing_percent / 100 * physics.west_weight
            trees = 1.0 - profile.tree_coverage_percent / 100 * physics.tree_weight
            rate *= (south + west) / 2 * trees

        # Dense rock conducts heat into the cover, porous rock holds cold water
        rate *= max(0.7, 1.3 - rock_type.porosity_percent / 100)

        wind = current.wind_speed_mph
        if wind >= 15:
            rate *= 1.0 + physics.strong_wind_bonus
        elif wind > 5:
            rate *= 1.0 + physics.moderate_wind_bonus

        rate = max(rate, MIN_MELT_RATE)
        hours = thickness_inches / rate

        trend_avg = _mean_recent_temperature(historical, TREND_WINDOW_SAMPLES)
        if trend_avg is not None:
            if trend_avg > temp:
                hours *= physics.warming_multiplier
            elif trend_avg < temp - 5:
                hours *= physics.cooling_multiplier

        hours = min(hours, physics.max_hours)
        total = hours + rock_type.base_drying_hours * physics.drying_tail_fraction
        logger.debug(
            f"Melt of {thickness_inches:.2f}in at {temp:.1f}°F: {hours:.1f}h melt, "
            f"{total:.1f}h including drying"
        )
        return total
