"""Rock drying status and algorithm configuration models."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, model_validator

from utils.constants import DEFAULT_TREE_COVERAGE_PERCENT

MIN_CONFIDENCE = 20
MAX_CONFIDENCE = 95


class RockStatus(str, Enum):
    """Overall climbability of the rock."""

    GOOD = "good"  # Dry, climb away
    FAIR = "fair"  # Wet but past half way through drying
    POOR = "poor"  # Wet, most of the drying still ahead
    CRITICAL = "critical"  # Wet-sensitive rock is wet, climbing causes damage


class DryingState(str, Enum):
    """Which branch of the drying state machine produced a verdict."""

    DRY = "dry"
    DRYING = "drying"
    CURRENTLY_RAINING = "currently_raining"
    SNOW_ON_GROUND = "snow_on_ground"
    ICE_RISK = "ice_risk"


class Season(str, Enum):
    SUMMER = "summer"
    SHOULDER = "shoulder"  # Spring and fall
    WINTER = "winter"


class RockDryingStatus(BaseModel):
    """Drying verdict for a climbing location."""

    is_wet: bool = Field(..., description="Rock is currently wet")
    is_safe: bool = Field(..., description="Climbing is considered safe")
    is_wet_sensitive: bool = Field(
        default=False, description="Any rock type here is damaged when wet"
    )
    hours_until_dry: float = Field(
        default=0.0, ge=0, description="Estimated hours until rock is dry"
    )
    last_rain_timestamp: str | None = Field(
        None, description="ISO timestamp of the end of the last rain event"
    )
    status: RockStatus = Field(..., description="good, fair, poor or critical")
    message: str = Field(default="", description="Human readable explanation")
    rock_types: list[str] = Field(default_factory=list)
    primary_rock_type: str | None = None
    primary_group_name: str | None = None
    confidence_score: int = Field(
        ..., ge=MIN_CONFIDENCE, le=MAX_CONFIDENCE, description="0-100 confidence"
    )
    state: DryingState = Field(default=DryingState.DRY)

    model_config = ConfigDict(use_enum_values=True)

    @model_validator(mode="after")
    def check_wet_consistency(self) -> "RockDryingStatus":
        if self.is_wet != (self.hours_until_dry > 0):
            raise ValueError("hours_until_dry must be positive exactly when rock is wet")
        if self.is_wet and self.is_wet_sensitive:
            if self.status != RockStatus.CRITICAL or self.is_safe:
                raise ValueError("wet wet-sensitive rock must be critical and unsafe")
        if self.status == RockStatus.CRITICAL and self.is_safe:
            raise ValueError("critical rock cannot be safe")
        return self


class SeasonalMeltFallback(BaseModel):
    """Melt timeouts used when it is freezing and nothing is warming up.

    Melt physics cannot run below freezing, so these per-season guesses stand
    in. Regions with a different climate can swap in their own values.
    """

    summer_months: list[int] = Field(default=[6, 7, 8])
    shoulder_months: list[int] = Field(default=[3, 4, 5, 9, 10])

    summer_snow_base_hours: float = 48.0
    summer_snow_hours_per_inch: float = 12.0
    shoulder_snow_base_hours: float = 96.0
    shoulder_snow_hours_per_inch: float = 24.0
    winter_snow_base_hours: float = 168.0
    winter_snow_hours_per_inch: float = 36.0

    summer_ice_base_hours: float = 24.0
    summer_ice_hours_per_inch: float = 8.0
    shoulder_ice_base_hours: float = 48.0
    shoulder_ice_hours_per_inch: float = 12.0
    winter_ice_base_hours: float = 84.0
    winter_ice_hours_per_inch: float = 18.0

    def season_for(self, month: int) -> Season:
        if month in self.summer_months:
            return Season.SUMMER
        if month in self.shoulder_months:
            return Season.SHOULDER
        return Season.WINTER

    def snow_melt_hours(self, month: int, depth_inches: float) -> float:
        season = self.season_for(month)
        if season == Season.SUMMER:
            return self.summer_snow_base_hours + depth_inches * self.summer_snow_hours_per_inch
        if season == Season.SHOULDER:
            return (
                self.shoulder_snow_base_hours
                + depth_inches * self.shoulder_snow_hours_per_inch
            )
        return self.winter_snow_base_hours + depth_inches * self.winter_snow_hours_per_inch

    def ice_melt_hours(self, month: int, thickness_inches: float) -> float:
        season = self.season_for(month)
        if season == Season.SUMMER:
            return self.summer_ice_base_hours + thickness_inches * self.summer_ice_hours_per_inch
        if season == Season.SHOULDER:
            return (
                self.shoulder_ice_base_hours
                + thickness_inches * self.shoulder_ice_hours_per_inch
            )
        return self.winter_ice_base_hours + thickness_inches * self.winter_ice_hours_per_inch


class DryingAlgorithm(BaseModel):
    """Configuration for the rock drying algorithm."""

    # Precipitation thresholds
    rain_threshold_inches: float = Field(
        default=0.01, description="Precipitation above this counts as rain"
    )
    forecast_rain_threshold_inches: float = Field(
        default=0.01, description="Forecast precipitation at or above this wets rock"
    )
    snow_depth_threshold_inches: float = Field(
        default=0.5, description="Snow depth that puts snow on the ground"
    )
    significant_snow_depth_inches: float = Field(default=2.0)

    # Ice risk
    freezing_temp_fahrenheit: float = Field(default=32.0)
    ice_precip_threshold_inches: float = Field(
        default=0.1, description="Recent precipitation needed to form ice"
    )
    ice_lookback_hours: float = Field(default=48.0)

    # Drying time multipliers
    seepage_multiplier: float = Field(
        default=1.4, description="Extra drying time where water seeps from above"
    )
    wet_sensitive_multiplier: float = Field(
        default=1.5, description="Extra caution margin for wet-sensitive rock"
    )

    # Boulder forecast
    forecast_days: int = Field(default=6, description="Days of forecast to replay")
    heavy_rain_threshold_inches: float = Field(
        default=0.5, description="Rain beyond this extends forecast drying time"
    )
    heavy_rain_hours_per_inch: float = Field(default=12.0)
    min_period_hours: float = Field(
        default=1.0, description="Shorter forecast periods are absorbed as noise"
    )
    default_tree_coverage_percent: float = Field(
        default=DEFAULT_TREE_COVERAGE_PERCENT, ge=0, le=100
    )

    seasonal_melt: SeasonalMeltFallback = Field(default_factory=SeasonalMeltFallback)

    @property
    def forecast_hours(self) -> int:
        return self.forecast_days * 24
