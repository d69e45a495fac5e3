"""Weather sample and rain event data models."""

from datetime import UTC, datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class WeatherSample(BaseModel):
    """A single hourly weather observation or forecast point.

    Units follow the US climbing-weather convention used throughout the engine:
    Fahrenheit, inches of precipitation per sample interval, mph and percent.
    """

    timestamp: datetime = Field(..., description="Sample time (naive values are UTC)")
    temperature_fahrenheit: float = Field(..., description="Air temperature in °F")
    precipitation_inches: float = Field(
        default=0.0, ge=0, description="Precipitation during the sample interval"
    )
    humidity_percent: float = Field(
        default=50.0, ge=0, le=100, description="Relative humidity"
    )
    wind_speed_mph: float = Field(default=0.0, ge=0, description="Wind speed in mph")
    cloud_cover_percent: float = Field(
        default=50.0, ge=0, le=100, description="Cloud cover"
    )

    model_config = ConfigDict(frozen=True)

    @field_validator("timestamp")
    @classmethod
    def assume_utc(cls, value: datetime) -> datetime:
        if value.tzinfo is None:
            return value.replace(tzinfo=UTC)
        return value


class RainEvent(BaseModel):
    """The most recent contiguous run of precipitation-bearing samples."""

    start_time: datetime = Field(..., description="First rainy sample")
    end_time: datetime = Field(..., description="Last rainy sample")
    total_rain_inches: float = Field(..., ge=0)
    duration_hours: float = Field(..., ge=0)
    max_hourly_rate: float = Field(..., ge=0, description="Peak inches per sample")
    avg_hourly_rate: float = Field(..., ge=0, description="Mean inches per sample")
    sample_count: int = Field(..., ge=1)


class ForecastStatus(str, Enum):
    """Status of a projected forecast period."""

    DRY = "dry"
    DRYING = "drying"  # More than half way through drying
    WET = "wet"


class DryingForecastPeriod(BaseModel):
    """A contiguous span of the multi-day wet/dry projection."""

    start_time: datetime = Field(..., description="Period start (inclusive)")
    end_time: datetime = Field(..., description="Period end (exclusive)")
    is_dry: bool = Field(..., description="Whether rock is climbable in this period")
    status: ForecastStatus = Field(..., description="dry, drying or wet")
    hours_until_dry: float = Field(
        default=0.0, ge=0, description="Hours from period start until rock is dry"
    )
    rain_amount_inches: float = Field(
        default=0.0, ge=0, description="Rain falling during the period"
    )

    model_config = ConfigDict(use_enum_values=True)

    @model_validator(mode="after")
    def check_dry_consistency(self) -> "DryingForecastPeriod":
        if self.is_dry != (self.status == ForecastStatus.DRY):
            raise ValueError("is_dry must match a dry status")
        if self.is_dry and self.hours_until_dry != 0:
            raise ValueError("dry periods cannot have hours until dry")
        if self.end_time < self.start_time:
            raise ValueError("period end_time precedes start_time")
        return self

    @property
    def duration_hours(self) -> float:
        return (self.end_time - self.start_time).total_seconds() / 3600
