"""Boulder-level drying models."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from utils.geo_utils import degrees_to_aspect

from .drying import RockDryingStatus
from .weather import DryingForecastPeriod


class Aspect(str, Enum):
    """Eight-point compass direction a rock face points toward."""

    N = "N"
    NE = "NE"
    E = "E"
    SE = "SE"
    S = "S"
    SW = "SW"
    W = "W"
    NW = "NW"


# Long-form spellings seen in route databases
ASPECT_ALIASES: dict[str, Aspect] = {
    "NORTH": Aspect.N,
    "NORTHEAST": Aspect.NE,
    "EAST": Aspect.E,
    "SOUTHEAST": Aspect.SE,
    "SOUTH": Aspect.S,
    "SOUTHWEST": Aspect.SW,
    "WEST": Aspect.W,
    "NORTHWEST": Aspect.NW,
}


class TreeCoverageSource(str, Enum):
    """Where a tree coverage figure came from."""

    BOULDER = "boulder"  # Cached per-boulder canopy lookup
    LOCATION = "location"  # Location sun exposure profile
    REGIONAL = "regional"  # Known climbing area estimate
    DEFAULT = "default"


class TreeCoverageEstimate(BaseModel):
    """Resolved canopy cover for a boulder."""

    percent: float = Field(..., ge=0, le=100)
    source: TreeCoverageSource
    confidence_penalty: int = Field(default=0, ge=0)

    model_config = ConfigDict(use_enum_values=True)


class BoulderSite(BaseModel):
    """A boulder or route with optional position and orientation."""

    boulder_id: str = Field(..., description="Route or boulder identifier")
    name: str | None = Field(None, description="Display name")
    latitude: float | None = Field(None, ge=-90, le=90)
    longitude: float | None = Field(None, ge=-180, le=180)
    aspect: Aspect | None = Field(None, description="Direction the face points")

    model_config = ConfigDict(use_enum_values=True)

    @field_validator("aspect", mode="before")
    @classmethod
    def normalize_aspect(cls, value):
        if value is None or isinstance(value, Aspect):
            return value
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return degrees_to_aspect(value)
        key = str(value).strip().upper().replace("-", "").replace(" ", "")
        if key in Aspect.__members__:
            return key
        # Unrecognized directions are treated as unknown
        return ASPECT_ALIASES.get(key)

    @property
    def has_gps(self) -> bool:
        """Zero coordinates are treated as missing."""
        return (
            self.latitude is not None
            and self.longitude is not None
            and not (self.latitude == 0 and self.longitude == 0)
        )


class BoulderDryingStatus(RockDryingStatus):
    """Location drying verdict refined for one boulder."""

    boulder_id: str
    latitude: float | None = None
    longitude: float | None = None
    aspect: Aspect = Field(default=Aspect.S)
    sun_exposure_hours: float = Field(
        default=0.0, ge=0, description="Effective direct sun hours over the next 6 days"
    )
    tree_coverage_percent: float = Field(default=0.0, ge=0, le=100)
    tree_coverage_source: TreeCoverageSource = Field(default=TreeCoverageSource.DEFAULT)
    forecast: list[DryingForecastPeriod] | None = Field(
        None, description="Projected dry/wet periods"
    )

    @model_validator(mode="after")
    def check_forecast_contiguous(self) -> "BoulderDryingStatus":
        periods = self.forecast or []
        for previous, period in zip(periods, periods[1:]):
            if previous.end_time != period.start_time:
                raise ValueError(
                    "forecast periods must be contiguous: period ending "
                    f"{previous.end_time.isoformat()} is followed by one starting "
                    f"{period.start_time.isoformat()}"
                )
        return self


class AreaDryingStats(BaseModel):
    """Aggregate drying picture across the boulders of an area."""

    total_boulders: int = 0
    dry_count: int = 0
    drying_count: int = Field(default=0, description="Wet with 24h or less to go")
    wet_count: int = 0
    percent_dry: float = 0.0
    avg_hours_until_dry: float = Field(
        default=0.0, description="Mean over wet boulders only"
    )
    avg_tree_coverage: float = Field(
        default=0.0, description="Mean over boulders with known coverage"
    )
    confidence_score: int = 0
