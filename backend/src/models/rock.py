"""Rock type and site geometry data models."""

from pydantic import BaseModel, ConfigDict, Field, model_validator

# Allowed drift from 100% when aspect percentages are supplied
ASPECT_SUM_TOLERANCE = 5.0


class RockType(BaseModel):
    """Physical drying properties of a rock type found at a climbing location."""

    name: str = Field(..., description="Rock type name, e.g. Granite")
    base_drying_hours: float = Field(
        ...,
        gt=0,
        description="Hours to dry after 0.1in of rain under ideal conditions",
    )
    porosity_percent: float = Field(
        default=0.0, ge=0, le=100, description="Water absorption capacity"
    )
    is_wet_sensitive: bool = Field(
        default=False, description="Climbing while wet permanently damages the rock"
    )
    group_name: str = Field(default="", description="Display group, e.g. Fast-Drying")
    description: str = Field(default="", description="Free text description")

    model_config = ConfigDict(frozen=True)

    @property
    def display_group(self) -> str:
        return self.group_name or self.name


class LocationSunExposureProfile(BaseModel):
    """Share of a location's rock facing each direction, plus angle and shade."""

    south_facing_percent: float = Field(default=0.0, ge=0, le=100)
    west_facing_percent: float = Field(default=0.0, ge=0, le=100)
    east_facing_percent: float = Field(default=0.0, ge=0, le=100)
    north_facing_percent: float = Field(default=0.0, ge=0, le=100)
    slab_percent: float = Field(
        default=0.0, ge=0, le=100, description="Low-angle rock that sheds water"
    )
    overhang_percent: float = Field(
        default=0.0, ge=0, le=100, description="Steep rock that stays shaded"
    )
    tree_coverage_percent: float = Field(
        default=0.0, ge=0, le=100, description="Canopy shade, 0 when unknown"
    )
    description: str = Field(default="")

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def check_percentages(self) -> "LocationSunExposureProfile":
        if self.slab_percent + self.overhang_percent > 100:
            raise ValueError("slab_percent + overhang_percent cannot exceed 100")
        aspect_total = (
            self.south_facing_percent
            + self.west_facing_percent
            + self.east_facing_percent
            + self.north_facing_percent
        )
        if aspect_total > 0 and abs(aspect_total - 100) > ASPECT_SUM_TOLERANCE:
            raise ValueError(
                f"Aspect percentages must sum to roughly 100, got {aspect_total:.1f}"
            )
        return self
