"""Climbing location data model."""

from pydantic import BaseModel, Field


class ClimbingLocation(BaseModel):
    """A climbing area with a shared weather station and rock inventory."""

    location_id: str = Field(..., description="Unique identifier for the location")
    name: str = Field(..., description="Display name")
    latitude: float = Field(..., ge=-90, le=90, description="Latitude coordinate")
    longitude: float = Field(..., ge=-180, le=180, description="Longitude coordinate")
    elevation_feet: int | None = Field(None, description="Approximate elevation")
    has_seepage_risk: bool = Field(
        default=False, description="Water seeps onto the rock after rain"
    )
    snow_depth_inches: float | None = Field(
        None, ge=0, description="Current snow depth on the ground if known"
    )
