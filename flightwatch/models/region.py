"""Geofence region model."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, model_validator


class Region(BaseModel):
    """Immutable rectangular bounding box in decimal degrees."""

    name: str = Field(default="region", description="Human-readable region name")
    north: float = Field(..., ge=-90.0, le=90.0, description="Northern latitude bound")
    south: float = Field(..., ge=-90.0, le=90.0, description="Southern latitude bound")
    east: float = Field(..., ge=-180.0, le=180.0, description="Eastern longitude bound")
    west: float = Field(..., ge=-180.0, le=180.0, description="Western longitude bound")

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def _check_bounds(self) -> "Region":
        if self.south > self.north:
            raise ValueError("south bound must not exceed north bound")
        if self.west > self.east:
            raise ValueError("west bound must not exceed east bound")
        return self


__all__ = ["Region"]
