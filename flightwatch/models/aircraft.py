"""Aircraft ownership metadata served by the aircraft registry."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class AircraftProfile(BaseModel):
    """Static registration details for one airframe."""

    icao24: str = Field(..., description="ICAO 24-bit hex address (lowercase)")
    registration: Optional[str] = Field(default=None, description="Tail number")
    model: Optional[str] = Field(default=None, description="Aircraft model")
    operator: Optional[str] = Field(
        default=None, description="Owning or operating entity name"
    )
    owner: Optional[str] = Field(default=None, description="Registered owner")
    manufacturer_name: Optional[str] = Field(default=None, description="Manufacturer")
    typecode: Optional[str] = Field(default=None, description="ICAO type designator")
    operator_icao: Optional[str] = Field(default=None, description="Operator ICAO code")
    operator_callsign: Optional[str] = Field(
        default=None, description="Operator radio callsign"
    )

    model_config = ConfigDict(extra="ignore", frozen=True)

    def operated_by(self, operator: str) -> bool:
        """Return True when the profile's operator matches ``operator``.

        Comparison ignores case and surrounding whitespace.
        """

        if not self.operator:
            return False
        return self.operator.strip().casefold() == operator.strip().casefold()


__all__ = ["AircraftProfile"]
