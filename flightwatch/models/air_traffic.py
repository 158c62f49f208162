"""Models for live aircraft state vectors ingested from ADS-B feeds."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

_FEET_PER_METER = 3.28084
_KNOTS_PER_MS = 1.94384
_FPM_PER_MS = 196.850394


class StateRecord(BaseModel):
    """One aircraft's telemetry as reported in a single feed snapshot.

    Units follow the upstream feed (meters, meters per second, degrees).
    Numeric fields are ``None`` when the feed did not report them.
    """

    icao24: Optional[str] = Field(default=None, description="ICAO 24-bit hex address")
    callsign: Optional[str] = Field(default=None, description="Aircraft callsign")
    origin_country: Optional[str] = Field(
        default=None, description="Country inferred from the ICAO address"
    )
    time_position: Optional[datetime] = Field(
        default=None, description="Timestamp of the last position update"
    )
    last_contact: Optional[datetime] = Field(
        default=None, description="Timestamp of the last message received"
    )
    longitude: Optional[float] = Field(default=None, description="WGS-84 longitude")
    latitude: Optional[float] = Field(default=None, description="WGS-84 latitude")
    baro_altitude: Optional[float] = Field(
        default=None, description="Barometric altitude in meters"
    )
    on_ground: Optional[bool] = Field(
        default=None, description="Whether the position came from a surface report"
    )
    velocity: Optional[float] = Field(
        default=None, description="Ground speed in meters per second"
    )
    true_track: Optional[float] = Field(
        default=None, description="True track in degrees clockwise from north"
    )
    vertical_rate: Optional[float] = Field(
        default=None, description="Vertical rate in meters per second"
    )
    sensors: Optional[list[int]] = Field(
        default=None, description="Receiver IDs that contributed to this state"
    )
    geo_altitude: Optional[float] = Field(
        default=None, description="Geometric altitude in meters"
    )
    squawk: Optional[str] = Field(default=None, description="Transponder code")
    spi: Optional[bool] = Field(default=None, description="Special purpose indicator")
    position_source: Optional[int] = Field(
        default=None, description="0=ADS-B, 1=ASTERIX, 2=MLAT, 3=FLARM"
    )

    model_config = ConfigDict(extra="ignore", frozen=True)

    @property
    def has_position(self) -> bool:
        return self.latitude is not None and self.longitude is not None

    @property
    def altitude_ft(self) -> float | None:
        altitude = self.baro_altitude if self.baro_altitude is not None else self.geo_altitude
        if altitude is None:
            return None
        return altitude * _FEET_PER_METER

    @property
    def ground_speed_kts(self) -> float | None:
        if self.velocity is None:
            return None
        return self.velocity * _KNOTS_PER_MS

    @property
    def vertical_rate_fpm(self) -> float | None:
        if self.vertical_rate is None:
            return None
        return self.vertical_rate * _FPM_PER_MS


__all__ = ["StateRecord"]
