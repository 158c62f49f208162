"""Alert events emitted by the monitoring engine."""

from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from flightwatch.models.aircraft import AircraftProfile
from flightwatch.models.air_traffic import StateRecord


class AlertClassification(str, Enum):
    """How a tracked aircraft relates to the monitored region."""

    APPROACHING = "approaching"
    INSIDE = "inside"


class Alert(BaseModel):
    """A single detection of a tracked aircraft near or inside the region."""

    id: str = Field(..., description="Unique identifier for this emission")
    state: StateRecord = Field(..., description="Telemetry the alert was computed from")
    aircraft: AircraftProfile = Field(..., description="Registry profile of the aircraft")
    timestamp: datetime = Field(..., description="Emission time (UTC)")
    classification: AlertClassification = Field(..., description="Alert classification")

    model_config = ConfigDict(frozen=True)


__all__ = ["Alert", "AlertClassification"]
