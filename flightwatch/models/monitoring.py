"""API models for the monitoring control surface."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from flightwatch.models.alerts import Alert
from flightwatch.models.region import Region


class MonitoringStatusResponse(BaseModel):
    """Current state of the monitoring engine."""

    active: bool = Field(..., description="Whether a monitoring session is running")
    started_at: Optional[datetime] = Field(
        default=None, description="When the active session started (UTC)"
    )
    cycles_completed: int = Field(default=0, description="Poll cycles completed")
    cycles_failed: int = Field(default=0, description="Poll cycles that errored")
    last_cycle_at: Optional[datetime] = Field(
        default=None, description="When the last cycle completed (UTC)"
    )
    last_alert_count: int = Field(default=0, description="Alerts found in the last cycle")
    poll_interval_seconds: float = Field(..., description="Seconds between cycles")
    target_operator: str = Field(..., description="Operator being tracked")
    region: Region = Field(..., description="Monitored geofence")


class AlertListResponse(BaseModel):
    """Recent alerts, newest first."""

    alerts: list[Alert] = Field(default_factory=list)
    count: int = Field(default=0, description="Number of alerts returned")
