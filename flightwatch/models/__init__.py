"""Pydantic models for the Flightwatch monitor."""

from .aircraft import AircraftProfile
from .air_traffic import StateRecord
from .alerts import Alert, AlertClassification
from .monitoring import AlertListResponse, MonitoringStatusResponse
from .region import Region

__all__ = [
    "AircraftProfile",
    "Alert",
    "AlertClassification",
    "AlertListResponse",
    "MonitoringStatusResponse",
    "Region",
    "StateRecord",
]
