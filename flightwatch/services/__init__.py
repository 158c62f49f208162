"""Service-layer components for the Flightwatch monitor."""

from .alert_history import AlertHistory, describe_alert
from .monitoring import (
    AlertCallback,
    MonitoringEngine,
    MonitoringSession,
    StateFeed,
    build_engine,
    build_region,
)

__all__ = [
    "AlertCallback",
    "AlertHistory",
    "MonitoringEngine",
    "MonitoringSession",
    "StateFeed",
    "build_engine",
    "build_region",
    "describe_alert",
]
