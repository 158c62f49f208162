"""Bounded in-memory list of recently delivered alerts."""

from __future__ import annotations

from collections import deque
import logging
from threading import Lock

from flightwatch.models.alerts import Alert, AlertClassification

logger = logging.getLogger("flightwatch.alerts")


def describe_alert(alert: Alert, region_name: str) -> str:
    """Return a one-line human summary of an alert."""

    label = alert.aircraft.registration or alert.state.icao24
    callsign = alert.state.callsign or "N/A"
    if alert.classification is AlertClassification.INSIDE:
        return f"{label} ({callsign}) is currently in {region_name}"
    return f"{label} ({callsign}) is heading to {region_name}"


class AlertHistory:
    """Keep the newest alerts, usable directly as an engine subscriber."""

    def __init__(self, max_size: int = 10, region_name: str = "region") -> None:
        if max_size < 1:
            raise ValueError("max_size must be at least 1")
        self.region_name = region_name
        self._lock = Lock()
        self._alerts: deque[Alert] = deque(maxlen=max_size)

    def __call__(self, alert: Alert) -> None:
        self.record(alert)

    def __len__(self) -> int:
        return len(self._alerts)

    def record(self, alert: Alert) -> None:
        with self._lock:
            self._alerts.appendleft(alert)
        logger.info("Alert %s: %s", alert.id, describe_alert(alert, self.region_name))

    def recent(self, limit: int | None = None) -> list[Alert]:
        """Return alerts newest first."""

        with self._lock:
            alerts = list(self._alerts)
        return alerts[:limit] if limit is not None else alerts

    def clear(self) -> None:
        with self._lock:
            self._alerts.clear()


__all__ = ["AlertHistory", "describe_alert"]
