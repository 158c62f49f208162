"""Bounding-box geofence tests for live aircraft positions.

The approach test is a coarse heading heuristic rather than intercept
geometry. Only two approach vectors are recognized: an aircraft below the
southern boundary flying north-ish, and an aircraft beyond the western
boundary flying east-ish. Aircraft approaching from the north or east are
never reported as approaching.
"""

from __future__ import annotations

from typing import Optional

from flightwatch.models.air_traffic import StateRecord
from flightwatch.models.alerts import AlertClassification
from flightwatch.models.region import Region

# Closed heading arcs in compass degrees
NORTHBOUND_ARC = (315.0, 45.0)
EASTBOUND_ARC = (45.0, 135.0)


def _in_arc(heading: float, arc: tuple[float, float]) -> bool:
    start, end = arc
    if start <= end:
        return start <= heading <= end
    # arc wraps through north
    return heading >= start or heading <= end


def is_inside(region: Region, lat: Optional[float], lon: Optional[float]) -> bool:
    """Return True if the point lies within the region, boundaries included."""

    if lat is None or lon is None:
        return False
    return region.south <= lat <= region.north and region.west <= lon <= region.east


def is_approaching(
    region: Region,
    lat: Optional[float],
    lon: Optional[float],
    heading: Optional[float],
) -> bool:
    """Return True if an aircraft outside the region is heading toward it."""

    if lat is None or lon is None or heading is None:
        return False
    if is_inside(region, lat, lon):
        return False

    heading = heading % 360.0
    from_south = lat < region.south and _in_arc(heading, NORTHBOUND_ARC)
    from_west = lon < region.west and _in_arc(heading, EASTBOUND_ARC)
    return from_south or from_west


def classify(region: Region, state: StateRecord) -> AlertClassification | None:
    """Classify a state record against the region; INSIDE wins over APPROACHING."""

    if is_inside(region, state.latitude, state.longitude):
        return AlertClassification.INSIDE
    if is_approaching(region, state.latitude, state.longitude, state.true_track):
        return AlertClassification.APPROACHING
    return None


__all__ = [
    "EASTBOUND_ARC",
    "NORTHBOUND_ARC",
    "classify",
    "is_approaching",
    "is_inside",
]
