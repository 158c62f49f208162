"""Domain logic for region monitoring."""

from .geofence import classify, is_approaching, is_inside

__all__ = ["classify", "is_approaching", "is_inside"]
