"""Flightwatch: operator aircraft monitoring against a geofence region."""
