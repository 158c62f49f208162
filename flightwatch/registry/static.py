"""In-memory aircraft registry backed by a fixed allow-list."""

from __future__ import annotations

from typing import Iterable, Mapping, Optional

from flightwatch.models.aircraft import AircraftProfile

# Placeholder ICAO addresses for the demo fleet, not real registrations.
DEMO_FLEET_ICAO24 = ("a0b2c3", "a1b2c4", "a2b3c5")
DEMO_OPERATOR = "Walmart Inc"


class StaticAircraftRegistry:
    """Look up profiles from a fixed table keyed by lowercase ICAO address."""

    def __init__(self, profiles: Iterable[AircraftProfile] | Mapping[str, AircraftProfile] = ()):
        if isinstance(profiles, Mapping):
            profiles = profiles.values()
        self._profiles = {profile.icao24.lower(): profile for profile in profiles}

    def __len__(self) -> int:
        return len(self._profiles)

    def lookup(self, icao24: str) -> Optional[AircraftProfile]:
        return self._profiles.get(icao24.strip().lower())

    @classmethod
    def demo(cls, operator: str = DEMO_OPERATOR) -> "StaticAircraftRegistry":
        """Build the demo fleet table used when no real registry is configured."""

        return cls(
            AircraftProfile(
                icao24=icao24,
                registration=f"N{icao24.upper()}WMT",
                model="737-800",
                operator=operator,
                owner=operator,
                manufacturer_name="Boeing",
                typecode="B738",
                operator_icao="WMT",
                operator_callsign="WALMART",
            )
            for icao24 in DEMO_FLEET_ICAO24
        )


__all__ = ["DEMO_FLEET_ICAO24", "DEMO_OPERATOR", "StaticAircraftRegistry"]
