"""Aircraft registry implementations."""

from __future__ import annotations

from flightwatch.config import Settings

from .base import AircraftRegistry
from .opensky import OpenSkyAircraftRegistry, profile_from_metadata
from .static import DEMO_FLEET_ICAO24, DEMO_OPERATOR, StaticAircraftRegistry


def build_registry(config: Settings) -> AircraftRegistry:
    """Construct the registry selected by ``config.registry_backend``."""

    backend = config.registry_backend.lower()
    if backend == "opensky":
        return OpenSkyAircraftRegistry(
            base_url=config.opensky_metadata_url,
            timeout=config.opensky_timeout,
            cache_ttl=config.registry_cache_ttl_seconds,
            cache_max_size=config.registry_cache_max_size,
            retries=config.registry_retries,
        )
    if backend == "static":
        return StaticAircraftRegistry.demo(config.target_operator)
    raise ValueError(f"Unknown registry backend: {config.registry_backend}")


__all__ = [
    "AircraftRegistry",
    "DEMO_FLEET_ICAO24",
    "DEMO_OPERATOR",
    "OpenSkyAircraftRegistry",
    "StaticAircraftRegistry",
    "build_registry",
    "profile_from_metadata",
]
