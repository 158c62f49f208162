"""Aircraft registry capability interface."""

from __future__ import annotations

from typing import Awaitable, Optional, Protocol, Union, runtime_checkable

from flightwatch.models.aircraft import AircraftProfile

LookupResult = Union[Optional[AircraftProfile], Awaitable[Optional[AircraftProfile]]]


@runtime_checkable
class AircraftRegistry(Protocol):
    """Resolve an ICAO address to ownership metadata.

    ``lookup`` may be a plain or a coroutine function. Unknown addresses
    return ``None``.
    """

    def lookup(self, icao24: str) -> LookupResult:
        ...


__all__ = ["AircraftRegistry", "LookupResult"]
