"""Data ingestors for the Flightwatch monitor."""

from .opensky import OpenSkyFeedClient, parse_state_row

__all__ = ["OpenSkyFeedClient", "parse_state_row"]
