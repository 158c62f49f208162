"""OpenSky feed client for the global aircraft state snapshot."""

from __future__ import annotations

from datetime import datetime, timezone
import logging
import math
from typing import Any, Optional, Sequence

import httpx

from flightwatch.config import settings
from flightwatch.models.air_traffic import StateRecord
from flightwatch.models.region import Region

logger = logging.getLogger("flightwatch.ingestors.opensky")

# Positional layout of an OpenSky /states/all row.
ICAO24 = 0
CALLSIGN = 1
ORIGIN_COUNTRY = 2
TIME_POSITION = 3
LAST_CONTACT = 4
LONGITUDE = 5
LATITUDE = 6
BARO_ALTITUDE = 7
ON_GROUND = 8
VELOCITY = 9
TRUE_TRACK = 10
VERTICAL_RATE = 11
SENSORS = 12
GEO_ALTITUDE = 13
SQUAWK = 14
SPI = 15
POSITION_SOURCE = 16


def _field(row: Sequence[Any], index: int) -> Any:
    return row[index] if len(row) > index else None


def _as_float(value: Any) -> float | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number):
        return None
    return number


def _as_int(value: Any) -> int | None:
    number = _as_float(value)
    return int(number) if number is not None else None


def _as_bool(value: Any) -> bool | None:
    return value if isinstance(value, bool) else None


def _as_text(value: Any) -> str | None:
    if not isinstance(value, str):
        return None
    cleaned = value.strip()
    return cleaned or None


def _parse_timestamp(raw_ts: Any) -> datetime | None:
    seconds = _as_float(raw_ts)
    if seconds is None:
        return None
    try:
        # OpenSky returns seconds since epoch
        return datetime.fromtimestamp(seconds, tz=timezone.utc)
    except (OverflowError, OSError, ValueError):
        logger.debug("Failed to parse OpenSky timestamp: %s", raw_ts)
        return None


def parse_state_row(row: Any) -> Optional[StateRecord]:
    """Map one positional state row onto a ``StateRecord``.

    Returns ``None`` for rows that are not sequences. Missing or invalid
    fields become ``None`` rather than zero.
    """

    if not isinstance(row, (list, tuple)):
        return None

    icao24 = _as_text(_field(row, ICAO24))
    raw_sensors = _field(row, SENSORS)
    sensors = None
    if isinstance(raw_sensors, list):
        sensors = [s for s in (_as_int(item) for item in raw_sensors) if s is not None]

    return StateRecord(
        icao24=icao24.lower() if icao24 else None,
        callsign=_as_text(_field(row, CALLSIGN)),
        origin_country=_as_text(_field(row, ORIGIN_COUNTRY)),
        time_position=_parse_timestamp(_field(row, TIME_POSITION)),
        last_contact=_parse_timestamp(_field(row, LAST_CONTACT)),
        longitude=_as_float(_field(row, LONGITUDE)),
        latitude=_as_float(_field(row, LATITUDE)),
        baro_altitude=_as_float(_field(row, BARO_ALTITUDE)),
        on_ground=_as_bool(_field(row, ON_GROUND)),
        velocity=_as_float(_field(row, VELOCITY)),
        true_track=_as_float(_field(row, TRUE_TRACK)),
        vertical_rate=_as_float(_field(row, VERTICAL_RATE)),
        sensors=sensors,
        geo_altitude=_as_float(_field(row, GEO_ALTITUDE)),
        squawk=_as_text(_field(row, SQUAWK)),
        spi=_as_bool(_field(row, SPI)),
        position_source=_as_int(_field(row, POSITION_SOURCE)),
    )


class OpenSkyFeedClient:
    """Fetch the current aircraft state snapshot from the OpenSky REST API."""

    def __init__(
        self,
        *,
        base_url: str | None = None,
        timeout: float | None = None,
        username: str | None = None,
        password: str | None = None,
        bounds: Region | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = base_url or settings.opensky_states_url
        self.timeout = timeout or settings.opensky_timeout
        self.username = username if username is not None else settings.opensky_username
        self.password = password if password is not None else settings.opensky_password
        self.bounds = bounds
        self.transport = transport

    def _params(self) -> dict[str, float] | None:
        if self.bounds is None:
            return None
        return {
            "lamin": self.bounds.south,
            "lomin": self.bounds.west,
            "lamax": self.bounds.north,
            "lomax": self.bounds.east,
        }

    def _auth(self) -> httpx.BasicAuth | None:
        if self.username and self.password:
            return httpx.BasicAuth(self.username, self.password)
        return None

    async def fetch_snapshot(self) -> list[StateRecord]:
        """Return every state in the current snapshot, in feed order.

        Transport and payload failures are logged and produce an empty list.
        """

        try:
            async with httpx.AsyncClient(
                timeout=self.timeout, transport=self.transport, auth=self._auth()
            ) as client:
                response = await client.get(self.base_url, params=self._params())
        except httpx.TimeoutException as exc:
            logger.warning("OpenSky request timed out: %s", exc)
            return []
        except httpx.RequestError as exc:
            logger.warning("OpenSky request failed: %s", exc)
            return []

        if response.status_code == 429:
            logger.warning("OpenSky rate limit encountered: %s", response.text)
            return []
        try:
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            logger.warning(
                "OpenSky returned HTTP %s: %s", exc.response.status_code, exc
            )
            return []

        try:
            payload = response.json()
        except ValueError as exc:
            logger.warning("Failed to parse OpenSky JSON response: %s", exc)
            return []

        if not isinstance(payload, dict):
            logger.warning("Unexpected OpenSky payload type: %s", type(payload).__name__)
            return []

        raw_states = payload.get("states") or []
        if not isinstance(raw_states, list):
            logger.warning("OpenSky payload 'states' is not a list")
            return []

        states: list[StateRecord] = []
        for row in raw_states:
            state = parse_state_row(row)
            if state is not None:
                states.append(state)

        logger.debug("Fetched %s aircraft states", len(states))
        return states


__all__ = ["OpenSkyFeedClient", "StateRecord", "parse_state_row"]
