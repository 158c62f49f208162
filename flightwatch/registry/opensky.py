"""Aircraft registry backed by the OpenSky aircraft metadata directory."""

from __future__ import annotations

import asyncio
import logging
import time
from typing import Any, Callable, Optional

import httpx

from flightwatch.config import settings
from flightwatch.models.aircraft import AircraftProfile

logger = logging.getLogger("flightwatch.registry.opensky")


def _text(payload: dict[str, Any], key: str) -> str | None:
    value = payload.get(key)
    if not isinstance(value, str):
        return None
    return value.strip() or None


def profile_from_metadata(icao24: str, payload: dict[str, Any]) -> AircraftProfile:
    """Convert an OpenSky metadata document into an ``AircraftProfile``.

    The directory frequently leaves ``operator`` blank for corporate
    aircraft, so the registered owner is used in its place.
    """

    operator = _text(payload, "operator") or _text(payload, "owner")
    return AircraftProfile(
        icao24=icao24,
        registration=_text(payload, "registration"),
        model=_text(payload, "model"),
        operator=operator,
        owner=_text(payload, "owner"),
        manufacturer_name=_text(payload, "manufacturerName"),
        typecode=_text(payload, "typecode"),
        operator_icao=_text(payload, "operatorIcao"),
        operator_callsign=_text(payload, "operatorCallsign"),
    )


class OpenSkyAircraftRegistry:
    """Resolve profiles over HTTP with a bounded TTL cache and retries.

    Misses (HTTP 404) are cached like hits. Failures are not cached and
    resolve to ``None`` for the current call. One ``httpx.AsyncClient`` is
    reused for every request until ``aclose`` is awaited.
    """

    def __init__(
        self,
        *,
        base_url: str | None = None,
        timeout: float | None = None,
        cache_ttl: float | None = None,
        cache_max_size: int | None = None,
        retries: int | None = None,
        retry_backoff: float = 0.5,
        transport: httpx.AsyncBaseTransport | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.base_url = (base_url or settings.opensky_metadata_url).rstrip("/")
        self.timeout = timeout or settings.opensky_timeout
        self.cache_ttl = cache_ttl if cache_ttl is not None else settings.registry_cache_ttl_seconds
        self.cache_max_size = (
            cache_max_size if cache_max_size is not None else settings.registry_cache_max_size
        )
        if self.cache_max_size < 1:
            raise ValueError("cache_max_size must be at least 1")
        self.retries = retries if retries is not None else settings.registry_retries
        self.retry_backoff = retry_backoff
        self.transport = transport
        self._clock = clock
        self._client: httpx.AsyncClient | None = None
        # insertion order doubles as expiry order since the TTL is fixed
        self._cache: dict[str, tuple[float, Optional[AircraftProfile]]] = {}

    def __len__(self) -> int:
        return len(self._cache)

    def _cached(self, icao24: str) -> tuple[bool, Optional[AircraftProfile]]:
        entry = self._cache.get(icao24)
        if entry is None:
            return False, None
        expires_at, profile = entry
        if self._clock() >= expires_at:
            del self._cache[icao24]
            return False, None
        return True, profile

    def _evict(self) -> None:
        now = self._clock()
        while self._cache:
            oldest = next(iter(self._cache))
            expires_at, _ = self._cache[oldest]
            if expires_at > now and len(self._cache) < self.cache_max_size:
                return
            del self._cache[oldest]

    def _store(self, icao24: str, profile: Optional[AircraftProfile]) -> None:
        self._cache.pop(icao24, None)
        self._evict()
        self._cache[icao24] = (self._clock() + self.cache_ttl, profile)

    async def lookup(self, icao24: str) -> Optional[AircraftProfile]:
        key = icao24.strip().lower()
        if not key:
            return None

        hit, profile = self._cached(key)
        if hit:
            return profile

        attempts = max(self.retries, 0) + 1
        for attempt in range(1, attempts + 1):
            try:
                profile = await self._fetch(key)
            except (httpx.RequestError, httpx.HTTPStatusError, ValueError) as exc:
                logger.warning(
                    "Aircraft metadata lookup for %s failed (attempt %s/%s): %s",
                    key,
                    attempt,
                    attempts,
                    exc,
                )
                if attempt < attempts:
                    await asyncio.sleep(self.retry_backoff * attempt)
                continue
            self._store(key, profile)
            return profile

        return None

    async def aclose(self) -> None:
        client, self._client = self._client, None
        if client is not None:
            await client.aclose()

    def _http(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self.timeout, transport=self.transport)
        return self._client

    async def _fetch(self, icao24: str) -> Optional[AircraftProfile]:
        response = await self._http().get(f"{self.base_url}/{icao24}")

        if response.status_code == 404:
            return None
        response.raise_for_status()

        payload = response.json()
        if not isinstance(payload, dict):
            raise ValueError("Aircraft metadata response is not an object")
        return profile_from_metadata(icao24, payload)


__all__ = ["OpenSkyAircraftRegistry", "profile_from_metadata"]
