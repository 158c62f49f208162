"""Periodic monitoring of tracked aircraft against a geofence region."""

from __future__ import annotations

import asyncio
import contextlib
from dataclasses import dataclass, field
from datetime import datetime, timezone
import inspect
import logging
from typing import Any, Callable, Optional, Protocol

from flightwatch.config import Settings
from flightwatch.domain.geofence import classify
from flightwatch.ingestors.opensky import OpenSkyFeedClient
from flightwatch.models.aircraft import AircraftProfile
from flightwatch.models.air_traffic import StateRecord
from flightwatch.models.alerts import Alert, AlertClassification
from flightwatch.models.region import Region
from flightwatch.registry import AircraftRegistry, build_registry

logger = logging.getLogger("flightwatch.monitoring")

AlertCallback = Callable[[Alert], Any]


class StateFeed(Protocol):
    async def fetch_snapshot(self) -> list[StateRecord]:
        ...


def _utcnow() -> datetime:
    return datetime.now(tz=timezone.utc)


@dataclass
class MonitoringSession:
    """State owned by one start/stop lifetime of the engine."""

    on_alert: AlertCallback
    started_at: datetime
    schedule: Optional[asyncio.Task] = None
    cycles_completed: int = 0
    cycles_failed: int = 0
    last_cycle_at: Optional[datetime] = None
    last_alert_count: int = 0
    alerts_delivered: int = 0
    inflight: set[asyncio.Task] = field(default_factory=set)


class MonitoringEngine:
    """Poll the feed, match tracked aircraft and emit region alerts.

    At most one session is active. ``start`` replaces any running session
    and ``stop`` cancels the poll schedule. A cycle that is already running
    when its session ends finishes its fetch, but alerts are only handed to
    the subscriber while that session is still the active one.

    Alerts are not de-duplicated across cycles: an aircraft that stays
    inside the region is reported on every cycle.
    """

    def __init__(
        self,
        *,
        feed: StateFeed,
        registry: AircraftRegistry,
        region: Region,
        target_operator: str,
        poll_interval: float = 300.0,
        serialize_cycles: bool = True,
        lookup_concurrency: int = 8,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        if poll_interval <= 0:
            raise ValueError("poll_interval must be positive")
        if lookup_concurrency < 1:
            raise ValueError("lookup_concurrency must be at least 1")
        self.feed = feed
        self.registry = registry
        self.region = region
        self.target_operator = target_operator
        self.poll_interval = poll_interval
        self.serialize_cycles = serialize_cycles
        self.lookup_concurrency = lookup_concurrency
        self._clock = clock
        self._session: MonitoringSession | None = None
        # schedules and cycles of every session, including stopped ones
        self._tasks: set[asyncio.Task] = set()

    @property
    def is_active(self) -> bool:
        return self._session is not None

    @property
    def session(self) -> MonitoringSession | None:
        return self._session

    def start(self, on_alert: AlertCallback) -> MonitoringSession:
        """Begin monitoring and deliver alerts to ``on_alert``.

        The first cycle runs immediately, then every ``poll_interval``
        seconds. Must be called from a running event loop.
        """

        loop = asyncio.get_running_loop()
        if self._session is not None:
            logger.info("Replacing active monitoring session")
            self.stop()

        session = MonitoringSession(on_alert=on_alert, started_at=self._clock())
        session.schedule = self._track(
            loop.create_task(self._run_schedule(session), name="flightwatch-monitor-schedule")
        )
        self._session = session
        logger.info(
            "Monitoring started for operator %r in %s every %ss",
            self.target_operator,
            self.region.name,
            self.poll_interval,
        )
        return session

    def stop(self) -> None:
        """Cancel the poll schedule and drop the subscriber. No-op when idle."""

        session = self._session
        if session is None:
            return
        self._session = None
        if session.schedule is not None:
            session.schedule.cancel()
        logger.info(
            "Monitoring stopped after %s cycles", session.cycles_completed
        )

    async def shutdown(self) -> None:
        """Stop monitoring, cancel every task still running and close the registry.

        Cycles left over from earlier stopped or replaced sessions are
        cancelled too.
        """

        self.stop()
        tasks = list(self._tasks)
        for task in tasks:
            task.cancel()
        for task in tasks:
            with contextlib.suppress(asyncio.CancelledError):
                await task

        aclose = getattr(self.registry, "aclose", None)
        if aclose is not None:
            await aclose()

    def _track(self, task: asyncio.Task) -> asyncio.Task:
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def _run_schedule(self, session: MonitoringSession) -> None:
        loop = asyncio.get_running_loop()
        next_run = loop.time()
        while True:
            cycle = self._track(
                loop.create_task(self._run_cycle(session), name="flightwatch-monitor-cycle")
            )
            session.inflight.add(cycle)
            cycle.add_done_callback(session.inflight.discard)
            if self.serialize_cycles:
                # cancelling the schedule must not cancel the running cycle
                await asyncio.shield(cycle)

            next_run += self.poll_interval
            await asyncio.sleep(max(next_run - loop.time(), 0))

    async def _run_cycle(self, session: MonitoringSession) -> None:
        try:
            alerts = await self._collect_alerts()
        except Exception:
            session.cycles_failed += 1
            logger.exception("Monitoring cycle failed; waiting for next schedule")
            return

        session.cycles_completed += 1
        session.last_cycle_at = self._clock()
        session.last_alert_count = len(alerts)
        logger.info("Monitoring cycle found %s alerts", len(alerts))
        await self._deliver(session, alerts)

    async def _deliver(self, session: MonitoringSession, alerts: list[Alert]) -> None:
        for index, alert in enumerate(alerts):
            if self._session is not session:
                logger.debug(
                    "Session ended mid-cycle; dropping %s undelivered alerts",
                    len(alerts) - index,
                )
                return
            try:
                result = session.on_alert(alert)
                if inspect.isawaitable(result):
                    await result
            except Exception:
                logger.exception("Alert subscriber failed for %s", alert.id)
                continue
            session.alerts_delivered += 1

    async def _collect_alerts(self) -> list[Alert]:
        states = await self.feed.fetch_snapshot()
        candidates: list[tuple[StateRecord, AlertClassification]] = []
        for state in states:
            if not state.icao24:
                continue
            classification = classify(self.region, state)
            if classification is not None:
                candidates.append((state, classification))

        # gather keeps discovery order regardless of lookup completion order
        semaphore = asyncio.Semaphore(self.lookup_concurrency)

        async def resolve(icao24: str) -> AircraftProfile | None:
            async with semaphore:
                return await self._lookup(icao24)

        profiles = await asyncio.gather(
            *(resolve(state.icao24) for state, _ in candidates)
        )

        alerts: list[Alert] = []
        for (state, classification), profile in zip(candidates, profiles):
            if profile is None or not profile.operated_by(self.target_operator):
                continue
            alerts.append(self._build_alert(state, profile, classification))
        logger.debug(
            "Resolved %s candidates out of %s states", len(candidates), len(states)
        )
        return alerts

    async def _lookup(self, icao24: str) -> AircraftProfile | None:
        try:
            result = self.registry.lookup(icao24)
            if inspect.isawaitable(result):
                result = await result
        except Exception as exc:
            logger.warning("Registry lookup for %s failed: %s", icao24, exc)
            return None
        return result

    def _build_alert(
        self,
        state: StateRecord,
        profile: AircraftProfile,
        classification: AlertClassification,
    ) -> Alert:
        emitted_at = self._clock()
        return Alert(
            id=f"{state.icao24}-{int(emitted_at.timestamp() * 1000)}",
            state=state,
            aircraft=profile,
            timestamp=emitted_at,
            classification=classification,
        )


def build_region(config: Settings) -> Region:
    return Region(
        name=config.region_name,
        north=config.region_north,
        south=config.region_south,
        east=config.region_east,
        west=config.region_west,
    )


def build_engine(config: Settings) -> MonitoringEngine:
    """Wire the feed client, registry and region described by ``config``."""

    return MonitoringEngine(
        feed=OpenSkyFeedClient(
            base_url=config.opensky_states_url,
            timeout=config.opensky_timeout,
            username=config.opensky_username,
            password=config.opensky_password,
        ),
        registry=build_registry(config),
        region=build_region(config),
        target_operator=config.target_operator,
        poll_interval=config.poll_interval_seconds,
        serialize_cycles=config.serialize_cycles,
        lookup_concurrency=config.registry_concurrency,
    )


__all__ = [
    "AlertCallback",
    "MonitoringEngine",
    "MonitoringSession",
    "StateFeed",
    "build_engine",
    "build_region",
]
