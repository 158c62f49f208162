"""Monitoring control endpoints."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Query, Request

from flightwatch.models import AlertListResponse, MonitoringStatusResponse
from flightwatch.security import ControlPrincipal, require_api_key
from flightwatch.services import AlertHistory, MonitoringEngine

router = APIRouter(prefix="/api/v1", tags=["monitoring"])

logger = logging.getLogger("flightwatch.api.monitoring")


def get_engine(request: Request) -> MonitoringEngine:
    return request.app.state.engine


def get_alert_history(request: Request) -> AlertHistory:
    return request.app.state.alert_history


def _status(engine: MonitoringEngine) -> MonitoringStatusResponse:
    session = engine.session
    session_fields = {}
    if session is not None:
        session_fields = {
            "started_at": session.started_at,
            "cycles_completed": session.cycles_completed,
            "cycles_failed": session.cycles_failed,
            "last_cycle_at": session.last_cycle_at,
            "last_alert_count": session.last_alert_count,
        }
    return MonitoringStatusResponse(
        active=engine.is_active,
        poll_interval_seconds=engine.poll_interval,
        target_operator=engine.target_operator,
        region=engine.region,
        **session_fields,
    )


@router.get(
    "/monitoring/status",
    response_model=MonitoringStatusResponse,
    summary="Monitoring status",
)
async def monitoring_status(
    engine: MonitoringEngine = Depends(get_engine),
) -> MonitoringStatusResponse:
    return _status(engine)


@router.post(
    "/monitoring/start",
    response_model=MonitoringStatusResponse,
    summary="Start or restart monitoring",
)
async def start_monitoring(
    engine: MonitoringEngine = Depends(get_engine),
    history: AlertHistory = Depends(get_alert_history),
    principal: ControlPrincipal = Depends(require_api_key),
) -> MonitoringStatusResponse:
    """Start a monitoring session that records alerts into the history list."""

    logger.info("Monitoring start requested by %s", principal.key_hint)
    engine.start(history)
    return _status(engine)


@router.post(
    "/monitoring/stop",
    response_model=MonitoringStatusResponse,
    summary="Stop monitoring",
)
async def stop_monitoring(
    engine: MonitoringEngine = Depends(get_engine),
    principal: ControlPrincipal = Depends(require_api_key),
) -> MonitoringStatusResponse:
    logger.info("Monitoring stop requested by %s", principal.key_hint)
    engine.stop()
    return _status(engine)


@router.get("/alerts", response_model=AlertListResponse, summary="Recent alerts")
async def list_alerts(
    limit: int | None = Query(default=None, ge=1),
    history: AlertHistory = Depends(get_alert_history),
) -> AlertListResponse:
    alerts = history.recent(limit)
    return AlertListResponse(alerts=alerts, count=len(alerts))
