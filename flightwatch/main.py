from __future__ import annotations

import contextlib
import logging
import time

from fastapi import FastAPI, Request

from flightwatch.api import api_router
from flightwatch.config import settings
from flightwatch.services import AlertHistory, build_engine

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s - %(message)s",
)
logger = logging.getLogger("flightwatch")


@contextlib.asynccontextmanager
async def lifespan(app: FastAPI):
    """Own the monitoring engine for the lifetime of the application."""

    engine = build_engine(settings)
    history = AlertHistory(
        max_size=settings.alert_history_size, region_name=engine.region.name
    )
    app.state.engine = engine
    app.state.alert_history = history
    logger.info(
        "Monitoring engine ready (registry=%s, region=%s)",
        settings.registry_backend,
        engine.region.name,
    )

    if settings.monitor_autostart:
        engine.start(history)

    try:
        yield
    finally:
        await engine.shutdown()
        logger.info("Monitoring engine shut down")


app = FastAPI(title="Flightwatch", lifespan=lifespan)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log basic request information for observability."""

    start_time = time.time()
    response = await call_next(request)
    duration_ms = (time.time() - start_time) * 1000
    logger.info(
        "HTTP %s %s -> %s (%.2f ms)",
        request.method,
        request.url.path,
        response.status_code,
        duration_ms,
    )
    return response


app.include_router(api_router)

