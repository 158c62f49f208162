"""API routers for the Flightwatch monitor."""

from fastapi import APIRouter

from .health import router as health_router
from .monitoring import router as monitoring_router

api_router = APIRouter()
api_router.include_router(health_router)
api_router.include_router(monitoring_router)

__all__ = ["api_router"]
