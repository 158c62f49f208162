"""Configuration settings for the Flightwatch monitor."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from functools import lru_cache

import boto3
from botocore.exceptions import BotoCoreError, ClientError

logger = logging.getLogger("flightwatch.config")

# Shared SSM client for secret reads. Default to a region so imports do not
# fail in environments without AWS configuration (e.g. CI test runners).
_ssm_client = boto3.client(
    "ssm",
    region_name=os.getenv("AWS_REGION") or os.getenv("AWS_DEFAULT_REGION") or "us-east-1",
)


def _get_bool(env_var: str, default: bool = False) -> bool:
    """Parse an environment variable into a boolean with a default."""

    value = os.getenv(env_var)
    if value is None:
        return default

    return value.lower() in {"1", "true", "yes", "on"}


def _get_float(env_var: str, default: float) -> float:
    value = os.getenv(env_var)
    return float(value) if value else default


@lru_cache(maxsize=None)
def get_ssm_secret(name: str) -> str:
    """Fetch a decrypted parameter from AWS SSM Parameter Store.

    The value is cached in-memory to avoid repeated SSM calls. Failures raise
    ``RuntimeError`` so callers decide whether a missing secret is fatal.
    """

    try:
        response = _ssm_client.get_parameter(Name=name, WithDecryption=True)
        value = response.get("Parameter", {}).get("Value")
    except (ClientError, BotoCoreError) as exc:  # pragma: no cover - AWS error passthrough
        logger.error("Failed to load %s from SSM: %s", name, exc)
        raise RuntimeError(f"Unable to load {name} from SSM") from exc

    if not value:
        logger.error("Received empty value for %s from SSM", name)
        raise RuntimeError(f"{name} not configured in SSM")

    return value


@dataclass
class Settings:
    """Application configuration loaded from environment variables."""

    flightwatch_env: str = os.getenv("FLIGHTWATCH_ENV", "local")
    log_level: str = os.getenv("FLIGHTWATCH_LOG_LEVEL", "INFO")

    # OpenSky feed
    opensky_states_url: str = os.getenv(
        "OPENSKY_STATES_URL", "https://opensky-network.org/api/states/all"
    )
    opensky_metadata_url: str = os.getenv(
        "OPENSKY_METADATA_URL",
        "https://opensky-network.org/api/metadata/aircraft/icao",
    )
    opensky_timeout: float = _get_float("OPENSKY_TIMEOUT", 10.0)
    opensky_username: str | None = os.getenv("OPENSKY_USERNAME")
    opensky_password: str | None = os.getenv("OPENSKY_PASSWORD")
    opensky_password_ssm_param: str | None = os.getenv("OPENSKY_PASSWORD_SSM_PARAM")

    # Monitoring
    poll_interval_seconds: float = _get_float("POLL_INTERVAL_SECONDS", 300.0)
    serialize_cycles: bool = _get_bool("SERIALIZE_CYCLES", default=True)
    target_operator: str = os.getenv("TARGET_OPERATOR", "Walmart Inc")
    monitor_autostart: bool = _get_bool("MONITOR_AUTOSTART")
    alert_history_size: int = int(os.getenv("ALERT_HISTORY_SIZE", "10"))

    # Geofence, defaults to the Minnesota state bounding box
    region_name: str = os.getenv("REGION_NAME", "Minnesota")
    region_north: float = _get_float("REGION_NORTH", 49.384)
    region_south: float = _get_float("REGION_SOUTH", 43.499)
    region_east: float = _get_float("REGION_EAST", -89.491)
    region_west: float = _get_float("REGION_WEST", -97.239)

    # Aircraft registry
    registry_backend: str = os.getenv("REGISTRY_BACKEND", "static")
    registry_cache_ttl_seconds: float = _get_float("REGISTRY_CACHE_TTL_SECONDS", 3600.0)
    registry_cache_max_size: int = int(os.getenv("REGISTRY_CACHE_MAX_SIZE", "20000"))
    registry_concurrency: int = int(os.getenv("REGISTRY_CONCURRENCY", "8"))
    registry_retries: int = int(os.getenv("REGISTRY_RETRIES", "1"))

    # API key authentication for the control endpoints
    api_key_pepper: str = os.getenv("API_KEY_PEPPER", "")
    api_key_pepper_ssm_param: str | None = os.getenv("API_KEY_PEPPER_SSM_PARAM")
    control_api_key_hash: str = os.getenv("CONTROL_API_KEY_HASH", "")
    require_api_key: bool = _get_bool(
        "REQUIRE_API_KEY",
        default=os.getenv("FLIGHTWATCH_ENV", "local").lower()
        in {"prod", "production"},
    )


settings = Settings()

# Secrets stored in SSM are only fetched when a parameter name is configured
if settings.opensky_password_ssm_param and not settings.opensky_password:
    try:
        settings.opensky_password = get_ssm_secret(settings.opensky_password_ssm_param)
    except RuntimeError:
        logger.warning("OpenSky password not available at import time")

if settings.api_key_pepper_ssm_param and not settings.api_key_pepper:
    try:
        settings.api_key_pepper = get_ssm_secret(settings.api_key_pepper_ssm_param)
    except RuntimeError:
        logger.warning("API key pepper not available at import time")

__all__ = ["settings", "Settings", "get_ssm_secret"]
