"""FastAPI dependencies for request authentication."""

from __future__ import annotations

import logging

from fastapi import HTTPException, Security, status
from fastapi.security import APIKeyHeader

from flightwatch.config import settings
from flightwatch.security.api_keys import (
    API_KEY_HEADER,
    ControlPrincipal,
    key_hint,
    verify_control_key,
)

logger = logging.getLogger("flightwatch.security")

api_key_header = APIKeyHeader(name=API_KEY_HEADER, auto_error=False)


def _auth_error(status_code: int, code: str, message: str) -> HTTPException:
    return HTTPException(status_code=status_code, detail={"code": code, "message": message})


async def require_api_key(
    api_key: str | None = Security(api_key_header),
) -> ControlPrincipal:
    """Authenticate control requests against the configured key hash."""

    if not settings.require_api_key:
        return ControlPrincipal(key_hint="bypass", authenticated=False)

    if not settings.api_key_pepper or not settings.control_api_key_hash:
        logger.error("Control API key is not configured; rejecting request")
        raise _auth_error(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "api_key_misconfigured",
            "Control API key is not configured",
        )

    if not api_key or not api_key.strip():
        raise _auth_error(status.HTTP_401_UNAUTHORIZED, "api_key_missing", "API key header is required")

    if not verify_control_key(api_key, settings.api_key_pepper, settings.control_api_key_hash):
        logger.warning("Rejected control API key %s...", key_hint(api_key))
        raise _auth_error(status.HTTP_401_UNAUTHORIZED, "api_key_invalid", "Invalid API key")

    return ControlPrincipal(key_hint=key_hint(api_key))
