"""Security utilities for the Flightwatch control API."""

from .api_keys import (
    API_KEY_HEADER,
    ControlPrincipal,
    generate_control_key,
    hash_control_key,
    key_hint,
    verify_control_key,
)
from .dependencies import require_api_key

__all__ = [
    "API_KEY_HEADER",
    "ControlPrincipal",
    "generate_control_key",
    "hash_control_key",
    "key_hint",
    "require_api_key",
    "verify_control_key",
]
