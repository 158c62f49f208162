"""Control API key helpers.

The server holds a single control key, stored only as an HMAC-SHA256 digest
(``CONTROL_API_KEY_HASH``) keyed by a server-side pepper. The plaintext key is
shown once by ``scripts/generate_control_key.py`` and never persisted.
"""

from __future__ import annotations

import hmac
import secrets
from dataclasses import dataclass
from hashlib import sha256

API_KEY_HEADER = "X-Flightwatch-API-Key"
CONTROL_KEY_PREFIX = "fwctl"
_TOKEN_BYTES = 32


@dataclass(frozen=True)
class ControlPrincipal:
    """Caller allowed to start and stop monitoring."""

    key_hint: str
    authenticated: bool = True


def generate_control_key() -> str:
    """Return a new ``fwctl_<64 hex chars>`` control key."""

    return f"{CONTROL_KEY_PREFIX}_{secrets.token_hex(_TOKEN_BYTES)}"


def key_hint(api_key: str, length: int = 8) -> str:
    """Short, non-secret fragment of a key for log lines."""

    token = api_key.strip().rpartition("_")[2]
    return token[:length]


def hash_control_key(api_key: str, pepper: str) -> str:
    if not pepper:
        raise ValueError("API key pepper must be configured to hash keys")
    return hmac.new(pepper.encode(), api_key.strip().encode(), sha256).hexdigest()


def verify_control_key(api_key: str, pepper: str, expected_hash: str) -> bool:
    """Check ``api_key`` against the configured digest in constant time."""

    return hmac.compare_digest(hash_control_key(api_key, pepper), expected_hash.strip().lower())
