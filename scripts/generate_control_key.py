"""Generate the control API key and the hash to configure on the server.

Usage examples:
    API_KEY_PEPPER=... python scripts/generate_control_key.py
    API_KEY_PEPPER=... python scripts/generate_control_key.py --json
"""

from __future__ import annotations

import argparse
import json
import sys

from flightwatch.config import settings
from flightwatch.security.api_keys import generate_control_key, hash_control_key, key_hint


def _ensure_pepper() -> str:
    if not settings.api_key_pepper:
        sys.stderr.write("API key pepper must be configured to generate the control key.\n")
        raise SystemExit(1)
    return settings.api_key_pepper


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Generate the Flightwatch control API key")
    parser.add_argument("--json", action="store_true", help="Emit JSON output")
    args = parser.parse_args(argv)

    pepper = _ensure_pepper()
    plaintext_key = generate_control_key()
    key_hash = hash_control_key(plaintext_key, pepper)

    if args.json:
        print(json.dumps({"api_key": plaintext_key, "hint": key_hint(plaintext_key), "hash": key_hash}))
        return

    print("Store this key now; it cannot be recovered:")
    print(f"  {plaintext_key}")
    print("Configure the server with:")
    print(f"  CONTROL_API_KEY_HASH={key_hash}")


if __name__ == "__main__":
    main()
