#!/usr/bin/env python
"""
Run this to exercise the live OpenSky feed and monitoring engine for a few cycles.

Usage (from repo root):
    python scripts/tests/run_monitor_live_test.py --cycles 2 --interval 30
"""

import argparse
import asyncio
from datetime import datetime, timezone

from flightwatch.config import settings
from flightwatch.ingestors import OpenSkyFeedClient
from flightwatch.models import Alert
from flightwatch.services import AlertHistory, build_engine, describe_alert


async def main(cycles: int, interval: float) -> None:
    settings.poll_interval_seconds = interval
    engine = build_engine(settings)
    history = AlertHistory(max_size=50, region_name=engine.region.name)

    now = datetime.now(timezone.utc)
    print(f"=== Live monitor test for {settings.target_operator!r} in {engine.region.name} (UTC now: {now.isoformat()}) ===\n")

    print("Requesting one raw snapshot from OpenSky...")
    states = await OpenSkyFeedClient(bounds=engine.region).fetch_snapshot()
    print(f"Snapshot returned {len(states)} aircraft inside the region bounds")
    for state in states[:5]:
        print("  ", state.model_dump(include={"icao24", "callsign", "latitude", "longitude", "true_track"}))

    def on_alert(alert: Alert) -> None:
        history.record(alert)
        print(f"ALERT {alert.classification.value}: {describe_alert(alert, engine.region.name)}")

    engine.start(on_alert)
    try:
        while engine.session is not None and engine.session.cycles_completed + engine.session.cycles_failed < cycles:
            await asyncio.sleep(1)
    finally:
        await engine.shutdown()

    print(f"\nDone. {len(history)} alerts recorded.")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--cycles", type=int, default=1, help="Poll cycles to run")
    parser.add_argument("--interval", type=float, default=30.0, help="Seconds between cycles")
    args = parser.parse_args()
    asyncio.run(main(args.cycles, args.interval))
