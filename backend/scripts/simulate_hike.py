"""Drive the tracker through a synthetic hike and save it.

Usage (from backend/): python -m scripts.simulate_hike [--minutes 30]
"""
import argparse
import math
import random

from app.core.config import settings
from app.db import Base, SessionLocal, engine
from app.models.kv_entry import KeyValueEntry  # noqa: F401
from app.services.clock import ManualClock
from app.services.display import BufferedDisplay
from app.services.location import PushLocationSource
from app.services.store import SessionLog, SqlKeyValueStore
from app.services.ticker import ManualTicker
from app.services.tracker import SessionTracker

# Trailhead near Boulder, CO
TRAILHEAD = (40.0150, -105.2705)


def walk(lat: float, lng: float, heading_deg: float, meters: float):
    """Move roughly `meters` along `heading_deg` from (lat, lng)."""
    d_lat = meters * math.cos(math.radians(heading_deg)) / 111_320
    d_lng = meters * math.sin(math.radians(heading_deg)) / (111_320 * math.cos(math.radians(lat)))
    return lat + d_lat, lng + d_lng


def simulate(tracker: SessionTracker, source: PushLocationSource, clock: ManualClock,
             ticker: ManualTicker, minutes: int, pause_at: int):
    lat, lng = TRAILHEAD
    heading = random.uniform(0, 360)
    tracker.start()
    for minute in range(minutes):
        if minute == pause_at:
            tracker.pause()
            clock.advance(5 * 60 * 1000)  # snack break
            ticker.fire(300)
            tracker.resume()
        for _ in range(6):  # one sample every 10 s
            clock.advance(10_000)
            heading += random.uniform(-20, 20)
            lat, lng = walk(lat, lng, heading, random.uniform(10, 16))
            source.push(lat, lng, clock.now())
            ticker.fire(10)
    return tracker.finish()


def main():
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--minutes", type=int, default=30)
    parser.add_argument("--pause-at", type=int, default=12)
    args = parser.parse_args()

    Base.metadata.create_all(bind=engine)
    clock = ManualClock(start_ms=1_700_000_000_000)
    ticker = ManualTicker()
    source = PushLocationSource()
    display = BufferedDisplay()
    tracker = SessionTracker(
        location_source=source,
        clock=clock,
        ticker=ticker,
        display=display,
        store=SessionLog(SqlKeyValueStore(SessionLocal), key=settings.session_log_key),
    )

    simulate(tracker, source, clock, ticker, args.minutes, args.pause_at)
    print(display.latest.status)


if __name__ == "__main__":
    main()
