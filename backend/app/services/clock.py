import time


class SystemClock:
    """Wall-clock milliseconds that never go backwards.

    The wall time is read once and then advanced with the monotonic clock,
    so NTP adjustments during a hike cannot produce negative durations.
    """

    def __init__(self):
        self._wall_anchor_ms = time.time_ns() // 1_000_000
        self._mono_anchor_ns = time.monotonic_ns()

    def now(self) -> int:
        return self._wall_anchor_ms + (time.monotonic_ns() - self._mono_anchor_ns) // 1_000_000


class ManualClock:
    """Clock driven by hand; used by tests and the hike simulator."""

    def __init__(self, start_ms: int = 0):
        self._now = int(start_ms)

    def now(self) -> int:
        return self._now

    def advance(self, ms: int) -> int:
        if ms < 0:
            raise ValueError("ManualClock cannot go backwards")
        self._now += int(ms)
        return self._now
