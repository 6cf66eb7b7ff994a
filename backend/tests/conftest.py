import os

# Must happen before app.core.config is imported anywhere
os.environ.setdefault("DATABASE_URL", "sqlite+pysqlite:///:memory:")

import pytest  # noqa: E402

from app.core.errors import PersistenceFailed  # noqa: E402
from app.domain.session import Position  # noqa: E402
from app.services.clock import ManualClock  # noqa: E402
from app.services.display import BufferedDisplay  # noqa: E402
from app.services.store import InMemoryKeyValueStore, SessionLog  # noqa: E402
from app.services.ticker import ManualTicker  # noqa: E402
from app.services.tracker import SessionTracker  # noqa: E402

T0 = 1_700_000_000_000


class RecordingLocationSource:
    """Keeps every subscription's callbacks, even after unsubscribe,
    so tests can replay late deliveries."""

    def __init__(self):
        self.subscriptions = {}
        self.active = set()
        self._next = 0

    def subscribe(self, on_position, on_error):
        self._next += 1
        self.subscriptions[self._next] = (on_position, on_error)
        self.active.add(self._next)
        return self._next

    def unsubscribe(self, handle):
        self.active.discard(handle)

    def emit(self, lat, lng, observed_at):
        for handle in sorted(self.active):
            self.subscriptions[handle][0](Position(lat, lng, observed_at))

    def emit_error(self, error):
        for handle in sorted(self.active):
            self.subscriptions[handle][1](error)

    def late(self, handle, lat, lng, observed_at):
        self.subscriptions[handle][0](Position(lat, lng, observed_at))


class FlakyStore:
    def __init__(self, failures: int = 1):
        self.failures = failures
        self.records = []

    def append(self, record):
        if self.failures > 0:
            self.failures -= 1
            raise PersistenceFailed("disk full")
        self.records.append(record)


class Rig:
    def __init__(self, store=None):
        self.clock = ManualClock(start_ms=T0)
        self.ticker = ManualTicker()
        self.source = RecordingLocationSource()
        self.display = BufferedDisplay()
        self.kv = InMemoryKeyValueStore()
        self.store = store if store is not None else SessionLog(self.kv)
        self.tracker = SessionTracker(
            location_source=self.source,
            clock=self.clock,
            ticker=self.ticker,
            display=self.display,
            store=self.store,
        )


@pytest.fixture
def rig():
    return Rig()


@pytest.fixture
def flaky_rig():
    return Rig(store=FlakyStore(failures=1))
