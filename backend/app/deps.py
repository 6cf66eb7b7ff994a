"""Process-wide tracker wiring used as FastAPI dependencies.

Tests replace these through ``app.dependency_overrides``.
"""
import threading

from app.core.config import settings
from app.db import SessionLocal
from app.services.clock import SystemClock
from app.services.display import BufferedDisplay
from app.services.location import PushLocationSource
from app.services.preferences import Preferences
from app.services.store import SessionLog, SqlKeyValueStore
from app.services.ticker import IntervalTicker
from app.services.tracker import SessionTracker

_lock = threading.Lock()
_components: dict = {}


def _build():
    kv = SqlKeyValueStore(SessionLocal)
    source = PushLocationSource()
    display = BufferedDisplay()
    session_log = SessionLog(kv, key=settings.session_log_key)
    tracker = SessionTracker(
        location_source=source,
        clock=SystemClock(),
        ticker=IntervalTicker(),
        display=display,
        store=session_log,
        tick_interval_s=settings.tick_interval_s,
    )
    return {
        "kv": kv,
        "source": source,
        "display": display,
        "session_log": session_log,
        "tracker": tracker,
        "preferences": Preferences(kv, settings.default_theme, settings.default_tab),
    }


def _component(name: str):
    with _lock:
        if not _components:
            _components.update(_build())
        return _components[name]


def get_tracker() -> SessionTracker:
    return _component("tracker")


def get_location_source() -> PushLocationSource:
    return _component("source")


def get_display() -> BufferedDisplay:
    return _component("display")


def get_session_log() -> SessionLog:
    return _component("session_log")


def get_preferences() -> Preferences:
    return _component("preferences")
