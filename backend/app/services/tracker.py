"""Hike session tracker.

Every input (user command, position, location failure, timer tick) becomes an
event handed to ``SessionTracker.dispatch``. Dispatch holds one lock, so the
session has a single writer even when the HTTP thread pool and the ticker
thread call in concurrently.
"""
import logging
import threading
from dataclasses import dataclass
from enum import Enum

from app.core.errors import InvalidTransition, LocationError, PersistenceFailed
from app.core.time_utils import format_distance, ms_to_hhmmss
from app.domain.session import HikeRecord, HikeSession, Position, SessionState
from app.domain.snapshot import SessionSnapshot

logger = logging.getLogger(__name__)


class Command(str, Enum):
    start = "start"
    pause = "pause"
    resume = "resume"
    finish = "finish"
    # only valid while a finished hike is waiting to be saved
    save = "save"
    discard = "discard"


# (current state, command) -> next state. Missing pairs are invalid.
TRANSITIONS = {
    (SessionState.idle, Command.start): SessionState.active,
    (SessionState.active, Command.pause): SessionState.paused,
    (SessionState.paused, Command.resume): SessionState.active,
    (SessionState.active, Command.finish): SessionState.finished,
    (SessionState.paused, Command.finish): SessionState.finished,
}


@dataclass(frozen=True)
class UserCommand:
    command: Command


@dataclass(frozen=True)
class PositionReceived:
    handle: int
    position: Position


@dataclass(frozen=True)
class LocationFailed:
    handle: int
    error: LocationError


@dataclass(frozen=True)
class TimerTick:
    pass


class SessionTracker:
    def __init__(self, location_source, clock, ticker, display, store, tick_interval_s: float = 1.0):
        self._source = location_source
        self._clock = clock
        self._ticker = ticker
        self._display = display
        self._store = store
        self._tick_interval_s = tick_interval_s

        self._lock = threading.RLock()
        self._session = HikeSession()
        self._subscription = None
        # Finished hike whose store write failed; kept for retry_save()
        self._unsaved: HikeRecord | None = None
        self.last_saved: HikeRecord | None = None

    # ----- public API ----- #

    @property
    def session(self) -> HikeSession:
        return self._session

    @property
    def state(self) -> SessionState:
        return self._session.state

    @property
    def unsaved(self) -> HikeRecord | None:
        return self._unsaved

    def start(self):
        return self.dispatch(UserCommand(Command.start))

    def pause(self):
        return self.dispatch(UserCommand(Command.pause))

    def resume(self):
        return self.dispatch(UserCommand(Command.resume))

    def finish(self) -> HikeRecord:
        return self.dispatch(UserCommand(Command.finish))

    def elapsed_ms(self) -> int:
        with self._lock:
            return self._session.elapsed_ms(self._clock.now())

    def snapshot(self) -> SessionSnapshot:
        with self._lock:
            return SessionSnapshot.of(self._session, self._clock.now())

    def retry_save(self) -> HikeRecord:
        """Re-attempt the store write of a finished hike."""
        with self._lock:
            if self._unsaved is None:
                raise InvalidTransition(self._session.state, Command.save)
            return self._hand_off(self._unsaved)

    def discard(self):
        """Drop a finished hike that could not be saved."""
        with self._lock:
            if self._unsaved is None:
                raise InvalidTransition(self._session.state, Command.discard)
            logger.warning("Discarding unsaved hike")
            self._unsaved = None
            self._session = HikeSession()
            self._render("Unsaved hike discarded", "warning")

    def dispatch(self, event):
        with self._lock:
            if isinstance(event, UserCommand):
                return self._apply_command(event.command)
            if isinstance(event, PositionReceived):
                return self._on_position(event.handle, event.position)
            if isinstance(event, LocationFailed):
                return self._on_location_error(event.handle, event.error)
            if isinstance(event, TimerTick):
                return self._on_tick()
            raise TypeError(f"Unknown tracker event: {event!r}")

    # ----- commands ----- #

    def _apply_command(self, command: Command):
        current = self._session.state
        target = TRANSITIONS.get((current, command))
        if target is None:
            raise InvalidTransition(current, command)

        logger.info(f"Hike {command.value}: {current.value} -> {target.value}")
        handler = getattr(self, f"_do_{command.value}")
        return handler()

    def _do_start(self):
        now = self._clock.now()
        session = self._session
        session.distance_km = 0.0
        session.samples = []
        session.last_accepted = None
        session.total_paused_ms = 0
        session.paused_at = None
        session.started_at = now
        session.state = SessionState.active

        self._subscribe()
        self._ticker.start(lambda: self.dispatch(TimerTick()), self._tick_interval_s)
        self._render("Tracking started! Stay safe on your hike.", "success")

    def _do_pause(self):
        session = self._session
        session.paused_at = self._clock.now()
        session.state = SessionState.paused
        self._unsubscribe()
        self._render("Tracking paused", "warning")

    def _do_resume(self):
        session = self._session
        session.total_paused_ms += self._clock.now() - session.paused_at
        session.paused_at = None
        session.last_accepted = None
        session.state = SessionState.active
        self._subscribe()
        self._render("Tracking resumed", "success")

    def _do_finish(self) -> HikeRecord:
        self._unsubscribe()
        self._ticker.stop()

        now = self._clock.now()
        session = self._session
        session.duration_ms = session.elapsed_ms(now)
        session.finished_at = now
        session.state = SessionState.finished

        record = session.to_record()
        self._render(
            f"Hike completed! Duration: {ms_to_hhmmss(record.duration_ms)}, "
            f"Distance: {format_distance(record.distance_km)}",
            "success",
        )
        return self._hand_off(record)

    def _hand_off(self, record: HikeRecord) -> HikeRecord:
        try:
            self._store.append(record)
        except Exception as e:
            self._unsaved = record
            self._render("Could not save hike. Try saving again.", "error")
            if isinstance(e, PersistenceFailed):
                raise
            logger.error(f"Session store raised {type(e).__name__}: {e}")
            raise PersistenceFailed(str(e)) from e

        self._unsaved = None
        self.last_saved = record
        # the finished session is immutable and no longer ours
        self._session = HikeSession()
        return record

    # ----- location source ----- #

    def _subscribe(self):
        holder = {}

        def on_position(position):
            self.dispatch(PositionReceived(holder["handle"], position))

        def on_error(error):
            self.dispatch(LocationFailed(holder["handle"], error))

        # the source must not call back before subscribe() returns
        holder["handle"] = self._subscription = self._source.subscribe(on_position, on_error)

    def _unsubscribe(self):
        handle, self._subscription = self._subscription, None
        if handle is not None:
            self._source.unsubscribe(handle)

    def _is_current(self, handle) -> bool:
        return self._subscription is not None and handle == self._subscription

    def _on_position(self, handle, position: Position):
        if not self._is_current(handle) or self._session.state is not SessionState.active:
            logger.debug(f"Ignoring position from stale subscription {handle}")
            return None
        increment = self._session.add_sample(position)
        self._render()
        return increment

    def _on_location_error(self, handle, error: LocationError):
        if not self._is_current(handle):
            logger.debug(f"Ignoring location error from stale subscription {handle}")
            return None
        logger.warning(f"Location error ({error.kind.value}): {error.detail or error.message}")
        self._render(error.message, "error")
        return error

    # ----- display ----- #

    def _on_tick(self):
        if self._session.state not in (SessionState.active, SessionState.paused):
            return None
        self._render()

    def _render(self, status: str | None = None, level: str = "info"):
        snapshot = SessionSnapshot.of(self._session, self._clock.now(), status, level)
        self._display.render(snapshot)
        return snapshot
