import itertools
import logging
import threading

from app.core.errors import LocationError, LocationErrorKind
from app.domain.session import Position

logger = logging.getLogger(__name__)


class PushLocationSource:
    """Location source fed from outside (HTTP client, simulator).

    Samples pushed while nobody is subscribed are dropped, the same way a
    cleared geolocation watch stops reporting.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._ids = itertools.count(1)
        self._subscribers: dict[int, tuple] = {}

    def subscribe(self, on_position, on_error) -> int:
        with self._lock:
            handle = next(self._ids)
            self._subscribers[handle] = (on_position, on_error)
        logger.debug(f"Location subscription {handle} opened")
        return handle

    def unsubscribe(self, handle: int):
        with self._lock:
            removed = self._subscribers.pop(handle, None)
        if removed is not None:
            logger.debug(f"Location subscription {handle} closed")

    @property
    def subscribed(self) -> bool:
        return bool(self._subscribers)

    def _callbacks(self):
        with self._lock:
            return list(self._subscribers.values())

    def push(self, latitude: float, longitude: float, observed_at: int) -> int:
        """Deliver one sample; returns the number of subscribers reached."""
        position = Position(latitude, longitude, observed_at)
        callbacks = self._callbacks()
        for on_position, _ in callbacks:
            on_position(position)
        return len(callbacks)

    def fail(self, kind: LocationErrorKind, detail: str | None = None) -> int:
        error = LocationError(kind, detail)
        callbacks = self._callbacks()
        for _, on_error in callbacks:
            on_error(error)
        return len(callbacks)
