import logging
import threading

logger = logging.getLogger(__name__)


class IntervalTicker:
    """Calls `callback` every `interval_s` seconds on a daemon thread."""

    def __init__(self, name: str = "hike-ticker"):
        self._name = name
        self._thread = None
        self._stop = threading.Event()

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self, callback, interval_s: float):
        self.stop()
        stop = threading.Event()

        def loop():
            while not stop.wait(interval_s):
                try:
                    callback()
                except Exception:
                    logger.exception("Ticker callback failed")

        self._stop = stop
        self._thread = threading.Thread(target=loop, name=self._name, daemon=True)
        self._thread.start()

    def stop(self):
        # no join: a tick may be waiting on the tracker lock held by our caller
        self._stop.set()
        self._thread = None


class ManualTicker:
    """Ticker that only fires when told to."""

    def __init__(self):
        self._callback = None
        self.interval_s = None

    @property
    def running(self) -> bool:
        return self._callback is not None

    def start(self, callback, interval_s: float):
        self._callback = callback
        self.interval_s = interval_s

    def stop(self):
        self._callback = None

    def fire(self, times: int = 1):
        for _ in range(times):
            if self._callback is None:
                return
            self._callback()
