import threading
from collections import deque

from app.domain.snapshot import SessionSnapshot


class BufferedDisplay:
    """Display sink that keeps the latest snapshot plus a short history.

    The HTTP host reads `latest`; tests inspect `history`.
    """

    def __init__(self, maxlen: int = 256):
        self._lock = threading.Lock()
        self.history: deque[SessionSnapshot] = deque(maxlen=maxlen)

    def render(self, snapshot: SessionSnapshot):
        with self._lock:
            self.history.append(snapshot)

    @property
    def latest(self) -> SessionSnapshot | None:
        with self._lock:
            return self.history[-1] if self.history else None

    @property
    def statuses(self) -> list[str]:
        with self._lock:
            return [s.status for s in self.history if s.status]
