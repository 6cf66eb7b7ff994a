import json
import logging
import threading

from app.core.errors import PersistenceFailed
from app.domain.session import HikeRecord
from app.models.kv_entry import KeyValueEntry

logger = logging.getLogger(__name__)


class InMemoryKeyValueStore:
    """String-valued key-value store, like a browser's localStorage."""

    def __init__(self):
        self._data: dict[str, str] = {}

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str):
        self._data[key] = value


class SqlKeyValueStore:
    """Key-value store backed by the `kv_entries` table.

    Each call opens its own DB session, so the store can outlive requests.
    """

    def __init__(self, session_factory):
        self._session_factory = session_factory

    def get(self, key: str) -> str | None:
        with self._session_factory() as db:
            row = db.query(KeyValueEntry).filter(KeyValueEntry.key == key).first()
            return row.value if row else None

    def set(self, key: str, value: str):
        with self._session_factory() as db:
            row = db.query(KeyValueEntry).filter(KeyValueEntry.key == key).first()
            if not row:
                db.add(KeyValueEntry(key=key, value=value))
            else:
                row.value = value
            db.commit()


class SessionLog:
    """Append-only list of finished hikes kept under one key."""

    def __init__(self, kv, key: str = "hikes"):
        self._kv = kv
        self._key = key
        self._lock = threading.Lock()

    def _load(self) -> list[dict]:
        raw = self._kv.get(self._key)
        return json.loads(raw) if raw else []

    def append(self, record: HikeRecord):
        with self._lock:
            try:
                hikes = self._load()
                hikes.append(record.to_dict())
                self._kv.set(self._key, json.dumps(hikes))
            except Exception as e:
                logger.error(f"Could not save hike under '{self._key}': {e}")
                raise PersistenceFailed(str(e)) from e
        logger.info(
            f"Saved hike #{len(hikes)}: {record.distance_km:.2f} km in {record.duration_ms} ms"
        )

    def list(self) -> list[HikeRecord]:
        with self._lock:
            return [HikeRecord.from_dict(h) for h in self._load()]
