from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, List, Tuple

from app.core.geo import haversine_km


class SessionState(str, Enum):
    idle = "idle"
    active = "active"
    paused = "paused"
    finished = "finished"


@dataclass(frozen=True)
class Position:
    latitude: float
    longitude: float
    observed_at: int  # ms, assigned by the location source

    def __post_init__(self):
        if not -90.0 <= self.latitude <= 90.0:
            raise ValueError(f"latitude out of range: {self.latitude}")
        if not -180.0 <= self.longitude <= 180.0:
            raise ValueError(f"longitude out of range: {self.longitude}")

    def to_dict(self) -> dict:
        return {"lat": self.latitude, "lng": self.longitude, "observedAt": self.observed_at}

    @classmethod
    def from_dict(cls, data: dict) -> "Position":
        return cls(float(data["lat"]), float(data["lng"]), int(data["observedAt"]))


@dataclass(frozen=True)
class HikeRecord:
    """What a finished hike looks like once handed to the session store."""

    started_at: int
    duration_ms: int
    distance_km: float
    samples: Tuple[Position, ...] = ()

    def to_dict(self) -> dict:
        return {
            "startedAt": self.started_at,
            "durationMs": self.duration_ms,
            "distanceKm": self.distance_km,
            "samples": [p.to_dict() for p in self.samples],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "HikeRecord":
        return cls(
            started_at=int(data["startedAt"]),
            duration_ms=int(data["durationMs"]),
            distance_km=float(data["distanceKm"]),
            samples=tuple(Position.from_dict(s) for s in data.get("samples") or []),
        )


@dataclass
class HikeSession:
    state: SessionState = SessionState.idle

    started_at: Optional[int] = None
    paused_at: Optional[int] = None
    total_paused_ms: int = 0

    distance_km: float = 0.0
    samples: List[Position] = field(default_factory=list)
    # Cleared on resume so the pause gap never counts as distance
    last_accepted: Optional[Position] = None

    finished_at: Optional[int] = None
    duration_ms: Optional[int] = None

    def add_sample(self, position: Position) -> float:
        """Store a sample and grow the distance; returns the increment in km."""
        self.samples.append(position)
        if self.last_accepted is None:
            self.last_accepted = position
            return 0.0

        prev = self.last_accepted
        increment = haversine_km(prev.latitude, prev.longitude, position.latitude, position.longitude)
        self.distance_km += increment
        self.last_accepted = position
        return increment

    def elapsed_ms(self, now: int) -> int:
        if self.started_at is None:
            return 0
        if self.state is SessionState.finished:
            return self.duration_ms or 0
        reference = self.paused_at if self.state is SessionState.paused else now
        return reference - self.started_at - self.total_paused_ms

    def to_record(self) -> HikeRecord:
        return HikeRecord(
            started_at=self.started_at,
            duration_ms=self.duration_ms,
            distance_km=self.distance_km,
            samples=tuple(self.samples),
        )
