from dataclasses import dataclass
from typing import Optional

from app.core.time_utils import compute_speed_kmh, format_distance, format_speed, ms_to_hhmmss
from app.domain.session import HikeSession, SessionState


@dataclass(frozen=True)
class SessionSnapshot:
    """Display-ready view of a session at one instant."""

    state: SessionState
    elapsed_ms: int
    distance_km: float
    speed_kmh: float
    samples_count: int

    duration: str  # "HH:MM:SS"
    distance: str  # "0.11 km"
    speed: str     # "1.2 km/h"

    status: Optional[str] = None
    level: str = "info"  # info, success, warning, error

    @classmethod
    def of(cls, session: HikeSession, now: int, status: Optional[str] = None, level: str = "info"):
        elapsed = session.elapsed_ms(now)
        speed = compute_speed_kmh(session.distance_km, elapsed)
        return cls(
            state=session.state,
            elapsed_ms=elapsed,
            distance_km=session.distance_km,
            speed_kmh=speed,
            samples_count=len(session.samples),
            duration=ms_to_hhmmss(elapsed),
            distance=format_distance(session.distance_km),
            speed=format_speed(speed),
            status=status,
            level=level,
        )
