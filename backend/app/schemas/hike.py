from datetime import datetime

from pydantic import BaseModel


class SampleRead(BaseModel):
    lat: float
    lng: float
    observed_at: int


class HikeSummary(BaseModel):
    """Saved hike as shown in the history list."""

    index: int
    started_at: datetime  # local time per settings.timezone
    duration: str         # "HH:MM:SS"
    duration_ms: int
    distance_km: float
    avg_speed_kmh: float
    points_count: int


class HikeRead(HikeSummary):
    samples: list[SampleRead]
