from typing import Optional

from pydantic import BaseModel, Field

from app.core.errors import LocationErrorKind
from app.domain.session import SessionState


class PositionIn(BaseModel):
    lat: float = Field(..., ge=-90, le=90)
    lng: float = Field(..., ge=-180, le=180)
    observed_at: int  # epoch ms from the device


class PositionBatch(BaseModel):
    """One or many samples; delivered in list order."""

    positions: list[PositionIn]


class LocationErrorIn(BaseModel):
    kind: LocationErrorKind = LocationErrorKind.unknown
    detail: Optional[str] = None


class SavedHikeRead(BaseModel):
    """Final numbers of the hike that was just handed to the store."""

    started_at: int  # epoch ms
    duration: str
    duration_ms: int
    distance_km: float
    avg_speed_kmh: float
    points_count: int


class SnapshotRead(BaseModel):
    state: SessionState
    duration: str   # "HH:MM:SS"
    distance: str   # "0.11 km"
    speed: str      # "1.2 km/h"
    elapsed_ms: int
    distance_km: float
    speed_kmh: float
    samples_count: int
    status: Optional[str] = None
    level: str = "info"
    unsaved: bool = False
    saved: Optional[SavedHikeRead] = None


class DeliveryResult(BaseModel):
    delivered: int
    snapshot: SnapshotRead
