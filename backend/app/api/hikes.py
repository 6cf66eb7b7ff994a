from fastapi import APIRouter, Depends, HTTPException

from app.core.config import settings
from app.core.time_utils import compute_speed_kmh, ms_to_datetime, ms_to_hhmmss, to_local_datetime
from app.deps import get_session_log
from app.domain.session import HikeRecord
from app.schemas.hike import HikeRead, HikeSummary, SampleRead
from app.services.store import SessionLog

router = APIRouter(prefix="/hikes", tags=["hikes"])


def _summary_fields(index: int, record: HikeRecord) -> dict:
    return {
        "index": index,
        "started_at": to_local_datetime(ms_to_datetime(record.started_at), settings.timezone),
        "duration": ms_to_hhmmss(record.duration_ms),
        "duration_ms": record.duration_ms,
        "distance_km": round(record.distance_km, 3),
        "avg_speed_kmh": round(compute_speed_kmh(record.distance_km, record.duration_ms), 2),
        "points_count": len(record.samples),
    }


@router.get("", response_model=list[HikeSummary])
def list_hikes(session_log: SessionLog = Depends(get_session_log)):
    """Saved hikes, most recent first."""
    records = session_log.list()
    results = [HikeSummary(**_summary_fields(i, r)) for i, r in enumerate(records)]
    return list(reversed(results))


@router.get("/{index}", response_model=HikeRead)
def get_hike(index: int, session_log: SessionLog = Depends(get_session_log)):
    records = session_log.list()
    if index < 0 or index >= len(records):
        raise HTTPException(status_code=404, detail="Hike not found")
    record = records[index]
    return HikeRead(
        **_summary_fields(index, record),
        samples=[
            SampleRead(lat=p.latitude, lng=p.longitude, observed_at=p.observed_at)
            for p in record.samples
        ],
    )
