import logging

from fastapi import APIRouter, Depends, HTTPException

from app.core.errors import InvalidTransition, PersistenceFailed
from app.core.time_utils import compute_speed_kmh, ms_to_hhmmss
from app.deps import get_display, get_location_source, get_tracker
from app.domain.session import HikeRecord
from app.schemas.tracking import DeliveryResult, LocationErrorIn, PositionBatch, SavedHikeRead, SnapshotRead
from app.services.display import BufferedDisplay
from app.services.location import PushLocationSource
from app.services.tracker import SessionTracker

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/tracking", tags=["tracking"])


def _saved_read(record: HikeRecord) -> SavedHikeRead:
    return SavedHikeRead(
        started_at=record.started_at,
        duration=ms_to_hhmmss(record.duration_ms),
        duration_ms=record.duration_ms,
        distance_km=record.distance_km,
        avg_speed_kmh=round(compute_speed_kmh(record.distance_km, record.duration_ms), 2),
        points_count=len(record.samples),
    )


def _snapshot_read(tracker: SessionTracker, display: BufferedDisplay, saved: HikeRecord | None = None) -> SnapshotRead:
    snap = tracker.snapshot()
    latest = display.latest
    return SnapshotRead(
        state=snap.state,
        duration=snap.duration,
        distance=snap.distance,
        speed=snap.speed,
        elapsed_ms=snap.elapsed_ms,
        distance_km=snap.distance_km,
        speed_kmh=snap.speed_kmh,
        samples_count=snap.samples_count,
        status=latest.status if latest else None,
        level=latest.level if latest else "info",
        unsaved=tracker.unsaved is not None,
        saved=_saved_read(saved) if saved is not None else None,
    )


def _run_command(action, tracker: SessionTracker, display: BufferedDisplay) -> SnapshotRead:
    try:
        result = action()
    except InvalidTransition as e:
        raise HTTPException(status_code=409, detail=str(e))
    except PersistenceFailed as e:
        raise HTTPException(status_code=503, detail=f"Hike finished but not saved: {e}")
    # finish and retry-save hand back the record; the live session is already idle
    saved = result if isinstance(result, HikeRecord) else None
    return _snapshot_read(tracker, display, saved)


@router.get("", response_model=SnapshotRead)
def get_snapshot(
    tracker: SessionTracker = Depends(get_tracker),
    display: BufferedDisplay = Depends(get_display),
):
    return _snapshot_read(tracker, display)


@router.post("/start", response_model=SnapshotRead)
def start_tracking(
    tracker: SessionTracker = Depends(get_tracker),
    display: BufferedDisplay = Depends(get_display),
):
    return _run_command(tracker.start, tracker, display)


@router.post("/pause", response_model=SnapshotRead)
def pause_tracking(
    tracker: SessionTracker = Depends(get_tracker),
    display: BufferedDisplay = Depends(get_display),
):
    return _run_command(tracker.pause, tracker, display)


@router.post("/resume", response_model=SnapshotRead)
def resume_tracking(
    tracker: SessionTracker = Depends(get_tracker),
    display: BufferedDisplay = Depends(get_display),
):
    return _run_command(tracker.resume, tracker, display)


@router.post("/finish", response_model=SnapshotRead)
def finish_tracking(
    tracker: SessionTracker = Depends(get_tracker),
    display: BufferedDisplay = Depends(get_display),
):
    return _run_command(tracker.finish, tracker, display)


@router.post("/retry-save", response_model=SnapshotRead)
def retry_save(
    tracker: SessionTracker = Depends(get_tracker),
    display: BufferedDisplay = Depends(get_display),
):
    return _run_command(tracker.retry_save, tracker, display)


@router.post("/discard", response_model=SnapshotRead)
def discard_unsaved(
    tracker: SessionTracker = Depends(get_tracker),
    display: BufferedDisplay = Depends(get_display),
):
    return _run_command(tracker.discard, tracker, display)


@router.post("/positions", response_model=DeliveryResult)
def push_positions(
    payload: PositionBatch,
    tracker: SessionTracker = Depends(get_tracker),
    source: PushLocationSource = Depends(get_location_source),
    display: BufferedDisplay = Depends(get_display),
):
    """Feed device samples into the tracker.

    Samples arriving while tracking is paused or stopped are dropped;
    `delivered` counts the ones that reached a subscriber.
    """
    delivered = 0
    for p in payload.positions:
        delivered += min(source.push(p.lat, p.lng, p.observed_at), 1)
    if delivered < len(payload.positions):
        logger.debug(f"Dropped {len(payload.positions) - delivered} samples with no subscriber")
    return DeliveryResult(delivered=delivered, snapshot=_snapshot_read(tracker, display))


@router.post("/errors", response_model=DeliveryResult)
def push_location_error(
    payload: LocationErrorIn,
    tracker: SessionTracker = Depends(get_tracker),
    source: PushLocationSource = Depends(get_location_source),
    display: BufferedDisplay = Depends(get_display),
):
    delivered = min(source.fail(payload.kind, payload.detail), 1)
    return DeliveryResult(delivered=delivered, snapshot=_snapshot_read(tracker, display))
