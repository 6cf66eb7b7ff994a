from app.core.constants import MS_PER_HOUR, MS_PER_SECOND


def ms_to_hhmmss(total_ms: int) -> str:
    """
    Convert a duration in milliseconds -> 'HH:MM:SS'.
    Partial seconds are dropped. Example: 2732400 -> '00:45:32'
    """
    total_seconds = max(int(total_ms), 0) // MS_PER_SECOND
    hours = total_seconds // 3600
    minutes = (total_seconds % 3600) // 60
    seconds = total_seconds % 60
    return f"{hours:02d}:{minutes:02d}:{seconds:02d}"


def compute_speed_kmh(distance_km: float, elapsed_ms: int) -> float:
    """
    Average speed in km/h; 0 when no time has elapsed.
    Example: 2.5 km over 1800000 ms -> 5.0
    """
    if elapsed_ms <= 0:
        return 0.0
    return distance_km / (elapsed_ms / MS_PER_HOUR)


def format_distance(distance_km: float) -> str:
    return f"{distance_km:.2f} km"


def format_speed(speed_kmh: float) -> str:
    return f"{speed_kmh:.1f} km/h"


def ms_to_datetime(ts_ms: int):
    """Epoch milliseconds -> aware UTC datetime."""
    from datetime import datetime, timezone

    return datetime.fromtimestamp(ts_ms / MS_PER_SECOND, tz=timezone.utc)


def to_local_datetime(dt, tz_name: str | None = None):
    """Convert a datetime from source tz (assume UTC if naive) to local or given tz.

    - If `tz_name` is 'local' or None: use system local timezone.
    - If `tz_name` is IANA tz name (e.g., 'America/New_York'): use that.
    - If `dt` has no tzinfo, assume UTC.
    """
    from datetime import timezone
    from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    if tz_name and tz_name != "local":
        try:
            return dt.astimezone(ZoneInfo(tz_name))
        except ZoneInfoNotFoundError:
            return dt.astimezone()
    return dt.astimezone()
