"""Error taxonomy of the hike tracker.

InvalidTransition is a caller bug and is raised synchronously. LocationError
is recoverable and only ever reaches the display. PersistenceFailed is raised
from ``finish()``/``retry_save()`` and leaves the finished hike in memory.
"""
from enum import Enum


class TrackerError(Exception):
    """Base class for tracker errors."""


class InvalidTransition(TrackerError):
    def __init__(self, state, command):
        self.state = state
        self.command = command
        super().__init__(f"Cannot {command.value} while {state.value}")


class LocationErrorKind(str, Enum):
    permission_denied = "permission_denied"
    unavailable = "unavailable"
    timeout = "timeout"
    unknown = "unknown"


# Human readable text shown on the display
LOCATION_ERROR_MESSAGES = {
    LocationErrorKind.permission_denied: "Permission denied. Please allow location access.",
    LocationErrorKind.unavailable: "Position unavailable. Check your GPS signal.",
    LocationErrorKind.timeout: "Request timeout. Please try again.",
    LocationErrorKind.unknown: "Unknown error occurred.",
}


class LocationError(TrackerError):
    def __init__(self, kind: LocationErrorKind, detail: str | None = None):
        self.kind = LocationErrorKind(kind)
        self.detail = detail
        super().__init__(self.message)

    @property
    def message(self) -> str:
        return "Error getting location: " + LOCATION_ERROR_MESSAGES[self.kind]


class PersistenceFailed(TrackerError):
    """The session store could not append a finished hike."""
