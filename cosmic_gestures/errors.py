"""
Errors raised by the tracking pipeline.

None of these are fatal: every failure leaves gesture tracking inactive
while pointer control keeps working.
"""
from enum import Enum


class StreamFailure(Enum):
    """Why a camera stream could not be opened."""
    PERMISSION_DENIED = "permission_denied"
    NO_DEVICE = "no_device"
    DEVICE_BUSY = "device_busy"


_STREAM_MESSAGES = {
    StreamFailure.PERMISSION_DENIED: (
        "Camera access was denied. Allow camera access for this terminal "
        "(on Linux: add your user to the 'video' group) and toggle the camera again."
    ),
    StreamFailure.NO_DEVICE: (
        "No camera was found. Connect a webcam or pick another index with --camera."
    ),
    StreamFailure.DEVICE_BUSY: (
        "The camera is in use by another application. Close it and toggle the camera again."
    ),
}


class TrackingError(Exception):
    """Base class for recoverable tracking failures."""


class StreamUnavailable(TrackingError):
    """The media stream could not be opened."""

    def __init__(self, reason: StreamFailure, detail: str = ""):
        self.reason = reason
        self.detail = detail
        message = _STREAM_MESSAGES[reason]
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message)

    @property
    def user_message(self) -> str:
        """Actionable text for the user, without the technical detail."""
        return _STREAM_MESSAGES[self.reason]


class ModelLoadFailed(TrackingError):
    """The landmark detector failed to initialize."""


class MalformedLandmarkSet(TrackingError):
    """The detector returned an incomplete point set."""

    def __init__(self, missing):
        self.missing = tuple(missing)
        super().__init__(f"Landmark set is missing indices {list(self.missing)}")
