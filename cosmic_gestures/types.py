"""
Type definitions for the gesture tracking pipeline.
"""
from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Awaitable, Literal, Mapping, Optional, Protocol, Tuple, Union, runtime_checkable


Point2D = Tuple[float, float]

IndicatorName = Literal["rotate", "zoom", "select"]
INDICATOR_NAMES: Tuple[IndicatorName, ...] = ("rotate", "zoom", "select")

STATUS_HAND_DETECTED = "Hand detected"
STATUS_MOVE_HAND = "Move hand into view"
STATUS_CAMERA_OFF = "Camera off"


class HandIndex(IntEnum):
    """Canonical 21-point hand landmark layout (MediaPipe Hands)."""
    WRIST = 0
    THUMB_CMC = 1
    THUMB_MCP = 2
    THUMB_IP = 3
    THUMB_TIP = 4
    INDEX_MCP = 5
    INDEX_PIP = 6
    INDEX_DIP = 7
    INDEX_TIP = 8
    MIDDLE_MCP = 9
    MIDDLE_PIP = 10
    MIDDLE_DIP = 11
    MIDDLE_TIP = 12
    RING_MCP = 13
    RING_PIP = 14
    RING_DIP = 15
    RING_TIP = 16
    PINKY_MCP = 17
    PINKY_PIP = 18
    PINKY_DIP = 19
    PINKY_TIP = 20


NUM_HAND_LANDMARKS = len(HandIndex)


@dataclass(frozen=True)
class Landmark:
    """A single hand keypoint in source-frame pixel space (y grows downward)."""
    idx: int
    x: float
    y: float
    z: float = 0.0


# Ordered mapping from HandIndex to Landmark; None when no hand was detected.
LandmarkSet = Mapping[int, Landmark]


@dataclass(frozen=True)
class GestureFeatures:
    """Geometric features derived from one landmark set."""
    centroid: Point2D  # midpoint of wrist and middle-finger base
    pinch_distance: float  # thumb tip to index tip
    index_extended: bool  # index tip above index PIP
    middle_closed: bool  # middle tip below middle PIP


@dataclass
class TrackingState:
    """Cross-tick memory of the gesture state machine."""
    last_centroid: Optional[Point2D] = None
    is_pinching: bool = False
    last_pinch_distance: float = 0.0
    is_pointing: bool = False

    def reset(self) -> None:
        """Clear everything that depends on a visible hand."""
        self.last_centroid = None
        self.is_pinching = False
        self.is_pointing = False


@dataclass(frozen=True)
class HandLost:
    """No hand was detected this tick."""


@dataclass(frozen=True)
class Rotate:
    """Hand centroid moved past the deadzone."""
    dx: float
    dy: float


@dataclass(frozen=True)
class ZoomPinchStart:
    """Thumb and index closed below the pinch threshold."""


@dataclass(frozen=True)
class ZoomDelta:
    """Change in pinch distance; positive when the fingers move closer."""
    amount: float


@dataclass(frozen=True)
class ZoomPinchEnd:
    """Pinch released."""


@dataclass(frozen=True)
class PointSelectOn:
    """Index extended with middle finger curled."""


@dataclass(frozen=True)
class PointSelectOff:
    """Pointing pose released."""


@dataclass(frozen=True)
class Idle:
    """Hand visible but nothing happened."""


GestureEvent = Union[
    HandLost, Rotate, ZoomPinchStart, ZoomDelta, ZoomPinchEnd, PointSelectOn, PointSelectOff, Idle
]


@runtime_checkable
class LandmarkSourceProto(Protocol):
    """Produces at most one hand's landmarks per frame."""

    def estimate(self, frame: Any) -> Union[Optional[LandmarkSet], Awaitable[Optional[LandmarkSet]]]:
        """Return the landmarks for the frame, or None when no hand is visible."""
        ...


@runtime_checkable
class FrameStreamProto(Protocol):
    """Video source compatible with cv2.VideoCapture."""

    def isOpened(self) -> bool:
        ...

    def read(self) -> Tuple[bool, Any]:
        ...

    def release(self) -> None:
        ...


@runtime_checkable
class CameraHandle(Protocol):
    """Render camera; only position.z is driven by gestures."""
    position: Any


@runtime_checkable
class ModelHandle(Protocol):
    """Displayed model; only rotation.x and rotation.y are driven by gestures."""
    rotation: Any


@runtime_checkable
class UIAffordanceProto(Protocol):
    """Host UI layer showing gesture indicators and tracking status."""

    def set_indicator_active(self, name: IndicatorName, active: bool) -> None:
        """Light up or clear a gesture indicator."""
        ...

    def set_status_text(self, text: str) -> None:
        """Update the tracking status readout."""
        ...
